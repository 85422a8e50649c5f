import hashlib
import re
import secrets
from urllib.parse import quote

import bcrypt

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def parse_file_size(size_str: str) -> int:
    """Parse file size string with units (B, KB, MB, GB) to bytes.

    Examples:
        "10" -> 10 bytes
        "1mb" or "1MB" -> 1048576 bytes
        "64kb" or "64KB" -> 65536 bytes
    """
    size_str = str(size_str).strip()

    # Check if it's just a number (bytes)
    if size_str.isdigit():
        return int(size_str)

    # Parse with units
    match = re.match(r'^(\d+(?:\.\d+)?)\s*(b|kb|mb|gb)$', size_str, re.IGNORECASE)
    if not match:
        raise ValueError(f"Invalid file size format: {size_str}")

    value = float(match.group(1))
    unit = match.group(2).lower()

    multipliers = {
        'b': 1,
        'kb': 1024 ** 1,
        'mb': 1024 ** 2,
        'gb': 1024 ** 3
    }

    return int(value * multipliers[unit])


def verify_password(password: str, configured: str) -> bool:
    """Check *password* against one configured value.

    The configured value is either ``sha256:<hex>``, a bcrypt hash, or the
    password itself in clear text. Values starting with ``sha256:``,
    ``$2a$``, ``$2b$`` or ``$2y$`` are always read as hashes, so a clear-text
    password cannot begin with one of those prefixes.
    """
    if not password or not configured:
        return False
    if configured.startswith("sha256:"):
        input_hash = hashlib.sha256(password.encode("utf-8")).hexdigest()
        return secrets.compare_digest(input_hash, configured.split(":", 1)[1].lower())
    if configured.startswith(BCRYPT_PREFIXES):
        try:
            return bcrypt.checkpw(password.encode("utf-8"), configured.encode("utf-8"))
        except ValueError:
            # Malformed hash in the environment
            return False
    return secrets.compare_digest(password.encode("utf-8"), configured.encode("utf-8"))


def is_valid_password(password: str | None, valid_passwords: list[str]) -> bool:
    """Return True if *password* matches any of the configured passwords."""
    if not password:
        return False
    return any(verify_password(password, configured) for configured in valid_passwords)


def filename_from_path(path: str) -> str:
    """Last segment of a blob key, used as the download filename."""
    return path.split("/")[-1] or "file"


def content_disposition(filename: str) -> str:
    """Attachment header value, with an RFC 5987 name for non-ASCII filenames."""
    ascii_name = filename.encode("ascii", "ignore").decode().replace('"', "") or "file"
    value = f'attachment; filename="{ascii_name}"'
    if ascii_name != filename:
        value += f"; filename*=UTF-8''{quote(filename)}"
    return value
