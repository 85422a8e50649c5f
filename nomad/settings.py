import os
from collections.abc import Mapping
from pathlib import Path

from . import utils

PASSWORD_ENV = "DOWNLOAD_PASSWORD"

# Built-in defaults
_DEFAULTS = {
    "files_dir": "/nomad/data/files",
    "chunk_size": "1mb",
}


def collect_passwords(env: Mapping[str, str]) -> list[str]:
    """Return every non-empty DOWNLOAD_PASSWORD / DOWNLOAD_PASSWORD_* value."""
    return [
        value
        for key, value in env.items()
        if (key == PASSWORD_ENV or key.startswith(PASSWORD_ENV + "_")) and value
    ]


def load_settings(env: Mapping[str, str] | None = None) -> dict:
    """Load storage settings from the environment."""
    if env is None:
        env = os.environ
    return {
        "files_dir": Path(env.get("MAG_FILES_DIR") or _DEFAULTS["files_dir"]),
        "chunk_size": utils.parse_file_size(env.get("DOWNLOAD_CHUNK_SIZE") or _DEFAULTS["chunk_size"]),
    }
