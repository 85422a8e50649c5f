"""
Blob storage for downloadable files.

Objects are looked up by key (the request path without its leading slash) and
streamed back in chunks. ``LocalBlobStore`` serves files from a directory on
disk, laid out as ``<root>/<key>``.
"""

import mimetypes
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from email.utils import formatdate
from pathlib import Path
from typing import Protocol

import anyio

CHUNK_SIZE = 1024 * 1024  # 1MB


@dataclass
class BlobObject:
    key: str
    size: int | None
    content_type: str | None
    body: AsyncIterator[bytes]
    # Stored HTTP headers (Cache-Control, Content-Language, Last-Modified...)
    http_metadata: dict[str, str] = field(default_factory=dict)


class BlobStore(Protocol):
    async def get(self, key: str) -> BlobObject | None:
        """Return the object stored under *key*, or ``None`` if it doesn't exist."""
        ...


class LocalBlobStore:
    def __init__(self, root: Path, chunk_size: int = CHUNK_SIZE):
        self.root = Path(root)
        self.chunk_size = chunk_size

    def _resolve(self, key: str) -> Path | None:
        # Keys must stay inside the root to prevent path traversal
        try:
            root = self.root.resolve()
            file_path = (root / key).resolve()
            if file_path == root or not file_path.is_relative_to(root) or not file_path.is_file():
                return None
        except (ValueError, OSError):
            # Embedded NUL bytes, names too long for the filesystem
            return None
        return file_path

    async def get(self, key: str) -> BlobObject | None:
        file_path = self._resolve(key)
        if file_path is None:
            print(f"[Store] Object not found: {key}")
            return None

        stat = file_path.stat()
        content_type, _ = mimetypes.guess_type(file_path.name)
        return BlobObject(
            key=key,
            size=stat.st_size,
            content_type=content_type,
            body=self._read_chunks(file_path),
            http_metadata={"Last-Modified": formatdate(stat.st_mtime, usegmt=True)},
        )

    async def _read_chunks(self, file_path: Path) -> AsyncIterator[bytes]:
        # File reads run in a worker thread so the event loop is never blocked
        async with await anyio.open_file(file_path, "rb") as f:
            while True:
                chunk = await f.read(self.chunk_size)
                if not chunk:
                    break
                yield chunk
