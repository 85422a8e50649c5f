"""Shared pytest fixtures."""

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from nomad.routes.download import DownloadRouter
from nomad.storage import BlobObject


class MemoryBlobStore:
    """In-memory BlobStore for tests: key -> (bytes, content type), plus optional HTTP metadata per key."""

    def __init__(
        self,
        objects: dict[str, tuple[bytes, str | None]] | None = None,
        metadata: dict[str, dict[str, str]] | None = None,
    ):
        self.objects = objects or {}
        self.metadata = metadata or {}
        self.requested: list[str] = []

    async def get(self, key: str) -> BlobObject | None:
        self.requested.append(key)
        if key not in self.objects:
            return None
        data, content_type = self.objects[key]

        async def body() -> AsyncIterator[bytes]:
            yield data

        return BlobObject(
            key=key,
            size=len(data),
            content_type=content_type,
            body=body(),
            http_metadata=dict(self.metadata.get(key, {})),
        )


@pytest.fixture
def env() -> dict[str, str]:
    """Environment with two passwords and full Bento credentials."""
    return {
        "DOWNLOAD_PASSWORD": "letmein",
        "DOWNLOAD_PASSWORD_2": "sha256:" + "5e884898da28047151d0e56f8dc6292773603d0d6aabbdd62a11ef721d1542d8",  # "password"
        "BENTO_SITE_UUID": "site-123",
        "BENTO_PUBLISHABLE_KEY": "pub",
        "BENTO_SECRET_KEY": "sec",
    }


@pytest.fixture
def store() -> MemoryBlobStore:
    return MemoryBlobStore({
        "reports/a.pdf": (b"%PDF-1.7 test", "application/pdf"),
        "reports/raw.bin": (b"\x00\x01\x02", None),
        "mags/Issue #3.pdf": (b"issue three", "application/pdf"),
        "mags/what?.pdf": (b"question", "application/pdf"),
    })


@pytest.fixture
def make_client(store: MemoryBlobStore):
    """Build a TestClient around a DownloadRouter with the given environment."""
    def _make(env: dict[str, str]) -> TestClient:
        app = FastAPI()
        app.include_router(DownloadRouter(store=store, env=env).router)
        return TestClient(app)
    return _make
