"""Tests for the on-disk blob store."""

import os

import pytest

from nomad.storage import LocalBlobStore


async def read_all(blob) -> bytes:
    return b"".join([chunk async for chunk in blob.body])


@pytest.fixture
def files_dir(tmp_path):
    (tmp_path / "mags").mkdir()
    (tmp_path / "mags" / "issue-1.pdf").write_bytes(b"x" * 10)
    (tmp_path / "mags" / "notes.unknownext").write_bytes(b"abc")
    return tmp_path


@pytest.mark.asyncio
async def test_get_streams_file_in_chunks(files_dir) -> None:
    store = LocalBlobStore(files_dir, chunk_size=4)

    blob = await store.get("mags/issue-1.pdf")

    assert blob is not None
    assert blob.size == 10
    assert blob.content_type == "application/pdf"
    chunks = [chunk async for chunk in blob.body]
    assert chunks == [b"xxxx", b"xxxx", b"xx"]


@pytest.mark.asyncio
async def test_unknown_extension_has_no_content_type(files_dir) -> None:
    blob = await LocalBlobStore(files_dir).get("mags/notes.unknownext")

    assert blob.content_type is None
    assert await read_all(blob) == b"abc"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "key",
    ["mags/missing.pdf", "mags", "", "../etc/passwd", "mags/../../secret", "mags/a\x00b.pdf", "mags/" + "a" * 300 + ".pdf"],
)
async def test_missing_or_escaping_keys_are_not_found(files_dir, key) -> None:
    assert await LocalBlobStore(files_dir).get(key) is None


@pytest.mark.asyncio
async def test_last_modified_is_exposed_as_http_metadata(files_dir) -> None:
    os.utime(files_dir / "mags" / "issue-1.pdf", (0, 784111777))

    blob = await LocalBlobStore(files_dir).get("mags/issue-1.pdf")

    assert blob.http_metadata == {"Last-Modified": "Sun, 06 Nov 1994 08:49:37 GMT"}
