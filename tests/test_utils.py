"""Tests for password checks, size parsing and settings."""

from pathlib import Path

import bcrypt
import pytest

from nomad import utils
from nomad.settings import collect_passwords, load_settings


@pytest.mark.parametrize(
    "size_str, expected",
    [("10", 10), ("1mb", 1048576), ("64KB", 65536), ("1.5 kb", 1536), ("2gb", 2 * 1024 ** 3)],
)
def test_parse_file_size(size_str, expected) -> None:
    assert utils.parse_file_size(size_str) == expected


def test_parse_file_size_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        utils.parse_file_size("lots")


class TestPasswords:
    def test_plain_password(self) -> None:
        assert utils.verify_password("letmein", "letmein")
        assert not utils.verify_password("letmein2", "letmein")
        assert not utils.verify_password("", "")

    def test_sha256_password(self) -> None:
        configured = "sha256:5E884898DA28047151D0E56F8DC6292773603D0D6AABBDD62A11EF721D1542D8"

        assert utils.verify_password("password", configured)
        assert not utils.verify_password("Password", configured)

    def test_bcrypt_password(self) -> None:
        configured = bcrypt.hashpw(b"s3cret", bcrypt.gensalt(rounds=4)).decode()

        assert utils.verify_password("s3cret", configured)
        assert not utils.verify_password("nope", configured)

    def test_malformed_bcrypt_hash(self) -> None:
        assert not utils.verify_password("x", "$2b$garbage")

    @pytest.mark.parametrize("configured", ["sha256:abc", "$2b$literal-password"])
    def test_hash_prefixes_are_never_clear_text(self, configured) -> None:
        assert not utils.verify_password(configured, configured)

    def test_any_configured_password_matches(self) -> None:
        assert utils.is_valid_password("two", ["one", "two"])
        assert not utils.is_valid_password("three", ["one", "two"])
        assert not utils.is_valid_password(None, ["one"])


def test_collect_passwords() -> None:
    env = {
        "DOWNLOAD_PASSWORD": "main",
        "DOWNLOAD_PASSWORD_1": "first",
        "DOWNLOAD_PASSWORD_PARTNER": "partner",
        "DOWNLOAD_PASSWORD_2": "",
        "DOWNLOAD_PASSWORDS": "not-a-match",
        "OTHER": "ignored",
    }

    assert sorted(collect_passwords(env)) == ["first", "main", "partner"]
    assert collect_passwords({}) == []


@pytest.mark.parametrize(
    "path, expected",
    [("reports/a.pdf", "a.pdf"), ("a.pdf", "a.pdf"), ("reports/", "file")],
)
def test_filename_from_path(path, expected) -> None:
    assert utils.filename_from_path(path) == expected


def test_content_disposition_non_ascii() -> None:
    assert utils.content_disposition("revista-año.pdf") == (
        "attachment; filename=\"revista-ao.pdf\"; filename*=UTF-8''revista-a%C3%B1o.pdf"
    )


def test_load_settings() -> None:
    assert load_settings({}) == {"files_dir": Path("/nomad/data/files"), "chunk_size": 1024 * 1024}
    assert load_settings({"MAG_FILES_DIR": "/srv/mag", "DOWNLOAD_CHUNK_SIZE": "64kb"}) == {
        "files_dir": Path("/srv/mag"),
        "chunk_size": 65536,
    }
