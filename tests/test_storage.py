"""File store tests."""

import io
import logging
import re

import pytest

from blog_api.errors import InternalError
from blog_api.services.storage import FileStore, UploadedAsset, generate_filename

UUID_HEX = r"[0-9a-f]{32}"


def asset(name: str, content: bytes = b"data") -> UploadedAsset:
    return UploadedAsset(name=name, size=len(content), source=io.BytesIO(content))


def test_generate_filename_keeps_base_and_extension():
    assert re.fullmatch(rf"cover_{UUID_HEX}\.png", generate_filename("cover.png"))


def test_generate_filename_uses_first_base_and_last_extension():
    assert re.fullmatch(rf"my_{UUID_HEX}\.gz", generate_filename("my.archive.tar.gz"))


def test_generate_filename_without_extension():
    assert re.fullmatch(rf"README_{UUID_HEX}", generate_filename("README"))


def test_generate_filename_strips_directories():
    assert re.fullmatch(rf"passwd_{UUID_HEX}\.txt", generate_filename("../../etc/passwd.txt"))
    assert re.fullmatch(rf"evil_{UUID_HEX}\.png", generate_filename("C:\\temp\\evil.png"))


def test_generate_filename_is_unique():
    assert generate_filename("a.png") != generate_filename("a.png")


def test_save_writes_bytes(tmp_path):
    store = FileStore(tmp_path / "uploads")
    filename = store.save(asset("photo.jpg", b"jpeg-bytes"))

    assert store.exists(filename)
    assert store.path_for(filename).read_bytes() == b"jpeg-bytes"


def test_save_rewinds_partially_read_source(tmp_path):
    store = FileStore(tmp_path)
    upload = asset("photo.jpg", b"0123456789")
    upload.source.read(4)

    filename = store.save(upload)
    assert store.path_for(filename).read_bytes() == b"0123456789"


def test_discard_removes_file(tmp_path):
    store = FileStore(tmp_path)
    filename = store.save(asset("a.png"))

    assert store.discard(filename) is True
    assert not store.exists(filename)


def test_discard_missing_file_logs_warning(tmp_path, caplog):
    store = FileStore(tmp_path)
    with caplog.at_level(logging.WARNING, logger="blog_api.services.storage"):
        assert store.discard("missing.png") is False
    assert "missing.png" in caplog.text


def test_discard_none_is_noop(tmp_path):
    assert FileStore(tmp_path).discard(None) is False


def test_path_for_stays_inside_root(tmp_path):
    store = FileStore(tmp_path / "uploads")
    assert store.path_for("../outside.png") == tmp_path / "uploads" / "outside.png"


def test_save_failure_is_internal_error(tmp_path):
    store = FileStore(tmp_path / "uploads")
    store.root.rmdir()

    with pytest.raises(InternalError):
        store.save(asset("a.png"))
