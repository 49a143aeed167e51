"""Tests for buffer persistence and atomic file saving."""

import os
from unittest.mock import Mock

import pytest

from wordsmith.buffer import Buffer
from wordsmith.document import Document
from wordsmith.errors import MissingStorageError, StorageError
from wordsmith.position import EditorPosition
from wordsmith.storage import FileStorage


def test_new_buffer_is_pristine():
    buffer = Buffer("abc")
    assert buffer.pristine()
    assert not buffer.has_storage()
    assert not buffer.is_empty()
    assert Buffer().is_empty()


def test_save_without_storage_raises():
    buffer = Buffer("abc")
    Document(buffer, clipboard=Mock()).insert("d")
    with pytest.raises(MissingStorageError):
        buffer.save()
    assert not buffer.pristine()


def test_save_and_reload_verbatim(tmp_path):
    path = tmp_path / "doc.md"
    text = "## Title\r\n\nBody  text\n\n"
    buffer = Buffer(text)
    buffer.set_storage(FileStorage(str(path)))

    assert buffer.pristine()
    assert path.read_bytes() == text.encode("utf-8")
    assert Buffer.from_storage(FileStorage(str(path))).text() == text


def test_failed_save_leaves_state_unchanged():
    storage = Mock()
    storage.save.side_effect = StorageError("Error: disk on fire")
    buffer = Buffer("abc", storage)
    document = Document(buffer, clipboard=Mock())
    document.set_cursor(EditorPosition(0, 1))
    document.backspace()

    with pytest.raises(StorageError):
        buffer.save()
    assert buffer.text() == "bc"
    assert not buffer.pristine()


def test_failed_set_storage_keeps_previous_target():
    storage = Mock()
    storage.save.side_effect = StorageError("Error: nope")
    buffer = Buffer("abc")

    with pytest.raises(StorageError):
        buffer.set_storage(storage)
    assert not buffer.has_storage()


def test_load_missing_file_is_empty(tmp_path):
    storage = FileStorage(str(tmp_path / "new.md"))
    assert not storage.exists()
    assert storage.load() == ""


def test_load_unreadable_file(tmp_path):
    path = tmp_path / "binary.md"
    path.write_bytes(b"\xff\xfe\x00bad")
    with pytest.raises(StorageError):
        FileStorage(str(path)).load()


def test_save_overwrites_atomically(tmp_path):
    path = tmp_path / "doc.md"
    path.write_text("old content", encoding="utf-8")

    FileStorage(str(path)).save("new content")

    assert path.read_text(encoding="utf-8") == "new content"
    assert os.listdir(tmp_path) == ["doc.md"]


def test_save_into_missing_directory(tmp_path):
    path = tmp_path / "missing" / "doc.md"
    with pytest.raises(StorageError) as excinfo:
        FileStorage(str(path)).save("text")
    assert isinstance(excinfo.value.cause, OSError)
    assert str(excinfo.value).startswith("Error:")


@pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0,
                    reason="root ignores directory permissions")
def test_save_permission_denied_keeps_original(tmp_path):
    path = tmp_path / "doc.md"
    path.write_text("original", encoding="utf-8")
    os.chmod(tmp_path, 0o555)
    try:
        with pytest.raises(StorageError) as excinfo:
            FileStorage(str(path)).save("replacement")
        assert "Permission denied" in str(excinfo.value)
    finally:
        os.chmod(tmp_path, 0o755)
    assert path.read_text(encoding="utf-8") == "original"
