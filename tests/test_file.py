from pathlib import Path

import pytest

from webform.exceptions import FileError
from webform.multipart import File


def test_file_is_created_on_disk(tmp_path: Path) -> None:
    file = File("test.png", "image", config={"UPLOAD_DIR": str(tmp_path)})
    assert file.file_name == "test.png"
    assert file.field_name == "image"
    assert Path(file.actual_file_name).parent == tmp_path
    assert Path(file.actual_file_name).exists()
    file.delete()


def test_file_write_and_close(tmp_path: Path) -> None:
    file = File("test.txt", config={"UPLOAD_DIR": str(tmp_path)})
    assert file.write(b"12345") == 5
    assert file.write(b"678") == 3
    assert file.size == 8

    file.finalize()
    file.close()

    # Closing never removes the data.
    assert Path(file.actual_file_name).read_bytes() == b"12345678"


def test_file_delete(tmp_path: Path) -> None:
    file = File("test.txt", config={"UPLOAD_DIR": str(tmp_path)})
    file.write(b"partial")
    file.delete()

    assert file.file_object.closed
    assert list(tmp_path.iterdir()) == []

    # A second delete is harmless.
    file.delete()


def test_file_repr() -> None:
    file = File("test.png", "image")
    try:
        repr_str = repr(file)
        assert "file_name='test.png'" in repr_str
        assert "field_name='image'" in repr_str
    finally:
        file.delete()


@pytest.mark.parametrize("keep_extensions,suffix", [(True, ".txt"), (False, "")])
def test_upload_keep_extensions(tmp_path: Path, keep_extensions: bool, suffix: str) -> None:
    file = File("foo.txt", config={"UPLOAD_DIR": str(tmp_path), "UPLOAD_KEEP_EXTENSIONS": keep_extensions})
    try:
        assert Path(file.actual_file_name).suffix == suffix
        assert Path(file.actual_file_name).name != "foo.txt"
    finally:
        file.delete()


def test_upload_dir_as_bytes(tmp_path: Path) -> None:
    file = File("foo", config={"UPLOAD_DIR": bytes(tmp_path)})
    try:
        assert Path(file.actual_file_name).parent == tmp_path
    finally:
        file.delete()


def test_upload_dir_with_leading_slash_in_filename(tmp_path: Path) -> None:
    upload_dir = tmp_path / "upload"
    upload_dir.mkdir()

    # The uploaded name is never used as a path, only its extension.
    file = File(
        str(tmp_path / "foo.txt"),
        config={"UPLOAD_DIR": str(upload_dir), "UPLOAD_KEEP_EXTENSIONS": True},
    )
    file.write(b"123456789012")
    file.close()

    assert Path(file.actual_file_name).parent == upload_dir
    assert Path(file.actual_file_name).read_bytes() == b"123456789012"
    assert not (tmp_path / "foo.txt").exists()


def test_invalid_upload_dir(tmp_path: Path) -> None:
    with pytest.raises(FileError):
        File("foo.txt", config={"UPLOAD_DIR": str(tmp_path / "missing")})
