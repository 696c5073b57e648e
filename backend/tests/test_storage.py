import pytest

from app.core.errors import BadRequestError
from app.services.storage import LocalImageStorage


def test_upload_writes_file_and_returns_url(tmp_path):
    storage = LocalImageStorage(media_dir=str(tmp_path), media_url="/media/")

    url = storage.upload_image("Photo.JPG", b"image-bytes")

    assert url.startswith("/media/avatars/")
    assert url.endswith(".jpg")
    stored = tmp_path / "avatars" / url.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"image-bytes"


def test_names_are_unique(tmp_path):
    storage = LocalImageStorage(media_dir=str(tmp_path), media_url="/media")
    assert storage.upload_image("a.png", b"1") != storage.upload_image("a.png", b"1")


@pytest.mark.parametrize("filename", ["notes.txt", "archive.tar.gz", "noextension", ""])
def test_rejects_unsupported_types(tmp_path, filename):
    storage = LocalImageStorage(media_dir=str(tmp_path), media_url="/media")

    with pytest.raises(BadRequestError) as exc_info:
        storage.upload_image(filename, b"data")

    assert exc_info.value.message.startswith("Unsupported image type")


def test_rejects_empty_file(tmp_path):
    storage = LocalImageStorage(media_dir=str(tmp_path), media_url="/media")

    with pytest.raises(BadRequestError, match="empty"):
        storage.upload_image("a.png", b"")


def test_rejects_large_file(tmp_path):
    storage = LocalImageStorage(media_dir=str(tmp_path), media_url="/media", max_bytes=2048)

    with pytest.raises(BadRequestError, match="Maximum size is 2KB"):
        storage.upload_image("a.png", b"x" * 2049)

    assert not (tmp_path / "avatars").exists()
