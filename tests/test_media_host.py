import pytest
from cloudinary.exceptions import Error as CloudinaryError

from core.api import MediaStore, StoredMedia
from core.api import media_host
from core.config import Settings
from core.errors import MediaHostError


@pytest.fixture
def settings():
    return Settings(
        CLOUDINARY_CLOUD_NAME="demo",
        CLOUDINARY_UPLOAD_PRESET="student_profiles",
        CLOUDINARY_API_KEY="key-123",
        CLOUDINARY_API_SECRET="secret-456",
    )


@pytest.fixture
def uploader(monkeypatch):
    """Record SDK calls instead of reaching the host."""
    calls = {"upload": [], "destroy": []}
    answers = {
        "upload": {"secure_url": "https://res.cloudinary.com/x.png", "public_id": "x"},
        "destroy": {"result": "ok"},
        "error": None,
    }

    def fake_upload(file, upload_preset, **options):
        calls["upload"].append((file.read(), upload_preset, options))
        if answers["error"]:
            raise answers["error"]
        return answers["upload"]

    def fake_destroy(public_id, **options):
        calls["destroy"].append((public_id, options))
        if answers["error"]:
            raise answers["error"]
        return answers["destroy"]

    monkeypatch.setattr(media_host.cloudinary.uploader, "unsigned_upload", fake_upload)
    monkeypatch.setattr(media_host.cloudinary.uploader, "destroy", fake_destroy)
    return calls, answers


def test_store_uses_unsigned_preset(settings, uploader):
    calls, _ = uploader

    stored = MediaStore(settings).store(b"bytes", filename="x.png")

    assert stored == StoredMedia(secure_url="https://res.cloudinary.com/x.png", public_id="x")
    content, preset, options = calls["upload"][0]
    assert content == b"bytes"
    assert preset == "student_profiles"
    assert options["cloud_name"] == "demo"
    assert options["filename"] == "x.png"


def test_store_sdk_error_raises(settings, uploader):
    _, answers = uploader
    answers["error"] = CloudinaryError("Upload preset not found")

    with pytest.raises(MediaHostError, match="Failed to upload image"):
        MediaStore(settings).store(b"bytes")


def test_store_incomplete_answer_raises(settings, uploader):
    _, answers = uploader
    answers["upload"] = {"secure_url": "u"}

    with pytest.raises(MediaHostError):
        MediaStore(settings).store(b"bytes")


def test_store_requires_configuration(uploader):
    calls, _ = uploader

    with pytest.raises(MediaHostError, match="not configured"):
        MediaStore(Settings(CLOUDINARY_CLOUD_NAME="", CLOUDINARY_UPLOAD_PRESET="")).store(b"bytes")
    assert calls["upload"] == []


def test_remove_returns_whole_answer(settings, uploader):
    calls, answers = uploader
    answers["destroy"] = {"result": "not found"}

    result = MediaStore(settings).remove("student-profiles/avatar")

    assert result == {"result": "not found"}
    public_id, options = calls["destroy"][0]
    assert public_id == "student-profiles/avatar"
    assert options["api_key"] == "key-123"
    assert options["api_secret"] == "secret-456"


def test_remove_sdk_error_raises(settings, uploader):
    _, answers = uploader
    answers["error"] = CloudinaryError("Server returned unexpected status code - 500")

    with pytest.raises(MediaHostError, match="Failed to delete image"):
        MediaStore(settings).remove("x")


def test_remove_requires_credentials(uploader):
    calls, _ = uploader

    with pytest.raises(MediaHostError, match="credentials"):
        MediaStore(Settings(CLOUDINARY_API_KEY="", CLOUDINARY_API_SECRET="")).remove("x")
    assert calls["destroy"] == []
