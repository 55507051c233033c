from unittest.mock import MagicMock

import pytest
import requests

from app.clients.storage_client import StorageClient, validate_file

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def response(status=200, json_body=None, text=""):
    r = MagicMock()
    r.status_code = status
    r.text = text
    if json_body is None:
        r.json.side_effect = ValueError("no json")
    else:
        r.json.return_value = json_body
    return r


@pytest.fixture()
def session():
    return MagicMock()


@pytest.fixture()
def storage(session):
    return StorageClient("https://site.example/", token="tok", session=session)


def test_validate_file():
    assert validate_file(PNG, "image/png") is None
    assert validate_file(PNG, "IMAGE/WEBP") is None
    assert "10MB" in validate_file(b"x" * (10 * 1024 * 1024 + 1), "image/png")
    assert "JPEG" in validate_file(PNG, "text/plain")


def test_invalid_file_never_hits_the_network(storage, session):
    result = storage.upload_file(b"x" * (10 * 1024 * 1024 + 1), "big.png", "image/png")
    assert result.success is False
    assert "10MB" in result.error
    session.post.assert_not_called()


def test_upload_file(storage, session):
    session.post.return_value = response(200, {"success": True, "path": "1-abc.png", "url": "/u/1-abc.png"})
    result = storage.upload_file(PNG, "/tmp/photos/villa.png", "image/png", bucket="services", name="hero.png")
    assert result.success is True
    assert result.path == "1-abc.png"
    _, kwargs = session.post.call_args
    assert session.post.call_args[0][0] == "https://site.example/api/storage"
    assert kwargs["files"]["file"][0] == "villa.png"
    assert kwargs["data"] == {"bucketName": "services", "fileName": "hero.png"}
    assert kwargs["headers"] == {"Authorization": "Bearer tok"}


def test_upload_error_detail(storage, session):
    session.post.return_value = response(409, {"detail": "A file already exists at this path"})
    result = storage.upload_file(PNG, "a.png", "image/png")
    assert result.success is False
    assert result.error == "A file already exists at this path"

    session.post.return_value = response(502, text="Bad Gateway")
    assert storage.upload_file(PNG, "a.png", "image/png").error == "Bad Gateway"

    session.post.side_effect = requests.ConnectionError("refused")
    assert storage.upload_file(PNG, "a.png", "image/png").error == "refused"


def test_upload_multiple_files_continues_after_failure(storage, session):
    session.post.return_value = response(200, {"path": "p", "url": "u"})
    results = storage.upload_multiple_files([(PNG, "a.png", "image/png"), (PNG, "b.txt", "text/plain"),
                                             (PNG, "c.png", "image/png")])
    assert [r.success for r in results] == [True, False, True]
    assert session.post.call_count == 2


def test_delete_file_sends_bucket_relative_path(storage, session):
    session.delete.return_value = response(200, {"success": True})
    url = "https://site.example/storage/v1/object/public/listings/villa/cover.png"
    assert storage.delete_file(url) is True
    _, kwargs = session.delete.call_args
    assert kwargs["params"] == {"bucket": "listings", "path": "villa/cover.png"}


def test_delete_file_failures(storage, session):
    assert storage.delete_file("") is False
    session.delete.return_value = response(400, {"detail": "Unknown bucket"})
    assert storage.delete_file("a.png", bucket="nope") is False
    session.delete.side_effect = requests.Timeout()
    assert storage.delete_file("a.png") is False


def test_replace_file_removes_old_only_after_upload(storage, session):
    session.post.return_value = response(200, {"path": "new.png", "url": "/u/new.png"})
    session.delete.return_value = response(200, {"success": True})
    result = storage.replace_file("old.png", PNG, "new.png", "image/png")
    assert result.success is True
    session.delete.assert_called_once()

    session.delete.reset_mock()
    session.post.return_value = response(500, {"detail": "boom"})
    assert storage.replace_file("old.png", PNG, "new.png", "image/png").success is False
    session.delete.assert_not_called()
