from greatwok.core import config
from greatwok.core.storage_service import object_name_for, public_url


def test_admin_upload_returns_public_url(client, admin_headers, uploader):
    res = client.post("/api/upload", files={"file": ("wok.png", b"\x89PNG fake", "image/png")},
                      headers=admin_headers)
    assert res.status_code == 200
    url = res.json()["imageUrl"]
    assert url.startswith("https://storage.googleapis.com/test-bucket/")
    assert url.endswith("_wok.png")

    name, data, content_type = uploader.uploads[0]
    assert data == b"\x89PNG fake"
    assert content_type == "image/png"


def test_upload_requires_admin(client, user_headers, uploader):
    res = client.post("/api/upload", files={"file": ("wok.png", b"data", "image/png")}, headers=user_headers)
    assert res.status_code == 403
    assert uploader.uploads == []


def test_missing_or_empty_file(client, admin_headers):
    assert client.post("/api/upload", headers=admin_headers).status_code == 400
    empty = client.post("/api/upload", files={"file": ("empty.png", b"", "image/png")}, headers=admin_headers)
    assert empty.status_code == 400


def test_oversized_file(client, admin_headers, uploader, monkeypatch):
    monkeypatch.setattr(config, "MAX_UPLOAD_BYTES", 8)
    res = client.post("/api/upload", files={"file": ("big.png", b"0123456789", "image/png")}, headers=admin_headers)
    assert res.status_code == 413
    assert uploader.uploads == []


def test_storage_failure(client, admin_headers, uploader):
    uploader.fail = True
    res = client.post("/api/upload", files={"file": ("wok.png", b"data", "image/png")}, headers=admin_headers)
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to upload image"}


def test_object_naming():
    assert object_name_for("wok.png", now_ms=1700000000000) == "1700000000000_wok.png"
    assert public_url("menu", "1_a.png") == "https://storage.googleapis.com/menu/1_a.png"
