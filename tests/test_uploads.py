"""
Tests for featured image uploads.
"""
import os

from blog_api import config

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class TestUploadImage:
    """Tests for POST /api/posts/upload."""

    def test_upload_png(self, client, user_headers):
        response = client.post(
            "/api/posts/upload",
            files={"image": ("cover.png", PNG_BYTES, "image/png")},
            headers=user_headers,
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["filename"].startswith("image-")
        assert data["filename"].endswith(".png")
        assert data["path"] == f"/uploads/{data['filename']}"
        assert os.path.exists(os.path.join(config.UPLOAD_DIR, data["filename"]))

    def test_uploaded_file_is_served(self, client, user_headers):
        response = client.post(
            "/api/posts/upload",
            files={"image": ("cover.png", PNG_BYTES, "image/png")},
            headers=user_headers,
        )
        served = client.get(response.json()["data"]["path"])
        assert served.status_code == 200
        assert served.content == PNG_BYTES

    def test_missing_file(self, client, user_headers):
        response = client.post("/api/posts/upload", headers=user_headers)
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Please upload an image file"}

    def test_rejects_non_image(self, client, user_headers):
        response = client.post(
            "/api/posts/upload",
            files={"image": ("notes.txt", b"hello", "text/plain")},
            headers=user_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Only image files are allowed"

    def test_rejects_large_file(self, client, user_headers, monkeypatch):
        monkeypatch.setattr(config, "MAX_UPLOAD_SIZE_MB", 0)
        response = client.post(
            "/api/posts/upload",
            files={"image": ("cover.png", PNG_BYTES, "image/png")},
            headers=user_headers,
        )
        assert response.status_code == 400

    def test_anonymous(self, client):
        response = client.post(
            "/api/posts/upload",
            files={"image": ("cover.png", PNG_BYTES, "image/png")},
        )
        assert response.status_code == 401

    def test_featured_image_on_post(self, client, category, user_headers):
        upload = client.post(
            "/api/posts/upload",
            files={"image": ("cover.png", PNG_BYTES, "image/png")},
            headers=user_headers,
        ).json()["data"]

        response = client.post("/api/posts/", json={
            "title": "With cover",
            "content": "Body",
            "category": category.id,
            "featured_image": upload["path"],
        }, headers=user_headers)
        assert response.json()["data"]["featured_image"] == upload["path"]
