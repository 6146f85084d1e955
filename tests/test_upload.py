"""Image upload sink (local backend)."""

import pytest

from app.core.exceptions import BadRequestError
from app.utils.storage_service import get_image_dir, make_image_filename, validate_image

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def upload(client, headers, name="shot.png", data=PNG_BYTES, content_type="image/png", field="image"):
    return client.post(
        "/api/upload/image",
        files={field: (name, data, content_type)},
        headers=headers,
    )


class TestUploadImage:
    def test_author_uploads(self, test_client, author_headers):
        r = upload(test_client, author_headers)
        assert r.status_code == 200
        url = r.json()["url"]
        assert url.startswith("http://localhost:8000/uploads/ctf-images/")
        assert url.endswith(".png")

        filename = url.rsplit("/", 1)[1]
        assert (get_image_dir() / filename).read_bytes() == PNG_BYTES

        served = test_client.get(f"/uploads/ctf-images/{filename}")
        assert served.status_code == 200
        assert served.content == PNG_BYTES

    def test_server_url_prefix(self, test_client, admin_headers, monkeypatch):
        monkeypatch.setenv("SERVER_URL", "https://api.cybershield.example/")
        r = upload(test_client, admin_headers)
        assert r.json()["url"].startswith("https://api.cybershield.example/uploads/ctf-images/")

    def test_non_image_rejected(self, test_client, author_headers):
        r = upload(test_client, author_headers, name="notes.txt", data=b"hello", content_type="text/plain")
        assert r.status_code == 400
        assert r.json()["message"] == "Only image files are allowed"

    def test_client_file_name_never_sets_extension(self, test_client, author_headers):
        payload = b"<script>alert(document.cookie)</script>"
        r = upload(test_client, author_headers, name="evil.html", data=payload, content_type="image/png")
        assert r.status_code == 200
        url = r.json()["url"]
        assert url.endswith(".png")

        served = test_client.get(f"/uploads/ctf-images/{url.rsplit('/', 1)[1]}")
        assert served.status_code == 200
        assert served.headers["content-type"] == "image/png"

    def test_svg_rejected(self, test_client, author_headers):
        r = upload(
            test_client,
            author_headers,
            name="logo.svg",
            data=b"<svg xmlns=\"http://www.w3.org/2000/svg\"><script>alert(1)</script></svg>",
            content_type="image/svg+xml",
        )
        assert r.status_code == 400
        assert r.json()["message"] == "Only image files are allowed"

    def test_too_large(self, test_client, author_headers, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "16")
        r = upload(test_client, author_headers, data=b"x" * 17)
        assert r.status_code == 400
        assert r.json()["message"] == "Upload error: File too large"

    def test_exactly_at_cap(self, test_client, author_headers, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "16")
        r = upload(test_client, author_headers, data=b"x" * 16)
        assert r.status_code == 200

    def test_missing_file(self, test_client, author_headers):
        r = upload(test_client, author_headers, field="file")
        assert r.status_code == 400
        assert r.json()["message"] == "No image file provided"

    def test_student_forbidden(self, test_client, student_headers):
        assert upload(test_client, student_headers).status_code == 403

    def test_anonymous_rejected(self, test_client):
        assert upload(test_client, {}).status_code == 401


class TestStorageHelpers:
    def test_filenames_are_unique(self):
        names = {make_image_filename("image/png") for _ in range(50)}
        assert len(names) == 50
        assert all(n.endswith(".png") for n in names)

    def test_extension_follows_content_type(self):
        assert make_image_filename("image/jpeg").endswith(".jpg")
        assert make_image_filename("image/WEBP; charset=binary").endswith(".webp")

    def test_default_extension(self):
        assert make_image_filename(None).endswith(".jpg")
        assert make_image_filename("image/x-unknown").endswith(".jpg")

    def test_validate_image(self, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "10")
        validate_image("image/gif", 10)
        with pytest.raises(BadRequestError):
            validate_image(None, 1)
        with pytest.raises(BadRequestError):
            validate_image("image/svg+xml", 1)
        with pytest.raises(BadRequestError):
            validate_image("image/gif", 11)
