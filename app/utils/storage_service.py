"""
Storage Service - image uploads for article bodies and covers.

Two backends, selected with UPLOAD_BACKEND:

- ``local`` (default): files are written under UPLOAD_ROOT/ctf-images and
  served by the API itself from the ``/uploads`` prefix.
- ``firebase``: files are uploaded to the Firebase Storage bucket
  (FIREBASE_STORAGE_BUCKET) under ``ctf-images/`` and made public.

File names are ``<epoch ms>-<random hex><ext>`` so concurrent uploads never
race on a name. The extension comes from the accepted content type, never
from the client file name.

Configuration (environment variables):
- UPLOAD_BACKEND          : "local" | "firebase"
- UPLOAD_ROOT             : Local root directory (default "uploads")
- SERVER_URL              : Public base URL used in returned links
- MAX_UPLOAD_BYTES        : Size cap (default 2 MiB)
- FIREBASE_STORAGE_BUCKET : Bucket name for the firebase backend
"""

import logging
import os
import secrets
from pathlib import Path
from typing import Optional

from app.core.exceptions import BadRequestError, StorageError
from app.utils.enums import UploadBackend
from app.utils.firebase_config import get_firebase_app
from app.utils.slug_utils import now_millis

logger = logging.getLogger(__name__)

IMAGE_FOLDER = "ctf-images"
PUBLIC_PREFIX = "/uploads"
DEFAULT_MAX_UPLOAD_BYTES = 2 * 1024 * 1024

# Accepted content types and the extension each is stored under. The static
# mount serves files by extension, so the client file name never decides it.
# SVG is excluded: it can carry script.
IMAGE_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/pjpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/avif": ".avif",
    "image/bmp": ".bmp",
}


def get_upload_root() -> Path:
    return Path(os.getenv("UPLOAD_ROOT", "uploads")).resolve()


def get_image_dir() -> Path:
    image_dir = get_upload_root() / IMAGE_FOLDER
    image_dir.mkdir(parents=True, exist_ok=True)
    return image_dir


def get_max_upload_bytes() -> int:
    return int(os.getenv("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES))


def get_backend() -> str:
    return os.getenv("UPLOAD_BACKEND", UploadBackend.LOCAL).strip().lower()


def _normalize_type(content_type: Optional[str]) -> str:
    return (content_type or "").split(";", 1)[0].strip().lower()


def make_image_filename(content_type: Optional[str]) -> str:
    """``<epoch ms>-<random hex><ext>``, extension taken from the content type (``.jpg`` if unknown)."""
    ext = IMAGE_EXTENSIONS.get(_normalize_type(content_type), ".jpg")
    return f"{now_millis()}-{secrets.token_hex(6)}{ext}"


def validate_image(content_type: Optional[str], size: int) -> None:
    """
    Reject non-image payloads and payloads over the size cap.

    Raises:
        BadRequestError: wrong content type or too large
    """
    if _normalize_type(content_type) not in IMAGE_EXTENSIONS:
        raise BadRequestError("Only image files are allowed")
    if size > get_max_upload_bytes():
        raise BadRequestError("Upload error: File too large")


# ── Backends ─────────────────────────────────────────────────────────

def _save_local(data: bytes, filename: str) -> str:
    target = get_image_dir() / filename
    target.write_bytes(data)
    base_url = os.getenv("SERVER_URL", "http://localhost:8000").rstrip("/")
    return f"{base_url}{PUBLIC_PREFIX}/{IMAGE_FOLDER}/{filename}"


def _save_firebase(data: bytes, filename: str, content_type: str) -> str:
    from firebase_admin import storage

    app = get_firebase_app()
    if app is None:
        raise RuntimeError("Firebase Storage is not available (credentials not configured)")

    bucket = storage.bucket(app=app)
    blob = bucket.blob(f"{IMAGE_FOLDER}/{filename}")
    blob.upload_from_string(data, content_type=content_type)
    blob.make_public()
    return blob.public_url


def save_image(data: bytes, content_type: str) -> str:
    """
    Persist an already validated image and return its public URL.

    Raises:
        StorageError: the backend failed to store the bytes
    """
    filename = make_image_filename(content_type)
    backend = get_backend()
    try:
        if backend == UploadBackend.FIREBASE:
            url = _save_firebase(data, filename, content_type)
        else:
            url = _save_local(data, filename)
    except Exception as e:
        logger.error(f"Image upload failed ({backend}): {e}")
        raise StorageError("Failed to store image", error=str(e))

    logger.info(f"Image stored ({backend}): {filename} ({len(data)} bytes)")
    return url
