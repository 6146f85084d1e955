"""
Upload Router - image uploads for the article editor.

POST /api/upload/image, multipart field ``image``. Author or admin only.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from starlette.concurrency import run_in_threadpool

from app.api.schemas.common import UploadResponse
from app.core.auth import AuthContext, require_author
from app.core.exceptions import BadRequestError
from app.utils.storage_service import get_max_upload_bytes, save_image, validate_image

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/image", response_model=UploadResponse)
async def upload_image(
    image: Optional[UploadFile] = File(None),
    ctx: AuthContext = Depends(require_author),
):
    """Store an image (max 2 MiB by default) and return its public URL."""
    if image is None:
        raise BadRequestError("No image file provided")

    # Read one byte past the cap so oversized payloads are detected without
    # buffering them whole
    data = await image.read(get_max_upload_bytes() + 1)
    validate_image(image.content_type, len(data))

    url = await run_in_threadpool(save_image, data, image.content_type)
    logger.info(f"Image uploaded by {ctx.uid}: {url}")
    return UploadResponse(url=url)
