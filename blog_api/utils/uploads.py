import logging
import os
import time
import uuid

from fastapi import HTTPException, UploadFile, status

from blog_api import config

logger = logging.getLogger(__name__)


def ensure_upload_dir() -> str:
    os.makedirs(config.UPLOAD_DIR, exist_ok=True)
    return config.UPLOAD_DIR


async def save_image(upload: UploadFile) -> str:
    """
    Validate and store an uploaded image, returning the stored filename.

    Only the content types in ``config.ALLOWED_IMAGE_TYPES`` are accepted and
    the file must not exceed ``config.MAX_UPLOAD_SIZE_MB``.
    """
    extension = config.ALLOWED_IMAGE_TYPES.get(upload.content_type or "")
    if extension is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only image files are allowed"
        )

    max_bytes = config.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    contents = await upload.read(max_bytes + 1)
    if len(contents) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large, maximum size is {config.MAX_UPLOAD_SIZE_MB}MB"
        )

    filename = f"image-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{extension}"
    path = os.path.join(ensure_upload_dir(), filename)
    with open(path, "wb") as f:
        f.write(contents)

    logger.info(f"Stored upload {upload.filename!r} as {filename} ({len(contents)} bytes)")
    return filename
