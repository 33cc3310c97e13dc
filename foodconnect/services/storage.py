# foodconnect/services/storage.py

import logging
import os
import uuid
from pathlib import Path

import aiofiles
from fastapi import HTTPException, UploadFile, status

from foodconnect.core.config import settings
from foodconnect.core.constants import ALLOWED_UPLOAD_EXTENSIONS
from foodconnect.schemas.content import UploadResponse

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def get_upload_dir() -> Path:
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


async def save_upload(file: UploadFile) -> UploadResponse:
    """
    Streams an uploaded image or video to UPLOAD_DIR under a random name.
    The partial file is removed if the size limit is exceeded mid-stream.
    """
    if not file or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    extension = Path(file.filename).suffix.lower()
    if extension not in ALLOWED_UPLOAD_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only image and video files are allowed",
        )

    max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    unique_filename = f"{uuid.uuid4()}{extension}"
    file_path = get_upload_dir() / unique_filename
    size = 0

    try:
        async with aiofiles.open(file_path, "wb") as out_file:
            while chunk := await file.read(CHUNK_SIZE):
                size += len(chunk)
                if size > max_bytes:
                    break
                await out_file.write(chunk)
    except OSError:
        logger.error(f"Failed to save uploaded file '{file.filename}'.", exc_info=True)
        cleanup_file(file_path)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save file")

    if size > max_bytes:
        cleanup_file(file_path)
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File is too large. Maximum size is {settings.MAX_UPLOAD_SIZE_MB} MB",
        )

    logger.info(f"Saved upload '{file.filename}' as '{file_path}' ({size} bytes).")
    return UploadResponse(
        url=f"/uploads/{unique_filename}",
        filename=unique_filename,
        original_name=file.filename,
        size=size,
        content_type=file.content_type,
    )


def cleanup_file(file_path: Path | str):
    try:
        if file_path and os.path.exists(file_path):
            os.remove(file_path)
            logger.info(f"Removed file: '{file_path}'.")
    except OSError:
        logger.error(f"Failed to remove file '{file_path}'.", exc_info=True)
