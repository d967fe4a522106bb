"""Generic image upload and retrieval."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from volunteer_api.core.deps import get_current_user
from volunteer_api.core.exceptions import BadRequestError
from volunteer_api.schemas.messaging import UploadResult
from volunteer_api.services import storage_service
from volunteer_api.utils.file_upload import (
    MAX_IMAGE_SIZE_BYTES,
    MAX_IMAGES_PER_REQUEST,
    get_upload_file_size,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/images",
    response_model=UploadResult,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_user)],
)
async def upload_images(
    files: Annotated[list[UploadFile], File()],
    folder: Annotated[str, Form()] = storage_service.DEFAULT_FOLDER,
):
    """
    Upload 1 to 10 images into ``folder``.

    Either every file is stored or none: earlier uploads are removed when a
    later one fails.
    """
    if not files:
        raise BadRequestError("At least one file is required")
    if len(files) > MAX_IMAGES_PER_REQUEST:
        raise BadRequestError(f"At most {MAX_IMAGES_PER_REQUEST} files per request")

    # Reject oversized files before reading any of them into memory
    for f in files:
        if await get_upload_file_size(f) > MAX_IMAGE_SIZE_BYTES:
            raise BadRequestError(f"File {f.filename} exceeds the size limit")

    keys: list[str] = []
    try:
        for f in files:
            content = await f.read()
            keys.append(storage_service.upload_file(content, f.filename, f.content_type, folder))
    except Exception:
        logger.warning("Upload batch failed after %d files, cleaning up", len(keys))
        storage_service.delete_files(keys)
        raise

    return UploadResult(keys=keys, urls=storage_service.get_public_urls(keys))


@router.get("/{key:path}")
def get_image(key: str):
    """Return a stored object with its content type."""
    stored = storage_service.get_file(key)
    return Response(content=stored.body, media_type=stored.content_type)
