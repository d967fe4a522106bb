"""Helpers for image upload validation."""

from __future__ import annotations

from os import SEEK_END

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

ALLOWED_IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp"}
ALLOWED_IMAGE_MIME_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
}
MAX_IMAGE_SIZE_BYTES = 10 * 1024 * 1024  # 10 MB
MAX_IMAGES_PER_REQUEST = 10


def file_extension(filename: str | None) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


def validate_image(filename: str | None, content_type: str | None, size: int) -> str | None:
    """Return an error message when the file is not an acceptable image, else None."""
    ext = file_extension(filename)
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        return f"File extension '.{ext}' not allowed"
    if (content_type or "").lower() not in ALLOWED_IMAGE_MIME_TYPES:
        return f"Content type '{content_type}' not allowed"
    if size > MAX_IMAGE_SIZE_BYTES:
        max_mb = MAX_IMAGE_SIZE_BYTES / (1024 * 1024)
        return f"File size exceeds {max_mb:.0f} MB limit"
    return None


async def get_upload_file_size(file: UploadFile) -> int:
    """Read size from the underlying file object without loading into memory."""

    def _get_size() -> int:
        stream = file.file
        original_pos = stream.tell()
        try:
            stream.seek(0, SEEK_END)
            return stream.tell()
        finally:
            stream.seek(original_pos)

    return await run_in_threadpool(_get_size)
