"""Object storage for uploaded images.

Keys are opaque to callers: ``<folder>/<uuid>.<ext>`` for generic uploads and
``organizations/<orgId>/<uuid>.<ext>`` for organization galleries.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Iterable

from botocore.exceptions import BotoCoreError, ClientError

from volunteer_api.core.config import settings
from volunteer_api.core.exceptions import BadRequestError, NotFoundError
from volunteer_api.services.storage_client import get_s3_client, normalize_endpoint
from volunteer_api.utils.file_upload import file_extension, validate_image

logger = logging.getLogger(__name__)

DEFAULT_FOLDER = "images"
MISSING_OBJECT_CODES = {"NoSuchKey", "404", "NotFound"}


@dataclass
class StoredFile:
    body: bytes
    content_type: str


def build_key(folder: str, filename: str | None) -> str:
    folder = (folder or DEFAULT_FOLDER).strip("/") or DEFAULT_FOLDER
    ext = file_extension(filename) or "bin"
    return f"{folder}/{uuid.uuid4()}.{ext}"


def organization_folder(organization_id: int) -> str:
    return f"organizations/{organization_id}"


def upload_file(data: bytes, filename: str | None, mimetype: str | None, folder: str) -> str:
    """Validate and store an image; return its storage key."""
    error = validate_image(filename, mimetype, len(data))
    if error:
        raise BadRequestError(error)

    key = build_key(folder, filename)
    get_s3_client().put_object(
        Bucket=settings.S3_BUCKET,
        Key=key,
        Body=data,
        ContentType=mimetype,
    )
    logger.info("Stored object %s (%d bytes)", key, len(data))
    return key


def public_url(key: str) -> str:
    """Map a storage key to its public URL."""
    if key.startswith(("http://", "https://")):
        return key
    template = settings.S3_PUBLIC_URL_TEMPLATE.strip()
    if template:
        return template.format(bucket=settings.S3_BUCKET, key=key, region=settings.S3_REGION)
    endpoint = normalize_endpoint(settings.S3_ENDPOINT_URL)
    if endpoint:
        return f"{endpoint}/{settings.S3_BUCKET}/{key}"
    return f"https://{settings.S3_BUCKET}.s3.{settings.S3_REGION}.amazonaws.com/{key}"


def get_public_urls(keys: Iterable[str] | None) -> list[str]:
    return [public_url(key) for key in keys or []]


def delete_files(keys: Iterable[str]) -> None:
    """Best-effort delete; failures are logged, never raised."""
    keys = [key for key in keys if key and not key.startswith(("http://", "https://"))]
    if not keys:
        return
    try:
        client = get_s3_client()
    except (BotoCoreError, ClientError):
        logger.warning("Could not create storage client to delete %d objects", len(keys), exc_info=True)
        return
    for key in keys:
        try:
            client.delete_object(Bucket=settings.S3_BUCKET, Key=key)
        except (BotoCoreError, ClientError):
            logger.warning("Failed to delete object %s", key, exc_info=True)


def get_file(key: str) -> StoredFile:
    """Fetch an object by key; NotFoundError when it does not exist."""
    try:
        response = get_s3_client().get_object(Bucket=settings.S3_BUCKET, Key=key)
    except ClientError as exc:
        code = str(exc.response.get("Error", {}).get("Code", ""))
        if code in MISSING_OBJECT_CODES:
            raise NotFoundError(f"File {key} not found") from exc
        raise
    body = response["Body"].read()
    return StoredFile(
        body=body,
        content_type=response.get("ContentType") or "application/octet-stream",
    )
