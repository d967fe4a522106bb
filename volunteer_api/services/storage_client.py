"""boto3 client factory for the object store holding images and gallery files."""

from __future__ import annotations

import boto3
from botocore.client import BaseClient
from botocore.config import Config

from volunteer_api.core.config import settings

ADDRESSING_STYLES = {"path", "virtual"}
CONNECT_TIMEOUT_SECONDS = 5
READ_TIMEOUT_SECONDS = 30


def normalize_endpoint(endpoint_url: str | None) -> str | None:
    if endpoint_url:
        return endpoint_url.rstrip("/")
    return None


def _build_s3_config() -> Config:
    # Failures surface to the caller; botocore's own retry loop is disabled.
    options: dict = {
        "connect_timeout": CONNECT_TIMEOUT_SECONDS,
        "read_timeout": READ_TIMEOUT_SECONDS,
        "retries": {"max_attempts": 0},
    }
    style = (settings.S3_URL_STYLE or "").strip().lower()
    if style in ADDRESSING_STYLES:
        options["s3"] = {"addressing_style": style}
    return Config(**options)


def get_s3_client(endpoint_url: str | None = None) -> BaseClient:
    """Return an S3 client for AWS or any S3-compatible endpoint (MinIO, Yandex, ...)."""
    return boto3.client(
        "s3",
        region_name=settings.S3_REGION or None,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
        endpoint_url=normalize_endpoint(endpoint_url or settings.S3_ENDPOINT_URL),
        config=_build_s3_config(),
    )
