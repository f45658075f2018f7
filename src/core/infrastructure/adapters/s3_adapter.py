"""Thin adapter for an S3-compatible object store (R2 or S3)."""

import os
from typing import Any, Protocol

import boto3

from core.utils.constants import (
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_R2_BUCKET_NAME,
    ENV_R2_ENDPOINT_URL,
)


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def delete_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Any: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (repository-facing)."""

    def delete_object(self, *, key: str) -> None: ...


class S3Adapter:
    """Low-level object store operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client, pointed at R2 when an endpoint is configured
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(
        self,
        bucket_name: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        """Create S3 client from explicit values or environment configuration."""
        bucket_name = bucket_name or os.getenv(ENV_R2_BUCKET_NAME)
        if not bucket_name:
            raise RuntimeError(f"{ENV_R2_BUCKET_NAME} environment variable is not set")

        self._bucket = bucket_name
        self._client: _Boto3S3Client = boto3.client(
            "s3",
            endpoint_url=endpoint_url
            or os.getenv(ENV_R2_ENDPOINT_URL)
            or os.getenv(ENV_AWS_ENDPOINT_URL),
            region_name=os.getenv(ENV_AWS_REGION),
        )

    def delete_object(self, *, key: str) -> None:
        """Delete object from the bucket.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.delete_object(
            Bucket=self._bucket,
            Key=key,
        )
