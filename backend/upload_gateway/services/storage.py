import asyncio
import logging
from typing import Any

import boto3
from botocore.client import Config

from upload_gateway.core.config import Settings
from upload_gateway.core.errors import UploadError

logger = logging.getLogger(__name__)


def build_s3_client(settings: Settings) -> Any:
    """Create the S3 client shared by every request.

    Credentials are static (no session token) and buckets are addressed
    path-style, which most S3-compatible endpoints require.
    """
    session = boto3.session.Session()
    client = session.client(
        "s3",
        endpoint_url=settings.endpoint,
        aws_access_key_id=settings.access_key_id,
        aws_secret_access_key=settings.secret_access_key,
        region_name=settings.region,
        config=Config(s3={"addressing_style": "path"}),
    )
    logger.info("S3 client initialized for endpoint %s (%s)", settings.endpoint, settings.region)
    return client


class StorageService:
    """S3-compatible object storage backed by a single shared client."""

    def __init__(self, client: Any) -> None:
        self.client = client

    async def put_object(self, bucket: str, key: str, data: bytes, content_type: str) -> None:
        def _upload() -> None:
            self.client.put_object(
                Bucket=bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )

        try:
            await asyncio.to_thread(_upload)
        except Exception as exc:
            raise UploadError(f"put_object failed for {bucket}/{key}") from exc
