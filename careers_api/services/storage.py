"""
S3-compatible object storage for CV files.
"""

import asyncio
import logging
import re
import uuid
from functools import partial
from typing import Optional
from urllib.parse import quote

import boto3

from careers_api.config import Settings

logger = logging.getLogger(__name__)

WHITESPACE_RUN = re.compile(r"\s+")


def sanitize_filename(filename: str) -> str:
    """Collapse each run of whitespace into a single underscore; nothing else changes."""
    return WHITESPACE_RUN.sub("_", filename)


def generate_file_key(original_filename: str, correlation_id: str, token: Optional[str] = None) -> str:
    """applications/{correlation_id}/{token}_{sanitized filename}

    ``token`` defaults to a fresh random hex string, so two uploads of the
    same file never share a key.
    """
    token = token or uuid.uuid4().hex
    return f"applications/{correlation_id}/{token}_{sanitize_filename(original_filename)}"


class S3Storage:
    def __init__(self, client, bucket_name: str, region: str = "us-east-1", endpoint_url: Optional[str] = None):
        if not bucket_name:
            raise ValueError("S3_BUCKET_NAME environment variable is not set")
        self.client = client
        self.bucket_name = bucket_name
        self.region = region
        self.endpoint_url = endpoint_url.rstrip("/") if endpoint_url else None

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3Storage":
        # Credentials come from the usual AWS environment variables / config files
        client = boto3.client(
            "s3",
            region_name=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url,
        )
        return cls(client, settings.s3_bucket_name, settings.aws_region, settings.s3_endpoint_url)

    def object_url(self, key: str) -> str:
        quoted = quote(key, safe="/")
        if self.endpoint_url:
            return f"{self.endpoint_url}/{self.bucket_name}/{quoted}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{quoted}"

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        """Write ``data`` at ``key`` and return its URL. Client errors propagate."""
        loop = asyncio.get_running_loop()
        # boto3 is blocking; keep it off the event loop
        await loop.run_in_executor(
            None,
            partial(
                self.client.put_object,
                Bucket=self.bucket_name,
                Key=key,
                Body=data,
                ContentType=content_type,
            ),
        )
        logger.debug("Stored %d bytes at s3://%s/%s", len(data), self.bucket_name, key)
        return self.object_url(key)
