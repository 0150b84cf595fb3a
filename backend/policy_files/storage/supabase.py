# backend/policy_files/storage/supabase.py
import asyncio
from urllib.parse import quote

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import Settings
from ..errors import SignedUrlFailed, StorageWriteFailed
from ..utils.logging import storage_logger
from .base import StorageClient, UnconfiguredStorage

NOT_CONFIGURED = (
    "Supabase storage not configured. Set SUPABASE_URL, SUPABASE_BUCKET, "
    "SUPABASE_S3_ACCESS_KEY_ID and SUPABASE_S3_SECRET_ACCESS_KEY."
)


class SupabaseStorage(StorageClient):
    """Fallback backend: a Supabase Storage bucket reached over its S3 protocol endpoint"""

    def __init__(self, client, project_url: str, bucket_name: str):
        super().__init__("supabase")
        self.client = client
        self.project_url = project_url.rstrip("/")
        self.bucket_name = bucket_name

    async def put(self, path: str, data: bytes, content_type: str) -> None:
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket_name,
                Key=path,
                Body=data,
                ContentType=content_type or "application/octet-stream"
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageWriteFailed(str(e), backend=self.name) from e

    async def signed_read_url(self, path: str, ttl: int) -> str:
        try:
            return await asyncio.to_thread(
                self.client.generate_presigned_url,
                "get_object",
                Params={"Bucket": self.bucket_name, "Key": path},
                ExpiresIn=ttl
            )
        except (ClientError, BotoCoreError) as e:
            raise SignedUrlFailed(str(e), backend=self.name) from e

    def public_url(self, path: str) -> str:
        return f"{self.project_url}/storage/v1/object/public/{self.bucket_name}/{quote(path, safe='')}"


def build_supabase_storage(settings: Settings) -> StorageClient:
    if not settings.supabase_configured:
        return UnconfiguredStorage("supabase", NOT_CONFIGURED)

    project_url = settings.SUPABASE_URL.rstrip("/")
    client = boto3.client(
        "s3",
        endpoint_url=f"{project_url}/storage/v1/s3",
        region_name=settings.SUPABASE_S3_REGION,
        aws_access_key_id=settings.SUPABASE_S3_ACCESS_KEY_ID,
        aws_secret_access_key=settings.SUPABASE_S3_SECRET_ACCESS_KEY,
        # Every external failure is terminal for the request
        config=Config(
            signature_version="s3v4",
            s3={"addressing_style": "path"},
            retries={"max_attempts": 1, "mode": "standard"}
        ),
    )

    storage_logger.info("Supabase storage configured", extra={"bucket": settings.SUPABASE_BUCKET})
    return SupabaseStorage(client, project_url, settings.SUPABASE_BUCKET)
