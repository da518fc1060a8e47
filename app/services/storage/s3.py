"""
S3 asset store (boto3). Uploads are public-read via bucket policy; the
object key is kept on the photo so the object can be deleted later.
"""
import logging
from pathlib import Path
from typing import Optional, Dict, Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.services.storage.base import BaseAssetStore, StoredAsset, StorageDeleteResult
from app.services.storage.image import optimize_image, build_storage_key

logger = logging.getLogger(__name__)


class S3AssetStore(BaseAssetStore):
    """Store optimized photos in an S3 bucket"""

    store_id = "s3"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        config = config or {}
        self.bucket_name = config.get("bucket_name", settings.aws_bucket_name)
        self.region = config.get("region", settings.aws_region)
        if not self.bucket_name:
            raise ValueError("AWS_BUCKET_NAME is required for the s3 storage backend")

        self.s3_client = config.get("client") or boto3.client(
            "s3",
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=self.region
        )

    def _public_url(self, key: str) -> str:
        if self.region:
            return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"
        return f"https://{self.bucket_name}.s3.amazonaws.com/{key}"

    def _upload(self, owner: str, source_path: Path) -> StoredAsset:
        body = optimize_image(source_path)
        key = build_storage_key(owner, source_path)
        self.s3_client.put_object(
            Bucket=self.bucket_name,
            Key=key,
            Body=body,
            ContentType="image/webp"
        )
        logger.info(f"[OK] Uploaded s3://{self.bucket_name}/{key} ({len(body)} bytes)")
        return StoredAsset(url=self._public_url(key), key=key, size=len(body))

    async def store_image(self, owner: str, source_path: Path) -> StoredAsset:
        return await run_in_threadpool(self._upload, owner, source_path)

    async def delete(self, key: str) -> StorageDeleteResult:
        if not key:
            return StorageDeleteResult(success=False, error_message="No storage key")
        try:
            await run_in_threadpool(
                self.s3_client.delete_object,
                Bucket=self.bucket_name,
                Key=key
            )
            return StorageDeleteResult(success=True, key=key)
        except (BotoCoreError, ClientError) as e:
            return StorageDeleteResult(success=False, key=key, error_message=str(e))
