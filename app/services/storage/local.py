"""
Local disk asset store. Files are written under the upload directory and
served by the app's ``/uploads`` static mount.
"""
import logging
from pathlib import Path
from typing import Optional, Dict, Any

from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.services.storage.base import BaseAssetStore, StoredAsset, StorageDeleteResult
from app.services.storage.image import optimize_image, build_storage_key

logger = logging.getLogger(__name__)


class LocalAssetStore(BaseAssetStore):
    """Store optimized photos on the local filesystem"""

    store_id = "local"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        config = config or {}
        self.root = Path(config.get("upload_dir", settings.upload_dir))
        self.base_url = config.get("base_url", settings.backend_url).rstrip("/")

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        # Keys never escape the upload directory
        if self.root.resolve() not in path.parents:
            raise ValueError(f"Invalid storage key: {key}")
        return path

    def _write(self, owner: str, source_path: Path) -> StoredAsset:
        body = optimize_image(source_path)
        key = build_storage_key(owner, source_path)
        target = self._path_for(key)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(body)
        logger.info(f"[OK] Stored {key} locally ({len(body)} bytes)")
        return StoredAsset(url=f"{self.base_url}/uploads/{key}", key=key, size=len(body))

    async def store_image(self, owner: str, source_path: Path) -> StoredAsset:
        return await run_in_threadpool(self._write, owner, source_path)

    async def delete(self, key: str) -> StorageDeleteResult:
        if not key:
            return StorageDeleteResult(success=False, error_message="No storage key")
        try:
            path = self._path_for(key)
            if not path.exists():
                return StorageDeleteResult(success=False, key=key, error_message="File not found")
            path.unlink()
            return StorageDeleteResult(success=True, key=key)
        except (OSError, ValueError) as e:
            return StorageDeleteResult(success=False, key=key, error_message=str(e))
