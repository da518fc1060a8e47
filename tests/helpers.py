"""Shared test helpers: asset store double and direct record inserts."""
from pathlib import Path

from bson import ObjectId

from app.models.contest.photo import PhotoInDB
from app.services.auth.security import security_service
from app.services.storage.base import BaseAssetStore, StoredAsset, StorageDeleteResult


class MemoryAssetStore(BaseAssetStore):
    """Asset store double that keeps uploads in a dict"""

    store_id = "memory"

    def __init__(self):
        self.objects = {}
        self.fail_deletes = False
        self.deleted = []

    async def store_image(self, owner: str, source_path: Path) -> StoredAsset:
        key = f"photo-contest/{owner}/{source_path.stem}.webp"
        self.objects[key] = source_path.read_bytes()
        return StoredAsset(url=f"https://assets.test/{key}", key=key, size=len(self.objects[key]))

    async def delete(self, key: str) -> StorageDeleteResult:
        self.deleted.append(key)
        if self.fail_deletes:
            return StorageDeleteResult(success=False, key=key, error_message="storage unavailable")
        self.objects.pop(key, None)
        return StorageDeleteResult(success=True, key=key)


def auth_headers(admin: dict) -> dict:
    """Bearer header for an admin document."""
    return {"Authorization": f"Bearer {security_service.create_access_token(admin)}"}


async def insert_photo(db, owner: str, **fields) -> dict:
    """Insert a photo record directly, bypassing upload."""
    photo = PhotoInDB(
        participant_unique_string=owner,
        path=fields.pop("path", "https://assets.test/photo.webp"),
        storage_key=fields.pop("storage_key", f"photo-contest/{ObjectId()}/photo.webp"),
        **fields
    )
    result = await db.photos.insert_one(photo.model_dump())
    return await db.photos.find_one({"_id": result.inserted_id})
