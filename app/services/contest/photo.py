import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List, Optional, Dict
from fastapi import UploadFile

from app.models.contest.photo import PhotoInDB, PhotoSort
from app.services.auth.admin_service import parse_object_id
from app.services.contest.participant import ParticipantService
from app.services.storage.base import BaseAssetStore
from app.utils.exceptions import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from app.utils.file_upload import FileUploadService

logger = logging.getLogger(__name__)

SORT_ORDERS = {
    PhotoSort.LIKES: [("likes", -1), ("upload_date", -1)],
    PhotoSort.RECENT: [("upload_date", -1)],
}


class PhotoService:
    """Service for photo records and their stored images"""

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        asset_store: Optional[BaseAssetStore] = None,
        file_service: Optional[FileUploadService] = None
    ):
        self.db = db
        self.collection = db.photos
        self.winners_collection = db.winners
        self.asset_store = asset_store
        self.file_service = file_service or FileUploadService()

    async def get_photo(self, photo_id: str) -> Dict:
        """Get photo by ID, raising NotFoundError for unknown or malformed ids"""
        object_id = parse_object_id(photo_id)
        photo = await self.collection.find_one({"_id": object_id}) if object_id else None
        if not photo:
            raise NotFoundError("Photo not found")
        return photo

    async def upload_photo(
        self,
        owner_unique_string: Optional[str],
        file: Optional[UploadFile],
        caption: Optional[str] = None
    ) -> Dict:
        """
        Store an uploaded image and create its photo record.

        The upload is staged on disk, handed to the asset store for
        optimization and storage, then the temp file is removed. A failed
        temp cleanup does not fail the upload.
        """
        if file is None or not file.filename:
            raise InvalidInputError("No file uploaded")

        if not owner_unique_string:
            raise InvalidInputError("Participant unique string is required")

        participant = await ParticipantService(self.db).get_participant_by_unique_string(owner_unique_string)
        if not participant:
            raise UnauthorizedError("Invalid participant")

        staged_path = await self.file_service.stage_image(file)
        try:
            # Storage keys and URLs are public: they carry the participant id, never the secret
            asset = await self.asset_store.store_image(str(participant["_id"]), staged_path)
        finally:
            self.file_service.discard(staged_path)

        caption = (caption or "").strip() or None
        photo = PhotoInDB(
            participant_unique_string=owner_unique_string,
            path=asset.url,
            storage_key=asset.key,
            caption=caption
        )
        result = await self.collection.insert_one(photo.model_dump())
        logger.info(f"[OK] Photo {result.inserted_id} uploaded by {participant['random_name']}")
        return await self.collection.find_one({"_id": result.inserted_id})

    async def get_photos_for_participant(self, unique_string: str) -> List[Dict]:
        """All photos of one participant, newest first"""
        cursor = self.collection.find(
            {"participant_unique_string": unique_string}
        ).sort("upload_date", -1)
        return await cursor.to_list(length=None)

    async def get_all_photos(self, sort: PhotoSort = PhotoSort.LIKES) -> List[Dict]:
        """All photos, most liked first by default"""
        cursor = self.collection.find({}).sort(SORT_ORDERS[sort])
        return await cursor.to_list(length=None)

    async def delete_photo(
        self,
        photo_id: str,
        requestor_unique_string: Optional[str] = None,
        as_superadmin: bool = False
    ) -> Dict:
        """
        Delete a photo, its stored image and its winner record.

        Participants may only delete their own photos; the superadmin path
        skips the ownership check (the caller has verified the role).
        """
        if not as_superadmin and not requestor_unique_string:
            raise UnauthorizedError("Authentication required")

        photo = await self.get_photo(photo_id)

        if not as_superadmin and photo["participant_unique_string"] != requestor_unique_string:
            raise ForbiddenError("You do not have permission to delete this photo")

        await self._delete_stored_image(photo)

        await self.collection.delete_one({"_id": photo["_id"]})
        winners = await self.winners_collection.delete_many({"photo_id": photo["_id"]})
        if winners.deleted_count:
            logger.info(f"[OK] Removed winner record of deleted photo {photo['_id']}")

        logger.info(f"[OK] Photo {photo['_id']} deleted{' by superadmin' if as_superadmin else ''}")
        return photo

    async def _delete_stored_image(self, photo: Dict) -> None:
        key = photo.get("storage_key")
        if not key or self.asset_store is None:
            return
        result = await self.asset_store.delete(key)
        if not result.success:
            logger.warning(f"[WARN] Failed to delete stored image {key}: {result.error_message}")


def serialize_photo(photo: Dict, include_owner: bool = False) -> Dict:
    """
    Convert photo document to the client's JSON shape.

    The owner secret is only included for the owner's own listing.
    """
    upload_date = photo.get("upload_date")
    data = {
        "_id": str(photo["_id"]),
        "path": photo.get("path"),
        "caption": photo.get("caption"),
        "uploadDate": upload_date.isoformat() if upload_date else None,
        "likes": photo.get("likes", 0),
        "likedBy": list(photo.get("liked_by", [])),
        "isWinner": photo.get("is_winner", False),
        "hasClaimed": photo.get("has_claimed", False)
    }
    if include_owner:
        data["participantUniqueString"] = photo.get("participant_unique_string")
    return data
