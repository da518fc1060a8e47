import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Dict, Optional, Tuple
from pymongo import ReturnDocument

from app.services.auth.admin_service import AdminService, parse_object_id
from app.utils.exceptions import InternalError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

# Each attempt is one conditional update; a retry only happens when another
# admin's toggle raced between our unlike and like attempts
MAX_TOGGLE_ATTEMPTS = 5


class LikeService:
    """Admin likes on photos"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db.photos
        self.admin_service = AdminService(db)

    async def toggle_like(self, photo_id: str, admin_username: Optional[str]) -> Tuple[Dict, bool]:
        """
        Like the photo, or unlike it if this admin already liked it.

        Membership test and counter change happen in one single-document
        update, so ``likes`` always equals ``len(liked_by)``.

        Returns:
            (updated photo, True if the call liked / False if it unliked)
        """
        if not admin_username:
            raise InvalidInputError("Admin username is required")

        admin = await self.admin_service.get_admin_by_username(admin_username)
        if not admin:
            raise NotFoundError("Admin not found")

        object_id = parse_object_id(photo_id)
        if object_id is None or not await self.collection.find_one({"_id": object_id}, {"_id": 1}):
            raise NotFoundError("Photo not found")

        for _ in range(MAX_TOGGLE_ATTEMPTS):
            # Unlike if already liked
            photo = await self.collection.find_one_and_update(
                {"_id": object_id, "liked_by": admin_username},
                {"$pull": {"liked_by": admin_username}, "$inc": {"likes": -1}},
                return_document=ReturnDocument.AFTER
            )
            if photo:
                logger.info(f"[OK] {admin_username} unliked photo {photo_id}")
                return photo, False

            # Otherwise like
            photo = await self.collection.find_one_and_update(
                {"_id": object_id, "liked_by": {"$nin": [admin_username]}},
                {"$addToSet": {"liked_by": admin_username}, "$inc": {"likes": 1}},
                return_document=ReturnDocument.AFTER
            )
            if photo:
                logger.info(f"[OK] {admin_username} liked photo {photo_id}")
                return photo, True

            # Neither matched: photo deleted meanwhile, or membership flipped
            if not await self.collection.find_one({"_id": object_id}, {"_id": 1}):
                raise NotFoundError("Photo not found")

        raise InternalError("Photo is being updated, please try again")
