"""
Winner lifecycle for a photo.

    Normal --declare--> Winner-Unclaimed --claim--> Winner-Claimed
    Normal <--remove--- Winner-Unclaimed            (edit keeps Winner-Claimed)

A winner record exists exactly when the photo's ``is_winner`` flag is set.
The unique index on ``winners.photo_id`` keeps it to one record per photo.
"""
import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List, Optional, Dict
from datetime import datetime
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.models.contest.winner import (
    ANONYMOUS,
    PENDING,
    PENDING_CLAIM,
    ClaimRequest,
    LeaderboardEntry,
    WinnerInDB,
)
from app.services.auth.admin_service import AdminService, SUPERADMIN_ONLY, parse_object_id
from app.services.contest.photo import PhotoService
from app.utils.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


class WinnerService:
    """Service for declaring winners and claiming prizes"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db.winners
        self.photos_collection = db.photos
        self.participants_collection = db.participants
        self.admin_service = AdminService(db)
        self.photo_service = PhotoService(db)

    async def declare_winner(self, photo_id: str, admin_username: Optional[str]) -> Dict:
        """Mark a photo as winner and create its (unclaimed) winner record"""
        admin = await self.admin_service.get_verified_admin(
            admin_username, SUPERADMIN_ONLY, "Only super admin can declare winners"
        )
        photo = await self.photo_service.get_photo(photo_id)

        updated = await self.photos_collection.find_one_and_update(
            {"_id": photo["_id"], "is_winner": {"$ne": True}},
            {"$set": {"is_winner": True, "has_claimed": False}},
            return_document=ReturnDocument.AFTER
        )
        if not updated:
            raise ConflictError("This photo is already marked as a winner")

        winner = WinnerInDB(photo_id=photo["_id"], declared_by=admin["username"])
        try:
            await self.collection.insert_one(winner.model_dump())
        except DuplicateKeyError:
            # A record was already there; the flag now matches it
            logger.warning(f"[WARN] Winner record for photo {photo['_id']} already existed")
            raise ConflictError("This photo is already marked as a winner")

        logger.info(f"[OK] Photo {photo['_id']} declared winner by {admin['username']}")
        return updated

    async def remove_winner(self, photo_id: str, admin_username: Optional[str]) -> Dict:
        """Return an unclaimed winner to a normal photo"""
        await self.admin_service.get_verified_admin(
            admin_username, SUPERADMIN_ONLY, "Only super admin can remove winner status"
        )
        photo = await self.photo_service.get_photo(photo_id)

        if not photo.get("is_winner"):
            raise InvalidStateError("This photo is not marked as a winner")

        winner = await self.collection.find_one({"photo_id": photo["_id"]})
        if not winner:
            raise NotFoundError("Winner record not found")

        if winner.get("has_claimed"):
            raise ConflictError("Cannot remove winner status after prize has been claimed")

        # Conditional so a claim landing in between is not thrown away
        result = await self.collection.delete_one({"_id": winner["_id"], "has_claimed": False})
        if result.deleted_count == 0:
            raise ConflictError("Cannot remove winner status after prize has been claimed")

        updated = await self.photos_collection.find_one_and_update(
            {"_id": photo["_id"]},
            {"$set": {"is_winner": False, "has_claimed": False}},
            return_document=ReturnDocument.AFTER
        )
        logger.info(f"[OK] Winner status removed from photo {photo['_id']} by {admin_username}")
        return updated

    async def _get_owned_winner(self, claim: ClaimRequest) -> Dict:
        """Shared checks for claim and edit; returns the winner record"""
        if not claim.photo_id or not claim.participant_unique_string:
            raise InvalidInputError("Photo ID and participant unique string are required")

        if not claim.name or not claim.sic or not claim.year:
            raise InvalidInputError("Name, SIC, and year are required")

        photo = await self.photo_service.get_photo(claim.photo_id)

        if photo["participant_unique_string"] != claim.participant_unique_string:
            raise ForbiddenError("This photo does not belong to you")

        if not photo.get("is_winner"):
            raise InvalidStateError("This photo is not marked as a winner")

        winner = await self.collection.find_one({"photo_id": photo["_id"]})
        if not winner:
            raise NotFoundError("Winner record not found for this photo")

        return winner

    async def claim_prize(self, claim: ClaimRequest) -> Dict:
        """First submission of the winner's details"""
        winner = await self._get_owned_winner(claim)

        if winner.get("has_claimed"):
            raise ConflictError("Prize already claimed for this photo")

        updated = await self.collection.find_one_and_update(
            {"_id": winner["_id"], "has_claimed": False},
            {"$set": {
                "name": claim.name,
                "sic": claim.sic,
                "year": claim.year,
                "has_claimed": True,
                "claimed_at": datetime.utcnow()
            }},
            return_document=ReturnDocument.AFTER
        )
        if not updated:
            raise ConflictError("Prize already claimed for this photo")

        await self.photos_collection.update_one(
            {"_id": winner["photo_id"]},
            {"$set": {"has_claimed": True}}
        )
        logger.info(f"[OK] Prize claimed for photo {winner['photo_id']}")
        return updated

    async def edit_claim(self, claim: ClaimRequest) -> Dict:
        """Change details of an already claimed prize"""
        winner = await self._get_owned_winner(claim)

        if not winner.get("has_claimed"):
            raise InvalidStateError("Prize has not been claimed yet. Use the claim endpoint instead.")

        updated = await self.collection.find_one_and_update(
            {"_id": winner["_id"], "has_claimed": True},
            {"$set": {
                "name": claim.name,
                "sic": claim.sic,
                "year": claim.year,
                "updated_at": datetime.utcnow()
            }},
            return_document=ReturnDocument.AFTER
        )
        if not updated:
            raise NotFoundError("Winner record not found for this photo")

        logger.info(f"[OK] Winner details updated for photo {winner['photo_id']}")
        return updated

    async def get_winner_by_photo(self, photo_id: str) -> Dict:
        """Winner record of one photo"""
        object_id = parse_object_id(photo_id)
        winner = await self.collection.find_one({"photo_id": object_id}) if object_id else None
        if not winner:
            raise NotFoundError("Winner record not found for this photo")
        return winner

    async def _get_winners_with_photos(self) -> List[Dict]:
        """All winners, newest declaration first, each with its photo (or None)"""
        winners = await self.collection.find({}).sort("declared_at", -1).to_list(length=None)

        photo_ids = [winner["photo_id"] for winner in winners]
        photos = await self.photos_collection.find({"_id": {"$in": photo_ids}}).to_list(length=None)
        photos_by_id = {photo["_id"]: photo for photo in photos}

        for winner in winners:
            winner["photo"] = photos_by_id.get(winner["photo_id"])
        return winners

    async def get_all_winners(self) -> List[Dict]:
        return await self._get_winners_with_photos()

    async def get_leaderboard(self) -> List[Dict]:
        """
        Public view of all winners.

        Unclaimed winners show pending values instead of the placeholder
        claimant fields; unknown owners show as anonymous.
        """
        winners = await self._get_winners_with_photos()

        owner_strings = list({
            winner["photo"]["participant_unique_string"]
            for winner in winners if winner["photo"]
        })
        participants = await self.participants_collection.find(
            {"unique_string": {"$in": owner_strings}}
        ).to_list(length=None)
        names = {p["unique_string"]: p["random_name"] for p in participants}

        leaderboard = []
        for winner in winners:
            photo = winner["photo"]
            claimed = bool(winner.get("has_claimed"))
            entry = LeaderboardEntry(
                id=str(winner["_id"]),
                photo_path=photo["path"] if photo else None,
                participant_name=names.get(photo["participant_unique_string"], ANONYMOUS) if photo else ANONYMOUS,
                winner_name=winner.get("name") if claimed else PENDING_CLAIM,
                sic=winner.get("sic") if claimed else PENDING,
                year=winner.get("year") if claimed else PENDING,
                declared_at=winner["declared_at"],
                has_claimed=claimed
            )
            leaderboard.append(entry.model_dump(by_alias=True, mode="json"))

        return leaderboard


def serialize_winner(winner: Dict, photo_data: Optional[Dict] = None) -> Dict:
    """
    Convert winner document to the client's JSON shape.

    ``photo_data`` replaces the plain photo id when the photo is embedded.
    """
    declared_at = winner.get("declared_at")
    return {
        "_id": str(winner["_id"]),
        "photoId": photo_data if photo_data is not None else str(winner["photo_id"]),
        "name": winner.get("name"),
        "sic": winner.get("sic"),
        "year": winner.get("year"),
        "hasClaimed": winner.get("has_claimed", False),
        "declaredAt": declared_at.isoformat() if declared_at else None,
        "declaredBy": winner.get("declared_by")
    }
