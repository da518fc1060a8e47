import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional, Dict
from pymongo.errors import DuplicateKeyError

from app.models.contest.participant import ParticipantInDB
from app.services.contest.name_generator import generate_display_name, generate_unique_string
from app.utils.exceptions import ConflictError, InvalidInputError, UnauthorizedError

logger = logging.getLogger(__name__)

MAX_CREATE_ATTEMPTS = 5


class ParticipantService:
    """Service for pseudonymous participant identities"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db.participants

    async def get_participant_by_unique_string(self, unique_string: str) -> Optional[Dict]:
        """Get participant by secret"""
        if not unique_string:
            return None
        return await self.collection.find_one({"unique_string": unique_string})

    async def create_participant(self) -> Dict:
        """
        Mint a new participant identity.

        The unique index on ``unique_string`` rejects collisions, so an
        existing participant is never overwritten; a colliding secret is
        regenerated a few times before giving up.
        """
        for _ in range(MAX_CREATE_ATTEMPTS):
            unique_string = generate_unique_string()
            if await self.get_participant_by_unique_string(unique_string):
                continue

            participant = ParticipantInDB(
                unique_string=unique_string,
                random_name=generate_display_name()
            )
            try:
                result = await self.collection.insert_one(participant.model_dump())
            except DuplicateKeyError:
                continue

            logger.info(f"[OK] Participant {participant.random_name} created")
            return await self.collection.find_one({"_id": result.inserted_id})

        logger.warning("[WARN] Could not generate a free participant secret")
        raise ConflictError("Please try again, unique string already exists.")

    async def login(self, unique_string: Optional[str], random_name: Optional[str]) -> Dict:
        """Exact match of the (secret, display name) pair"""
        if not unique_string or not random_name:
            raise InvalidInputError("Please provide both unique string and random name")

        participant = await self.collection.find_one({
            "unique_string": unique_string,
            "random_name": random_name
        })
        if not participant:
            raise UnauthorizedError("Invalid credentials")

        return participant


def serialize_participant(participant: Dict) -> Dict:
    """Credentials pair as the client stores it"""
    return {
        "uniqueString": participant["unique_string"],
        "randomName": participant["random_name"]
    }
