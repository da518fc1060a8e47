from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from bson import ObjectId

# Claimant fields hold this until the participant claims
PLACEHOLDER = "TBA"

# Leaderboard values shown for unclaimed winners
PENDING_CLAIM = "Pending Claim"
PENDING = "Pending"
ANONYMOUS = "Anonymous"


class WinnerInDB(BaseModel):
    """Schema for winner record in database (one per photo)"""
    photo_id: ObjectId
    name: str = PLACEHOLDER
    sic: str = PLACEHOLDER
    year: str = PLACEHOLDER
    has_claimed: bool = False
    declared_at: datetime = Field(default_factory=datetime.utcnow)
    declared_by: str

    class Config:
        arbitrary_types_allowed = True


class ClaimRequest(BaseModel):
    """Body for claiming a prize or editing claimed details"""
    photo_id: Optional[str] = Field(None, alias="photoId")
    participant_unique_string: Optional[str] = Field(None, alias="participantUniqueString")
    name: Optional[str] = None
    sic: Optional[str] = None
    year: Optional[str] = None

    class Config:
        populate_by_name = True
        # Whitespace-only details count as missing
        str_strip_whitespace = True


class LeaderboardEntry(BaseModel):
    """Public projection of one winner"""
    id: str
    photo_path: Optional[str] = Field(None, alias="photoPath")
    participant_name: str = Field(ANONYMOUS, alias="participantName")
    winner_name: str = Field(PENDING_CLAIM, alias="winnerName")
    sic: str = PENDING
    year: str = PENDING
    declared_at: datetime = Field(..., alias="declaredAt")
    has_claimed: bool = Field(False, alias="hasClaimed")

    class Config:
        populate_by_name = True
