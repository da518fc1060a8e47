from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from enum import Enum


class PhotoSort(str, Enum):
    """Orderings for the all-photos listing"""
    LIKES = "likes"  # likes desc, then upload date desc
    RECENT = "recent"  # upload date desc


class PhotoInDB(BaseModel):
    """
    Schema for photo in database.

    ``likes`` always equals ``len(liked_by)``; both are only changed
    together in a single atomic update.
    """
    participant_unique_string: str
    path: str
    storage_key: str
    caption: Optional[str] = None
    upload_date: datetime = Field(default_factory=datetime.utcnow)
    likes: int = Field(0, ge=0)
    liked_by: List[str] = []
    is_winner: bool = False
    has_claimed: bool = False


class PhotoOwnerRequest(BaseModel):
    """Body for participant-initiated photo deletion"""
    participant_unique_string: Optional[str] = Field(None, alias="participantUniqueString")

    class Config:
        populate_by_name = True


class AdminActionRequest(BaseModel):
    """Body naming the acting admin for like/winner actions"""
    admin_username: Optional[str] = Field(None, alias="adminUsername")

    class Config:
        populate_by_name = True
