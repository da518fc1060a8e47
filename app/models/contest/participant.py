from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ParticipantInDB(BaseModel):
    """Schema for participant in database"""
    unique_string: str
    random_name: str
    created_at: datetime = Field(default_factory=datetime.utcnow)


class ParticipantLogin(BaseModel):
    """Schema for participant login with the secret/name pair"""
    unique_string: Optional[str] = Field(None, alias="uniqueString")
    random_name: Optional[str] = Field(None, alias="randomName")

    class Config:
        populate_by_name = True
