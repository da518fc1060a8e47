from pydantic import BaseModel
from typing import Optional


class TokenData(BaseModel):
    """Token payload data"""
    admin_id: Optional[str] = None
    username: Optional[str] = None
    role: Optional[str] = None
