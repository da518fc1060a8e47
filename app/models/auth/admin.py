from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import datetime
from enum import Enum


class AdminRole(str, Enum):
    """Staff roles. Superadmin is a strict superset of admin."""
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


def is_super_admin_role(role: Optional[str]) -> bool:
    """The superadmin flag is always derived from the role"""
    return role == AdminRole.SUPERADMIN.value


class AdminCreate(BaseModel):
    """Schema for admin creation (fields checked by the service)"""
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class AdminLogin(BaseModel):
    """Schema for admin username/password login"""
    username: Optional[str] = None
    password: Optional[str] = None


class AdminInDB(BaseModel):
    """Schema for admin in database"""
    username: str
    hashed_password: str
    role: AdminRole = AdminRole.ADMIN
    is_super_admin: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @model_validator(mode="after")
    def sync_super_admin_flag(self):
        self.is_super_admin = is_super_admin_role(self.role.value)
        return self
