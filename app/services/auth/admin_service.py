import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional, Dict, List
from datetime import datetime
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError

from app.config import settings
from app.models.auth.admin import AdminInDB, AdminRole, is_super_admin_role
from app.services.auth.security import security_service
from app.utils.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

SUPER_ADMIN_USERNAME = "superadmin"

# Role gates
ANY_ADMIN = (AdminRole.ADMIN.value, AdminRole.SUPERADMIN.value)
SUPERADMIN_ONLY = (AdminRole.SUPERADMIN.value,)


def parse_object_id(value: Optional[str]) -> Optional[ObjectId]:
    """Parse a path/body id, returning None when it is not a valid ObjectId"""
    if not value:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def require_role(admin: Optional[Dict], allowed_roles: tuple, message: str = None) -> Dict:
    """Raise ForbiddenError unless the admin's live role is one of allowed_roles"""
    if not admin or admin.get("role") not in allowed_roles:
        if allowed_roles == SUPERADMIN_ONLY:
            raise ForbiddenError(message or "Access denied. Superadmin required.")
        raise ForbiddenError(message or "Access denied. Admin required.")
    return admin


class AdminService:
    """Service for admin accounts and credential checks"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.admins_collection = db.admins

    async def get_admin_by_username(self, username: str) -> Optional[Dict]:
        """Get admin by exact username"""
        if not username:
            return None
        return await self.admins_collection.find_one({"username": username})

    async def get_admin_by_id(self, admin_id: str) -> Optional[Dict]:
        """Get admin by ID"""
        object_id = parse_object_id(admin_id)
        if object_id is None:
            return None
        return await self.admins_collection.find_one({"_id": object_id})

    async def create_admin(
        self,
        username: Optional[str],
        password: Optional[str],
        role: Optional[str]
    ) -> Dict:
        """Create a new admin account"""
        username = (username or "").strip()
        if not username or not password or not role:
            raise InvalidInputError("Username, password, and role are required")

        if role not in ANY_ADMIN:
            raise InvalidInputError('Role must be either "admin" or "superadmin"')

        if await self.get_admin_by_username(username):
            raise ConflictError("Username already exists")

        admin_data = AdminInDB(
            username=username,
            hashed_password=await security_service.get_password_hash_async(password),
            role=AdminRole(role)
        ).model_dump()
        admin_data["role"] = role

        try:
            result = await self.admins_collection.insert_one(admin_data)
        except DuplicateKeyError:
            # Lost a race with a concurrent create
            raise ConflictError("Username already exists")

        logger.info(f"[OK] Admin '{username}' created with role {role}")
        return await self.admins_collection.find_one({"_id": result.inserted_id})

    async def authenticate(self, username: Optional[str], password: Optional[str]) -> Dict:
        """
        Check admin credentials.

        Unknown usernames and wrong passwords fail with the same message.
        """
        if not username or not password:
            raise InvalidInputError("Please provide both username and password")

        admin = await self.get_admin_by_username(username)
        if not admin:
            raise UnauthorizedError("Invalid credentials")

        if not await security_service.verify_password_async(password, admin.get("hashed_password")):
            raise UnauthorizedError("Invalid credentials")

        return admin

    async def list_admins(self) -> List[Dict]:
        """Get all admins, newest first"""
        cursor = self.admins_collection.find(
            {},
            {"hashed_password": 0}
        ).sort("created_at", -1)
        return await cursor.to_list(length=None)

    async def delete_admin(self, admin_id: str, actor_id: str) -> bool:
        """Delete an admin account. Admins cannot delete themselves."""
        if admin_id == actor_id:
            raise InvalidInputError("Cannot delete your own account")

        object_id = parse_object_id(admin_id)
        if object_id is None:
            raise NotFoundError("Admin not found")

        result = await self.admins_collection.delete_one({"_id": object_id})
        if result.deleted_count == 0:
            raise NotFoundError("Admin not found")

        logger.info(f"[OK] Admin {admin_id} deleted by {actor_id}")
        return True

    async def get_verified_admin(self, username: Optional[str], allowed_roles: tuple, message: str = None) -> Dict:
        """
        Resolve an acting admin by username and check the live role.

        Unknown usernames are treated the same as insufficient roles.
        """
        admin = await self.get_admin_by_username(username)
        return require_role(admin, allowed_roles, message)

    async def seed_super_admin(self) -> Dict:
        """Create the initial superadmin, or repair its role if it drifted"""
        existing = await self.get_admin_by_username(SUPER_ADMIN_USERNAME)
        if not existing:
            admin = await self.create_admin(
                SUPER_ADMIN_USERNAME,
                settings.super_admin_password,
                AdminRole.SUPERADMIN.value
            )
            logger.info("[OK] Super Admin created")
            return admin

        if existing.get("role") != AdminRole.SUPERADMIN.value or not existing.get("is_super_admin"):
            await self.admins_collection.update_one(
                {"_id": existing["_id"]},
                {"$set": {
                    "role": AdminRole.SUPERADMIN.value,
                    "is_super_admin": True,
                    "updated_at": datetime.utcnow()
                }}
            )
            logger.info("[OK] Existing Super Admin role updated")
            existing = await self.get_admin_by_username(SUPER_ADMIN_USERNAME)

        return existing


def serialize_admin(admin: Dict) -> Dict:
    """Public view of an admin document (no password hash)"""
    created_at = admin.get("created_at")
    return {
        "id": str(admin["_id"]),
        "username": admin.get("username"),
        "role": admin.get("role"),
        "isSuperAdmin": is_super_admin_role(admin.get("role")),
        "createdAt": created_at.isoformat() if created_at else None
    }
