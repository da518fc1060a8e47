from typing import Annotated, Optional
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.database import get_database
from app.services.auth.security import security_service
from app.services.auth.admin_service import AdminService, ANY_ADMIN, SUPERADMIN_ONLY, require_role
from app.utils.exceptions import ForbiddenError, UnauthorizedError

# OAuth2 scheme (Authorization: Bearer <token>)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/admin/login", auto_error=False)


async def _load_admin(token: str, db: AsyncIOMotorDatabase) -> dict:
    """
    Resolve a bearer token to the live admin document.

    The role always comes from the database, never from the token claims.
    """
    token_data = security_service.verify_token(token, "access")
    if token_data is None:
        raise UnauthorizedError("Invalid token")

    admin = await AdminService(db).get_admin_by_id(token_data.admin_id)
    if admin is None:
        raise UnauthorizedError("Invalid token")

    return admin


async def get_current_admin(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    db: AsyncIOMotorDatabase = Depends(get_database)
) -> dict:
    """Get current authenticated admin (any role)"""
    if not token:
        raise UnauthorizedError("No authorization token provided")
    admin = await _load_admin(token, db)
    return require_role(admin, ANY_ADMIN)


async def get_optional_admin(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    db: AsyncIOMotorDatabase = Depends(get_database)
) -> Optional[dict]:
    """Authenticated admin if a token was sent; a bad token is still rejected"""
    if not token:
        return None
    return await _load_admin(token, db)


async def get_current_superadmin(
    admin: dict = Depends(get_current_admin)
) -> dict:
    """Current admin, required to hold the superadmin role"""
    return require_role(admin, SUPERADMIN_ONLY)


def resolve_acting_username(current_admin: Optional[dict], body_username: Optional[str]) -> Optional[str]:
    """
    Username of the admin performing a like/winner action.

    With a token the token's admin acts, and a differing body username is
    refused. Without one the body username is used and verified later.
    """
    if current_admin is None:
        return body_username

    if body_username and body_username != current_admin["username"]:
        raise ForbiddenError("Admin username does not match the authenticated admin")

    return current_admin["username"]
