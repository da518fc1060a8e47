from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.auth.admin import AdminCreate, AdminLogin
from app.services.auth.admin_service import AdminService, serialize_admin
from app.services.auth.security import security_service
from app.routes.auth.dependencies import (
    get_current_admin,
    get_current_superadmin,
    get_database,
)
from app.utils.exceptions import ContestError
from app.utils.response import (
    success_response,
    contest_error_response,
    internal_error_response,
)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/login")
async def login(
    login_data: AdminLogin,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Login with username and password.
    Returns a bearer token valid for 24 hours.
    """
    try:
        admin = await AdminService(db).authenticate(login_data.username, login_data.password)
        token = security_service.create_access_token(admin)

        return success_response(
            message="Admin login successful",
            data={
                "token": token,
                "token_type": "bearer",
                "admin": serialize_admin(admin)
            }
        )
    except ContestError as e:
        return contest_error_response(e)
    except Exception as e:
        return internal_error_response("Login failed", e)


@router.get("/verify")
async def verify(current_admin: dict = Depends(get_current_admin)):
    """
    Return the admin's current role from the database.
    Clients use this instead of trusting the role inside their token.
    """
    return success_response(
        message="Admin verified",
        data={"admin": serialize_admin(current_admin)}
    )


@router.get("/all")
async def get_all_admins(
    current_admin: dict = Depends(get_current_superadmin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    List all admin accounts (superadmin only).
    """
    try:
        admins = await AdminService(db).list_admins()
        return success_response(
            message="Admins retrieved successfully",
            data=[serialize_admin(admin) for admin in admins]
        )
    except Exception as e:
        return internal_error_response("Failed to fetch admins", e)


@router.post("/create")
async def create_admin(
    admin_data: AdminCreate,
    current_admin: dict = Depends(get_current_superadmin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Create a new admin or superadmin (superadmin only).
    """
    try:
        admin = await AdminService(db).create_admin(
            admin_data.username,
            admin_data.password,
            admin_data.role
        )
        return success_response(
            message="Admin created successfully",
            data=serialize_admin(admin),
            status_code=201
        )
    except ContestError as e:
        return contest_error_response(e)
    except Exception as e:
        return internal_error_response("Failed to create admin", e)


@router.delete("/delete/{admin_id}")
async def delete_admin(
    admin_id: str,
    current_admin: dict = Depends(get_current_superadmin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Delete an admin account (superadmin only, never your own).
    """
    try:
        await AdminService(db).delete_admin(admin_id, str(current_admin["_id"]))
        return success_response(message="Admin deleted successfully")
    except ContestError as e:
        return contest_error_response(e)
    except Exception as e:
        return internal_error_response("Failed to delete admin", e)
