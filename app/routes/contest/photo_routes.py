from typing import Optional
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.contest.photo import AdminActionRequest, PhotoOwnerRequest, PhotoSort
from app.services.contest.like import LikeService
from app.services.contest.photo import PhotoService, serialize_photo
from app.services.contest.winner import WinnerService
from app.services.storage.base import BaseAssetStore
from app.services.storage.factory import get_asset_store
from app.routes.auth.dependencies import (
    get_current_superadmin,
    get_database,
    get_optional_admin,
    resolve_acting_username,
)
from app.utils.exceptions import ContestError
from app.utils.response import (
    success_response,
    contest_error_response,
    internal_error_response,
)

router = APIRouter(prefix="/photos", tags=["Photos"])


@router.post("/upload")
async def upload_photo(
    photo: Optional[UploadFile] = File(None),
    participant_unique_string: Optional[str] = Form(None, alias="participantUniqueString"),
    caption: Optional[str] = Form(None),
    db: AsyncIOMotorDatabase = Depends(get_database),
    asset_store: BaseAssetStore = Depends(get_asset_store)
):
    """
    Upload a contest photo (multipart form).

    Fields: ``photo`` (image file, max 10MB), ``participantUniqueString``,
    optional ``caption``. The image is stored as WebP.
    """
    try:
        photo_service = PhotoService(db, asset_store=asset_store)
        new_photo = await photo_service.upload_photo(participant_unique_string, photo, caption)
        return success_response(
            message="Photo uploaded successfully",
            data=serialize_photo(new_photo, include_owner=True),
            status_code=201
        )
    except ContestError as e:
        return contest_error_response(e)
    except Exception as e:
        return internal_error_response("Failed to upload photo", e)


@router.get("/participant/{unique_string}")
async def get_participant_photos(
    unique_string: str,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Photos of one participant, newest first"""
    try:
        photos = await PhotoService(db).get_photos_for_participant(unique_string)
        return success_response(
            message="Photos retrieved successfully",
            data=[serialize_photo(photo, include_owner=True) for photo in photos]
        )
    except Exception as e:
        return internal_error_response("Failed to fetch photos", e)


@router.get("/all")
async def get_all_photos(
    sort: PhotoSort = Query(PhotoSort.LIKES, description="likes (default) or recent"),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """All photos, most liked first unless ``sort=recent``"""
    try:
        photos = await PhotoService(db).get_all_photos(sort)
        return success_response(
            message="Photos retrieved successfully",
            data=[serialize_photo(photo) for photo in photos]
        )
    except Exception as e:
        return internal_error_response("Failed to fetch photos", e)


@router.post("/like/{photo_id}")
async def toggle_like(
    photo_id: str,
    body: Optional[AdminActionRequest] = None,
    current_admin: Optional[dict] = Depends(get_optional_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Like a photo, or unlike it if this admin already liked it.
    """
    try:
        admin_username = resolve_acting_username(current_admin, body.admin_username if body else None)
        photo, liked = await LikeService(db).toggle_like(photo_id, admin_username)
        return success_response(
            message="Photo liked successfully" if liked else "Photo unliked successfully",
            data=serialize_photo(photo)
        )
    except ContestError as e:
        return contest_error_response(e)
    except Exception as e:
        return internal_error_response("Failed to like photo", e)


@router.patch("/winner/{photo_id}")
async def declare_winner(
    photo_id: str,
    body: Optional[AdminActionRequest] = None,
    current_admin: Optional[dict] = Depends(get_optional_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Mark a photo as winner (superadmin only).
    """
    try:
        admin_username = resolve_acting_username(current_admin, body.admin_username if body else None)
        photo = await WinnerService(db).declare_winner(photo_id, admin_username)
        return success_response(
            message="Photo marked as winner",
            data=serialize_photo(photo)
        )
    except ContestError as e:
        return contest_error_response(e)
    except Exception as e:
        return internal_error_response("Failed to mark photo as winner", e)


@router.delete("/admin/{photo_id}")
async def admin_delete_photo(
    photo_id: str,
    current_admin: dict = Depends(get_current_superadmin),
    db: AsyncIOMotorDatabase = Depends(get_database),
    asset_store: BaseAssetStore = Depends(get_asset_store)
):
    """
    Delete any photo (superadmin only).
    """
    try:
        await PhotoService(db, asset_store=asset_store).delete_photo(photo_id, as_superadmin=True)
        return success_response(message="Photo deleted successfully by admin")
    except ContestError as e:
        return contest_error_response(e)
    except Exception as e:
        return internal_error_response("Failed to delete photo", e)


@router.delete("/{photo_id}")
async def delete_photo(
    photo_id: str,
    body: Optional[PhotoOwnerRequest] = None,
    db: AsyncIOMotorDatabase = Depends(get_database),
    asset_store: BaseAssetStore = Depends(get_asset_store)
):
    """
    Delete one of your own photos. Body: ``participantUniqueString``.
    """
    try:
        await PhotoService(db, asset_store=asset_store).delete_photo(
            photo_id,
            requestor_unique_string=body.participant_unique_string if body else None
        )
        return success_response(message="Photo deleted successfully")
    except ContestError as e:
        return contest_error_response(e)
    except Exception as e:
        return internal_error_response("Failed to delete photo", e)
