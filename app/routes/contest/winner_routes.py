from typing import Optional
from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.contest.photo import AdminActionRequest
from app.models.contest.winner import ClaimRequest
from app.services.contest.photo import serialize_photo
from app.services.contest.winner import WinnerService, serialize_winner
from app.routes.auth.dependencies import (
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

router = APIRouter(prefix="/winners", tags=["Winners"])


@router.delete("/remove/{photo_id}")
async def remove_winner(
    photo_id: str,
    body: Optional[AdminActionRequest] = None,
    current_admin: Optional[dict] = Depends(get_optional_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Remove winner status from a photo (superadmin only).
    Not allowed once the prize has been claimed.
    """
    try:
        admin_username = resolve_acting_username(current_admin, body.admin_username if body else None)
        photo = await WinnerService(db).remove_winner(photo_id, admin_username)
        return success_response(
            message="Winner status removed successfully",
            data=serialize_photo(photo)
        )
    except ContestError as e:
        return contest_error_response(e)
    except Exception as e:
        return internal_error_response("Failed to remove winner status", e)


@router.post("/claim")
async def claim_prize(
    claim: ClaimRequest,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Claim the prize for one of your winning photos.

    Body: ``photoId``, ``participantUniqueString``, ``name``, ``sic``, ``year``.
    """
    try:
        winner = await WinnerService(db).claim_prize(claim)
        return success_response(
            message="Prize claimed successfully",
            data=serialize_winner(winner)
        )
    except ContestError as e:
        return contest_error_response(e)
    except Exception as e:
        return internal_error_response("Failed to claim prize", e)


@router.put("/edit")
async def edit_claim(
    claim: ClaimRequest,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Update the details of an already claimed prize. Same body as claim.
    """
    try:
        winner = await WinnerService(db).edit_claim(claim)
        return success_response(
            message="Winner details updated successfully",
            data=serialize_winner(winner)
        )
    except ContestError as e:
        return contest_error_response(e)
    except Exception as e:
        return internal_error_response("Failed to update winner details", e)


@router.get("/photo/{photo_id}")
async def get_winner_by_photo(
    photo_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Winner record of one photo"""
    try:
        winner = await WinnerService(db).get_winner_by_photo(photo_id)
        return success_response(
            message="Winner retrieved successfully",
            data=serialize_winner(winner)
        )
    except ContestError as e:
        return contest_error_response(e)
    except Exception as e:
        return internal_error_response("Failed to fetch winner details", e)


@router.get("/all")
async def get_all_winners(db: AsyncIOMotorDatabase = Depends(get_database)):
    """All winners with their photos, newest declaration first"""
    try:
        winners = await WinnerService(db).get_all_winners()
        return success_response(
            message="Winners retrieved successfully",
            data=[
                serialize_winner(
                    winner,
                    photo_data=serialize_photo(winner["photo"]) if winner["photo"] else None
                )
                for winner in winners
            ]
        )
    except Exception as e:
        return internal_error_response("Failed to fetch winners", e)


@router.get("/leaderboard")
async def get_leaderboard(db: AsyncIOMotorDatabase = Depends(get_database)):
    """Public leaderboard of winners"""
    try:
        leaderboard = await WinnerService(db).get_leaderboard()
        return success_response(
            message="Leaderboard retrieved successfully",
            data=leaderboard
        )
    except Exception as e:
        return internal_error_response("Failed to fetch leaderboard", e)
