from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.contest.participant import ParticipantLogin
from app.services.contest.participant import ParticipantService, serialize_participant
from app.routes.auth.dependencies import get_database
from app.utils.exceptions import ContestError
from app.utils.response import (
    success_response,
    contest_error_response,
    internal_error_response,
)

router = APIRouter(prefix="/participants", tags=["Participants"])


@router.post("/create")
async def create_participant(db: AsyncIOMotorDatabase = Depends(get_database)):
    """
    Mint a new pseudonymous participant.

    The returned uniqueString/randomName pair is the participant's only
    credential; the client keeps it as its session.
    """
    try:
        participant = await ParticipantService(db).create_participant()
        return success_response(
            message="Participant account created successfully",
            data=serialize_participant(participant),
            status_code=201
        )
    except ContestError as e:
        return contest_error_response(e)
    except Exception as e:
        return internal_error_response("Failed to create participant account", e)


@router.post("/login")
async def login(
    login_data: ParticipantLogin,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Check a uniqueString/randomName pair"""
    try:
        participant = await ParticipantService(db).login(
            login_data.unique_string,
            login_data.random_name
        )
        return success_response(
            message="Login successful",
            data=serialize_participant(participant)
        )
    except ContestError as e:
        return contest_error_response(e)
    except Exception as e:
        return internal_error_response("Login failed", e)
