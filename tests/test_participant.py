"""
Tests for pseudonymous participant creation and login
"""
import re

import pytest

from app.services.contest import participant as participant_module
from app.services.contest.name_generator import (
    ADJECTIVES,
    COLORS,
    COUNTRIES,
    generate_display_name,
    generate_unique_string,
)
from app.services.contest.participant import ParticipantService
from app.utils.exceptions import ConflictError, InvalidInputError, UnauthorizedError


def test_display_name_shape():
    adjective, color, country = generate_display_name().split("-")

    assert adjective in ADJECTIVES
    assert color in COLORS
    assert country in COUNTRIES


def test_unique_string_is_hex():
    assert re.fullmatch(r"[0-9a-f]{32}", generate_unique_string())


class TestParticipantService:

    async def test_create_and_login(self, db):
        service = ParticipantService(db)
        created = await service.create_participant()

        logged_in = await service.login(created["unique_string"], created["random_name"])

        assert logged_in["_id"] == created["_id"]

    async def test_login_wrong_name(self, db, participant):
        with pytest.raises(UnauthorizedError) as exc_info:
            await ParticipantService(db).login(participant["unique_string"], "Calm-Red-Peru")
        assert exc_info.value.message == "Invalid credentials"

    async def test_login_requires_both(self, db):
        with pytest.raises(InvalidInputError):
            await ParticipantService(db).login("abc", "")

    async def test_collision_never_overwrites(self, db, participant, monkeypatch):
        monkeypatch.setattr(
            participant_module, "generate_unique_string", lambda: participant["unique_string"]
        )

        with pytest.raises(ConflictError):
            await ParticipantService(db).create_participant()

        assert await db.participants.count_documents({}) == 1
        stored = await db.participants.find_one({"unique_string": participant["unique_string"]})
        assert stored["random_name"] == participant["random_name"]


class TestParticipantRoutes:

    async def test_create_then_login(self, client):
        created = await client.post("/api/participants/create")

        assert created.status_code == 201
        data = created.json()["data"]
        assert set(data) == {"uniqueString", "randomName"}

        login = await client.post("/api/participants/login", json=data)
        assert login.status_code == 200
        assert login.json()["data"] == data

    async def test_login_unknown(self, client):
        response = await client.post(
            "/api/participants/login",
            json={"uniqueString": "0" * 32, "randomName": "Calm-Red-Peru"}
        )

        assert response.status_code == 401
        assert response.json()["success"] is False
