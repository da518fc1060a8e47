"""Pytest configuration and fixtures."""
import os
import tempfile

import pytest

# Settings are read at import time, so point them at test locations first
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="photocontest-test-")
os.environ["STORAGE_BACKEND"] = "local"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SUPER_ADMIN_PASSWORD"] = "super-secret"
os.environ["DATABASE_NAME"] = "photocontest_test"

from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app.database import Database
from app.main import app
from app.services.auth.admin_service import AdminService
from app.services.contest.participant import ParticipantService
from app.services.storage.factory import get_asset_store
from tests.helpers import MemoryAssetStore, insert_photo


@pytest.fixture
async def db():
    """Fresh in-memory database with the production indexes."""
    Database.client = AsyncMongoMockClient()
    await Database.create_indexes()
    yield Database.get_db()
    Database.client = None


@pytest.fixture
def asset_store():
    return MemoryAssetStore()


@pytest.fixture
async def client(db, asset_store):
    """HTTP client bound to the app with the in-memory asset store."""
    app.dependency_overrides[get_asset_store] = lambda: asset_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


@pytest.fixture
async def superadmin(db):
    return await AdminService(db).seed_super_admin()


@pytest.fixture
async def admin_a(db):
    return await AdminService(db).create_admin("alice", "alice-password", "admin")


@pytest.fixture
async def admin_b(db):
    return await AdminService(db).create_admin("bob", "bob-password", "admin")


@pytest.fixture
async def participant(db):
    return await ParticipantService(db).create_participant()


@pytest.fixture
async def other_participant(db):
    return await ParticipantService(db).create_participant()


@pytest.fixture
async def photo(db, participant):
    return await insert_photo(db, participant["unique_string"], caption="sunset")
