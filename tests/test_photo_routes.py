"""
Tests for photo upload, listing and deletion
"""
import io
from datetime import datetime

import pytest
from bson import ObjectId
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.services.contest.photo import PhotoService
from app.utils.exceptions import InvalidInputError
from app.utils.file_upload import FileUploadService
from tests.helpers import auth_headers, insert_photo

IMAGE_BYTES = b"\xff\xd8\xff\xe0" + b"0" * 256


def make_upload(data=IMAGE_BYTES, filename="sunset.jpg", content_type="image/jpeg"):
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type})
    )


class TestUpload:

    async def test_upload_creates_photo(self, client, participant, asset_store):
        response = await client.post(
            "/api/photos/upload",
            data={"participantUniqueString": participant["unique_string"], "caption": "  sunset  "},
            files={"photo": ("sunset.jpg", IMAGE_BYTES, "image/jpeg")}
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["caption"] == "sunset"
        assert data["likes"] == 0
        assert data["likedBy"] == []
        assert data["isWinner"] is False
        assert data["hasClaimed"] is False
        assert data["participantUniqueString"] == participant["unique_string"]
        assert data["path"].startswith("https://assets.test/photo-contest/")
        assert len(asset_store.objects) == 1

        listed = await client.get(f"/api/photos/participant/{participant['unique_string']}")
        assert listed.status_code == 200
        [only] = listed.json()["data"]
        assert only["_id"] == data["_id"]
        assert only["caption"] == "sunset"
        assert only["likes"] == 0

    async def test_public_views_never_contain_secret(self, client, participant, superadmin):
        secret = participant["unique_string"]
        uploaded = await client.post(
            "/api/photos/upload",
            data={"participantUniqueString": secret, "caption": "sunset"},
            files={"photo": ("sunset.jpg", IMAGE_BYTES, "image/jpeg")}
        )
        photo_id = uploaded.json()["data"]["_id"]
        await client.patch(f"/api/photos/winner/{photo_id}", headers=auth_headers(superadmin))

        assert str(participant["_id"]) in uploaded.json()["data"]["path"]
        assert secret not in uploaded.json()["data"]["path"]
        for url in ("/api/photos/all", "/api/winners/all", "/api/winners/leaderboard"):
            response = await client.get(url)
            assert response.status_code == 200
            assert secret not in response.text

    async def test_staged_file_is_removed(self, db, participant, asset_store, tmp_path):
        file_service = FileUploadService(upload_dir=str(tmp_path))
        service = PhotoService(db, asset_store=asset_store, file_service=file_service)

        await service.upload_photo(participant["unique_string"], make_upload())

        assert list((tmp_path / "temp").iterdir()) == []

    async def test_upload_without_file(self, client, participant):
        response = await client.post(
            "/api/photos/upload",
            data={"participantUniqueString": participant["unique_string"]}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "No file uploaded"

    async def test_upload_non_image(self, client, participant):
        response = await client.post(
            "/api/photos/upload",
            data={"participantUniqueString": participant["unique_string"]},
            files={"photo": ("notes.txt", b"hello", "text/plain")}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Only image files are allowed!"

    async def test_upload_unknown_participant(self, client):
        response = await client.post(
            "/api/photos/upload",
            data={"participantUniqueString": "f" * 32},
            files={"photo": ("sunset.jpg", IMAGE_BYTES, "image/jpeg")}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid participant"

    async def test_upload_too_large(self, db, participant, asset_store, tmp_path):
        file_service = FileUploadService(upload_dir=str(tmp_path), max_size=100)
        service = PhotoService(db, asset_store=asset_store, file_service=file_service)

        with pytest.raises(InvalidInputError) as exc_info:
            await service.upload_photo(participant["unique_string"], make_upload())

        assert exc_info.value.message.startswith("File too large")
        assert asset_store.objects == {}
        assert await db.photos.count_documents({}) == 0

    def test_extension_must_match_type(self):
        assert FileUploadService.validate_image_type("a.png", "image/png")
        assert not FileUploadService.validate_image_type("a.png", "image/jpeg")
        assert not FileUploadService.validate_image_type("a.jpg", "application/pdf")


class TestListing:

    async def test_all_sorted_by_likes_then_recent(self, client, db, participant):
        owner = participant["unique_string"]
        await insert_photo(db, owner, caption="old-popular", likes=2, liked_by=["a", "b"],
                           upload_date=datetime(2024, 1, 1))
        await insert_photo(db, owner, caption="new-plain", upload_date=datetime(2024, 3, 1))
        await insert_photo(db, owner, caption="newer-popular", likes=2, liked_by=["a", "b"],
                           upload_date=datetime(2024, 2, 1))

        by_likes = await client.get("/api/photos/all")
        by_date = await client.get("/api/photos/all", params={"sort": "recent"})

        assert [p["caption"] for p in by_likes.json()["data"]] == [
            "newer-popular", "old-popular", "new-plain"
        ]
        assert [p["caption"] for p in by_date.json()["data"]] == [
            "new-plain", "newer-popular", "old-popular"
        ]

    async def test_all_hides_owner_secret(self, client, photo):
        response = await client.get("/api/photos/all")

        [listed] = response.json()["data"]
        assert "participantUniqueString" not in listed

    async def test_invalid_sort_rejected(self, client):
        response = await client.get("/api/photos/all", params={"sort": "random"})

        assert response.status_code == 422

    async def test_participant_photos_newest_first(self, client, db, participant, other_participant):
        owner = participant["unique_string"]
        await insert_photo(db, owner, caption="first", upload_date=datetime(2024, 1, 1))
        await insert_photo(db, owner, caption="second", upload_date=datetime(2024, 1, 2))
        await insert_photo(db, other_participant["unique_string"], caption="not mine")

        response = await client.get(f"/api/photos/participant/{owner}")

        assert [p["caption"] for p in response.json()["data"]] == ["second", "first"]

    async def test_participant_without_photos(self, client):
        response = await client.get("/api/photos/participant/nobody")

        assert response.status_code == 200
        assert response.json()["data"] == []


class TestDelete:

    async def test_owner_deletes_photo(self, client, db, photo, participant, asset_store):
        response = await client.request(
            "DELETE",
            f"/api/photos/{photo['_id']}",
            json={"participantUniqueString": participant["unique_string"]}
        )

        assert response.status_code == 200
        assert await db.photos.count_documents({}) == 0
        assert asset_store.deleted == [photo["storage_key"]]

    async def test_other_participant_forbidden(self, client, db, photo, other_participant):
        response = await client.request(
            "DELETE",
            f"/api/photos/{photo['_id']}",
            json={"participantUniqueString": other_participant["unique_string"]}
        )

        assert response.status_code == 403
        assert response.json()["message"] == "You do not have permission to delete this photo"
        assert await db.photos.count_documents({}) == 1

    async def test_delete_without_secret(self, client, photo):
        response = await client.delete(f"/api/photos/{photo['_id']}")

        assert response.status_code == 401

    async def test_delete_unknown_photo(self, client, participant):
        response = await client.request(
            "DELETE",
            f"/api/photos/{ObjectId()}",
            json={"participantUniqueString": participant["unique_string"]}
        )

        assert response.status_code == 404

    async def test_storage_failure_does_not_block_delete(self, client, db, photo, participant, asset_store):
        asset_store.fail_deletes = True

        response = await client.request(
            "DELETE",
            f"/api/photos/{photo['_id']}",
            json={"participantUniqueString": participant["unique_string"]}
        )

        assert response.status_code == 200
        assert await db.photos.count_documents({}) == 0

    async def test_superadmin_deletes_any_photo(self, client, db, photo, superadmin):
        response = await client.delete(
            f"/api/photos/admin/{photo['_id']}",
            headers=auth_headers(superadmin)
        )

        assert response.status_code == 200
        assert await db.photos.count_documents({}) == 0

    async def test_regular_admin_cannot_admin_delete(self, client, db, photo, admin_a):
        response = await client.delete(
            f"/api/photos/admin/{photo['_id']}",
            headers=auth_headers(admin_a)
        )

        assert response.status_code == 403
        assert await db.photos.count_documents({}) == 1


class TestAppEndpoints:

    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    async def test_health(self, client):
        response = await client.get("/health")

        assert response.json() == {"status": "healthy"}
