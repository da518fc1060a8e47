"""
Tests for image optimization and the asset store backends
"""
import io
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from PIL import Image

from app.services.storage.factory import AssetStoreFactory
from app.services.storage.image import MAX_WIDTH, build_storage_key, optimize_image
from app.services.storage.local import LocalAssetStore
from app.services.storage.s3 import S3AssetStore
from app.utils.exceptions import InvalidInputError


def write_image(path, size, mode="RGB", fmt="PNG"):
    Image.new(mode, size, color=(200, 120, 40) if mode == "RGB" else None).save(path, format=fmt)
    return path


class TestOptimizeImage:

    def test_wide_image_is_capped(self, tmp_path):
        source = write_image(tmp_path / "wide.png", (3000, 1500))

        with Image.open(io.BytesIO(optimize_image(source))) as result:
            assert result.format == "WEBP"
            assert result.size == (MAX_WIDTH, 1000)

    def test_small_image_keeps_size(self, tmp_path):
        source = write_image(tmp_path / "small.png", (640, 480))

        with Image.open(io.BytesIO(optimize_image(source))) as result:
            assert result.format == "WEBP"
            assert result.size == (640, 480)

    def test_palette_image_converted(self, tmp_path):
        source = write_image(tmp_path / "palette.gif", (100, 100), mode="P", fmt="GIF")

        with Image.open(io.BytesIO(optimize_image(source))) as result:
            assert result.format == "WEBP"

    def test_non_image_rejected(self, tmp_path):
        source = tmp_path / "fake.jpg"
        source.write_bytes(b"definitely not an image")

        with pytest.raises(InvalidInputError) as exc_info:
            optimize_image(source)
        assert exc_info.value.message == "Only image files are allowed!"


def test_storage_key_layout(tmp_path):
    key = build_storage_key("abc123", tmp_path / "holiday.jpg")

    prefix, owner, name = key.split("/")
    assert prefix == "photo-contest"
    assert owner == "abc123"
    assert name.endswith("-holiday.webp")


class TestLocalAssetStore:

    @pytest.fixture
    def store(self, tmp_path):
        return LocalAssetStore({"upload_dir": str(tmp_path / "uploads"), "base_url": "http://api.test/"})

    async def test_store_and_delete(self, store, tmp_path):
        source = write_image(tmp_path / "sunset.png", (300, 200))

        asset = await store.store_image("owner1", source)

        assert asset.url == f"http://api.test/uploads/{asset.key}"
        stored = tmp_path / "uploads" / asset.key
        assert stored.exists()
        assert asset.size == stored.stat().st_size

        result = await store.delete(asset.key)
        assert result.success
        assert not stored.exists()

    async def test_delete_missing_reports_failure(self, store):
        result = await store.delete("photo-contest/owner1/missing.webp")

        assert not result.success
        assert result.error_message == "File not found"

    async def test_delete_outside_root_refused(self, store):
        result = await store.delete("../../etc/passwd")

        assert not result.success


class TestAssetStoreFactory:

    def test_local_backend(self):
        assert isinstance(AssetStoreFactory.get_store("local"), LocalAssetStore)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            AssetStoreFactory.get_store("ftp")

    def test_s3_requires_bucket(self):
        with pytest.raises(ValueError):
            AssetStoreFactory.get_store("s3", {"bucket_name": None})


class TestS3AssetStore:

    @pytest.fixture
    def s3_client(self):
        return MagicMock()

    @pytest.fixture
    def store(self, s3_client):
        return S3AssetStore({"bucket_name": "contest-bucket", "region": "eu-west-1", "client": s3_client})

    async def test_store_puts_webp_object(self, store, s3_client, tmp_path):
        source = write_image(tmp_path / "sunset.png", (300, 200))

        asset = await store.store_image("owner1", source)

        kwargs = s3_client.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "contest-bucket"
        assert kwargs["Key"] == asset.key
        assert kwargs["ContentType"] == "image/webp"
        assert asset.url == f"https://contest-bucket.s3.eu-west-1.amazonaws.com/{asset.key}"

    async def test_delete_client_error_reported(self, store, s3_client):
        s3_client.delete_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "DeleteObject"
        )

        result = await store.delete("photo-contest/owner1/x.webp")

        assert not result.success
        assert result.key == "photo-contest/owner1/x.webp"
