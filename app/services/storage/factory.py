"""
Asset Store Factory
Creates the configured storage backend
"""
from typing import Dict, Any, Optional, Type

from app.config import settings
from app.services.storage.base import BaseAssetStore
from app.services.storage.local import LocalAssetStore
from app.services.storage.s3 import S3AssetStore


class AssetStoreFactory:
    """
    Factory for creating asset store instances.
    Backends are registered by id and selected with STORAGE_BACKEND.
    """

    # Registry of available backends
    _stores: Dict[str, Type[BaseAssetStore]] = {
        "local": LocalAssetStore,
        "s3": S3AssetStore,
    }

    # Cached instances
    _instances: Dict[str, BaseAssetStore] = {}

    @classmethod
    def get_store(
        cls,
        store_id: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None
    ) -> BaseAssetStore:
        """
        Get an asset store instance.

        Raises:
            ValueError: If the backend is not registered
        """
        store_id = store_id or settings.storage_backend
        if store_id not in cls._stores:
            raise ValueError(f"Unknown storage backend: {store_id}. Available: {list(cls._stores.keys())}")

        if config is None and store_id in cls._instances:
            return cls._instances[store_id]

        instance = cls._stores[store_id](config)
        if config is None:
            cls._instances[store_id] = instance
        return instance


def get_asset_store() -> BaseAssetStore:
    """Dependency returning the configured asset store"""
    return AssetStoreFactory.get_store()
