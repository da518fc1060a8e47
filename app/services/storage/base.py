"""
Base Asset Store
Abstract class defining the interface for photo storage backends
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class StoredAsset:
    """Result of storing an image"""
    url: str
    key: str
    size: int = 0


@dataclass
class StorageDeleteResult:
    """
    Result of a best-effort delete.

    Callers only inspect this for logging; record deletion never depends on it.
    """
    success: bool
    key: Optional[str] = None
    error_message: Optional[str] = None


class BaseAssetStore(ABC):
    """
    Abstract base class for asset stores.
    All storage backends must implement these methods.
    """

    store_id: str = "base"

    @abstractmethod
    async def store_image(self, owner: str, source_path: Path) -> StoredAsset:
        """
        Optimize the staged image at ``source_path`` and store it.

        ``owner`` ends up in the public URL, so callers pass the
        participant record id.

        Raises:
            InvalidInputError: the file is not a decodable image
        """

    @abstractmethod
    async def delete(self, key: str) -> StorageDeleteResult:
        """Delete a stored asset. Never raises."""
