import logging
import os
import re
import uuid
from pathlib import Path
from typing import Optional
from datetime import datetime
from fastapi import UploadFile

from app.config import settings
from app.utils.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

# Allowed image types and their extensions (with browser variants)
ALLOWED_IMAGE_TYPES = {
    'image/jpeg': ['.jpg', '.jpeg'],
    'image/jpg': ['.jpg', '.jpeg'],
    'image/pjpeg': ['.jpg', '.jpeg'],  # IE
    'image/png': ['.png'],
    'image/x-png': ['.png'],
    'image/gif': ['.gif'],
    'image/webp': ['.webp'],
    'image/bmp': ['.bmp'],
    'image/tiff': ['.tif', '.tiff'],
    'image/heic': ['.heic'],
    'image/heif': ['.heif'],
}

# Read uploads in chunks so oversized files are rejected early
CHUNK_SIZE = 1024 * 1024


class FileUploadService:
    """Stages uploaded photos on local disk before they go to the asset store"""

    def __init__(self, upload_dir: Optional[str] = None, max_size: Optional[int] = None):
        self.temp_dir = Path(upload_dir or settings.upload_dir) / "temp"
        self.max_size = max_size or settings.max_upload_size

    @staticmethod
    def sanitize_filename(filename: str) -> str:
        """Sanitize filename to prevent directory traversal attacks"""
        # Remove any path components
        filename = os.path.basename(filename or "")

        # Remove any non-alphanumeric characters except dots, underscores, and hyphens
        filename = re.sub(r'[^\w\s.-]', '', filename)

        # Replace spaces with underscores
        filename = filename.replace(' ', '_')

        # Limit filename length
        name, ext = os.path.splitext(filename)
        if len(name) > 50:
            name = name[:50]

        return f"{name}{ext}"

    @staticmethod
    def validate_image_type(filename: str, content_type: Optional[str]) -> bool:
        """Accept only image MIME types; the extension must not contradict it"""
        if not content_type or not content_type.startswith('image/'):
            return False

        file_ext = os.path.splitext((filename or "").lower())[1]
        allowed_extensions = ALLOWED_IMAGE_TYPES.get(content_type)
        if allowed_extensions is None or not file_ext:
            # Unknown image subtype or no extension: Pillow decides later
            return True
        return file_ext in allowed_extensions

    async def stage_image(self, file: Optional[UploadFile]) -> Path:
        """
        Save an uploaded image to the temp directory.

        Returns:
            Path of the staged file; the caller must discard() it.
        """
        if file is None or not file.filename:
            raise InvalidInputError("No file uploaded")

        if not self.validate_image_type(file.filename, file.content_type):
            raise InvalidInputError("Only image files are allowed!")

        self.temp_dir.mkdir(parents=True, exist_ok=True)

        # Generate unique filename
        original_filename = self.sanitize_filename(file.filename)
        file_ext = os.path.splitext(original_filename)[1].lower()
        unique_filename = f"{datetime.utcnow().strftime('%Y%m%d%H%M%S')}-{uuid.uuid4().hex[:12]}{file_ext}"
        file_path = self.temp_dir / unique_filename

        size = 0
        with open(file_path, 'wb') as f:
            while True:
                chunk = await file.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > self.max_size:
                    break
                f.write(chunk)

        if size > self.max_size:
            self.discard(file_path)
            max_size_mb = self.max_size / (1024 * 1024)
            raise InvalidInputError(f"File too large. Maximum size: {max_size_mb:g}MB")

        if size == 0:
            self.discard(file_path)
            raise InvalidInputError("No file uploaded")

        return file_path

    @staticmethod
    def discard(file_path: Path) -> bool:
        """Delete a staged file. Failures are logged, never raised."""
        try:
            file_path.unlink()
            return True
        except OSError as e:
            logger.warning(f"[WARN] Failed to delete temporary file {file_path}: {e}")
            return False
