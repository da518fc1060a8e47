"""
Image optimization using Pillow: every contest photo is stored as WebP.
"""
import io
import logging
import secrets
import time
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from app.utils.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

MAX_WIDTH = 2000
WEBP_QUALITY = 60
KEY_PREFIX = "photo-contest"


def optimize_image(source_path: Path) -> bytes:
    """
    Convert an image to WebP, capping the width at MAX_WIDTH.

    Smaller images are never enlarged. EXIF orientation is applied first so
    phone photos are stored upright.
    """
    try:
        with Image.open(source_path) as image:
            image = ImageOps.exif_transpose(image)

            if image.mode not in ("RGB", "RGBA"):
                image = image.convert("RGBA" if "A" in image.getbands() else "RGB")

            if image.width > MAX_WIDTH:
                height = round(image.height * MAX_WIDTH / image.width)
                image = image.resize((MAX_WIDTH, height), Image.Resampling.LANCZOS)

            buffer = io.BytesIO()
            image.save(buffer, format="WEBP", quality=WEBP_QUALITY)
    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"[WARN] Could not decode uploaded image {source_path.name}: {e}")
        raise InvalidInputError("Only image files are allowed!")

    return buffer.getvalue()


def build_storage_key(owner: str, source_path: Path) -> str:
    """``photo-contest/<owner>/<millis>-<stem>.webp``; ``owner`` must not be a secret"""
    stem = source_path.stem or secrets.token_hex(4)
    return f"{KEY_PREFIX}/{owner}/{int(time.time() * 1000)}-{stem}.webp"
