# backend/services/cloudinary_service.py
"""
Product image storage on Cloudinary.

``get_image_storage`` is the FastAPI dependency used by the routers; tests
override it with an in-memory fake exposing the same two coroutines.
"""

import hashlib
import logging
import os
import time
from typing import Dict, Optional

import cloudinary
import cloudinary.uploader

from config import settings
from services.errors import InternalError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp"}


class CloudinaryService:
    """Uploads product images to Cloudinary."""

    def __init__(self, cloud_name: str, api_key: str, api_secret: str):
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )
        self.cloud_name = cloud_name

    async def upload_product_image(self, file_content: bytes, filename: str) -> Dict[str, str]:
        """
        Upload an image and return its public id and secure URL.

        Args:
            file_content: raw file bytes
            filename: original file name, used for the public id

        Returns:
            Dict with ``public_id`` and ``url``
        """
        public_id = _generate_public_id(filename)
        try:
            result = cloudinary.uploader.upload(
                file_content,
                public_id=public_id,
                folder="products",
                resource_type="image",
                transformation=[
                    {"width": 800, "height": 600, "crop": "limit"},
                    {"quality": "auto:good"},
                ],
            )
        except Exception as e:
            logger.exception("Cloudinary upload failed for %s", filename)
            raise InternalError("Image upload failed") from e

        logger.info("Uploaded image %s", result["public_id"])
        return {"public_id": result["public_id"], "url": result["secure_url"]}

    async def delete_product_image(self, public_id: str) -> bool:
        try:
            result = cloudinary.uploader.destroy(public_id, resource_type="image")
        except Exception:
            logger.exception("Cloudinary delete failed for %s", public_id)
            return False
        return result.get("result") == "ok"


def _generate_public_id(filename: str) -> str:
    name_without_ext = os.path.splitext(os.path.basename(filename or "image"))[0]
    timestamp_hash = hashlib.md5(str(time.time()).encode()).hexdigest()[:8]
    return f"{name_without_ext or 'image'}_{timestamp_hash}"


def validate_image_file(file_content: bytes, filename: str, max_bytes: int = None) -> None:
    """Reject anything that is not a reasonably sized image."""
    max_bytes = settings.MAX_IMAGE_BYTES if max_bytes is None else max_bytes

    file_ext = os.path.splitext(filename or "")[1].lower()
    if file_ext not in ALLOWED_EXTENSIONS:
        raise ValidationError(
            f"Only image files are allowed ({', '.join(sorted(ALLOWED_EXTENSIONS))})"
        )
    if len(file_content) > max_bytes:
        raise ValidationError(f"Image exceeds {max_bytes // (1024 * 1024)}MB limit")
    if not _is_valid_image_header(file_content):
        raise ValidationError("File is not a valid image")


def _is_valid_image_header(file_content: bytes) -> bool:
    if len(file_content) < 12:
        return False
    if file_content.startswith(b"\xff\xd8\xff"):  # JPEG
        return True
    if file_content.startswith(b"\x89PNG\r\n\x1a\n"):
        return True
    if file_content.startswith((b"GIF87a", b"GIF89a")):
        return True
    if file_content.startswith(b"BM"):
        return True
    if file_content[:4] == b"RIFF" and file_content[8:12] == b"WEBP":
        return True
    return False


_service: Optional[CloudinaryService] = None


def is_configured() -> bool:
    return all([
        settings.CLOUDINARY_CLOUD_NAME,
        settings.CLOUDINARY_API_KEY,
        settings.CLOUDINARY_API_SECRET,
    ])


def get_image_storage() -> Optional[CloudinaryService]:
    """Shared service instance, or None when Cloudinary is not configured."""
    global _service
    if _service is None and is_configured():
        _service = CloudinaryService(
            settings.CLOUDINARY_CLOUD_NAME,
            settings.CLOUDINARY_API_KEY,
            settings.CLOUDINARY_API_SECRET,
        )
    return _service
