import logging
from typing import BinaryIO

import cloudinary
import cloudinary.uploader

from luxe_estate.core.config import get_settings

logger = logging.getLogger(__name__)


class MediaUploadError(Exception):
    pass


def cloudinary_enabled() -> bool:
    return get_settings().cloudinary_configured


def _configure() -> None:
    settings = get_settings()
    cloudinary.config(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        secure=True,
    )


def upload_image(fileobj: BinaryIO) -> str:
    settings = get_settings()
    if not cloudinary_enabled():
        logger.info("Cloudinary keys missing; returning placeholder image URL")
        return settings.PLACEHOLDER_IMAGE_URL

    _configure()
    try:
        result = cloudinary.uploader.upload(fileobj, folder=settings.CLOUDINARY_FOLDER, resource_type="image")
    except Exception as exc:
        raise MediaUploadError(str(exc)) from exc
    url = result.get("secure_url") or result.get("url")
    if not url:
        raise MediaUploadError("Upload response did not include a URL")
    return url


def upload_images(files: list[BinaryIO]) -> list[str]:
    """Upload a batch; the first provider error aborts the whole batch."""
    return [upload_image(f) for f in files]
