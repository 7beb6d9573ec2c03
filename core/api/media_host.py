"""Media host client (Cloudinary SDK).

Only two capabilities are used: store an image and get back its secure URL
and public id, and remove an image by public id. The application persists
the returned URLs and never serves image bytes itself.
"""

import io
from dataclasses import dataclass

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from core.config import Settings, get_settings
from core.errors import MediaHostError
from core.logging import get_logger, log_timing

logger = get_logger("media")


@dataclass(frozen=True)
class StoredMedia:
    secure_url: str
    public_id: str


class MediaStore:
    """Thin wrapper over the SDK's upload and destroy calls."""

    def __init__(self, settings: Settings | None = None, timeout: float = 30.0):
        self.settings = settings or get_settings()
        self.timeout = timeout

    def _account(self) -> dict:
        # Per-call account options override the SDK global config
        return {
            "cloud_name": self.settings.cloudinary_cloud_name,
            "api_key": self.settings.cloudinary_api_key,
            "api_secret": self.settings.cloudinary_api_secret,
            "timeout": self.timeout,
        }

    @log_timing("media_store")
    def store(self, content: bytes, filename: str = "upload") -> StoredMedia:
        """
        Upload image bytes using the unsigned upload preset.

        Raises:
            MediaHostError: If the host is not configured, unreachable, or
                answers without a URL/public id.
        """
        if not self.settings.cloudinary_cloud_name or not self.settings.cloudinary_upload_preset:
            raise MediaHostError("Media host is not configured")

        try:
            data = cloudinary.uploader.unsigned_upload(
                io.BytesIO(content),
                self.settings.cloudinary_upload_preset,
                filename=filename,
                **self._account(),
            )
        except CloudinaryError as e:
            logger.error("media_upload_failed", error=str(e), error_type=type(e).__name__)
            raise MediaHostError("Failed to upload image") from e

        secure_url = data.get("secure_url")
        public_id = data.get("public_id")
        if not secure_url or not public_id:
            logger.error("media_upload_incomplete", keys=sorted(data.keys()))
            raise MediaHostError("Failed to upload image")

        logger.info("media_stored", public_id=public_id, size_bytes=len(content))
        return StoredMedia(secure_url=secure_url, public_id=public_id)

    @log_timing("media_remove")
    def remove(self, public_id: str) -> dict:
        """
        Delete an image by public id.

        Returns:
            The host's answer as-is, e.g. ``{"result": "ok"}`` or
            ``{"result": "not found"}``.

        Raises:
            MediaHostError: If credentials are missing or the call fails.
        """
        if not self.settings.cloudinary_api_key or not self.settings.cloudinary_api_secret:
            raise MediaHostError("Media host credentials are not configured")

        try:
            result = cloudinary.uploader.destroy(public_id, **self._account())
        except CloudinaryError as e:
            logger.error("media_remove_failed", public_id=public_id, error=str(e))
            raise MediaHostError("Failed to delete image") from e

        logger.info("media_removed", public_id=public_id, result=result.get("result"))
        return result


def get_media_store() -> MediaStore:
    return MediaStore()
