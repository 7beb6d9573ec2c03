"""
Media endpoints.

Thin proxies to the media host so the browser never holds host
credentials. Failures are reported as a bare ``{"error": ...}`` body with
status 500, which is what the upload widgets check for. The SDK blocks, so
host calls run in the thread pool.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from core.api import MediaStore
from core.config import get_settings
from core.errors import MediaHostError
from core.logging import LogContext, get_logger

from ..auth.dependencies import get_current_user, get_optional_user
from ..dependencies import get_media_client
from ..models import User
from ..schemas import MediaDeleteRequest, MediaUploadResponse

logger = get_logger("media")

router = APIRouter(prefix="/media", tags=["media"])

ALLOWED_IMAGE_TYPES = {
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
}

UPLOAD_FAILED = "Failed to upload image"
DELETE_FAILED = "Failed to delete image"


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": message})


def _validate_image(file: UploadFile, content: bytes) -> None:
    """
    Reject non-image uploads and oversized files.

    Raises:
        HTTPException: 400 with a message the upload widget can show
    """
    content_type = file.content_type or ""
    if content_type not in ALLOWED_IMAGE_TYPES:
        logger.warning("upload_invalid_mime", content_type=content_type)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid file type: {content_type or 'unknown'}. Only images are supported.",
        )

    max_bytes = get_settings().max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File size must be less than {get_settings().max_upload_size_mb}MB",
        )


@router.post("/upload", response_model=MediaUploadResponse)
async def upload_image(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    media: MediaStore = Depends(get_media_client),
):
    """Store an image on the media host and return its URL and public id."""
    content = await file.read()
    _validate_image(file, content)

    try:
        stored = await run_in_threadpool(media.store, content, filename=file.filename or "upload")
    except MediaHostError:
        return _error(UPLOAD_FAILED)

    logger.info("image_uploaded", user_id=current_user.id, public_id=stored.public_id)
    return MediaUploadResponse(secure_url=stored.secure_url, public_id=stored.public_id)


@router.post("/delete")
async def delete_image(
    request: Request,
    current_user: Optional[User] = Depends(get_optional_user),
    media: MediaStore = Depends(get_media_client),
):
    """
    Remove an image by public id.

    Body: ``{"publicId": "..."}``. Returns ``{"result": <host answer>}``.
    A missing session or a malformed body is reported the same way as a
    host failure.
    """
    if current_user is None:
        logger.warning("media_delete_unauthenticated")
        return _error(DELETE_FAILED)

    try:
        payload = MediaDeleteRequest.model_validate(await request.json())
    except (ValueError, ValidationError) as e:
        logger.warning("media_delete_bad_request", error=str(e))
        return _error(DELETE_FAILED)

    with LogContext(public_id=payload.public_id):
        try:
            result = await run_in_threadpool(media.remove, payload.public_id)
        except MediaHostError:
            return _error(DELETE_FAILED)

        logger.info("image_deleted", user_id=current_user.id)
    return {"result": result}
