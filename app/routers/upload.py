# =============================================================================
# app/routers/upload.py - Bootcamp Photo Upload
# =============================================================================
# Handles photo uploads for a bootcamp: image MIME type and size are
# validated, the file is renamed to photo_<id><ext> and stored on disk.
#
# The announced size is checked before the body is read into memory.
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, File, Path, UploadFile

from app.auth import PublisherUser
from core.services.bootcamp_service import BootcampService

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Endpoints
# =============================================================================

@router.put("/{bootcamp_id}/photo")
async def bootcamp_photo_upload(
    bootcamp_id: Annotated[str, Path(description="Bootcamp ObjectId")],
    user: PublisherUser,
    file: Annotated[Optional[UploadFile], File(description="Image file to upload")] = None,
):
    """
    Upload a photo for a bootcamp.

    This endpoint:
    1. Verifies the bootcamp exists and the user owns it (or is admin)
    2. Checks the file is an image within MAX_FILE_UPLOAD bytes
    3. Saves it as photo_<bootcamp id><ext> in FILE_UPLOAD_PATH
    4. Stores the filename on the bootcamp

    Returns the stored filename.
    """
    bootcamp = await BootcampService.get_owned_bootcamp(bootcamp_id, user, "update")

    if file is None:
        content = None
        filename = content_type = None
    else:
        filename = file.filename
        content_type = file.content_type
        BootcampService.validate_photo(filename, content_type, file.size)
        content = await file.read()

    logger.debug(f"Photo upload for bootcamp {bootcamp_id}: {filename} ({content_type})")

    photo = await BootcampService.upload_photo(
        bootcamp,
        filename=filename,
        content_type=content_type,
        content=content,
    )

    return {
        "success": True,
        "message": "Photo added successfully",
        "data": photo,
    }
