# =============================================================================
# core/services/storage_service.py - Photo Storage on Disk
# =============================================================================
# Handles writing uploaded bootcamp photos to FILE_UPLOAD_PATH.
# The directory is served statically under /uploads by app/main.py.
# =============================================================================

import asyncio
import logging
from pathlib import Path

from app.config import settings
from app.exceptions import FileUploadError

logger = logging.getLogger(__name__)


class StorageService:
    """
    Service for photo file operations.

    Files are written to the local upload directory.
    """

    @staticmethod
    def upload_dir() -> Path:
        return Path(settings.FILE_UPLOAD_PATH)

    @staticmethod
    def photo_path(filename: str) -> Path:
        """Absolute-or-relative path of a stored photo."""
        return StorageService.upload_dir() / filename

    @staticmethod
    async def save_photo(filename: str, content: bytes) -> Path:
        """
        Write a photo to the upload directory, replacing any previous file.

        Args:
            filename: Target filename (no directories)
            content: Raw file bytes

        Returns:
            Path the file was written to

        Raises:
            FileUploadError: If the directory or file can't be written
        """
        path = StorageService.photo_path(filename)

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)

        try:
            await asyncio.to_thread(_write)
        except OSError as e:
            logger.error(f"Failed to write photo {path}: {e}")
            raise FileUploadError(str(e))

        logger.info(f"Saved photo: {path} ({len(content)} bytes)")
        return path
