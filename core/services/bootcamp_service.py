# =============================================================================
# core/services/bootcamp_service.py - Bootcamp Business Logic
# =============================================================================
# Handles bootcamp CRUD, radius search and photo uploads.
# Separates HTTP concerns from database/business logic.
#
# Ownership rules:
# - a non-admin user may publish only one bootcamp
# - only the owner or an admin may update, delete or upload a photo
# =============================================================================

import logging
import os
from typing import Any

from beanie.exceptions import RevisionIdWasChanged

from app.config import settings
from app.exceptions import (
    BootcampAlreadyPublishedError,
    BootcampNotFoundError,
    DuplicateFieldError,
    FileTooLargeError,
    GeocodeNotFoundError,
    InvalidFileTypeError,
    NoFileUploadedError,
    NotBootcampOwnerError,
)
from core.models import Bootcamp, BootcampCreate, BootcampUpdate, Location, User
from core.services.storage_service import StorageService
from lib.geocoder import geocode
from lib.query import ListQuery, apply_select, build_pagination
from lib.utils import parse_object_id, slugify

logger = logging.getLogger(__name__)

# Radius of the Earth in miles (6,378 km)
EARTH_RADIUS_MILES = 3963

# Fields a PUT may explicitly clear with null
NULLABLE_FIELDS = {"website", "phone", "email", "average_cost"}

# Image types that can carry script and are served from our origin
BLOCKED_IMAGE_TYPES = {"image/svg+xml"}
BLOCKED_IMAGE_EXTENSIONS = {".svg", ".svgz"}


class BootcampService:
    """
    Service for bootcamp operations.

    Provides a clean interface between API routes and database.
    """

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    async def _locate(address: str) -> Location:
        """Geocode an address into a GeoJSON location."""
        results = await geocode(address)
        if not results:
            raise GeocodeNotFoundError(address)

        loc = results[0]
        return Location(
            coordinates=[loc.longitude, loc.latitude],
            formatted_address=loc.formatted_address,
            street=loc.street,
            city=loc.city,
            state=loc.state,
            zipcode=loc.zipcode,
            country=loc.country,
        )

    @staticmethod
    def _ensure_owner(bootcamp: Bootcamp, user: User, action: str) -> None:
        """Owner or admin only."""
        if not bootcamp.is_owned_by(user.id) and not user.is_admin:
            raise NotBootcampOwnerError(str(user.id), str(bootcamp.id), action)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @staticmethod
    async def get_bootcamp(bootcamp_id: str) -> Bootcamp:
        """
        Get a bootcamp by ID.

        Raises:
            BootcampNotFoundError: If the id is unknown or malformed
        """
        object_id = parse_object_id(bootcamp_id)
        bootcamp = await Bootcamp.get(object_id) if object_id else None

        if not bootcamp:
            raise BootcampNotFoundError(str(bootcamp_id))

        return bootcamp

    @staticmethod
    async def get_owned_bootcamp(bootcamp_id: str, user: User, action: str) -> Bootcamp:
        """
        Get a bootcamp the user may modify.

        Raises:
            BootcampNotFoundError: If the bootcamp doesn't exist
            NotBootcampOwnerError: If the user is neither owner nor admin
        """
        bootcamp = await BootcampService.get_bootcamp(bootcamp_id)
        BootcampService._ensure_owner(bootcamp, user, action)
        return bootcamp

    @staticmethod
    async def list_bootcamps(query: ListQuery) -> dict[str, Any]:
        """
        Filtered, sorted and paginated listing.

        Returns:
            Dict with success, count, pagination and data
        """
        total = await Bootcamp.find(query.filters).count()
        bootcamps = await (
            Bootcamp.find(query.filters)
            .sort(*query.sort)
            .skip(query.skip)
            .limit(query.limit)
            .to_list()
        )

        data = [apply_select(bootcamp.to_response(), query.select) for bootcamp in bootcamps]

        return {
            "success": True,
            "count": len(data),
            "pagination": build_pagination(query.page, query.limit, total),
            "data": data,
        }

    @staticmethod
    async def get_bootcamps_in_radius(zipcode: str, distance: float) -> list[Bootcamp]:
        """
        Bootcamps within `distance` miles of a zipcode.

        The radius for $centerSphere is in radians: distance / Earth radius.

        Raises:
            GeocodeNotFoundError: If the zipcode can't be geocoded
        """
        results = await geocode(zipcode)
        if not results:
            raise GeocodeNotFoundError(zipcode)

        lat = results[0].latitude
        lng = results[0].longitude
        radius = distance / EARTH_RADIUS_MILES

        bootcamps = await Bootcamp.find(
            {"location": {"$geoWithin": {"$centerSphere": [[lng, lat], radius]}}}
        ).to_list()

        logger.info(f"Found {len(bootcamps)} bootcamps within {distance} miles of {zipcode}")
        return bootcamps

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    @staticmethod
    async def create_bootcamp(data: BootcampCreate, user: User) -> Bootcamp:
        """
        Create a bootcamp owned by `user`.

        Raises:
            BootcampAlreadyPublishedError: If a non-admin already owns one
            GeocodeNotFoundError: If the address can't be geocoded
        """
        published = await Bootcamp.find_one({"user": user.id})

        if published and not user.is_admin:
            raise BootcampAlreadyPublishedError(str(user.id))

        bootcamp = Bootcamp(
            **data.model_dump(),
            slug=slugify(data.name),
            user=user.id,
        )
        bootcamp.location = await BootcampService._locate(data.address)

        await bootcamp.insert()
        logger.info(f"Created bootcamp: {bootcamp.id} for user: {user.id}")
        return bootcamp

    @staticmethod
    async def update_bootcamp(bootcamp_id: str, data: BootcampUpdate, user: User) -> Bootcamp:
        """
        Apply a partial update.

        Raises:
            BootcampNotFoundError: If the bootcamp doesn't exist
            NotBootcampOwnerError: If the user is neither owner nor admin
            DuplicateFieldError: If the new name belongs to another bootcamp
        """
        bootcamp = await BootcampService.get_owned_bootcamp(bootcamp_id, user, "update")

        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key in NULLABLE_FIELDS
        }
        if not changes:
            return bootcamp

        if "name" in changes:
            taken = await Bootcamp.find_one({"name": changes["name"], "_id": {"$ne": bootcamp.id}})
            if taken:
                raise DuplicateFieldError("name", changes["name"])
            changes["slug"] = slugify(changes["name"])
        if "address" in changes and changes["address"] != bootcamp.address:
            changes["location"] = await BootcampService._locate(changes["address"])

        for key, value in changes.items():
            setattr(bootcamp, key, value)

        try:
            await bootcamp.save()
        except RevisionIdWasChanged:
            # Beanie reports a unique index violation on save this way
            raise DuplicateFieldError("name", bootcamp.name)

        logger.info(f"Updated bootcamp: {bootcamp.id} ({', '.join(sorted(changes))})")
        return bootcamp

    @staticmethod
    async def delete_bootcamp(bootcamp_id: str, user: User) -> None:
        """
        Delete a bootcamp.

        Raises:
            BootcampNotFoundError: If the bootcamp doesn't exist
            NotBootcampOwnerError: If the user is neither owner nor admin
        """
        bootcamp = await BootcampService.get_owned_bootcamp(bootcamp_id, user, "delete")

        await bootcamp.delete()
        logger.info(f"Deleted bootcamp: {bootcamp_id} by user: {user.id}")

    @staticmethod
    def validate_photo(filename: str | None, content_type: str | None, size: int | None) -> None:
        """
        Check an upload before (and after) its body is read.

        `size` may be None when the client didn't announce it; the check
        then happens once the content is in hand.

        Raises:
            NoFileUploadedError, InvalidFileTypeError, FileTooLargeError
        """
        if not filename:
            raise NoFileUploadedError()

        # Make sure the upload is an image, and not one that can run script
        content_type = (content_type or "").lower()
        ext = os.path.splitext(filename)[1].lower()
        if (
            not content_type.startswith("image")
            or content_type in BLOCKED_IMAGE_TYPES
            or ext in BLOCKED_IMAGE_EXTENSIONS
        ):
            raise InvalidFileTypeError(filename, content_type)

        if size is not None and size > settings.MAX_FILE_UPLOAD:
            raise FileTooLargeError(size, settings.MAX_FILE_UPLOAD)

    @staticmethod
    async def upload_photo(
        bootcamp: Bootcamp,
        filename: str | None,
        content_type: str | None,
        content: bytes | None,
    ) -> str:
        """
        Validate and store a bootcamp photo.

        The caller has already checked ownership (see get_owned_bootcamp).
        The file is renamed to photo_<bootcamp id><original extension>.

        Returns:
            The stored filename

        Raises:
            NoFileUploadedError, InvalidFileTypeError, FileTooLargeError,
            FileUploadError
        """
        if content is None:
            raise NoFileUploadedError()
        BootcampService.validate_photo(filename, content_type, len(content))

        ext = os.path.splitext(filename)[1]
        photo_name = f"photo_{bootcamp.id}{ext}"

        await StorageService.save_photo(photo_name, content)

        bootcamp.photo = photo_name
        await bootcamp.save()
        logger.info(f"Uploaded photo {photo_name} for bootcamp: {bootcamp.id}")
        return photo_name
