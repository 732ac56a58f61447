# =============================================================================
# core/models/bootcamp.py - Bootcamp Document and Schemas
# =============================================================================
# These models define the bootcamp resource:
# - Bootcamp: Beanie document persisted in the `bootcamps` collection
# - Location: GeoJSON point filled in by the geocoder on write
# - BootcampCreate / BootcampUpdate: request bodies for POST / PUT
#
# A bootcamp belongs to the user that created it (the owner).
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from beanie import Document, Indexed, PydanticObjectId
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pymongo import GEOSPHERE, IndexModel

# http(s) URLs only
URL_PATTERN = r"^https?://(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b([-a-zA-Z0-9()@:%_+.~#?&/=]*)$"

DEFAULT_PHOTO = "no-photo.jpg"


class Career(str, Enum):
    """Career tracks a bootcamp can offer."""
    WEB_DEVELOPMENT = "Web Development"
    MOBILE_DEVELOPMENT = "Mobile Development"
    UI_UX = "UI/UX"
    DATA_SCIENCE = "Data Science"
    BUSINESS = "Business"
    OTHER = "Other"


class Location(BaseModel):
    """
    GeoJSON point plus the address parts returned by the geocoder.

    Coordinates are [longitude, latitude], the order MongoDB expects.
    """
    type: Literal["Point"] = "Point"
    coordinates: list[float] = Field(..., min_length=2, max_length=2)
    formatted_address: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    country: str | None = None


class Bootcamp(Document):
    """Bootcamp listing."""

    name: Indexed(str, unique=True)
    slug: str | None = None
    description: str
    website: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str
    location: Location | None = None
    careers: list[Career]
    average_rating: float | None = Field(default=None, ge=1, le=10)
    average_cost: float | None = None
    photo: str = DEFAULT_PHOTO
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)
    user: PydanticObjectId

    class Settings:
        name = "bootcamps"
        indexes = [
            IndexModel([("location.coordinates", GEOSPHERE)]),
        ]

    def is_owned_by(self, user_id: Any) -> bool:
        return str(self.user) == str(user_id)

    def to_response(self) -> dict[str, Any]:
        """JSON-safe dict for API responses."""
        return self.model_dump(mode="json", exclude={"revision_id"})


# =============================================================================
# Request Models
# =============================================================================

class BootcampCreate(BaseModel):
    """
    Body for POST /bootcamps.

    Example:
        {
            "name": "Devworks Bootcamp",
            "description": "Full stack web development",
            "address": "233 Bay State Rd Boston MA 02215",
            "careers": ["Web Development", "UI/UX"]
        }
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1, max_length=500)
    website: str | None = Field(default=None, pattern=URL_PATTERN)
    phone: str | None = Field(default=None, max_length=20)
    email: EmailStr | None = None
    address: str = Field(..., min_length=1)
    careers: list[Career] = Field(..., min_length=1)
    average_cost: float | None = Field(default=None, ge=0)
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False


class BootcampUpdate(BaseModel):
    """Body for PUT /bootcamps/{id}. Only the fields sent are changed."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = Field(default=None, min_length=1, max_length=500)
    website: str | None = Field(default=None, pattern=URL_PATTERN)
    phone: str | None = Field(default=None, max_length=20)
    email: EmailStr | None = None
    address: str | None = Field(default=None, min_length=1)
    careers: list[Career] | None = Field(default=None, min_length=1)
    average_cost: float | None = Field(default=None, ge=0)
    housing: bool | None = None
    job_assistance: bool | None = None
    job_guarantee: bool | None = None
    accept_gi: bool | None = None
