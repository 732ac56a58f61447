# =============================================================================
# app/routers/bootcamps.py - Bootcamp CRUD Endpoints
# =============================================================================
# Handles listing, reading, creating, updating and deleting bootcamps,
# plus the zipcode radius search.
# Reads are public; writes require an authenticated owner or admin.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, status

from app.auth import PublisherUser
from app.dependencies import BootcampResults
from core.models import BootcampCreate, BootcampUpdate
from core.services.bootcamp_service import BootcampService

router = APIRouter()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("")
async def get_bootcamps(results: BootcampResults):
    """
    List bootcamps.

    Supports filtering (`average_cost[lte]=10000`, `careers[in]=Business`),
    `select`, `sort`, `page` and `limit` query parameters.
    """
    return results


@router.get("/radius/{zipcode}/{distance}")
async def get_bootcamps_in_radius(
    zipcode: Annotated[str, Path(description="Postal code at the center of the search")],
    distance: Annotated[float, Path(gt=0, description="Radius in miles")],
):
    """
    Get bootcamps within `distance` miles of `zipcode`.
    """
    bootcamps = await BootcampService.get_bootcamps_in_radius(zipcode, distance)

    return {
        "success": True,
        "count": len(bootcamps),
        "data": [bootcamp.to_response() for bootcamp in bootcamps],
    }


@router.get("/{bootcamp_id}")
async def get_bootcamp(
    bootcamp_id: Annotated[str, Path(description="Bootcamp ObjectId")],
):
    """
    Get a single bootcamp.

    Raises:
        404: If the bootcamp doesn't exist
    """
    bootcamp = await BootcampService.get_bootcamp(bootcamp_id)

    return {
        "success": True,
        "message": "Fetch bootcamp data successfully",
        "data": bootcamp.to_response(),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_bootcamp(request: BootcampCreate, user: PublisherUser):
    """
    Create a new bootcamp owned by the caller.

    Non-admin users can only publish one bootcamp.
    """
    bootcamp = await BootcampService.create_bootcamp(request, user)

    return {
        "success": True,
        "message": "Bootcamp created successfully",
        "data": bootcamp.to_response(),
    }


@router.put("/{bootcamp_id}")
async def update_bootcamp(
    bootcamp_id: Annotated[str, Path(description="Bootcamp ObjectId")],
    request: BootcampUpdate,
    user: PublisherUser,
):
    """
    Update a bootcamp.

    User must own the bootcamp or be an admin.
    """
    bootcamp = await BootcampService.update_bootcamp(bootcamp_id, request, user)

    return {
        "success": True,
        "message": "Bootcamp updated successfully",
        "data": bootcamp.to_response(),
    }


@router.delete("/{bootcamp_id}")
async def delete_bootcamp(
    bootcamp_id: Annotated[str, Path(description="Bootcamp ObjectId")],
    user: PublisherUser,
):
    """
    Delete a bootcamp.

    User must own the bootcamp or be an admin.
    """
    await BootcampService.delete_bootcamp(bootcamp_id, user)

    return {
        "success": True,
        "message": "Bootcamp deleted successfully",
        "data": {},
    }
