# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated, Any

from fastapi import Depends, Request

from app.exceptions import DevCamperException
from core.services.bootcamp_service import BootcampService
from lib.query import ListQuery, parse_list_query


class InvalidQueryError(DevCamperException):
    """Raised when listing parameters can't be parsed."""

    def __init__(self, error: str):
        super().__init__(
            message=error,
            code="INVALID_QUERY",
            status_code=400,
            suggestion="Use positive integers for page and limit, and plain field names (or field[gt|gte|lt|lte|in]) as filters",
        )


def get_list_query(request: Request) -> ListQuery:
    """
    Parse select/sort/page/limit and filters from the raw query string.

    Raw parameters are used because filter keys look like `field[op]`.
    """
    try:
        return parse_list_query(request.query_params.multi_items())
    except ValueError as e:
        raise InvalidQueryError(str(e))


async def bootcamp_results(
    query: Annotated[ListQuery, Depends(get_list_query)],
) -> dict[str, Any]:
    """
    Advanced results for the bootcamps collection.

    Runs the filtered, sorted, paginated query before the route handler,
    which just returns it.
    """
    return await BootcampService.list_bootcamps(query)


# Type alias for dependency injection
BootcampResults = Annotated[dict[str, Any], Depends(bootcamp_results)]
