"""Box-office endpoints for the REST API."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Response

from boxoffice.api.dependencies import get_ranker
from boxoffice.api.schemas import BoxOfficeResponse, ErrorResponse
from boxoffice.ranking import BoxOfficeRanker, parse_int_param
from boxoffice.settings import settings

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/movies",
    tags=["Movies"],
)


@router.get(
    "/box-office",
    response_model=BoxOfficeResponse,
    summary="Monthly box-office top 10",
    description=(
        "Rank movies released in the given month by reported revenue, "
        "falling back to a popularity-based estimate."
    ),
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def get_box_office(
    response: Response,
    ranker: Annotated[BoxOfficeRanker, Depends(get_ranker)],
    year: Annotated[str | None, Query(description="Release year, e.g. 2024")] = None,
    month: Annotated[str | None, Query(description="Release month, 1-12")] = None,
) -> BoxOfficeResponse:
    """Get the box-office ranking for one month.

    Args:
        response: Outgoing response (for cache headers).
        ranker: Ranking service.
        year: Raw year parameter; fractional values are truncated.
        month: Raw month parameter; fractional values are truncated.

    Returns:
        Ranking envelope with up to 10 movies.
    """
    year_value = parse_int_param(year)
    month_value = parse_int_param(month)

    result = await ranker.get_top(year_value, month_value)

    logger.info(
        "box_office_ranked",
        year=year_value,
        month=month_value,
        count=len(result.movies),
    )
    response.headers["Cache-Control"] = settings.api.cache_control
    return BoxOfficeResponse(data=result)
