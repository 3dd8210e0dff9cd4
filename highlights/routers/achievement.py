# highlights/routers/achievement.py
from __future__ import annotations

import logging
import re

from fastapi import APIRouter, Depends, Query, Request, Response

from highlights.errors import HighlightsError, InvalidYearError, UnexpectedServerError
from highlights.schemas import ErrorResponse, YearHighlights
from highlights.service import LookupService

logger = logging.getLogger("highlights.routers.achievement")

router = APIRouter(prefix="/api", tags=["achievement"])

# shared caches may keep an answer for a day; browsers always revalidate
CACHE_CONTROL = "public, max-age=0, s-maxage=86400"

# ASCII digits only; more than 308 significant digits is past float range (not a finite year)
_LEADING_INT = re.compile(r"\s*([+-]?)0*([0-9]{1,308})(?![0-9])")


def parse_year(raw: str | None) -> int:
    """
    Leading-integer parse of the ?year= parameter: "1969", " 1969", "1969abc"
    and "1969.5" all give 1969. Missing, non-numeric or negative -> InvalidYearError.
    """
    match = _LEADING_INT.match(raw or "")
    if not match:
        raise InvalidYearError()
    sign, digits = match.groups()
    year = int(digits)
    if sign == "-" and year != 0:
        raise InvalidYearError()
    return year


def _force_param(v: str | None) -> bool:
    """Only "1" and "true" force a refresh."""
    return v in {"1", "true"}


def get_lookup_service(request: Request) -> LookupService:
    return request.app.state.lookup


@router.get(
    "/achievement",
    response_model=YearHighlights,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def achievement(
    response: Response,
    year: str | None = Query(None, description="Calendar year, e.g. 1969"),
    force: str | None = Query(None, description="1|true bypasses the server cache"),
    service: LookupService = Depends(get_lookup_service),
):
    """Up to five short highlights for `year`, served from cache when fresh."""
    try:
        result = await service.lookup(parse_year(year), force=_force_param(force))
    except HighlightsError:
        raise
    except Exception:
        logger.exception("achievement lookup failed for year=%r", year)
        raise UnexpectedServerError()

    response.headers["Cache-Control"] = CACHE_CONTROL
    return YearHighlights(year=result.year, items=result.items)
