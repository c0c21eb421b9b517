"""API routes for postal code lookups."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse, Response

from app.core.dependencies import get_zip_service
from app.zips.service import RecordEncodingError, ZipLookupService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/zips", tags=["Zips"])

JSON_UTF8 = "application/json; charset=utf-8"
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


@router.get("/city/{city_path:path}")
async def zips_for_city(
    city_path: str,
    service: ZipLookupService = Depends(get_zip_service),
):
    """
    Postal records for a city, matched case-insensitively.

    The city is the last path segment, e.g. /zips/city/seattle. Unknown
    cities return an empty array.
    """
    city = city_path.rsplit("/", 1)[-1]
    records = service.lookup_by_city(city)

    try:
        body = service.encode(records)
    except RecordEncodingError as e:
        logger.error(f"Failed to encode zips for city {city!r}: {e}")
        return PlainTextResponse(
            f"error encoding json: {e}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            headers=CORS_HEADERS,
        )

    return Response(content=body, media_type=JSON_UTF8, headers=CORS_HEADERS)
