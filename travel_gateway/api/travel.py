# api/travel.py
"""
Travel Ask API
Free-text travel questions answered with raw travel API results.

Each endpoint extracts a TravelRequest from the text, then runs one search:
- POST /api/travel/ask/flight
- POST /api/travel/ask/hotel
- POST /api/travel/ask/activity
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger

from ..dependencies import get_extraction_client, get_search_client
from ..errors import GatewayError
from ..llm import ExtractionClient
from ..schemas import AskRequest, ErrorResponse
from ..travel import SearchClient


router = APIRouter(prefix="/api/travel/ask", tags=["travel"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ============================================
# Endpoints
# ============================================

@router.post("/flight", responses=ERROR_RESPONSES)
def ask_flights(
    body: AskRequest,
    extractor: ExtractionClient = Depends(get_extraction_client),
    search: SearchClient = Depends(get_search_client),
):
    """Search flights described in free text"""
    try:
        request = extractor.extract_travel_info(body.text)

        missing = [
            name for name, value in (
                ("origin", request.origin_city_code),
                ("destination", request.destination_city_code),
                ("departure date", request.departure_date),
            )
            if not value
        ]
        if missing:
            return error_response(400, f"Missing {', '.join(missing)} for the flight search.")

        return search.search_flights(
            request.origin_city_code,
            request.destination_city_code,
            request.departure_date,
            request.return_date,
            request.adults,
            request.cabin,
        )
    except GatewayError as e:
        logger.error(f"Flight search failed: {e}")
        return error_response(500, f"Error while searching flights: {e}")


@router.post("/hotel", responses=ERROR_RESPONSES)
def ask_hotels(
    body: AskRequest,
    extractor: ExtractionClient = Depends(get_extraction_client),
    search: SearchClient = Depends(get_search_client),
):
    """Search hotels in the destination city described in free text"""
    try:
        request = extractor.extract_travel_info(body.text)
        if not request.destination_city_code:
            return error_response(400, "Missing destination city for the hotel search.")

        return search.search_hotels(request.destination_city_code)
    except GatewayError as e:
        logger.error(f"Hotel search failed: {e}")
        return error_response(500, f"Error while searching hotels: {e}")


@router.post("/activity", responses=ERROR_RESPONSES)
def ask_activities(
    body: AskRequest,
    extractor: ExtractionClient = Depends(get_extraction_client),
    search: SearchClient = Depends(get_search_client),
):
    """
    Search activities described in free text.

    Coordinates come from the text when both are given, otherwise from the
    destination code. Dates fall back from start/end to departure/return.
    """
    try:
        request = extractor.extract_travel_info(body.text)

        latitude = request.latitude
        longitude = request.longitude
        start_date = request.activity_start_date
        end_date = request.activity_end_date

        if (latitude is None or longitude is None) and request.destination_city_code:
            lookup = search.resolve_coordinates(request.destination_city_code)
            if lookup.found:
                latitude = lookup.coordinates.latitude
                longitude = lookup.coordinates.longitude

        if latitude is None or longitude is None or not start_date or not end_date:
            return error_response(400, "Missing coordinates or dates for the activity search.")

        return search.search_activities(latitude, longitude, start_date, end_date)
    except GatewayError as e:
        logger.error(f"Activity search failed: {e}")
        return error_response(500, f"Error while searching activities: {e}")
