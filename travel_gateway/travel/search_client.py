# travel/search_client.py
"""
Travel API Search Client
Flights, hotels, activities and location lookups against the Amadeus REST API.

Every search follows the same path:
  ensure a valid bearer token -> build the query -> GET -> return parsed JSON.
A 401 invalidates the token and the call is retried once with a fresh one.
"""

from typing import Any, Dict, Optional

import httpx
from loguru import logger

from ..errors import SearchError
from ..schemas import CoordinatesLookup
from .credential_manager import CredentialManager


FLIGHT_OFFERS_PATH = "/v2/shopping/flight-offers"
HOTELS_BY_CITY_PATH = "/v1/reference-data/locations/hotels/by-city"
ACTIVITIES_PATH = "/v1/shopping/activities"
LOCATIONS_PATH = "/v1/reference-data/locations"

DEFAULT_ADULTS = 1
DEFAULT_CABIN = "ECONOMY"
FLIGHT_CURRENCY = "USD"
FLIGHT_MAX_RESULTS = 5
HOTEL_RADIUS_KM = 30


# ============================================
# Query Builders
# ============================================

def build_flight_params(
    origin: str,
    destination: str,
    departure_date: str,
    return_date: Optional[str] = None,
    adults: Optional[int] = None,
    cabin: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the flight-offers query.

    Adults default to 1 and cabin to ECONOMY; cabin is always uppercased.
    returnDate is only present for round trips.
    """
    params: Dict[str, Any] = {
        "originLocationCode": origin,
        "destinationLocationCode": destination,
        "departureDate": departure_date,
        "adults": adults if adults is not None else DEFAULT_ADULTS,
        "nonStop": "false",
        "currencyCode": FLIGHT_CURRENCY,
        "max": FLIGHT_MAX_RESULTS,
        "travelClass": cabin.upper() if cabin else DEFAULT_CABIN,
    }
    if return_date:
        params["returnDate"] = return_date
    return params


def build_hotel_params(city_code: str) -> Dict[str, Any]:
    return {
        "cityCode": city_code,
        "radius": HOTEL_RADIUS_KM,
        "radiusUnit": "KM",
        "hotelSource": "ALL",
    }


def build_activity_params(
    latitude: float,
    longitude: float,
    start_date: str,
    end_date: str,
) -> Dict[str, Any]:
    missing = [
        name for name, value in (
            ("latitude", latitude),
            ("longitude", longitude),
            ("start_date", start_date),
            ("end_date", end_date),
        )
        if value is None or value == ""
    ]
    if missing:
        raise ValueError(f"Activity search requires {', '.join(missing)}")

    return {
        "latitude": latitude,
        "longitude": longitude,
        "startDate": start_date,
        "endDate": end_date,
    }


def build_location_params(location_code: str) -> Dict[str, Any]:
    return {"subType": "AIRPORT,CITY", "keyword": location_code}


# ============================================
# Client
# ============================================

class SearchClient:
    """
    Outbound travel searches.
    Owns the CredentialManager that authorizes its calls.
    """

    def __init__(self, http_client: httpx.Client, credentials: CredentialManager):
        self.http_client = http_client
        self.credentials = credentials

    def search_flights(
        self,
        origin: str,
        destination: str,
        departure_date: str,
        return_date: Optional[str] = None,
        adults: Optional[int] = None,
        cabin: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Search flight offers.

        Args:
            origin: IATA origin code (e.g. "NYC")
            destination: IATA destination code (e.g. "LON")
            departure_date: YYYY-MM-DD
            return_date: YYYY-MM-DD, omitted for one-way searches
            adults: Number of adult passengers, default 1
            cabin: Cabin class, default ECONOMY

        Returns:
            Flight offers JSON as returned by the travel API

        Raises:
            AuthError: if no token could be obtained
            SearchError: on 4xx/5xx from the travel API
        """
        params = build_flight_params(origin, destination, departure_date, return_date, adults, cabin)
        logger.info(
            f"Searching flights: {origin} -> {destination}, departure {departure_date}, "
            f"return {return_date}, adults {params['adults']}, cabin {params['travelClass']}"
        )
        result = self._get(FLIGHT_OFFERS_PATH, params, operation="flight search")
        logger.info("Flight search succeeded")
        return result

    def search_hotels(self, city_code: str) -> Dict[str, Any]:
        """Hotels within 30 km of a city, all sources"""
        logger.info(f"Searching hotels in {city_code}")
        return self._get(HOTELS_BY_CITY_PATH, build_hotel_params(city_code), operation="hotel search")

    def search_activities(
        self,
        latitude: float,
        longitude: float,
        start_date: str,
        end_date: str,
    ) -> Dict[str, Any]:
        """
        Activities around a point.
        Callers resolve missing coordinates with resolve_coordinates() first.
        """
        params = build_activity_params(latitude, longitude, start_date, end_date)
        logger.info(f"Searching activities at ({latitude}, {longitude}) from {start_date} to {end_date}")
        return self._get(ACTIVITIES_PATH, params, operation="activity search")

    def resolve_coordinates(self, location_code: str) -> CoordinatesLookup:
        """
        Look up an airport/city code and return its coordinates.

        Returns:
            CoordinatesLookup, not found when the result list is empty

        Raises:
            AuthError, SearchError: when the lookup itself fails
        """
        payload = self._get(LOCATIONS_PATH, build_location_params(location_code), operation="location lookup")

        locations = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(payload, dict) or not isinstance(locations, (list, type(None))):
            logger.error(f"Location lookup for {location_code} returned an unusable payload: {payload!r}")
            raise SearchError(f"Location lookup for {location_code} returned an unusable location payload")

        if not locations:
            logger.info(f"No location found for {location_code}")
            return CoordinatesLookup.not_found(location_code)

        if not isinstance(locations[0], dict):
            logger.error(f"Location lookup for {location_code} returned an unusable location: {locations[0]!r}")
            raise SearchError(f"Location lookup for {location_code} returned an unusable location payload")

        geo_code = locations[0].get("geoCode") or {}
        try:
            latitude = float(geo_code["latitude"])
            longitude = float(geo_code["longitude"])
        except (KeyError, TypeError, ValueError) as e:
            raise SearchError(
                f"Location lookup for {location_code} returned no usable geoCode",
                cause=e,
            ) from e

        logger.info(f"Resolved {location_code} to ({latitude}, {longitude})")
        return CoordinatesLookup.hit(location_code, latitude, longitude)

    def _get(self, path: str, params: Dict[str, Any], operation: str) -> Dict[str, Any]:
        response = self._send(path, params, operation)

        # One re-authentication for a token the API no longer accepts
        if response.status_code == 401:
            logger.warning(f"Travel API rejected token during {operation}, re-authenticating once")
            self.credentials.invalidate()
            response = self._send(path, params, operation)

        if response.is_error:
            level = "4xx" if response.is_client_error else "5xx"
            logger.error(f"Travel API {level} error during {operation} ({response.status_code}): {response.text}")
            raise SearchError(
                f"Travel API error during {operation} ({response.status_code})",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Travel API returned invalid JSON during {operation}")
            raise SearchError(
                f"Travel API returned invalid JSON during {operation}",
                cause=e,
                status_code=response.status_code,
                body=response.text,
            ) from e

    def _send(self, path: str, params: Dict[str, Any], operation: str) -> httpx.Response:
        token = self.credentials.ensure_valid()
        try:
            return self.http_client.get(
                path,
                params=params,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Travel API request failed during {operation}: {e}")
            raise SearchError(f"Travel API request failed during {operation}", cause=e) from e
