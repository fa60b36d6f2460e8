"""
Pydantic Schemas Package

Contains all Pydantic v2 models for:
- LLM extraction output
- Coordinate lookups
- API requests/responses
"""

from .travel_schemas import (
    # Extraction
    TravelRequest,
    # Coordinates
    Coordinates, CoordinatesLookup,
    # API
    AskRequest, ErrorResponse, HealthResponse,
    # Users
    RegisterRequest, LoginRequest, UserPublic, LoginResponse
)

__all__ = [
    # Extraction
    "TravelRequest",
    # Coordinates
    "Coordinates", "CoordinatesLookup",
    # API
    "AskRequest", "ErrorResponse", "HealthResponse",
    # Users
    "RegisterRequest", "LoginRequest", "UserPublic", "LoginResponse"
]
