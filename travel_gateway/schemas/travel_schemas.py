# schemas/travel_schemas.py
"""
Pydantic v2 schemas for the Travel Gateway
Covers extraction output, coordinate lookups, API requests/responses and users
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================
# Extraction
# ============================================

class TravelRequest(BaseModel):
    """Structured travel fields extracted from free text"""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    origin_city_code: Optional[str] = Field(None, alias="originCityCode")
    destination_city_code: Optional[str] = Field(None, alias="destinationCityCode")
    departure_date: Optional[str] = Field(None, alias="departureDate")
    return_date: Optional[str] = Field(None, alias="returnDate")
    adults: Optional[int] = Field(None, ge=1)
    cabin: Optional[str] = None

    # Activity search overrides
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")

    @field_validator(
        "origin_city_code", "destination_city_code", "departure_date",
        "return_date", "cabin", "start_date", "end_date",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, value):
        # LLMs answer "" or "null" for unknown fields
        if isinstance(value, str):
            value = value.strip()
            if not value or value.lower() in ("null", "none"):
                return None
        return value

    @property
    def activity_start_date(self) -> Optional[str]:
        return self.start_date or self.departure_date

    @property
    def activity_end_date(self) -> Optional[str]:
        return self.end_date or self.return_date


# ============================================
# Coordinates
# ============================================

class Coordinates(BaseModel):
    """Latitude/longitude pair resolved from a location code"""
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class CoordinatesLookup(BaseModel):
    """
    Result of a location lookup.
    A lookup that finds nothing is a normal result; a failed lookup raises.
    """
    model_config = ConfigDict(frozen=True)

    location_code: str
    coordinates: Optional[Coordinates] = None

    @property
    def found(self) -> bool:
        return self.coordinates is not None

    @classmethod
    def hit(cls, location_code: str, latitude: float, longitude: float) -> "CoordinatesLookup":
        return cls(
            location_code=location_code,
            coordinates=Coordinates(latitude=latitude, longitude=longitude),
        )

    @classmethod
    def not_found(cls, location_code: str) -> "CoordinatesLookup":
        return cls(location_code=location_code)


# ============================================
# API
# ============================================

# Longest free-text request forwarded to the extraction model
MAX_ASK_TEXT_LENGTH = 2000


class AskRequest(BaseModel):
    """Free-text travel question"""
    text: str = Field(..., min_length=1, max_length=MAX_ASK_TEXT_LENGTH, description="User's travel request")


class ErrorResponse(BaseModel):
    """Error body returned by every endpoint"""
    error: str


class HealthResponse(BaseModel):
    status: str
    service: str
    missing_secrets: List[str] = Field(default_factory=list)
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


# ============================================
# Users
# ============================================

class RegisterRequest(BaseModel):
    """Registration form, same fields as the signup page"""
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    phone: str
    password: str

    model_config = ConfigDict(populate_by_name=True)


class LoginRequest(BaseModel):
    email: str
    password: str


class UserPublic(BaseModel):
    """User fields safe to return to a client"""
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    phone: str
    created_at: datetime = Field(..., alias="createdAt")


class LoginResponse(BaseModel):
    message: str
    user: UserPublic
