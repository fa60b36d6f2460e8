"""
API Endpoints Package

Contains all FastAPI routers for the gateway:
- travel: Free-text flight, hotel and activity searches
- auth: Registration and login
"""

from .auth import router as auth_router
from .travel import router as travel_router

__all__ = [
    "auth_router",
    "travel_router"
]
