"""
Travel API Package

Outbound access to the travel-data API:
- credential_manager: Bearer token acquisition and expiry checks
- search_client: Flights, hotels, activities, location lookups
"""

from .credential_manager import Credential, CredentialManager
from .search_client import SearchClient

__all__ = [
    "Credential",
    "CredentialManager",
    "SearchClient"
]
