# travel_gateway/__init__.py
"""
Travel API Gateway Package

Receives free-text travel requests, extracts structured fields with an LLM
and queries a travel API for flights, hotels and activities.
"""

__version__ = "1.0.0"

# Package structure:
# travel_gateway/
# ├── __init__.py           <- This file
# ├── main.py               <- FastAPI application entry
# ├── config.py             <- Configuration settings
# ├── errors.py             <- AuthError, SearchError, ExtractionError
# ├── dependencies.py       <- FastAPI dependency providers
# │
# ├── api/                  <- FastAPI Routers
# │   ├── travel.py         <- /api/travel/ask/{flight,hotel,activity}
# │   └── auth.py           <- /api/auth/{register,login}
# │
# ├── travel/               <- Travel API access
# │   ├── credential_manager.py <- Bearer token + expiry
# │   └── search_client.py  <- Flights, hotels, activities, locations
# │
# ├── llm/                  <- LLM Components
# │   ├── prompts.py        <- Extraction prompt
# │   └── extraction_client.py <- NL to TravelRequest
# │
# ├── interfaces/           <- Data Stores
# │   └── user_store.py     <- Registered users
# │
# └── schemas/              <- Pydantic Models
#     └── travel_schemas.py
