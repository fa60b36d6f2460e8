"""
FastAPI dependency providers
Shared clients are built once in the app lifespan and stored on app.state
"""

from fastapi import Request

from .interfaces import UserStore
from .llm import ExtractionClient
from .travel import SearchClient


def get_search_client(request: Request) -> SearchClient:
    return request.app.state.search_client


def get_extraction_client(request: Request) -> ExtractionClient:
    return request.app.state.extraction_client


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store
