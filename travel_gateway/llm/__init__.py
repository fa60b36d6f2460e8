"""
LLM Components Package

Contains LLM-powered components:
- prompts: Extraction prompt template
- extraction_client: Parse natural language into a TravelRequest
"""

from .extraction_client import ExtractionClient, parse_travel_request
from .prompts import build_extraction_messages

__all__ = [
    "ExtractionClient",
    "parse_travel_request",
    "build_extraction_messages"
]
