# llm/extraction_client.py
"""
Extraction Client
Turns a free-text travel request into a TravelRequest by asking a
chat-completion model (Mistral, through its OpenAI-compatible API) to
answer with a JSON document.
"""

import json
import re
from typing import Optional

from loguru import logger
from openai import APIError, OpenAI
from pydantic import ValidationError

from ..errors import ExtractionError
from ..schemas import TravelRequest
from .prompts import build_extraction_messages

# ```json ... ``` wrappers some models add despite the instructions
_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def strip_code_fence(content: str) -> str:
    content = content.strip()
    match = _CODE_FENCE.match(content)
    return match.group(1) if match else content


def parse_travel_request(content: Optional[str]) -> TravelRequest:
    """
    Parse completion content into a TravelRequest.

    Raises:
        ExtractionError: if content is empty, not a JSON object, or has the wrong shape
    """
    if not content or not content.strip():
        raise ExtractionError("Completion returned no content", content=content)

    try:
        document = json.loads(strip_code_fence(content))
    except json.JSONDecodeError as e:
        raise ExtractionError("Completion content is not valid JSON", cause=e, content=content) from e

    if not isinstance(document, dict):
        raise ExtractionError("Completion content is not a JSON object", content=content)

    try:
        return TravelRequest.model_validate(document)
    except ValidationError as e:
        raise ExtractionError("Completion content does not describe a travel request", cause=e, content=content) from e


class ExtractionClient:
    """
    Delegates natural-language parsing to a chat-completion model.
    """

    def __init__(self, openai_client: OpenAI, model: str = "mistral-tiny"):
        self.openai_client = openai_client
        self.model = model

    def extract_travel_info(self, free_text: str) -> TravelRequest:
        """
        Extract structured travel fields from free text.

        Args:
            free_text: User's travel request, e.g. "Flight from NYC to LON on 2024-06-01"

        Returns:
            TravelRequest with the fields the model found

        Raises:
            ExtractionError: if the completion call fails or its content is unusable
        """
        if not free_text or not free_text.strip():
            raise ExtractionError("Cannot extract travel information from empty text")

        try:
            completion = self.openai_client.chat.completions.create(
                model=self.model,
                messages=build_extraction_messages(free_text),
                temperature=0,
            )
        except APIError as e:
            logger.error(f"Completion API call failed: {e}")
            raise ExtractionError("Completion API call failed", cause=e) from e

        if not completion.choices:
            logger.error("Completion API returned no choices")
            raise ExtractionError("Completion API returned no choices")

        content = completion.choices[0].message.content
        try:
            travel_request = parse_travel_request(content)
        except ExtractionError:
            logger.error(f"Unusable completion content: {content!r}")
            raise

        logger.info(
            f"Extracted travel request: origin={travel_request.origin_city_code}, "
            f"destination={travel_request.destination_city_code}, "
            f"departure={travel_request.departure_date}, return={travel_request.return_date}"
        )
        return travel_request
