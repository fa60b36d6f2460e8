"""
Langchain Prompt Templates
Defines the prompt for travel-request extraction
"""

from langchain_core.prompts import ChatPromptTemplate

# ============================================
# Extraction Prompt
# ============================================

EXTRACTION_SYSTEM_PROMPT = """You are a travel assistant. Extract originCityCode, destinationCityCode, departureDate, returnDate, adults, and cabin from the user's input.
If the user asks for activities, also extract latitude, longitude, startDate and endDate when they are given.

Rules:
- City and airport codes are 3-letter IATA codes (e.g. "NYC", "LON", "PAR").
- Dates use the format YYYY-MM-DD.
- adults is an integer; cabin is one of ECONOMY, PREMIUM_ECONOMY, BUSINESS, FIRST.
- Use null for anything the user did not mention.

Respond ONLY in JSON format, with no explanation or markdown formatting.

Example:
Input: "Flight from NYC to LON on 2024-06-01"
Response: {{"originCityCode": "NYC", "destinationCityCode": "LON", "departureDate": "2024-06-01", "returnDate": null, "adults": null, "cabin": null}}"""

EXTRACTION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", EXTRACTION_SYSTEM_PROMPT),
    ("human", "{user_text}"),
])

# Langchain message types -> chat-completion roles
_ROLES = {"system": "system", "human": "user", "ai": "assistant"}


def build_extraction_messages(user_text: str) -> list:
    """Render the extraction prompt as chat-completion messages"""
    return [
        {"role": _ROLES[message.type], "content": message.content}
        for message in EXTRACTION_PROMPT.format_messages(user_text=user_text)
    ]
