"""
Intent extractor for hotel search requests.

Turns free-form user text (plus conversation history) into a structured
SearchRequest, or decides the user must be asked for more information.
"""

from hotel_agents.intent.extractor import IntentExtractor, build_search_request
from hotel_agents.intent.schemas import (
    ExtractionOutcome,
    ExtractionStatus,
    FALLBACK_CLARIFICATION_MESSAGE,
)

__all__ = [
    "IntentExtractor",
    "build_search_request",
    "ExtractionOutcome",
    "ExtractionStatus",
    "FALLBACK_CLARIFICATION_MESSAGE",
]
