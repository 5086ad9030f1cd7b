"""Data contracts shared between the workflow stages."""

from hotel_agents.shared.contracts.search_request import SearchRequest
from hotel_agents.shared.contracts.provider_result import ProviderListing, ProviderResult
from hotel_agents.shared.contracts.conversation import ConversationTurn, format_history

__all__ = [
    "SearchRequest",
    "ProviderListing",
    "ProviderResult",
    "ConversationTurn",
    "format_history",
]
