"""
Retrieval-augmented answers over the hotel catalog.

Retrieves matching catalog rooms, then asks the completion client to
analyze them for the user.
"""

import json
import logging
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from hotel_agents.catalog.vector_store import (
    CatalogEntry,
    HotelCatalog,
    SearchCriteria,
    filter_entries,
)
from hotel_agents.shared.llm.client import CompletionClient


logger = logging.getLogger(__name__)


CATALOG_SYSTEM_PROMPT = (
    "You are a hotel recommendation expert. Keep the response conversational "
    "and helpful."
)

RAG_USER_TEMPLATE = """Analyze the search results and provide a helpful response to the user's query.

User Query: "{query}"

Available Hotels:
{hotels}

Provide a helpful analysis that:
1. Addresses the user's specific query
2. Highlights the best options based on their needs
3. Mentions key features like price, location, amenities
4. Gives a clear recommendation if appropriate"""

ADVANCED_USER_TEMPLATE = """Analyze these hotel search results based on the following criteria:

Search Criteria: {criteria}

Found Hotels ({count}):
{hotels}

Provide a comprehensive analysis that:
1. Summarizes the search results
2. Highlights the best options based on the criteria
3. Provides price range and value analysis
4. Mentions any notable features or considerations
5. Gives clear recommendations if appropriate"""

NO_MATCHES_TEXT = "No hotels matched."


class CatalogSearchResult(BaseModel):
    """Retrieved rooms plus the model's analysis of them."""

    query: Optional[str] = None
    criteria: Optional[SearchCriteria] = None
    results: List[CatalogEntry] = Field(default_factory=list)
    analysis: str = ""


def format_hotels(entries: Sequence[CatalogEntry], include_description: bool = True) -> str:
    if not entries:
        return NO_MATCHES_TEXT
    blocks = []
    for index, hotel in enumerate(entries, 1):
        lines = [
            f"{index}. {hotel.hotel_name} - {hotel.room_type}",
            f"   Price: {hotel.price:g} {hotel.currency}",
            f"   Location: {hotel.location}",
            f"   Rating: {hotel.rating}/5",
            f"   Provider: {hotel.provider}",
            f"   Amenities: {', '.join(hotel.amenities)}",
        ]
        if include_description:
            lines.append(f"   Description: {hotel.description}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def rag_query(
    catalog: HotelCatalog,
    client: CompletionClient,
    query: str,
    limit: int = 5,
) -> CatalogSearchResult:
    """Answer a free-text query from the most similar catalog rooms."""
    results = catalog.search(query, limit=limit)
    logger.info(f"Catalog query | query={query!r}, results={len(results)}")

    user_prompt = RAG_USER_TEMPLATE.format(query=query, hotels=format_hotels(results))
    analysis = client.complete(CATALOG_SYSTEM_PROMPT, user_prompt)

    return CatalogSearchResult(query=query, results=results, analysis=analysis)


def advanced_search(
    catalog: HotelCatalog,
    client: CompletionClient,
    criteria: SearchCriteria,
    limit: int = 10,
) -> CatalogSearchResult:
    """
    Search by criteria, optionally seeded by a similarity query.

    With a query, the top matches are retrieved first and then filtered;
    without one, the whole catalog is filtered.
    """
    if criteria.query:
        candidates = catalog.search(criteria.query, limit=limit)
    else:
        candidates = catalog.entries
    results = filter_entries(candidates, criteria)

    logger.info(
        f"Catalog advanced search | criteria={criteria.model_dump(exclude_none=True)}, "
        f"results={len(results)}"
    )

    user_prompt = ADVANCED_USER_TEMPLATE.format(
        criteria=json.dumps(criteria.model_dump(exclude_none=True), indent=2),
        count=len(results),
        hotels=format_hotels(results, include_description=False),
    )
    analysis = client.complete(CATALOG_SYSTEM_PROMPT, user_prompt)

    return CatalogSearchResult(criteria=criteria, results=results, analysis=analysis)
