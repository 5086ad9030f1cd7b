"""
Catalog similarity search.

A standalone feature, separate from the conversational workflow: a static
CSV of hotel rooms searched by toy embedding similarity or by criteria.
"""

from hotel_agents.catalog.rag import CatalogSearchResult, advanced_search, rag_query
from hotel_agents.catalog.vector_store import CatalogEntry, HotelCatalog, SearchCriteria

__all__ = [
    "CatalogSearchResult",
    "advanced_search",
    "rag_query",
    "CatalogEntry",
    "HotelCatalog",
    "SearchCriteria",
]
