"""
FastAPI endpoints for catalog search.

Independent of the conversational workflow: a single request retrieves
catalog rooms and returns them with an analysis.
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from hotel_agents.catalog.rag import CatalogSearchResult, advanced_search, rag_query
from hotel_agents.catalog.vector_store import HotelCatalog, SearchCriteria
from hotel_agents.shared.llm.client import CompletionClient, OpenAICompletionClient


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/catalog", tags=["catalog"])

_catalog: Optional[HotelCatalog] = None
_client: Optional[CompletionClient] = None


def get_catalog() -> HotelCatalog:
    """Get or create the shared catalog instance."""
    global _catalog
    if _catalog is None:
        _catalog = HotelCatalog()
    return _catalog


def get_completion_client() -> CompletionClient:
    """Get or create the shared completion client."""
    global _client
    if _client is None:
        try:
            _client = OpenAICompletionClient()
        except ValueError as e:
            logger.error(f"Completion client unavailable: {e}")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Catalog search is not configured",
            )
    return _client


class CatalogSearchRequest(BaseModel):
    """Free-text query, structured criteria, or both."""

    query: Optional[str] = Field(default=None, description="Free-text query")
    search_type: Literal["simple", "advanced"] = Field(default="simple")
    criteria: Optional[SearchCriteria] = Field(default=None)


class CatalogSearchResponse(BaseModel):
    success: bool = True
    data: CatalogSearchResult


def _run_search(
    catalog: HotelCatalog,
    client: CompletionClient,
    query: Optional[str],
    criteria: Optional[SearchCriteria],
    search_type: str,
) -> CatalogSearchResult:
    try:
        if criteria is not None and (search_type == "advanced" or not query):
            return advanced_search(catalog, client, criteria)
        return rag_query(catalog, client, query)
    except Exception as e:
        logger.exception(f"Catalog search failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process search request",
        )


@router.post("/search", response_model=CatalogSearchResponse)
def search_catalog(
    request: CatalogSearchRequest,
    catalog: HotelCatalog = Depends(get_catalog),
    client: CompletionClient = Depends(get_completion_client),
) -> CatalogSearchResponse:
    """Search the catalog by free-text query or by criteria."""
    has_query = bool(request.query and request.query.strip())
    has_criteria = request.criteria is not None and not request.criteria.is_empty()
    if not has_query and not has_criteria:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query or criteria is required",
        )

    result = _run_search(
        catalog,
        client,
        request.query if has_query else None,
        request.criteria if has_criteria else None,
        request.search_type,
    )
    return CatalogSearchResponse(data=result)


@router.get("/search", response_model=CatalogSearchResponse)
def search_catalog_by_params(
    q: Optional[str] = Query(default=None),
    location: Optional[str] = Query(default=None),
    max_price: Optional[float] = Query(default=None, gt=0),
    min_rating: Optional[float] = Query(default=None, ge=0, le=5),
    amenities: Optional[str] = Query(default=None, description="Comma-separated"),
    room_type: Optional[str] = Query(default=None),
    catalog: HotelCatalog = Depends(get_catalog),
    client: CompletionClient = Depends(get_completion_client),
) -> CatalogSearchResponse:
    """Criteria search from query-string parameters."""
    criteria = SearchCriteria(
        query=q or None,
        location=location or None,
        max_price=max_price,
        min_rating=min_rating,
        amenities=[a.strip() for a in amenities.split(",") if a.strip()] if amenities else None,
        room_type=room_type or None,
    )
    if criteria.is_empty():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one search parameter is required",
        )

    result = _run_search(catalog, client, None, criteria, "advanced")
    return CatalogSearchResponse(data=result)
