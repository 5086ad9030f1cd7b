"""
Provider output contract.

Defines the listings and per-provider results that data sources return
to the aggregator and that the recommendation selector reduces.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from hotel_agents.shared.contracts.search_request import SearchRequest


class ProviderListing(BaseModel):
    """A single bookable room offer from one provider."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Provider-scoped listing identifier")
    hotel_name: str = Field(description="Name of the hotel")
    room_type: str = Field(description="Room type (e.g., 'Standard Room')")
    price: float = Field(gt=0, description="Nightly price")
    currency: str = Field(default="USD", description="ISO currency code")
    description: str = Field(default="", description="Free-text room description")
    amenities: List[str] = Field(default_factory=list, description="Amenity tags")
    provider: str = Field(description="Name of the provider offering the listing")
    rating: float = Field(ge=0, le=5, description="Rating out of 5")
    location: str = Field(description="Location text")
    availability: bool = Field(default=True, description="Whether the room is bookable")


class ProviderResult(BaseModel):
    """All listings one provider returned for a search request."""

    model_config = ConfigDict(frozen=True)

    provider: str = Field(description="Provider name")
    rooms: List[ProviderListing] = Field(
        default_factory=list, description="Listings in provider order"
    )
    total_results: int = Field(ge=0, description="Number of listings returned")
    search_query: SearchRequest = Field(description="Echo of the originating request")

    @classmethod
    def from_listings(
        cls,
        provider: str,
        rooms: List[ProviderListing],
        search_query: SearchRequest,
    ) -> "ProviderResult":
        """Build a result whose total matches the listings given."""
        return cls(
            provider=provider,
            rooms=list(rooms),
            total_results=len(rooms),
            search_query=search_query,
        )
