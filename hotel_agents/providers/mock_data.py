"""
Mock hotel providers.

Hardcoded listings for three booking sites, returned after a simulated
network delay, so the pipeline can be exercised without real APIs.
"""

import asyncio
import logging
from typing import List

from hotel_agents.providers.base import HotelProvider
from hotel_agents.shared.contracts import ProviderListing, ProviderResult, SearchRequest


logger = logging.getLogger(__name__)


# Listing templates by provider; location is filled in per search
_BOOKING_COM_ROOMS = [
    ProviderListing(
        id="booking-1",
        hotel_name="Grand Plaza Hotel",
        room_type="Standard Room",
        price=120,
        currency="USD",
        description="Comfortable room with city view",
        amenities=["Free WiFi", "Air Conditioning", "Mini Bar"],
        provider="Booking.com",
        rating=4.2,
        location="",
    ),
    ProviderListing(
        id="booking-2",
        hotel_name="Luxury Resort & Spa",
        room_type="Deluxe Suite",
        price=280,
        currency="USD",
        description="Luxurious suite with ocean view",
        amenities=["Free WiFi", "Spa Access", "Ocean View", "Balcony"],
        provider="Booking.com",
        rating=4.8,
        location="",
    ),
]

_EXPEDIA_ROOMS = [
    ProviderListing(
        id="expedia-1",
        hotel_name="Business Inn",
        room_type="Executive Room",
        price=95,
        currency="USD",
        description="Modern room perfect for business travelers",
        amenities=["Free WiFi", "Business Center", "Gym"],
        provider="Expedia",
        rating=4.0,
        location="",
    ),
    ProviderListing(
        id="expedia-2",
        hotel_name="Boutique Hotel Downtown",
        room_type="Premium Room",
        price=150,
        currency="USD",
        description="Stylish room in the heart of downtown",
        amenities=["Free WiFi", "Rooftop Bar", "Concierge"],
        provider="Expedia",
        rating=4.5,
        location="",
    ),
]

_HOTELS_COM_ROOMS = [
    ProviderListing(
        id="hotels-1",
        hotel_name="Budget Stay",
        room_type="Economy Room",
        price=75,
        currency="USD",
        description="Clean and affordable accommodation",
        amenities=["Free WiFi", "Parking"],
        provider="Hotels.com",
        rating=3.8,
        location="",
    ),
    ProviderListing(
        id="hotels-2",
        hotel_name="Family Resort",
        room_type="Family Suite",
        price=200,
        currency="USD",
        description="Spacious suite perfect for families",
        amenities=["Free WiFi", "Pool", "Kids Club", "Restaurant"],
        provider="Hotels.com",
        rating=4.3,
        location="",
    ),
]


class MockHotelProvider(HotelProvider):
    """Provider that returns fixed listings after a delay."""

    def __init__(
        self,
        name: str,
        rooms: List[ProviderListing],
        latency_seconds: float = 0.0,
    ):
        self.name = name
        self._rooms = list(rooms)
        self.latency_seconds = latency_seconds

    async def search(self, request: SearchRequest) -> ProviderResult:
        logger.debug(
            f"[provider={self.name}] Searching | destination={request.destination}, "
            f"latency={self.latency_seconds}s"
        )
        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)

        rooms = [
            room.model_copy(update={"location": request.destination})
            for room in self._rooms
        ]
        return ProviderResult.from_listings(self.name, rooms, request)


class BookingComProvider(MockHotelProvider):
    def __init__(self, latency_seconds: float = 1.0):
        super().__init__("Booking.com", _BOOKING_COM_ROOMS, latency_seconds)


class ExpediaProvider(MockHotelProvider):
    def __init__(self, latency_seconds: float = 1.2):
        super().__init__("Expedia", _EXPEDIA_ROOMS, latency_seconds)


class HotelsComProvider(MockHotelProvider):
    def __init__(self, latency_seconds: float = 0.8):
        super().__init__("Hotels.com", _HOTELS_COM_ROOMS, latency_seconds)


def create_default_providers(latency_scale: float = 1.0) -> List[HotelProvider]:
    """
    Create the three mock providers in their fixed invocation order.

    Args:
        latency_scale: Multiplier applied to each provider's simulated
            delay (0 disables the delay, e.g. in tests)
    """
    return [
        BookingComProvider(latency_seconds=1.0 * latency_scale),
        ExpediaProvider(latency_seconds=1.2 * latency_scale),
        HotelsComProvider(latency_seconds=0.8 * latency_scale),
    ]
