"""
Test doubles for the completion client and hotel providers.

Nothing here touches the network.
"""

import asyncio
import json
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from hotel_agents.providers.base import HotelProvider, ProviderError
from hotel_agents.shared.contracts import (
    ProviderListing,
    ProviderResult,
    SearchRequest,
)


TODAY = date(2025, 6, 1)


def fixed_clock() -> date:
    return TODAY


class FakeCompletionClient:
    """
    Completion client that replays scripted responses in order.

    A scripted Exception is raised instead of returned. Once the script runs
    out, `default` is returned (or AssertionError raised when it is None).
    """

    def __init__(
        self,
        responses: Sequence[Union[str, Exception]] = (),
        default: Optional[str] = None,
    ):
        self._responses = list(responses)
        self.default = default
        self.calls: List[Tuple[str, str]] = []

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self._responses:
            response = self._responses.pop(0)
        elif self.default is not None:
            response = self.default
        else:
            raise AssertionError("FakeCompletionClient ran out of scripted responses")
        if isinstance(response, Exception):
            raise response
        return response


def intent_json(**fields: Any) -> str:
    """A model answer for the intent extractor."""
    payload: Dict[str, Any] = {
        "destination": None,
        "check_in": None,
        "check_out": None,
        "guests": None,
        "rooms": None,
        "needs_clarification": False,
        "clarification_message": None,
    }
    payload.update(fields)
    return json.dumps(payload)


def _make_request(destination: str = "Paris") -> SearchRequest:
    return SearchRequest(
        destination=destination,
        check_in=date(2025, 6, 2),
        check_out=date(2025, 6, 3),
    )


def _make_listing(
    listing_id: str,
    price: float,
    provider: str = "TestProvider",
    hotel_name: Optional[str] = None,
) -> ProviderListing:
    return ProviderListing(
        id=listing_id,
        hotel_name=hotel_name or f"Hotel {listing_id}",
        room_type="Standard Room",
        price=price,
        provider=provider,
        rating=4.0,
        location="Paris",
    )


def _make_result(
    provider: str,
    prices: Sequence[float],
    request: Optional[SearchRequest] = None,
) -> ProviderResult:
    rooms = [
        _make_listing(f"{provider.lower()}-{i}", price, provider=provider)
        for i, price in enumerate(prices, 1)
    ]
    return ProviderResult.from_listings(provider, rooms, request or _make_request())


class StaticProvider(HotelProvider):
    """Returns the given prices and counts how often it was searched."""

    def __init__(self, name: str, prices: Sequence[float] = (100,)):
        self.name = name
        self.prices = list(prices)
        self.calls = 0

    async def search(self, request: SearchRequest) -> ProviderResult:
        self.calls += 1
        return _make_result(self.name, self.prices, request)


class FailingProvider(HotelProvider):
    def __init__(self, name: str):
        self.name = name
        self.calls = 0

    async def search(self, request: SearchRequest) -> ProviderResult:
        self.calls += 1
        raise ProviderError(self.name, "service unavailable")


class SlowProvider(HotelProvider):
    def __init__(self, name: str, delay: float = 5.0):
        self.name = name
        self.delay = delay

    async def search(self, request: SearchRequest) -> ProviderResult:
        await asyncio.sleep(self.delay)
        return _make_result(self.name, [50], request)
