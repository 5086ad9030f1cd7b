"""
Hotel data providers and the concurrent aggregator.

Providers are currently mocks with fixed listings and simulated latency;
real booking APIs can be added by implementing HotelProvider.
"""

from hotel_agents.providers.aggregator import AggregationOutcome, ProviderAggregator
from hotel_agents.providers.base import HotelProvider, ProviderError
from hotel_agents.providers.mock_data import MockHotelProvider, create_default_providers

__all__ = [
    "AggregationOutcome",
    "ProviderAggregator",
    "HotelProvider",
    "ProviderError",
    "MockHotelProvider",
    "create_default_providers",
]
