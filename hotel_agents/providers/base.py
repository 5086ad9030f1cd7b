"""Data source interface for hotel providers."""

from abc import ABC, abstractmethod

from hotel_agents.shared.contracts import ProviderResult, SearchRequest


class ProviderError(Exception):
    """Raised when a provider cannot answer a search."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class HotelProvider(ABC):
    """A booking data source that can be searched for room listings."""

    name: str

    @abstractmethod
    async def search(self, request: SearchRequest) -> ProviderResult:
        """
        Search this provider for rooms matching the request.

        Raises:
            ProviderError: If the provider cannot be searched.
        """
