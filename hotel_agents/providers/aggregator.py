"""
Provider aggregator.

Fans a search request out to every configured provider concurrently and
merges the per-provider results once all of them have finished.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from hotel_agents.providers.base import HotelProvider, ProviderError
from hotel_agents.shared.contracts import ProviderResult, SearchRequest
from hotel_agents.shared.errors import (
    AGGREGATION_FAILED_MESSAGE,
    MISSING_QUERY_MESSAGE,
    ErrorKind,
)


logger = logging.getLogger(__name__)


class AggregationOutcome(BaseModel):
    """Merged provider results, or the reason the search failed."""

    model_config = ConfigDict(frozen=True)

    results: List[ProviderResult] = Field(default_factory=list)
    failed_providers: List[str] = Field(default_factory=list)
    error_kind: Optional[ErrorKind] = None
    error: Optional[str] = None
    analysis: str = ""

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @property
    def total_listings(self) -> int:
        return sum(result.total_results for result in self.results)


class ProviderAggregator:
    """
    Searches all providers at once and merges what comes back.

    With allow_partial_results (the default) a provider that fails or times
    out is logged and skipped; the search only fails when every provider
    fails. With allow_partial_results=False any single failure fails the
    whole search.
    """

    def __init__(
        self,
        providers: Sequence[HotelProvider],
        timeout: Optional[float] = 10.0,
        allow_partial_results: bool = True,
    ):
        if not providers:
            raise ValueError("ProviderAggregator needs at least one provider")
        self.providers = list(providers)
        self.timeout = timeout
        self.allow_partial_results = allow_partial_results

    async def _search_one(
        self, provider: HotelProvider, request: SearchRequest
    ) -> ProviderResult:
        result = await asyncio.wait_for(provider.search(request), timeout=self.timeout)
        if not isinstance(result, ProviderResult):
            raise ProviderError(provider.name, f"unexpected result type {type(result).__name__}")
        return result

    async def search(self, request: Optional[SearchRequest]) -> AggregationOutcome:
        """
        Search every provider with the same request.

        Args:
            request: The search request; None or a blank destination is
                reported as a missing query without contacting providers

        Returns:
            AggregationOutcome with results in provider order, or an error
        """
        if request is None or not request.destination.strip():
            logger.warning("Search skipped | reason=missing_query")
            return AggregationOutcome(
                error_kind=ErrorKind.MISSING_QUERY,
                error=MISSING_QUERY_MESSAGE,
                analysis="Search failed - missing query",
            )

        logger.info(
            f"Searching providers | providers={[p.name for p in self.providers]}, "
            f"destination={request.destination}, timeout={self.timeout}s, "
            f"partial_results={self.allow_partial_results}"
        )

        outcomes = await asyncio.gather(
            *(self._search_one(provider, request) for provider in self.providers),
            return_exceptions=True,
        )

        results: List[ProviderResult] = []
        failed: List[str] = []
        for provider, outcome in zip(self.providers, outcomes):
            if isinstance(outcome, BaseException):
                reason = "timed out" if isinstance(outcome, asyncio.TimeoutError) else repr(outcome)
                logger.warning(f"Provider search failed | provider={provider.name}, error={reason}")
                failed.append(provider.name)
            else:
                results.append(outcome)

        if not results or (failed and not self.allow_partial_results):
            logger.error(
                f"Provider aggregation failed | failed={failed}, "
                f"succeeded={[r.provider for r in results]}"
            )
            return AggregationOutcome(
                failed_providers=failed,
                error_kind=ErrorKind.AGGREGATION_FAILED,
                error=AGGREGATION_FAILED_MESSAGE,
                analysis="Hotel search failed",
            )

        total = sum(result.total_results for result in results)
        logger.info(
            f"Provider aggregation complete | providers={len(results)}, "
            f"listings={total}, failed={failed}"
        )
        return AggregationOutcome(
            results=results,
            failed_providers=failed,
            analysis=f"Found {total} hotels across {len(results)} providers",
        )
