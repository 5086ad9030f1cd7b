"""
Recommendation selector.

Reduces merged provider results to the single cheapest listing and asks
the completion client to explain the choice.
"""

import logging
from typing import List, Sequence, Tuple

from hotel_agents.recommendation.prompts import (
    RECOMMENDATION_SYSTEM_PROMPT,
    build_recommendation_user_prompt,
)
from hotel_agents.shared.contracts import ProviderListing, ProviderResult
from hotel_agents.shared.errors import NO_LISTINGS_MESSAGE, NO_RESULTS_MESSAGE
from hotel_agents.shared.llm.client import CompletionClient


logger = logging.getLogger(__name__)


class NoResultsError(Exception):
    """Raised when there are no provider results to analyze."""

    def __init__(self, message: str = NO_RESULTS_MESSAGE):
        super().__init__(message)


class NoListingsError(Exception):
    """Raised when provider results contain no listings at all."""

    def __init__(self, message: str = NO_LISTINGS_MESSAGE):
        super().__init__(message)


def flatten_listings(results: Sequence[ProviderResult]) -> List[ProviderListing]:
    """All listings from all results, in provider order then listing order."""
    return [room for result in results for room in result.rooms]


def select_cheapest(results: Sequence[ProviderResult]) -> ProviderListing:
    """
    Pick the lowest-priced listing across all results.

    Ties go to the listing seen first in flattened order.

    Raises:
        NoResultsError: If results is empty
        NoListingsError: If no result contains a listing
    """
    if not results:
        raise NoResultsError()

    listings = flatten_listings(results)
    if not listings:
        raise NoListingsError()

    cheapest = listings[0]
    for listing in listings[1:]:
        if listing.price < cheapest.price:
            cheapest = listing
    return cheapest


class RecommendationSelector:
    """Selects the cheapest listing and generates a prose recommendation."""

    def __init__(self, client: CompletionClient):
        self._client = client

    def recommend(
        self, results: Sequence[ProviderResult]
    ) -> Tuple[ProviderListing, str]:
        """
        Select the cheapest listing and explain it.

        Returns:
            Tuple of (cheapest listing, recommendation text from the model)

        Raises:
            NoResultsError, NoListingsError: If there is nothing to select
        """
        cheapest = select_cheapest(results)
        listings = flatten_listings(results)

        logger.info(
            f"Cheapest selected | id={cheapest.id}, hotel={cheapest.hotel_name}, "
            f"price={cheapest.price} {cheapest.currency}, provider={cheapest.provider}, "
            f"candidates={len(listings)}"
        )

        user_prompt = build_recommendation_user_prompt(cheapest, listings)
        analysis = self._client.complete(RECOMMENDATION_SYSTEM_PROMPT, user_prompt)
        return cheapest, analysis
