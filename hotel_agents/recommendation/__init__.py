"""Cheapest-listing selection and recommendation prose."""

from hotel_agents.recommendation.selector import (
    NoListingsError,
    NoResultsError,
    RecommendationSelector,
    flatten_listings,
    select_cheapest,
)

__all__ = [
    "NoListingsError",
    "NoResultsError",
    "RecommendationSelector",
    "flatten_listings",
    "select_cheapest",
]
