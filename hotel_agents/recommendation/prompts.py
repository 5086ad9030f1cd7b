"""Prompt templates for the recommendation selector."""

from typing import Sequence

from hotel_agents.shared.contracts import ProviderListing


RECOMMENDATION_SYSTEM_PROMPT = """You are a hotel recommendation expert. Analyze the hotel search results and provide a recommendation focusing on the cheapest option.

Include:
1. Summary of the cheapest option with key details
2. Brief comparison with other options
3. Value proposition and what makes this a good choice
4. Any important considerations for the traveler

Be concise but informative."""

RECOMMENDATION_USER_TEMPLATE = """Here are the hotel search results:

Cheapest Option:
- Hotel: {hotel_name}
- Room: {room_type}
- Price: {price} {currency} per night
- Provider: {provider}
- Rating: {rating}/5
- Location: {location}
- Amenities: {amenities}
- Description: {description}

All Available Options:
{alternatives}

Provide your analysis and recommendation."""


def format_price(price: float) -> str:
    return f"{price:g}"


def format_listing_line(listing: ProviderListing) -> str:
    return (
        f"- {listing.hotel_name} ({listing.room_type}): "
        f"{format_price(listing.price)} {listing.currency}/night - "
        f"{listing.provider} - {listing.rating}/5"
    )


def build_recommendation_user_prompt(
    cheapest: ProviderListing,
    all_listings: Sequence[ProviderListing],
) -> str:
    return RECOMMENDATION_USER_TEMPLATE.format(
        hotel_name=cheapest.hotel_name,
        room_type=cheapest.room_type,
        price=format_price(cheapest.price),
        currency=cheapest.currency,
        provider=cheapest.provider,
        rating=cheapest.rating,
        location=cheapest.location,
        amenities=", ".join(cheapest.amenities) or "None listed",
        description=cheapest.description or "No description",
        alternatives="\n".join(format_listing_line(listing) for listing in all_listings),
    )
