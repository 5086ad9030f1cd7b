"""
Search request contract.

Defines the structured search parameters the intent extractor produces
and the provider aggregator consumes.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SearchRequest(BaseModel):
    """A complete hotel search request for one turn."""

    model_config = ConfigDict(frozen=True)

    destination: str = Field(min_length=1, description="City or location to stay in")
    check_in: date = Field(description="Check-in date")
    check_out: date = Field(description="Check-out date")
    guests: int = Field(default=1, ge=1, description="Number of guests")
    rooms: int = Field(default=1, ge=1, description="Number of rooms")

    @field_validator("destination")
    @classmethod
    def _strip_destination(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("destination must not be blank")
        return value

    @model_validator(mode="after")
    def _check_dates(self) -> "SearchRequest":
        if self.check_out <= self.check_in:
            raise ValueError(
                f"check_out ({self.check_out}) must be after check_in ({self.check_in})"
            )
        return self

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def summary(self) -> str:
        """Human-readable description of what will be searched."""
        return (
            f"Searching for hotels in {self.destination} from "
            f"{self.check_in.isoformat()} to {self.check_out.isoformat()} "
            f"for {self.guests} guest(s) in {self.rooms} room(s)"
        )
