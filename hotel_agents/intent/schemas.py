"""
Schemas for the intent extractor.

Defines the payload the completion model is asked to return and the
outcome the extractor hands to the workflow.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from hotel_agents.shared.contracts import ConversationTurn, SearchRequest


# Fixed prompt used when the model's answer could not be understood
FALLBACK_CLARIFICATION_MESSAGE = (
    "Could not parse your hotel search request. "
    "Please provide destination, dates, and number of guests."
)

# Used when the model asks for clarification without saying what it needs
DEFAULT_CLARIFICATION_MESSAGE = (
    "Which city would you like to stay in, and for which dates?"
)


class ExtractionStatus(str, Enum):
    PARSED = "parsed"
    CLARIFICATION_NEEDED = "clarification_needed"
    UNPARSABLE = "unparsable"


class IntentPayload(BaseModel):
    """
    The JSON object the model returns for an utterance.

    Every search field is optional here; defaults are applied when the
    payload is turned into a SearchRequest. camelCase keys are accepted
    because models sometimes drift back to them.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    destination: Optional[str] = None
    check_in: Optional[date] = Field(
        default=None, validation_alias=AliasChoices("check_in", "checkIn")
    )
    check_out: Optional[date] = Field(
        default=None, validation_alias=AliasChoices("check_out", "checkOut")
    )
    guests: Optional[int] = None
    rooms: Optional[int] = None
    needs_clarification: bool = Field(
        default=False,
        validation_alias=AliasChoices("needs_clarification", "needsClarification"),
    )
    clarification_message: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("clarification_message", "clarificationMessage"),
    )

    @field_validator(
        "destination", "check_in", "check_out", "guests", "rooms",
        "clarification_message",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("needs_clarification", mode="before")
    @classmethod
    def _null_flag_is_false(cls, value):
        return False if value is None else value


class ExtractionOutcome(BaseModel):
    """Result of one extraction: a request, or a reason to ask the user."""

    model_config = ConfigDict(frozen=True)

    status: ExtractionStatus
    request: Optional[SearchRequest] = None
    clarification_message: Optional[str] = None
    assistant_turn: Optional[ConversationTurn] = None
    analysis: str = ""

    @property
    def needs_clarification(self) -> bool:
        return self.status is not ExtractionStatus.PARSED

    @classmethod
    def parsed(cls, request: SearchRequest) -> "ExtractionOutcome":
        return cls(
            status=ExtractionStatus.PARSED,
            request=request,
            analysis=request.summary(),
        )

    @classmethod
    def clarification(cls, message: str) -> "ExtractionOutcome":
        return cls(
            status=ExtractionStatus.CLARIFICATION_NEEDED,
            clarification_message=message,
            assistant_turn=ConversationTurn.assistant(message),
            analysis="Query needs clarification",
        )

    @classmethod
    def unparsable(cls) -> "ExtractionOutcome":
        return cls(
            status=ExtractionStatus.UNPARSABLE,
            clarification_message=FALLBACK_CLARIFICATION_MESSAGE,
            assistant_turn=ConversationTurn.assistant(FALLBACK_CLARIFICATION_MESSAGE),
            analysis="Failed to parse query",
        )
