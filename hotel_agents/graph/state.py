"""
Workflow state schema.

WorkflowState is the aggregate root of a turn. It is immutable: every
stage returns a new value via evolve(). The LangGraph channel state just
carries the current WorkflowState plus the session id used in logs.
"""

from enum import Enum
from typing import Any, Optional, Tuple, TypedDict

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hotel_agents.shared.contracts import (
    ConversationTurn,
    ProviderListing,
    ProviderResult,
    SearchRequest,
)
from hotel_agents.shared.errors import ErrorKind


class WorkflowStage(str, Enum):
    START = "start"
    PARSING_INTENT = "parsing_intent"
    NEEDS_CLARIFICATION = "needs_clarification"
    INTENT_FAILED = "intent_failed"
    AWAITING_SEARCH = "awaiting_search"
    SEARCHING = "searching"
    SEARCH_FAILED = "search_failed"
    AWAITING_SELECTION = "awaiting_selection"
    SELECTING = "selecting"
    SELECTION_FAILED = "selection_failed"
    DONE = "done"


TERMINAL_STAGES = frozenset(
    {
        WorkflowStage.NEEDS_CLARIFICATION,
        WorkflowStage.INTENT_FAILED,
        WorkflowStage.SEARCH_FAILED,
        WorkflowStage.SELECTION_FAILED,
        WorkflowStage.DONE,
    }
)


class WorkflowState(BaseModel):
    """
    Everything the caller gets back from one turn.

    Invariants:
        - needs_clarification implies no request (the search never runs)
        - a done state carries no error, and always carries the selection
    """

    model_config = ConfigDict(frozen=True)

    stage: WorkflowStage = WorkflowStage.START
    request: Optional[SearchRequest] = None
    search_results: Tuple[ProviderResult, ...] = ()
    failed_providers: Tuple[str, ...] = ()
    cheapest_option: Optional[ProviderListing] = None
    analysis: str = ""
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    clarification_message: Optional[str] = None
    conversation_history: Tuple[ConversationTurn, ...] = Field(default=())
    needs_clarification: bool = False
    conversation_complete: bool = False

    @model_validator(mode="after")
    def _check_invariants(self) -> "WorkflowState":
        if self.needs_clarification and self.request is not None:
            raise ValueError("a state that needs clarification cannot carry a request")
        if self.stage is WorkflowStage.DONE:
            if self.error is not None:
                raise ValueError("a completed turn cannot carry an error")
            if self.cheapest_option is None:
                raise ValueError("a completed turn must carry the selected listing")
        return self

    def evolve(self, **updates: Any) -> "WorkflowState":
        """Return a validated copy with the given fields replaced."""
        return type(self).model_validate({**dict(self), **updates})

    @property
    def is_terminal(self) -> bool:
        return self.stage in TERMINAL_STAGES

    @property
    def has_results(self) -> bool:
        return self.cheapest_option is not None

    @property
    def latest_user_turn(self) -> Optional[ConversationTurn]:
        for turn in reversed(self.conversation_history):
            if turn.role == "user":
                return turn
        return None


class HotelSearchGraphState(TypedDict):
    """
    Channel state for the LangGraph workflow.

    Nodes replace the whole workflow value rather than merging fields.
    """

    workflow: WorkflowState
    session_id: Optional[str]
