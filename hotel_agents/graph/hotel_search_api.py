"""
FastAPI endpoints for the hotel search workflow.

Provides one-shot and streaming endpoints that run a single conversation
turn. The caller keeps the conversation history and sends it back with
every new message.
"""

import json
import logging
import uuid
from typing import AsyncIterator, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from hotel_agents.graph.state import WorkflowState
from hotel_agents.graph.workflow import HotelSearchWorkflow, create_default_workflow
from hotel_agents.shared.contracts import ConversationTurn


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/hotel-search", tags=["hotel-search"])

# Newlines inside an SSE data line would end the event early
NEWLINE = "$NEWLINE$"
TOKEN_CHUNK_SIZE = 48

# Workflow instance (shared across requests)
_workflow: Optional[HotelSearchWorkflow] = None


def get_workflow() -> HotelSearchWorkflow:
    """Get or create the shared workflow instance."""
    global _workflow
    if _workflow is None:
        try:
            _workflow = create_default_workflow()
        except ValueError as e:
            logger.error(f"Workflow unavailable: {e}")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Hotel search is not configured",
            )
    return _workflow


# ============================================================================
# Request/Response Models
# ============================================================================


class TurnRequest(BaseModel):
    """One user message plus the history returned by the previous turn."""

    query: str = Field(min_length=1, description="The user's new message")
    conversation_history: List[ConversationTurn] = Field(
        default_factory=list, description="History from the previous turn"
    )
    session_id: Optional[str] = Field(
        default=None, description="Session identifier for log correlation"
    )


class TurnResponse(BaseModel):
    """Result of one conversation turn."""

    session_id: str = Field(description="Session identifier")
    state: WorkflowState = Field(description="Final workflow state for the turn")


# ============================================================================
# Streaming helpers
# ============================================================================


def format_sse(event: str, data: str) -> str:
    return f"event: {event}\ndata: {data}\n\n"


def response_text(state: WorkflowState) -> str:
    """The text the assistant shows for a finished turn."""
    if state.needs_clarification and state.clarification_message:
        return state.clarification_message
    if state.error:
        return state.error
    return state.analysis


def chunk_text(text: str, size: int = TOKEN_CHUNK_SIZE) -> List[str]:
    return [text[i : i + size] for i in range(0, len(text), size)]


async def stream_turn_events(
    workflow: HotelSearchWorkflow,
    request: TurnRequest,
    session_id: str,
) -> AsyncIterator[str]:
    """
    Run a turn and yield it as server-sent events.

    Event order: conversation, state, token (zero or more), finished.
    """
    state = await workflow.arun_turn(
        request.query, request.conversation_history, session_id=session_id
    )

    history = [turn.model_dump(mode="json") for turn in state.conversation_history]
    yield format_sse("conversation", json.dumps(history))

    flags = {
        "needs_clarification": state.needs_clarification,
        "conversation_complete": state.conversation_complete,
        "has_results": state.has_results,
        "stage": state.stage.value,
    }
    yield format_sse("state", json.dumps(flags))

    for chunk in chunk_text(response_text(state)):
        yield format_sse("token", chunk.replace("\n", NEWLINE))

    yield format_sse("finished", "true")


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/turn", response_model=TurnResponse)
async def run_turn(
    request: TurnRequest,
    workflow: HotelSearchWorkflow = Depends(get_workflow),
) -> TurnResponse:
    """
    Run one conversation turn and return the final state.

    Failures inside the workflow are reported in the state, not as HTTP
    errors.
    """
    session_id = request.session_id or str(uuid.uuid4())
    _log = f"[session={session_id}] [graph=hotel_search] [api=turn] "

    logger.info(
        f"{_log}Turn requested | history_turns={len(request.conversation_history)}"
    )
    state = await workflow.arun_turn(
        request.query, request.conversation_history, session_id=session_id
    )
    logger.info(f"{_log}Turn returned | stage={state.stage.value}")

    return TurnResponse(session_id=session_id, state=state)


@router.post("/stream")
async def stream_turn(
    request: TurnRequest,
    workflow: HotelSearchWorkflow = Depends(get_workflow),
) -> StreamingResponse:
    """Run one conversation turn and stream it as server-sent events."""
    session_id = request.session_id or str(uuid.uuid4())
    logger.info(
        f"[session={session_id}] [graph=hotel_search] [api=stream] Stream requested | "
        f"history_turns={len(request.conversation_history)}"
    )
    return StreamingResponse(
        stream_turn_events(workflow, request, session_id),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache, no-transform"},
    )


@router.get("/health")
async def health_check():
    """Health check endpoint for the hotel search workflow."""
    return {"status": "healthy", "agent": "hotel_search"}
