"""
Routing logic for the hotel search graph.

Each router looks at the stage the previous node ended in and either
continues to the next stage or ends the turn.
"""

import logging
from typing import Literal

from hotel_agents.graph.state import HotelSearchGraphState, WorkflowStage


logger = logging.getLogger(__name__)


def route_after_intent(
    state: HotelSearchGraphState,
) -> Literal["search_providers", "end"]:
    """
    Continue to the provider search only when a complete request exists.

    Clarification and intent failures end the turn; the next user turn
    starts again from intent parsing with the accumulated history.
    """
    session_id = state.get("session_id") or "unknown"
    workflow = state["workflow"]
    _log = f"[session={session_id}] [graph=hotel_search] [router=route_after_intent] "

    if workflow.stage is WorkflowStage.AWAITING_SEARCH and workflow.request is not None:
        logger.info(f"{_log}Routing to 'search_providers' | destination={workflow.request.destination}")
        return "search_providers"

    logger.info(
        f"{_log}Routing to END | stage={workflow.stage.value}, "
        f"needs_clarification={workflow.needs_clarification}"
    )
    return "end"


def route_after_search(
    state: HotelSearchGraphState,
) -> Literal["select_recommendation", "end"]:
    """Continue to selection only when the search produced results."""
    session_id = state.get("session_id") or "unknown"
    workflow = state["workflow"]
    _log = f"[session={session_id}] [graph=hotel_search] [router=route_after_search] "

    if workflow.stage is WorkflowStage.AWAITING_SELECTION:
        logger.info(
            f"{_log}Routing to 'select_recommendation' | providers={len(workflow.search_results)}"
        )
        return "select_recommendation"

    logger.info(f"{_log}Routing to END | stage={workflow.stage.value}, error={workflow.error}")
    return "end"
