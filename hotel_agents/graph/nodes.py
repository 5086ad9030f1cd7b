"""
Stage nodes for the hotel search graph.

Each stage takes a WorkflowState and returns a new one; exceptions never
leave a stage. The make_*_node factories bind a stage to its collaborator
and adapt it to the graph's channel state.
"""

import logging
from typing import Any, Awaitable, Callable, Dict

from hotel_agents.graph.state import HotelSearchGraphState, WorkflowStage, WorkflowState
from hotel_agents.intent.extractor import IntentExtractor
from hotel_agents.intent.schemas import ExtractionStatus
from hotel_agents.providers.aggregator import ProviderAggregator
from hotel_agents.recommendation.selector import (
    NoListingsError,
    NoResultsError,
    RecommendationSelector,
)
from hotel_agents.shared.errors import (
    INTENT_STAGE_FAILED_MESSAGE,
    SEARCH_STAGE_FAILED_MESSAGE,
    SELECTION_STAGE_FAILED_MESSAGE,
    ErrorKind,
)


logger = logging.getLogger(__name__)


def _log_prefix(session_id: str, node: str) -> str:
    return f"[session={session_id}] [graph=hotel_search] [node={node}] "


def parse_intent(
    workflow: WorkflowState,
    extractor: IntentExtractor,
    session_id: str = "unknown",
) -> WorkflowState:
    """
    Run the intent extractor on the latest user turn.

    Ends in needs_clarification, intent_failed or awaiting_search.
    """
    _log = _log_prefix(session_id, "parse_intent")
    workflow = workflow.evolve(stage=WorkflowStage.PARSING_INTENT)
    history = workflow.conversation_history

    logger.info(f"{_log}Entering node | history_turns={len(history)}")

    try:
        if not history or history[-1].role != "user":
            raise ValueError("conversation must end with a user turn")
        outcome = extractor.extract(history[-1].content, history[:-1])
    except Exception as e:
        logger.exception(f"{_log}Intent extraction failed: {e}")
        return workflow.evolve(
            stage=WorkflowStage.INTENT_FAILED,
            error=INTENT_STAGE_FAILED_MESSAGE,
            error_kind=ErrorKind.STAGE_EXCEPTION,
            analysis="Parse error",
        )

    if outcome.needs_clarification:
        kind = (
            ErrorKind.EXTRACTION_UNPARSABLE
            if outcome.status is ExtractionStatus.UNPARSABLE
            else ErrorKind.CLARIFICATION_NEEDED
        )
        logger.info(
            f"{_log}Clarification needed - pausing for user input | kind={kind.value}"
        )
        return workflow.evolve(
            stage=WorkflowStage.NEEDS_CLARIFICATION,
            request=None,
            needs_clarification=True,
            clarification_message=outcome.clarification_message,
            error_kind=kind,
            analysis=outcome.analysis,
            conversation_history=history + (outcome.assistant_turn,),
        )

    logger.info(f"{_log}Node finished | {outcome.analysis}")
    return workflow.evolve(
        stage=WorkflowStage.AWAITING_SEARCH,
        request=outcome.request,
        analysis=outcome.analysis,
    )


async def search_providers(
    workflow: WorkflowState,
    aggregator: ProviderAggregator,
    session_id: str = "unknown",
) -> WorkflowState:
    """
    Fan the request out to all providers.

    Ends in search_failed or awaiting_selection. History is left as is.
    """
    _log = _log_prefix(session_id, "search_providers")
    workflow = workflow.evolve(stage=WorkflowStage.SEARCHING)

    logger.info(
        f"{_log}Entering node | providers={len(aggregator.providers)}, "
        f"destination={workflow.request.destination if workflow.request else None}"
    )

    try:
        outcome = await aggregator.search(workflow.request)
    except Exception as e:
        logger.exception(f"{_log}Provider search raised: {e}")
        return workflow.evolve(
            stage=WorkflowStage.SEARCH_FAILED,
            error=SEARCH_STAGE_FAILED_MESSAGE,
            error_kind=ErrorKind.STAGE_EXCEPTION,
            analysis="Search error",
        )

    if not outcome.ok:
        logger.warning(f"{_log}Search failed | kind={outcome.error_kind.value}")
        return workflow.evolve(
            stage=WorkflowStage.SEARCH_FAILED,
            failed_providers=tuple(outcome.failed_providers),
            error=outcome.error,
            error_kind=outcome.error_kind,
            analysis=outcome.analysis,
        )

    logger.info(f"{_log}Node finished | {outcome.analysis}")
    return workflow.evolve(
        stage=WorkflowStage.AWAITING_SELECTION,
        search_results=tuple(outcome.results),
        failed_providers=tuple(outcome.failed_providers),
        analysis=outcome.analysis,
    )


def select_recommendation(
    workflow: WorkflowState,
    selector: RecommendationSelector,
    session_id: str = "unknown",
) -> WorkflowState:
    """
    Pick the cheapest listing and generate the recommendation.

    Ends in selection_failed or done.
    """
    _log = _log_prefix(session_id, "select_recommendation")
    workflow = workflow.evolve(stage=WorkflowStage.SELECTING)

    logger.info(f"{_log}Entering node | providers={len(workflow.search_results)}")

    try:
        cheapest, analysis = selector.recommend(workflow.search_results)
    except NoResultsError as e:
        logger.warning(f"{_log}Nothing to analyze: {e}")
        return workflow.evolve(
            stage=WorkflowStage.SELECTION_FAILED,
            error=str(e),
            error_kind=ErrorKind.NO_RESULTS,
            analysis="Analysis failed - no results",
        )
    except NoListingsError as e:
        logger.warning(f"{_log}No listings: {e}")
        return workflow.evolve(
            stage=WorkflowStage.SELECTION_FAILED,
            error=str(e),
            error_kind=ErrorKind.NO_LISTINGS,
            analysis="No available rooms found",
        )
    except Exception as e:
        logger.exception(f"{_log}Recommendation failed: {e}")
        return workflow.evolve(
            stage=WorkflowStage.SELECTION_FAILED,
            error=SELECTION_STAGE_FAILED_MESSAGE,
            error_kind=ErrorKind.STAGE_EXCEPTION,
            analysis="Analysis error",
        )

    logger.info(
        f"{_log}Node finished | cheapest={cheapest.hotel_name} "
        f"({cheapest.price} {cheapest.currency}) -> END"
    )
    return workflow.evolve(
        stage=WorkflowStage.DONE,
        cheapest_option=cheapest,
        analysis=analysis,
        conversation_complete=True,
    )


NodeFn = Callable[[HotelSearchGraphState], Dict[str, Any]]


def make_parse_intent_node(extractor: IntentExtractor) -> NodeFn:
    def parse_intent_node(state: HotelSearchGraphState) -> Dict[str, Any]:
        session_id = state.get("session_id") or "unknown"
        return {"workflow": parse_intent(state["workflow"], extractor, session_id)}

    return parse_intent_node


def make_search_providers_node(
    aggregator: ProviderAggregator,
) -> Callable[[HotelSearchGraphState], Awaitable[Dict[str, Any]]]:
    async def search_providers_node(state: HotelSearchGraphState) -> Dict[str, Any]:
        session_id = state.get("session_id") or "unknown"
        workflow = await search_providers(state["workflow"], aggregator, session_id)
        return {"workflow": workflow}

    return search_providers_node


def make_select_recommendation_node(selector: RecommendationSelector) -> NodeFn:
    def select_recommendation_node(state: HotelSearchGraphState) -> Dict[str, Any]:
        session_id = state.get("session_id") or "unknown"
        return {
            "workflow": select_recommendation(state["workflow"], selector, session_id)
        }

    return select_recommendation_node
