"""
Hotel search workflow entry point.

HotelSearchWorkflow wires the three stages to their collaborators and
runs the graph once per user turn. It never raises to its caller: every
failure comes back encoded in the returned WorkflowState.
"""

import asyncio
import logging
import os
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Any, Callable, Iterable, Optional, Sequence, Tuple

from hotel_agents.graph.build import create_hotel_search_graph
from hotel_agents.graph.config import DEFAULT_CONFIG, WorkflowConfig
from hotel_agents.graph.state import WorkflowState
from hotel_agents.intent.extractor import IntentExtractor
from hotel_agents.providers.aggregator import ProviderAggregator
from hotel_agents.providers.base import HotelProvider
from hotel_agents.providers.mock_data import create_default_providers
from hotel_agents.recommendation.selector import RecommendationSelector
from hotel_agents.shared.contracts import ConversationTurn
from hotel_agents.shared.errors import WORKFLOW_FAILED_MESSAGE, ErrorKind
from hotel_agents.shared.llm.client import CompletionClient, OpenAICompletionClient
from hotel_agents.shared.logging.config import log_state_transition


logger = logging.getLogger(__name__)

WORKFLOW_FAILED_ANALYSIS = "An error occurred while processing your hotel search request."


def _coerce_history(prior_history: Iterable[Any]) -> Tuple[ConversationTurn, ...]:
    """Accept ConversationTurn instances or their dict form."""
    return tuple(ConversationTurn.model_validate(turn) for turn in prior_history)


class HotelSearchWorkflow:
    """
    Runs conversational hotel search turns.

    Conversation history is the only thing that carries over between
    turns, and the caller owns it: pass the previous state's
    conversation_history back in with the next utterance.
    """

    def __init__(
        self,
        client: CompletionClient,
        providers: Optional[Sequence[HotelProvider]] = None,
        config: Optional[WorkflowConfig] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.extractor = IntentExtractor(client, clock=clock)
        self.aggregator = ProviderAggregator(
            providers if providers is not None else create_default_providers(),
            timeout=self.config.provider_timeout,
            allow_partial_results=self.config.allow_partial_results,
        )
        self.selector = RecommendationSelector(client)
        self.graph = create_hotel_search_graph(self.extractor, self.aggregator, self.selector)

    async def arun_turn(
        self,
        user_utterance: str,
        prior_history: Iterable[Any] = (),
        session_id: Optional[str] = None,
    ) -> WorkflowState:
        """
        Run one turn of the conversation.

        Args:
            user_utterance: The user's new message
            prior_history: History returned by the previous turn
            session_id: Identifier used to correlate log lines

        Returns:
            The final WorkflowState for this turn
        """
        session_id = session_id or str(uuid.uuid4())
        _log = f"[session={session_id}] [graph=hotel_search] [api=run_turn] "

        try:
            history = _coerce_history(prior_history) + (
                ConversationTurn.user(user_utterance),
            )
        except Exception as e:
            logger.exception(f"{_log}Invalid conversation history: {e}")
            return WorkflowState(
                analysis=WORKFLOW_FAILED_ANALYSIS,
                error=WORKFLOW_FAILED_MESSAGE,
                error_kind=ErrorKind.STAGE_EXCEPTION,
            )

        initial_state = WorkflowState(conversation_history=history)
        log_state_transition("turn_start", initial_state, extra={"session_id": session_id})
        logger.info(f"{_log}Turn starting | history_turns={len(history)}")

        try:
            result = await self.graph.ainvoke(
                {"workflow": initial_state, "session_id": session_id},
                config={"recursion_limit": self.config.recursion_limit},
            )
            final_state = result["workflow"]
        except Exception as e:
            logger.exception(f"{_log}Workflow execution failed: {e}")
            final_state = initial_state.evolve(
                analysis=WORKFLOW_FAILED_ANALYSIS,
                error=WORKFLOW_FAILED_MESSAGE,
                error_kind=ErrorKind.STAGE_EXCEPTION,
            )

        logger.info(
            f"{_log}Turn finished | stage={final_state.stage.value}, "
            f"needs_clarification={final_state.needs_clarification}, "
            f"complete={final_state.conversation_complete}, error={final_state.error}"
        )
        log_state_transition("turn_complete", final_state, extra={"session_id": session_id})
        return final_state

    def run_turn(
        self,
        user_utterance: str,
        prior_history: Iterable[Any] = (),
        session_id: Optional[str] = None,
    ) -> WorkflowState:
        """
        Synchronous wrapper around arun_turn().

        Inside a running event loop the turn runs on a worker thread with its
        own loop, blocking the caller; async callers should await arun_turn()
        instead.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.arun_turn(user_utterance, prior_history, session_id))

        logger.warning("run_turn called inside a running event loop; using a worker thread")
        with ThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(
                asyncio.run, self.arun_turn(user_utterance, prior_history, session_id)
            )
            return future.result()


def create_default_workflow(config: Optional[WorkflowConfig] = None) -> HotelSearchWorkflow:
    """
    Build a workflow backed by OpenAI and the mock providers.

    Raises:
        ValueError: If OPENAI_API_KEY is not set.
    """
    config = config or DEFAULT_CONFIG
    client = OpenAICompletionClient(
        model=os.environ.get("HOTEL_AGENT_MODEL") or config.model,
        timeout=config.llm_timeout,
        max_retries=config.max_retries,
        retry_min_wait=config.retry_min_wait,
        retry_max_wait=config.retry_max_wait,
    )
    return HotelSearchWorkflow(client, config=config)
