"""
Intent extractor.

Turns the latest user utterance, plus the conversation so far, into a
SearchRequest or a request for clarification.
"""

import logging
from datetime import date, timedelta
from typing import Callable, Optional, Sequence

from pydantic import ValidationError

from hotel_agents.intent.prompts.builders import (
    build_intent_system_prompt,
    build_intent_user_prompt,
)
from hotel_agents.intent.response_parser import ParseError, parse_intent_response
from hotel_agents.intent.schemas import (
    DEFAULT_CLARIFICATION_MESSAGE,
    ExtractionOutcome,
    IntentPayload,
)
from hotel_agents.shared.contracts import ConversationTurn, SearchRequest
from hotel_agents.shared.llm.client import CompletionClient


logger = logging.getLogger(__name__)


def build_search_request(payload: IntentPayload, today: date) -> SearchRequest:
    """
    Apply defaults to a parsed payload and build the SearchRequest.

    Missing check-in is tomorrow, missing check-out is the day after
    check-in, and missing or non-positive guest/room counts are 1.

    Raises:
        ValidationError: If the resulting request is invalid
            (e.g., check-out not after check-in).
    """
    check_in = payload.check_in or today + timedelta(days=1)
    check_out = payload.check_out or check_in + timedelta(days=1)
    guests = payload.guests if payload.guests and payload.guests > 0 else 1
    rooms = payload.rooms if payload.rooms and payload.rooms > 0 else 1

    return SearchRequest(
        destination=payload.destination or "",
        check_in=check_in,
        check_out=check_out,
        guests=guests,
        rooms=rooms,
    )


class IntentExtractor:
    """
    Extracts structured search intent with a completion client.

    Completion client errors are not caught here; the workflow converts
    them at the stage boundary.
    """

    def __init__(
        self,
        client: CompletionClient,
        clock: Optional[Callable[[], date]] = None,
    ):
        self._client = client
        self._clock = clock or date.today

    def extract(
        self,
        latest_utterance: str,
        conversation_history: Sequence[ConversationTurn] = (),
    ) -> ExtractionOutcome:
        """
        Extract a search request from the latest utterance.

        Args:
            latest_utterance: The newest user message
            conversation_history: Prior turns, excluding the latest utterance

        Returns:
            ExtractionOutcome that is parsed, clarification_needed or unparsable
        """
        today = self._clock()
        system_prompt = build_intent_system_prompt(conversation_history, today)
        user_prompt = build_intent_user_prompt(latest_utterance)

        logger.info(
            f"Extracting intent | history_turns={len(conversation_history)}, "
            f"today={today.isoformat()}"
        )
        raw_response = self._client.complete(system_prompt, user_prompt)
        logger.debug(f"Intent response: {raw_response}")

        try:
            payload = parse_intent_response(raw_response)
        except ParseError as e:
            logger.warning(f"Intent response unparsable: {e}")
            return ExtractionOutcome.unparsable()

        if payload.needs_clarification or not payload.destination:
            message = payload.clarification_message or DEFAULT_CLARIFICATION_MESSAGE
            logger.info(
                f"Clarification needed | model_flag={payload.needs_clarification}, "
                f"has_destination={payload.destination is not None}"
            )
            return ExtractionOutcome.clarification(message)

        try:
            request = build_search_request(payload, today)
        except ValidationError as e:
            logger.warning(f"Extracted parameters invalid: {e}")
            return ExtractionOutcome.unparsable()

        logger.info(
            f"Intent extracted | destination={request.destination}, "
            f"check_in={request.check_in}, check_out={request.check_out}, "
            f"guests={request.guests}, rooms={request.rooms}"
        )
        return ExtractionOutcome.parsed(request)
