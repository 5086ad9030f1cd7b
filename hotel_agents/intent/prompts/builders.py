"""
Prompt builders for the intent extractor.

These functions construct the prompts sent to the completion model
from the latest utterance and the prior conversation.
"""

from datetime import date
from typing import Sequence

from hotel_agents.intent.prompts.templates import (
    CONTEXT_TEMPLATE,
    FOLLOW_UP_INSTRUCTIONS,
    FOLLOW_UP_TASK,
    INTENT_SYSTEM_PROMPT_TEMPLATE,
    NEW_QUERY_INSTRUCTIONS,
    NEW_QUERY_TASK,
)
from hotel_agents.shared.contracts import ConversationTurn, format_history


def build_intent_system_prompt(
    conversation_history: Sequence[ConversationTurn],
    today: date,
) -> str:
    """
    Build the system prompt for intent extraction.

    Args:
        conversation_history: Prior turns, excluding the latest utterance
        today: Date relative dates are resolved against

    Returns:
        Complete system prompt including the output schema
    """
    has_context = len(conversation_history) > 0

    context = ""
    if has_context:
        context = CONTEXT_TEMPLATE.format(history=format_history(conversation_history))

    return INTENT_SYSTEM_PROMPT_TEMPLATE.format(
        task=FOLLOW_UP_TASK if has_context else NEW_QUERY_TASK,
        today=today.isoformat(),
        context=context,
        instructions=FOLLOW_UP_INSTRUCTIONS if has_context else NEW_QUERY_INSTRUCTIONS,
    )


def build_intent_user_prompt(latest_utterance: str) -> str:
    return latest_utterance.strip()
