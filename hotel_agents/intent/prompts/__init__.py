"""Prompt templates and builders for the intent extractor."""

from hotel_agents.intent.prompts.builders import (
    build_intent_system_prompt,
    build_intent_user_prompt,
)
from hotel_agents.intent.prompts.templates import INTENT_SYSTEM_PROMPT_TEMPLATE

__all__ = [
    "build_intent_system_prompt",
    "build_intent_user_prompt",
    "INTENT_SYSTEM_PROMPT_TEMPLATE",
]
