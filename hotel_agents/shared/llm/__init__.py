"""LLM client utilities."""

from hotel_agents.shared.llm.client import (
    CompletionClient,
    OpenAICompletionClient,
    call_llm,
    create_openai_client,
)

__all__ = [
    "CompletionClient",
    "OpenAICompletionClient",
    "call_llm",
    "create_openai_client",
]
