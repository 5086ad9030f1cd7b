"""
Shared infrastructure for the workflow stages.

Modules:
- llm: Completion client protocol and OpenAI client with retry logic
- logging: Structured JSON logging
- contracts: Data contracts passed between stages
"""

from hotel_agents.shared.llm.client import CompletionClient, OpenAICompletionClient
from hotel_agents.shared.logging.config import setup_logging, log_state_transition

__all__ = [
    "CompletionClient",
    "OpenAICompletionClient",
    "setup_logging",
    "log_state_transition",
]
