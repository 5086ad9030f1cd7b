"""
Configuration for the hotel search workflow.

Centralizes the tunables for the graph, the completion client and the
provider fan-out, so behavior can change without touching the wiring.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class WorkflowConfig:
    """
    Configuration for the hotel search workflow.

    Attributes:
        recursion_limit: Maximum number of graph steps per turn
        model: Completion model used for extraction and recommendations
        llm_timeout: Completion request timeout in seconds
        max_retries: Attempts per completion call (tenacity)
        retry_min_wait: Minimum backoff between attempts in seconds
        retry_max_wait: Maximum backoff between attempts in seconds
        provider_timeout: Per-provider search timeout in seconds (None disables it)
        allow_partial_results: Continue with the providers that answered when
            some fail; when False, any provider failure fails the search
    """

    # Graph execution limits
    recursion_limit: int = 10

    # LLM configuration
    model: str = "gpt-4.1-mini"
    llm_timeout: int = 60  # seconds

    # Retry configuration (used by tenacity in shared/llm/client.py)
    max_retries: int = 3
    retry_min_wait: int = 2  # seconds
    retry_max_wait: int = 10  # seconds

    # Provider fan-out
    provider_timeout: Optional[float] = 10.0  # seconds
    allow_partial_results: bool = True


# Default configuration instance
DEFAULT_CONFIG = WorkflowConfig()


def get_config(**overrides) -> WorkflowConfig:
    """
    Create a configuration with optional overrides.

    Every override is applied as given, so provider_timeout=None switches
    the per-provider timeout off.

    Raises:
        TypeError: If an override names an unknown option
    """
    return replace(DEFAULT_CONFIG, **overrides)
