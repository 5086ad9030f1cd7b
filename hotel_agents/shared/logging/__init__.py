"""Logging configuration and utilities."""

from hotel_agents.shared.logging.config import (
    setup_logging,
    log_state_transition,
    summarize_state,
    StructuredFormatter,
)

__all__ = [
    "setup_logging",
    "log_state_transition",
    "summarize_state",
    "StructuredFormatter",
]
