"""
Structured logging for workflow turns.

State transitions go to their own logger, which main.py points at a JSON
handler so every turn's start and end summaries are written as one JSON
object per line. Regular module logs keep the plain text format.
"""

import json
import logging
from datetime import datetime, timezone
from typing import IO, Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from hotel_agents.graph.state import WorkflowState


TRANSITION_LOGGER_NAME = "hotel_agents.transitions"


class StructuredFormatter(logging.Formatter):
    """Render a record as JSON, including the payload set on record.extra."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload = getattr(record, "extra", None)
        if payload is not None:
            entry["extra"] = payload
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    logger_name: str = TRANSITION_LOGGER_NAME,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Send a logger's records through StructuredFormatter.

    The logger stops propagating so its records are not repeated by the
    root handler in plain text.

    Args:
        level: Minimum level for the logger
        log_file: Also append JSON lines to this file
        logger_name: Logger to configure (the transition logger by default)
        stream: Console stream, stderr when not given

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handlers = [logging.StreamHandler(stream)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

    return logger


def summarize_state(state: "WorkflowState") -> Dict[str, Any]:
    """Fields of a workflow state worth logging."""
    return {
        "stage": state.stage.value,
        "needs_clarification": state.needs_clarification,
        "conversation_complete": state.conversation_complete,
        "error_kind": state.error_kind.value if state.error_kind else None,
        "destination": state.request.destination if state.request else None,
        "providers": len(state.search_results),
        "failed_providers": list(state.failed_providers),
        "history_turns": len(state.conversation_history),
    }


def log_state_transition(
    event: str,
    state: "WorkflowState",
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Emit one INFO record describing a workflow state.

    The summary is attached as record.extra for StructuredFormatter.

    Args:
        event: Event name, e.g. "turn_start" or "turn_complete"
        state: State to summarize
        extra: Additional context, such as the session id
        logger: Defaults to the transition logger
    """
    logger = logger or logging.getLogger(TRANSITION_LOGGER_NAME)
    if not logger.isEnabledFor(logging.INFO):
        return

    payload: Dict[str, Any] = {"event": event, "state_summary": summarize_state(state)}
    if extra:
        payload["extra"] = extra

    logger.info(f"State transition: {event}", extra={"extra": payload})
