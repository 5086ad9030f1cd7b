"""Conversation turn contract."""

from datetime import datetime, timezone
from typing import Literal, Sequence

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationTurn(BaseModel):
    """One message in the conversation transcript."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"] = Field(description="Who said it")
    content: str = Field(description="Message text")
    timestamp: datetime = Field(default_factory=_utcnow)

    @classmethod
    def user(cls, content: str) -> "ConversationTurn":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> "ConversationTurn":
        return cls(role="assistant", content=content)


def format_history(history: Sequence[ConversationTurn]) -> str:
    """Serialize turns as 'role: content' lines for prompting."""
    return "\n".join(f"{turn.role}: {turn.content}" for turn in history)
