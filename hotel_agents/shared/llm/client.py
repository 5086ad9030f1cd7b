"""
Text-completion client with retry logic.

Defines the CompletionClient protocol the workflow stages depend on and an
OpenAI-backed implementation that wraps chat completion calls with
automatic retries using tenacity.
"""

import logging
import os
from typing import Dict, List, Optional, Protocol

from dotenv import load_dotenv
from openai import OpenAI
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4.1-mini"


class CompletionClient(Protocol):
    """Anything that turns a system prompt and a user message into text."""

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        ...


def create_openai_client(
    api_key: Optional[str] = None,
    timeout: float = 60,
) -> OpenAI:
    """
    Create an OpenAI client.

    Falls back to the OPENAI_API_KEY environment variable when no key is
    passed in.

    Raises:
        ValueError: If no API key is available.
    """
    api_key = api_key or os.environ.get("OPENAI_API_KEY")
    if not api_key:
        raise ValueError(
            "OPENAI_API_KEY environment variable is not set. "
            "Please set it to your OpenAI API key."
        )
    return OpenAI(api_key=api_key, timeout=timeout)


def call_llm(
    client: OpenAI,
    messages: List[Dict[str, str]],
    model: str = DEFAULT_MODEL,
    temperature: float = 0.1,
) -> str:
    """
    Call the OpenAI Chat Completion API once.

    Args:
        client: OpenAI client instance
        messages: List of message dicts with 'role' and 'content' keys
        model: Model identifier to use
        temperature: Sampling temperature

    Returns:
        The assistant's response content as a string.
    """
    response = client.chat.completions.create(
        model=model,
        messages=messages,
        temperature=temperature,
    )

    usage = response.usage
    if usage is not None:
        logger.debug(
            f"LLM usage | model={model}, tokens_in={usage.prompt_tokens}, "
            f"tokens_out={usage.completion_tokens}"
        )

    content = response.choices[0].message.content or ""
    return content.strip()


class OpenAICompletionClient:
    """
    CompletionClient backed by the OpenAI Chat Completion API.

    Each call is retried with exponential backoff before the last error is
    re-raised to the caller.
    """

    def __init__(
        self,
        client: Optional[OpenAI] = None,
        model: Optional[str] = None,
        timeout: float = 60,
        max_retries: int = 3,
        retry_min_wait: float = 2,
        retry_max_wait: float = 10,
    ):
        self.client = client or create_openai_client(timeout=timeout)
        self.model = model or DEFAULT_MODEL
        self._call = retry(
            stop=stop_after_attempt(max_retries),
            wait=wait_exponential(multiplier=1, min=retry_min_wait, max=retry_max_wait),
            retry=retry_if_exception_type((Exception,)),
            reraise=True,
        )(call_llm)

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        return self._call(self.client, messages, model=self.model)
