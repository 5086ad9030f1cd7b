"""
Response parser for the intent extractor.

Handles parsing of completion responses, including JSON extraction from
various formats (raw JSON, markdown code blocks, surrounding prose).
"""

import json
import logging
import re

from pydantic import ValidationError

from hotel_agents.intent.schemas import IntentPayload


logger = logging.getLogger(__name__)

_CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


class ParseError(Exception):
    """Raised when response parsing fails."""

    pass


def extract_json_from_response(raw_response: str) -> str:
    """
    Extract JSON content from a completion response.

    Handles multiple formats:
    - Raw JSON
    - JSON in markdown code blocks (```json ... ```)
    - JSON with leading/trailing whitespace or prose

    Args:
        raw_response: Raw response string

    Returns:
        Cleaned JSON string ready for parsing
    """
    content = raw_response.strip()

    match = _CODE_BLOCK_PATTERN.search(content)
    if match:
        content = match.group(1).strip()

    start = content.find("{")
    if start == -1:
        return content

    # Find the matching closing brace, ignoring braces inside strings
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(content)):
        char = content[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return content[start : i + 1]

    # Unbalanced; let the JSON parser report it
    return content[start:]


def parse_intent_response(raw_response: str) -> IntentPayload:
    """
    Parse an intent extraction response.

    Args:
        raw_response: Raw response string

    Returns:
        Validated IntentPayload

    Raises:
        ParseError: If the response is not a JSON object matching the schema
    """
    if not raw_response or not raw_response.strip():
        raise ParseError("Empty response")

    json_str = extract_json_from_response(raw_response)

    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse intent JSON: {e}\nContent: {json_str}")

    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}")

    try:
        return IntentPayload.model_validate(data)
    except ValidationError as e:
        raise ParseError(f"Intent JSON does not match schema: {e}")
