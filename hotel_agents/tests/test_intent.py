"""
Tests for the intent extractor.

Covers response parsing, default filling, clarification decisions and
the prompts sent to the completion client.
"""

from datetime import date

import pytest

from hotel_agents.intent.extractor import IntentExtractor, build_search_request
from hotel_agents.intent.prompts.builders import build_intent_system_prompt
from hotel_agents.intent.response_parser import (
    ParseError,
    extract_json_from_response,
    parse_intent_response,
)
from hotel_agents.intent.schemas import (
    DEFAULT_CLARIFICATION_MESSAGE,
    FALLBACK_CLARIFICATION_MESSAGE,
    ExtractionStatus,
    IntentPayload,
)
from hotel_agents.shared.contracts import ConversationTurn
from hotel_agents.tests.fakes import FakeCompletionClient, fixed_clock, intent_json


def _make_extractor(*responses):
    client = FakeCompletionClient(responses)
    return IntentExtractor(client, clock=fixed_clock), client


# ============================================================================
# Response parsing
# ============================================================================


class TestExtractJson:
    """Tests for pulling the JSON object out of a model answer."""

    def test_raw_json_passes_through(self):
        """A bare JSON object is returned unchanged."""
        assert extract_json_from_response('{"a": 1}') == '{"a": 1}'

    def test_fenced_json_block(self):
        """```json fences are stripped."""
        raw = '```json\n{"destination": "Paris"}\n```'
        assert extract_json_from_response(raw) == '{"destination": "Paris"}'

    def test_plain_fence_block(self):
        """Fences without a language tag are stripped too."""
        raw = '```\n{"destination": "Rome"}\n```'
        assert extract_json_from_response(raw) == '{"destination": "Rome"}'

    def test_surrounding_prose_ignored(self):
        """Text before and after the object is dropped."""
        raw = 'Sure! Here it is: {"destination": "Lima"} Let me know.'
        assert extract_json_from_response(raw) == '{"destination": "Lima"}'

    def test_braces_inside_strings(self):
        """Braces inside string values do not end the object early."""
        raw = '{"clarification_message": "Which {city}?"} trailing'
        assert extract_json_from_response(raw) == '{"clarification_message": "Which {city}?"}'


class TestParseIntentResponse:
    """Tests for validating the parsed payload."""

    def test_empty_response_raises(self):
        with pytest.raises(ParseError):
            parse_intent_response("   ")

    def test_non_json_raises(self):
        with pytest.raises(ParseError):
            parse_intent_response("I'm not sure what you mean")

    def test_non_object_raises(self):
        with pytest.raises(ParseError):
            parse_intent_response("[1, 2, 3]")

    def test_bad_date_raises(self):
        with pytest.raises(ParseError):
            parse_intent_response(intent_json(destination="Paris", check_in="next week"))

    def test_camel_case_keys_accepted(self):
        """Keys in camelCase populate the same fields."""
        payload = parse_intent_response(
            '{"destination": "Oslo", "checkIn": "2025-07-01", "checkOut": "2025-07-04",'
            ' "needsClarification": false}'
        )
        assert payload.check_in == date(2025, 7, 1)
        assert payload.check_out == date(2025, 7, 4)

    def test_blank_strings_become_none(self):
        payload = parse_intent_response(intent_json(destination="  ", check_in=""))
        assert payload.destination is None
        assert payload.check_in is None

    def test_null_clarification_flag_is_false(self):
        payload = parse_intent_response(intent_json(destination="Paris", needs_clarification=None))
        assert payload.needs_clarification is False


# ============================================================================
# Defaults
# ============================================================================


class TestBuildSearchRequest:
    """Tests for default filling."""

    def test_all_defaults(self):
        """Only a destination: tomorrow, one night, one guest, one room."""
        request = build_search_request(IntentPayload(destination="Paris"), date(2025, 6, 1))
        assert request.check_in == date(2025, 6, 2)
        assert request.check_out == date(2025, 6, 3)
        assert request.guests == 1
        assert request.rooms == 1

    def test_check_out_follows_given_check_in(self):
        payload = IntentPayload(destination="Paris", check_in=date(2025, 8, 10))
        request = build_search_request(payload, date(2025, 6, 1))
        assert request.check_out == date(2025, 8, 11)

    def test_non_positive_counts_default_to_one(self):
        payload = IntentPayload(destination="Paris", guests=0, rooms=-2)
        request = build_search_request(payload, date(2025, 6, 1))
        assert request.guests == 1
        assert request.rooms == 1

    def test_explicit_values_kept(self):
        payload = IntentPayload(
            destination="Paris",
            check_in=date(2025, 9, 1),
            check_out=date(2025, 9, 5),
            guests=3,
            rooms=2,
        )
        request = build_search_request(payload, date(2025, 6, 1))
        assert request.nights == 4
        assert (request.guests, request.rooms) == (3, 2)


# ============================================================================
# Extraction outcomes
# ============================================================================


class TestIntentExtractor:
    """Tests for IntentExtractor.extract()."""

    def test_parsed_request(self):
        """A complete answer produces a parsed outcome with a summary."""
        extractor, _ = _make_extractor(
            intent_json(destination="Paris", check_in="2025-06-10", check_out="2025-06-12", guests=2)
        )
        outcome = extractor.extract("Hotel in Paris June 10-12 for 2")

        assert outcome.status is ExtractionStatus.PARSED
        assert not outcome.needs_clarification
        assert outcome.request.destination == "Paris"
        assert outcome.assistant_turn is None
        assert outcome.analysis == (
            "Searching for hotels in Paris from 2025-06-10 to 2025-06-12 "
            "for 2 guest(s) in 1 room(s)"
        )

    def test_fenced_response_parsed(self):
        extractor, _ = _make_extractor("```json\n" + intent_json(destination="Paris") + "\n```")
        outcome = extractor.extract("Find me a hotel in Paris")
        assert outcome.status is ExtractionStatus.PARSED
        assert outcome.request.check_in == date(2025, 6, 2)
        assert outcome.request.check_out == date(2025, 6, 3)

    def test_missing_destination_needs_clarification(self):
        """No destination means clarification, even without the model flag."""
        extractor, _ = _make_extractor(intent_json(check_in="2025-06-10"))
        outcome = extractor.extract("I need a hotel next weekend")

        assert outcome.status is ExtractionStatus.CLARIFICATION_NEEDED
        assert outcome.request is None
        assert outcome.clarification_message == DEFAULT_CLARIFICATION_MESSAGE
        assert outcome.assistant_turn.role == "assistant"
        assert outcome.assistant_turn.content == DEFAULT_CLARIFICATION_MESSAGE

    def test_model_clarification_message_used(self):
        extractor, _ = _make_extractor(
            intent_json(
                destination="Paris",
                needs_clarification=True,
                clarification_message="Which dates work for you?",
            )
        )
        outcome = extractor.extract("Paris please")
        assert outcome.status is ExtractionStatus.CLARIFICATION_NEEDED
        assert outcome.request is None
        assert outcome.clarification_message == "Which dates work for you?"

    def test_unparsable_answer_falls_back(self):
        """Free text instead of JSON asks the fixed fallback question."""
        extractor, _ = _make_extractor("Sorry, I cannot help with that.")
        outcome = extractor.extract("asdf")

        assert outcome.status is ExtractionStatus.UNPARSABLE
        assert outcome.needs_clarification
        assert outcome.clarification_message == FALLBACK_CLARIFICATION_MESSAGE
        assert outcome.analysis == "Failed to parse query"

    def test_check_out_before_check_in_is_unparsable(self):
        extractor, _ = _make_extractor(
            intent_json(destination="Paris", check_in="2025-06-10", check_out="2025-06-08")
        )
        outcome = extractor.extract("Paris from the 10th to the 8th")
        assert outcome.status is ExtractionStatus.UNPARSABLE

    def test_client_errors_propagate(self):
        extractor, _ = _make_extractor(RuntimeError("connection refused"))
        with pytest.raises(RuntimeError):
            extractor.extract("Hotel in Paris")

    def test_prompts_sent_to_client(self):
        """Today's date and the utterance reach the client."""
        extractor, client = _make_extractor(intent_json(destination="Paris"))
        extractor.extract("  Hotel in Paris  ")

        system_prompt, user_prompt = client.calls[0]
        assert "2025-06-01" in system_prompt
        assert "needs_clarification" in system_prompt
        assert user_prompt == "Hotel in Paris"

    def test_history_included_in_prompt(self):
        extractor, client = _make_extractor(intent_json(destination="Tokyo"))
        history = [
            ConversationTurn.user("I need a hotel next weekend"),
            ConversationTurn.assistant("Which city would you like to stay in?"),
        ]
        extractor.extract("Tokyo", history)

        system_prompt, _ = client.calls[0]
        assert "user: I need a hotel next weekend" in system_prompt
        assert "assistant: Which city would you like to stay in?" in system_prompt


class TestIntentPrompts:
    """Tests for the system prompt builder."""

    def test_no_history_section_for_new_query(self):
        prompt = build_intent_system_prompt([], date(2025, 6, 1))
        assert "Previous conversation" not in prompt

    def test_history_section_for_follow_up(self):
        prompt = build_intent_system_prompt(
            [ConversationTurn.user("Somewhere warm")], date(2025, 6, 1)
        )
        assert "Previous conversation" in prompt
        assert "user: Somewhere warm" in prompt

    def test_new_query_asks_for_missing_dates(self):
        """A new query needs both a destination and stay dates."""
        prompt = build_intent_system_prompt([], date(2025, 6, 1))
        instructions = prompt.split("## Output format")[0].split("rooms: Number of rooms")[1]
        assert "destination" in instructions
        assert "check-in or check-out" in instructions
        assert "needs_clarification to true" in instructions

    def test_follow_up_still_asks_for_missing_dates(self):
        prompt = build_intent_system_prompt(
            [ConversationTurn.user("Find me a hotel in Tokyo")], date(2025, 6, 1)
        )
        assert "destination is still unknown" not in prompt
        assert "destination or stay dates" in prompt
