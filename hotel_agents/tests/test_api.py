"""
Tests for the HTTP endpoints.

The shared workflow and catalog dependencies are overridden with
instances backed by fake clients, so no API key is needed.
"""

import json

import pytest
from fastapi.testclient import TestClient

from hotel_agents.catalog.catalog_api import get_catalog, get_completion_client
from hotel_agents.catalog.vector_store import HotelCatalog
from hotel_agents.graph.hotel_search_api import NEWLINE, chunk_text, get_workflow
from hotel_agents.graph.workflow import HotelSearchWorkflow
from hotel_agents.main import app
from hotel_agents.providers.mock_data import create_default_providers
from hotel_agents.tests.fakes import FakeCompletionClient, fixed_clock, intent_json


def _make_test_client(responses):
    workflow = HotelSearchWorkflow(
        FakeCompletionClient(responses),
        providers=create_default_providers(latency_scale=0),
        clock=fixed_clock,
    )
    app.dependency_overrides[get_workflow] = lambda: workflow
    return TestClient(app)


def _parse_sse(body):
    """Split an SSE body into (event, data) pairs."""
    events = []
    for block in body.strip().split("\n\n"):
        fields = dict(line.split(": ", 1) for line in block.splitlines())
        events.append((fields["event"], fields["data"]))
    return events


@pytest.fixture(autouse=True)
def _clear_overrides():
    yield
    app.dependency_overrides.clear()


class TestAppEndpoints:
    def test_root_lists_agents(self):
        response = TestClient(app).get("/")
        assert response.status_code == 200
        assert set(response.json()["agents"]) == {"hotel_search", "catalog"}

    def test_health(self):
        assert TestClient(app).get("/health").json() == {"status": "healthy"}
        response = TestClient(app).get("/api/hotel-search/health")
        assert response.json()["status"] == "healthy"


class TestTurnEndpoint:
    """Tests for POST /api/hotel-search/turn."""

    def test_completed_turn(self):
        client = _make_test_client([intent_json(destination="Paris"), "Stay at Budget Stay."])
        response = client.post(
            "/api/hotel-search/turn",
            json={"query": "Hotel in Paris", "session_id": "abc"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["session_id"] == "abc"
        assert body["state"]["stage"] == "done"
        assert body["state"]["cheapest_option"]["price"] == 75
        assert body["state"]["analysis"] == "Stay at Budget Stay."

    def test_history_round_trip(self):
        """History from one response can be sent back with the next query."""
        client = _make_test_client(
            [
                intent_json(needs_clarification=True, clarification_message="Which city?"),
                intent_json(destination="Tokyo"),
                "Tokyo pick.",
            ]
        )
        first = client.post("/api/hotel-search/turn", json={"query": "Hotel next weekend"})
        history = first.json()["state"]["conversation_history"]
        assert [t["role"] for t in history] == ["user", "assistant"]

        second = client.post(
            "/api/hotel-search/turn",
            json={"query": "Tokyo", "conversation_history": history},
        )
        state = second.json()["state"]
        assert state["stage"] == "done"
        assert state["request"]["destination"] == "Tokyo"
        assert len(state["conversation_history"]) == 3

    def test_empty_query_rejected(self):
        client = _make_test_client([])
        response = client.post("/api/hotel-search/turn", json={"query": ""})
        assert response.status_code == 422


class TestStreamEndpoint:
    """Tests for POST /api/hotel-search/stream."""

    def test_event_order(self):
        client = _make_test_client(
            [intent_json(destination="Paris"), "Budget Stay wins.\nGreat value."]
        )
        response = client.post("/api/hotel-search/stream", json={"query": "Hotel in Paris"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        events = _parse_sse(response.text)
        names = [name for name, _ in events]
        assert names[0] == "conversation"
        assert names[1] == "state"
        assert names[-1] == "finished"
        assert set(names[2:-1]) == {"token"}

        flags = json.loads(events[1][1])
        assert flags["conversation_complete"] is True
        assert flags["has_results"] is True
        assert flags["needs_clarification"] is False

        text = "".join(data for name, data in events if name == "token")
        assert text == f"Budget Stay wins.{NEWLINE}Great value."
        assert events[-1][1] == "true"

    def test_clarification_streams_question(self):
        client = _make_test_client(
            [intent_json(needs_clarification=True, clarification_message="Which city?")]
        )
        response = client.post("/api/hotel-search/stream", json={"query": "A hotel please"})
        events = _parse_sse(response.text)

        history = json.loads(events[0][1])
        assert [t["content"] for t in history] == ["A hotel please", "Which city?"]
        assert json.loads(events[1][1])["needs_clarification"] is True
        assert "".join(d for n, d in events if n == "token") == "Which city?"

    def test_chunk_text(self):
        assert chunk_text("abcdefg", size=3) == ["abc", "def", "g"]
        assert chunk_text("") == []


class TestCatalogEndpoints:
    """Tests for /api/catalog/search."""

    def _client(self):
        app.dependency_overrides[get_catalog] = lambda: HotelCatalog()
        app.dependency_overrides[get_completion_client] = lambda: FakeCompletionClient(
            default="Here is what I found."
        )
        return TestClient(app)

    def test_post_query(self):
        response = self._client().post("/api/catalog/search", json={"query": "Eiffel Tower suite"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["analysis"] == "Here is what I found."
        assert len(body["data"]["results"]) == 5
        assert "embedding" not in body["data"]["results"][0]

    def test_post_criteria(self):
        response = self._client().post(
            "/api/catalog/search",
            json={"search_type": "advanced", "criteria": {"location": "London"}},
        )
        results = response.json()["data"]["results"]
        assert {r["location"] for r in results} == {"London"}
        assert len(results) == 3

    def test_post_requires_query_or_criteria(self):
        response = self._client().post("/api/catalog/search", json={"criteria": {}})
        assert response.status_code == 400

    def test_get_with_params(self):
        response = self._client().get(
            "/api/catalog/search", params={"location": "Orlando", "amenities": "Pool, Parking"}
        )
        ids = [r["id"] for r in response.json()["data"]["results"]]
        assert ids == ["cat-012", "cat-013"]

    def test_get_requires_a_param(self):
        assert self._client().get("/api/catalog/search").status_code == 400

    def test_analysis_failure_is_500(self):
        app.dependency_overrides[get_catalog] = lambda: HotelCatalog()
        app.dependency_overrides[get_completion_client] = lambda: FakeCompletionClient(
            [RuntimeError("down")]
        )
        response = TestClient(app).post("/api/catalog/search", json={"query": "Paris"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to process search request"
