"""
Graph construction for the hotel search workflow.

Builds and compiles the LangGraph workflow with nodes, edges, and the
stage-based conditional routing.
"""

from langgraph.graph import StateGraph, END

from hotel_agents.graph.nodes import (
    make_parse_intent_node,
    make_search_providers_node,
    make_select_recommendation_node,
)
from hotel_agents.graph.router import route_after_intent, route_after_search
from hotel_agents.graph.state import HotelSearchGraphState
from hotel_agents.intent.extractor import IntentExtractor
from hotel_agents.providers.aggregator import ProviderAggregator
from hotel_agents.recommendation.selector import RecommendationSelector


def create_hotel_search_graph(
    extractor: IntentExtractor,
    aggregator: ProviderAggregator,
    selector: RecommendationSelector,
):
    """
    Create and compile the LangGraph workflow for one hotel search turn.

    The graph structure is:
        Entry -> parse_intent -> route_after_intent()
                                   ├→ needs clarification / failed -> END
                                   └→ search_providers -> route_after_search()
                                                            ├→ failed -> END
                                                            └→ select_recommendation -> END

    The search node is async, so the compiled graph must be run with
    ainvoke().

    Args:
        extractor: Intent extractor for the first stage
        aggregator: Provider aggregator for the search stage
        selector: Recommendation selector for the final stage

    Returns:
        Compiled LangGraph application ready for execution.
    """
    graph = StateGraph(HotelSearchGraphState)

    # Add nodes
    graph.add_node("parse_intent", make_parse_intent_node(extractor))
    graph.add_node("search_providers", make_search_providers_node(aggregator))
    graph.add_node("select_recommendation", make_select_recommendation_node(selector))

    # Set entry point
    graph.set_entry_point("parse_intent")

    # Early exits after intent parsing and after search
    graph.add_conditional_edges(
        "parse_intent",
        route_after_intent,
        {
            "search_providers": "search_providers",
            "end": END,
        },
    )
    graph.add_conditional_edges(
        "search_providers",
        route_after_search,
        {
            "select_recommendation": "select_recommendation",
            "end": END,
        },
    )

    graph.add_edge("select_recommendation", END)

    return graph.compile()
