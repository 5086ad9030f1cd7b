"""
Conversational hotel search agents.

This package contains:
- shared/: Common infrastructure (LLM client, logging, contracts, errors)
- intent/: Turns user messages into a structured search request
- providers/: Mock hotel providers and the concurrent aggregator
- recommendation/: Cheapest-room selection and its written analysis
- graph/: The per-turn workflow graph and its HTTP endpoints
- catalog/: Standalone similarity search over a static hotel catalog
"""

from hotel_agents.graph.build import create_hotel_search_graph
from hotel_agents.graph.state import WorkflowState
from hotel_agents.graph.workflow import HotelSearchWorkflow

__all__ = ["create_hotel_search_graph", "WorkflowState", "HotelSearchWorkflow"]
