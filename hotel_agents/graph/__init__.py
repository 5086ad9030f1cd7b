"""Hotel search workflow: state, stages, routing and graph construction."""

from hotel_agents.graph.build import create_hotel_search_graph
from hotel_agents.graph.config import DEFAULT_CONFIG, WorkflowConfig, get_config
from hotel_agents.graph.state import WorkflowStage, WorkflowState
from hotel_agents.graph.workflow import HotelSearchWorkflow, create_default_workflow

__all__ = [
    "create_hotel_search_graph",
    "DEFAULT_CONFIG",
    "WorkflowConfig",
    "get_config",
    "WorkflowStage",
    "WorkflowState",
    "HotelSearchWorkflow",
    "create_default_workflow",
]
