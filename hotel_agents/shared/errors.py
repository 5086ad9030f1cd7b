"""
Error taxonomy for a workflow turn.

Errors become data once they leave a stage: the kind and the user-facing
message travel on the WorkflowState instead of as exceptions.
"""

from enum import Enum


class ErrorKind(str, Enum):
    CLARIFICATION_NEEDED = "clarification_needed"
    EXTRACTION_UNPARSABLE = "extraction_unparsable"
    MISSING_QUERY = "missing_query"
    AGGREGATION_FAILED = "aggregation_failed"
    NO_RESULTS = "no_results"
    NO_LISTINGS = "no_listings"
    STAGE_EXCEPTION = "stage_exception"


# User-facing messages (never include internal details)
MISSING_QUERY_MESSAGE = "No search query available"
AGGREGATION_FAILED_MESSAGE = "Failed to search hotel providers"
NO_RESULTS_MESSAGE = "No search results to analyze"
NO_LISTINGS_MESSAGE = "No hotel rooms found"
INTENT_STAGE_FAILED_MESSAGE = "Failed to parse query"
SEARCH_STAGE_FAILED_MESSAGE = "Failed to search hotels"
SELECTION_STAGE_FAILED_MESSAGE = "Failed to analyze results"
WORKFLOW_FAILED_MESSAGE = "Workflow execution failed"
