"""
Route planner.

Builds a prompt from a PlanRequest, calls the model with a per-attempt
deadline and bounded retries, extracts a Route from the response and
falls back to a fixed catalog whenever any of that fails.
"""

from trip_planner.planner.schemas import Language, OriginHub, PlannerPhase, PlanRequest
from trip_planner.planner.errors import InvalidTransitionError, PlanValidationError
from trip_planner.planner.fallback import DEFAULT_CATALOG, FallbackCatalog, synthesize_fallback
from trip_planner.planner.response_parser import ExtractionFailure, extract_route
from trip_planner.planner.orchestrator import PlanOutcome, RoutePlanner
from trip_planner.planner.session import PlannerSession

__all__ = [
    "Language",
    "OriginHub",
    "PlannerPhase",
    "PlanRequest",
    "InvalidTransitionError",
    "PlanValidationError",
    "DEFAULT_CATALOG",
    "FallbackCatalog",
    "synthesize_fallback",
    "ExtractionFailure",
    "extract_route",
    "PlanOutcome",
    "RoutePlanner",
    "PlannerSession",
]
