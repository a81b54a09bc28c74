"""
Resilient AI route planner.

This package contains:
- shared/: Common infrastructure (LLM client, resilience, logging, contracts)
- planner/: Route planning pipeline (prompting, extraction, fallback, session)
- api/: FastAPI routers exposing the planner
"""

from trip_planner.planner.orchestrator import RoutePlanner
from trip_planner.planner.session import PlannerSession

__all__ = ["RoutePlanner", "PlannerSession"]
