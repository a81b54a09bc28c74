"""HTTP routers for the planner."""

from trip_planner.api.planner_api import router as planner_router

__all__ = ["planner_router"]
