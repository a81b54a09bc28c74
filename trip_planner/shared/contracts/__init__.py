"""Output contracts shared between the planner and its callers."""

from trip_planner.shared.contracts.route_output import Route

__all__ = ["Route"]
