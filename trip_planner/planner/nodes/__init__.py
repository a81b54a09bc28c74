"""Node functions for the planner graph."""

from trip_planner.planner.nodes.request import make_build_request_node
from trip_planner.planner.nodes.generate import make_generate_node
from trip_planner.planner.nodes.extract import extract_node
from trip_planner.planner.nodes.fallback import make_fallback_node

__all__ = [
    "make_build_request_node",
    "make_generate_node",
    "extract_node",
    "make_fallback_node",
]
