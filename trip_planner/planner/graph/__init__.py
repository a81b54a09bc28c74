"""Graph construction and configuration for the route planner."""

from trip_planner.planner.graph.build import create_planner_graph
from trip_planner.planner.graph.config import PlannerConfig, get_config, config_from_env

__all__ = ["create_planner_graph", "PlannerConfig", "get_config", "config_from_env"]
