"""Logging utilities for the planner service."""

from trip_planner.shared.logging.config import configure_logging, log_state_transition

__all__ = [
    "configure_logging",
    "log_state_transition",
]
