"""
Shared infrastructure for the planner.

Modules:
- llm: Async OpenAI client
- resilience: Retry and deadline helpers for model calls
- logging: App logging setup and session transition logs
- contracts: Output contracts (Route)
"""

from trip_planner.shared.llm.client import get_cached_client, call_llm
from trip_planner.shared.logging.config import configure_logging, log_state_transition

__all__ = [
    "get_cached_client",
    "call_llm",
    "configure_logging",
    "log_state_transition",
]
