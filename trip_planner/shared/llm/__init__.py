"""LLM client utilities."""

from trip_planner.shared.llm.client import get_cached_client, call_llm

__all__ = ["get_cached_client", "call_llm"]
