"""Retry and deadline helpers for calls to the inference service."""

from trip_planner.shared.resilience.errors import (
    FatalCallError,
    ConfigurationError,
    TransientCallError,
    CallTimeoutError,
)
from trip_planner.shared.resilience.outcome import CallOutcome, OutcomeKind, classify_failure
from trip_planner.shared.resilience.retry import RetryPolicy, call_with_retry, is_fatal_error
from trip_planner.shared.resilience.deadline import race_deadline

__all__ = [
    "FatalCallError",
    "ConfigurationError",
    "TransientCallError",
    "CallTimeoutError",
    "CallOutcome",
    "OutcomeKind",
    "classify_failure",
    "RetryPolicy",
    "call_with_retry",
    "is_fatal_error",
    "race_deadline",
]
