"""
Call outcome variant.

Each attempt against the inference service ends as a success carrying the
raw text, a fatal error, or a transient error. The outcome kind drives the
retry policy and is recorded in the planner's error trail.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import openai

from trip_planner.shared.resilience.errors import FatalCallError


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    FATAL = "fatal"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class CallOutcome:
    """Tagged result of one call: exactly one of raw_text / reason is set."""

    kind: OutcomeKind
    raw_text: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, raw_text: str) -> "CallOutcome":
        return cls(kind=OutcomeKind.SUCCESS, raw_text=raw_text)

    @classmethod
    def fatal(cls, reason: str) -> "CallOutcome":
        return cls(kind=OutcomeKind.FATAL, reason=reason)

    @classmethod
    def transient(cls, reason: str) -> "CallOutcome":
        return cls(kind=OutcomeKind.TRANSIENT, reason=reason)

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS


# Provider errors that signal bad credentials or settings (unknown model)
_FATAL_PROVIDER_ERRORS = (
    openai.AuthenticationError,
    openai.PermissionDeniedError,
    openai.NotFoundError,
)


def classify_failure(exc: BaseException) -> CallOutcome:
    """
    Classify a failed call as fatal or transient.

    Args:
        exc: The exception raised by the call

    Returns:
        CallOutcome with kind FATAL or TRANSIENT and a short reason
    """
    reason = f"{type(exc).__name__}: {exc}"
    if isinstance(exc, (FatalCallError,) + _FATAL_PROVIDER_ERRORS):
        return CallOutcome.fatal(reason)
    return CallOutcome.transient(reason)
