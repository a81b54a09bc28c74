"""
Retry wrapper for calls to the inference service.

Retries transient failures with a fixed delay up to a bounded number of
attempts using tenacity. Fatal failures (bad credentials or settings) are
re-raised on first occurrence without consuming another attempt.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_fixed,
)

from trip_planner.shared.resilience.outcome import OutcomeKind, classify_failure


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry configuration.

    Attributes:
        max_attempts: Total attempts including the first one (>= 1)
        fixed_delay_ms: Delay between attempts in milliseconds (>= 0)
    """

    max_attempts: int = 2
    fixed_delay_ms: int = 1000

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.fixed_delay_ms < 0:
            raise ValueError(f"fixed_delay_ms must be >= 0, got {self.fixed_delay_ms}")


def is_fatal_error(exc: BaseException) -> bool:
    """Return True when retrying the failed call cannot help."""
    return classify_failure(exc).kind is OutcomeKind.FATAL


async def call_with_retry(
    op: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
) -> T:
    """
    Invoke ``op`` and retry transient failures according to ``policy``.

    Args:
        op: Zero-argument coroutine factory; called once per attempt
        policy: Attempt budget and fixed delay

    Returns:
        The value returned by the first successful attempt.

    Raises:
        FatalCallError (or a fatal provider error): on first occurrence
        Exception: The last transient error once attempts are exhausted
    """
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_fixed(policy.fixed_delay_ms / 1000),
        retry=retry_if_exception(lambda exc: not is_fatal_error(exc)),
        reraise=True,
    ):
        with attempt:
            try:
                return await op()
            except Exception as exc:
                _log_failure(exc, attempt.retry_state.attempt_number, policy)
                raise


def _log_failure(exc: Exception, attempt_number: int, policy: RetryPolicy) -> None:
    outcome = classify_failure(exc)
    if outcome.kind is OutcomeKind.FATAL:
        logger.error(
            f"[retry] fatal failure on attempt {attempt_number}, not retrying | {outcome.reason}"
        )
        return

    remaining = policy.max_attempts - attempt_number
    if remaining > 0:
        logger.warning(
            f"[retry] transient failure on attempt {attempt_number} | "
            f"remaining_attempts={remaining}, delay={policy.fixed_delay_ms}ms | {outcome.reason}"
        )
    else:
        logger.warning(
            f"[retry] transient failure on attempt {attempt_number} | "
            f"remaining_attempts=0, giving up | {outcome.reason}"
        )
