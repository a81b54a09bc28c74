"""
Deadline racing for model calls.

Races one in-flight call against a wall-clock deadline. The call is started
as its own task; when the deadline wins, that task is abandoned rather than
cancelled and its eventual result is retrieved and dropped.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Set, TypeVar

from trip_planner.shared.resilience.errors import CallTimeoutError


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Abandoned calls stay referenced here until they settle
_orphaned: Set["asyncio.Future"] = set()


def _discard_orphan(task: "asyncio.Future") -> None:
    _orphaned.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug(f"[deadline] abandoned call settled with error: {exc!r}")
    else:
        logger.debug("[deadline] abandoned call settled, result discarded")


def pending_orphans() -> int:
    """Number of abandoned calls that have not settled yet."""
    return len(_orphaned)


async def race_deadline(op: Callable[[], Awaitable[T]], deadline_ms: int) -> T:
    """
    Run ``op()`` and fail with CallTimeoutError if it outlives ``deadline_ms``.

    Args:
        op: Zero-argument coroutine factory
        deadline_ms: Deadline in milliseconds (> 0)

    Returns:
        The result of ``op()`` when it settles first.

    Raises:
        CallTimeoutError: If the deadline elapses first
        Exception: Whatever ``op()`` raised, when it settles first
    """
    if deadline_ms <= 0:
        raise ValueError(f"deadline_ms must be > 0, got {deadline_ms}")

    task = asyncio.ensure_future(op())
    done, _ = await asyncio.wait({task}, timeout=deadline_ms / 1000)

    if task in done:
        return task.result()

    _orphaned.add(task)
    task.add_done_callback(_discard_orphan)
    logger.warning(f"[deadline] call abandoned after {deadline_ms}ms")
    raise CallTimeoutError(deadline_ms)
