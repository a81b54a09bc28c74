"""
Generate node for the planner graph.

Calls the inference boundary with a fresh deadline per attempt and retries
transient failures. Any failure is recorded in the error trail and leaves
``raw_response`` empty so the router sends the request to the fallback.
"""

import logging
import time
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict

from trip_planner.planner.inference import InvokeFn
from trip_planner.planner.schemas import PlannerGraphState
from trip_planner.shared.resilience.deadline import race_deadline
from trip_planner.shared.resilience.outcome import CallOutcome, OutcomeKind, classify_failure
from trip_planner.shared.resilience.retry import call_with_retry

if TYPE_CHECKING:
    from trip_planner.planner.graph.config import PlannerConfig


logger = logging.getLogger(__name__)


def make_generate_node(
    invoke: InvokeFn,
    config: "PlannerConfig",
) -> Callable[[PlannerGraphState], Awaitable[Dict[str, Any]]]:
    """Create the node that calls the model."""

    async def generate_node(state: PlannerGraphState) -> Dict[str, Any]:
        session_id = state.get("session_id", "unknown")
        _log = f"[session={session_id}] [graph=planner] [node=generate] "

        request = state["request"]
        prompt = state["prompt"]
        policy = config.retry_policy

        async def _attempt() -> str:
            return await race_deadline(
                lambda: invoke(prompt, request.language), config.deadline_ms
            )

        logger.info(
            f"{_log}Calling model | deadline={config.deadline_ms}ms, "
            f"max_attempts={policy.max_attempts}, delay={policy.fixed_delay_ms}ms"
        )

        start_time = time.perf_counter()
        try:
            raw_response = await call_with_retry(_attempt, policy)
            outcome = CallOutcome.success(raw_response)
        except Exception as e:
            outcome = classify_failure(e)
        duration_ms = (time.perf_counter() - start_time) * 1000

        if outcome.ok:
            logger.info(
                f"{_log}Model responded | duration={duration_ms:.0f}ms, "
                f"chars={len(outcome.raw_text or '')}"
            )
            return {
                "raw_response": outcome.raw_text,
                "messages": [
                    {"role": "system", "agent": "generate", "content": "Model responded"}
                ],
            }

        if outcome.kind is OutcomeKind.FATAL:
            logger.error(f"{_log}Fatal call error, skipping model | {outcome.reason}")
        else:
            logger.warning(
                f"{_log}Model call failed after retries | duration={duration_ms:.0f}ms, "
                f"{outcome.reason}"
            )

        return {
            "raw_response": None,
            "errors": [f"{outcome.kind.value}: {outcome.reason}"],
            "messages": [
                {
                    "role": "system",
                    "agent": "generate",
                    "content": f"Model call failed ({outcome.kind.value})",
                }
            ],
        }

    return generate_node
