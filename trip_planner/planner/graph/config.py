"""
Configuration for the route planner.

Centralizes the model, deadline and retry settings so behavior can be
tuned without touching the graph wiring.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from trip_planner.shared.llm.client import DEFAULT_MODEL
from trip_planner.shared.resilience.errors import ConfigurationError
from trip_planner.shared.resilience.retry import RetryPolicy


@dataclass
class PlannerConfig:
    """
    Configuration for the planner graph.

    Attributes:
        model: LLM model to use
        deadline_ms: Per-attempt deadline for the model call
        retry_policy: Attempt budget and fixed delay for transient failures
        max_known_locations: Cap on location names embedded in the prompt
        recursion_limit: Maximum number of graph steps
    """

    model: str = DEFAULT_MODEL
    deadline_ms: int = 20000
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    max_known_locations: int = 30
    recursion_limit: int = 10

    def __post_init__(self):
        if self.deadline_ms <= 0:
            raise ConfigurationError(f"deadline_ms must be > 0, got {self.deadline_ms}")
        if self.max_known_locations < 0:
            raise ConfigurationError(
                f"max_known_locations must be >= 0, got {self.max_known_locations}"
            )


# Default configuration instance
DEFAULT_CONFIG = PlannerConfig()


def get_config(
    model: Optional[str] = None,
    deadline_ms: Optional[int] = None,
    max_attempts: Optional[int] = None,
    fixed_delay_ms: Optional[int] = None,
    max_known_locations: Optional[int] = None,
) -> PlannerConfig:
    """
    Create a configuration with optional overrides.

    Args:
        model: Override for LLM model
        deadline_ms: Override for per-attempt deadline
        max_attempts: Override for retry attempt budget
        fixed_delay_ms: Override for delay between attempts
        max_known_locations: Override for the prompt location cap

    Returns:
        PlannerConfig with specified overrides applied

    Raises:
        ConfigurationError: If an override is out of range
    """
    policy = DEFAULT_CONFIG.retry_policy
    try:
        retry_policy = RetryPolicy(
            max_attempts=max_attempts if max_attempts is not None else policy.max_attempts,
            fixed_delay_ms=fixed_delay_ms if fixed_delay_ms is not None else policy.fixed_delay_ms,
        )
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    return PlannerConfig(
        model=model or DEFAULT_CONFIG.model,
        deadline_ms=deadline_ms if deadline_ms is not None else DEFAULT_CONFIG.deadline_ms,
        retry_policy=retry_policy,
        max_known_locations=max_known_locations
        if max_known_locations is not None
        else DEFAULT_CONFIG.max_known_locations,
    )


def _int_env(name: str) -> Optional[int]:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e


def config_from_env() -> PlannerConfig:
    """
    Build a configuration from PLANNER_* environment variables.

    Reads PLANNER_MODEL, PLANNER_DEADLINE_MS, PLANNER_MAX_ATTEMPTS and
    PLANNER_RETRY_DELAY_MS; unset variables keep their defaults.
    """
    return get_config(
        model=os.environ.get("PLANNER_MODEL") or None,
        deadline_ms=_int_env("PLANNER_DEADLINE_MS"),
        max_attempts=_int_env("PLANNER_MAX_ATTEMPTS"),
        fixed_delay_ms=_int_env("PLANNER_RETRY_DELAY_MS"),
    )
