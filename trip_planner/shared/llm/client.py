"""
Async OpenAI client.

Provides a cached client instance and a single-shot chat completion call.
Retries and deadlines are applied by the caller (see shared/resilience).
"""

import os
from typing import Dict, List, Optional

from dotenv import load_dotenv
from openai import AsyncOpenAI

from trip_planner.shared.resilience.errors import ConfigurationError
load_dotenv()

API_KEY_ENV = "OPENAI_API_KEY"

DEFAULT_MODEL = "gpt-4.1-mini"

# Module-level cache for the async OpenAI client
_client: Optional[AsyncOpenAI] = None


def read_api_key() -> str:
    """
    Read and validate the credential from the environment.

    Raises:
        ConfigurationError: If the key is missing, blank or contains whitespace
    """
    api_key = os.environ.get(API_KEY_ENV)
    if api_key is None or not api_key.strip():
        raise ConfigurationError(
            f"{API_KEY_ENV} environment variable is not set. "
            "Please set it to your OpenAI API key."
        )
    if any(ch.isspace() for ch in api_key):
        raise ConfigurationError(f"{API_KEY_ENV} is malformed (contains whitespace).")
    return api_key


def get_cached_client() -> AsyncOpenAI:
    """
    Returns a cached instance of the async OpenAI client.

    The credential is validated before the client is created, so a missing
    key fails here without any network attempt.
    """
    global _client
    if _client is None:
        _client = AsyncOpenAI(api_key=read_api_key())
    return _client


def reset_client() -> None:
    """Drop the cached client (used when the credential changes)."""
    global _client
    _client = None


async def call_llm(
    messages: List[Dict[str, str]],
    model: str = DEFAULT_MODEL,
    client: Optional[AsyncOpenAI] = None,
) -> str:
    """
    Call the OpenAI Chat Completion API once.

    Args:
        messages: List of message dicts with 'role' and 'content' keys
        model: Model identifier to use
        client: Optional client instance. If not provided, uses cached client.

    Returns:
        The assistant's response content as a string (may be empty).
    """
    if client is None:
        client = get_cached_client()

    response = await client.chat.completions.create(
        model=model,
        messages=messages,
    )

    content = response.choices[0].message.content or ""
    return content.strip()
