"""
Inference boundary for the planner.

``InvokeFn`` is the only thing the planner knows about the model service:
an async callable taking a prompt and a language and returning raw text.
``invoke_model`` is the default implementation backed by OpenAI.
"""

from typing import Awaitable, Callable, Optional

from openai import AsyncOpenAI

from trip_planner.planner.prompts.builders import build_system_prompt
from trip_planner.planner.schemas import Language
from trip_planner.shared.llm.client import DEFAULT_MODEL, call_llm


InvokeFn = Callable[[str, Language], Awaitable[str]]


async def invoke_model(
    prompt: str,
    language: Language,
    model: str = DEFAULT_MODEL,
    client: Optional[AsyncOpenAI] = None,
) -> str:
    """
    Send one planning prompt and return the raw response text.

    Args:
        prompt: Complete user prompt
        language: Response language
        model: Model identifier to use
        client: Optional client instance. If not provided, uses cached client.
    """
    messages = [
        {"role": "system", "content": build_system_prompt(language)},
        {"role": "user", "content": prompt},
    ]
    return await call_llm(messages, model=model, client=client)


def make_model_invoker(model: str = DEFAULT_MODEL) -> InvokeFn:
    """Bind ``invoke_model`` to a model name."""

    async def _invoke(prompt: str, language: Language) -> str:
        return await invoke_model(prompt, language, model=model)

    return _invoke
