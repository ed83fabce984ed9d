"""
LLM invocation with a single rate-limit fallback.

The primary provider is called first. A rate-limit shaped failure
triggers exactly one call to the fallback provider with the same prompt
and temperature; any other failure, and any fallback failure, is terminal.

Dependencies: langchain_core, draftsmith.core.agentic_system.providers
System role: Language-model invocation layer
"""

import logging
from typing import Any

from langchain_core.messages import BaseMessage

from draftsmith.core.agentic_system.providers import ChatModelRegistry, Provider
from draftsmith.core.exceptions import LLMInvocationError

logger = logging.getLogger(__name__)

RATE_LIMIT_MARKERS = (
    "429",
    "rate limit",
    "rate_limit",
    "ratelimit",
    "too many requests",
    "resource_exhausted",
    "resource exhausted",
    "quota",
)


def is_rate_limit_error(exc: BaseException) -> bool:
    """
    Detect a rate-limit signal from status attributes or the message text.

    Args:
        exc: Exception raised by a provider client

    Returns:
        bool: True when the error looks like a 429 / quota rejection
    """
    for attr in ("status_code", "status", "code"):
        if getattr(exc, attr, None) == 429:
            return True
    response = getattr(exc, "response", None)
    if response is not None and getattr(response, "status_code", None) == 429:
        return True
    message = str(exc).lower()
    return any(marker in message for marker in RATE_LIMIT_MARKERS)


def message_text(message: BaseMessage | Any) -> str:
    """Flatten a chat message's content (string or content blocks) to text."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        return "".join(parts)
    return str(content)


class LLMInvoker:
    """Call the primary model, falling back once on rate limits."""

    def __init__(self, registry: ChatModelRegistry, default_temperature: float = 0.3) -> None:
        self._registry = registry
        self._default_temperature = default_temperature

    async def invoke(self, prompt: str, temperature: float | None = None) -> str:
        """
        Run a prompt and return the model's text.

        Args:
            prompt: Full prompt text
            temperature: Sampling temperature (default from settings)

        Returns:
            str: Model response text

        Raises:
            LLMInvocationError: Primary failed without a rate-limit signal, or
                the fallback failed. The provider exception is the __cause__.
        """
        temp = self._default_temperature if temperature is None else temperature

        try:
            model = self._registry.get(Provider.PRIMARY, temp)
            response = await model.ainvoke(prompt)
            return message_text(response)
        except Exception as primary_error:
            if not is_rate_limit_error(primary_error):
                logger.error(
                    f"{__name__}:invoke - Primary provider failed",
                    extra={
                        "error_type": type(primary_error).__name__,
                        "error_msg": str(primary_error)[:300],
                    },
                )
                raise LLMInvocationError(
                    f"Primary model call failed: {primary_error}",
                    provider=Provider.PRIMARY.value,
                ) from primary_error

            logger.warning(
                f"{__name__}:invoke - Primary provider rate limited, falling back",
                extra={"temperature": temp, "prompt_len": len(prompt)},
            )

        try:
            model = self._registry.get(Provider.FALLBACK, temp)
            response = await model.ainvoke(prompt)
            return message_text(response)
        except Exception as fallback_error:
            logger.error(
                f"{__name__}:invoke - Fallback provider failed",
                extra={
                    "error_type": type(fallback_error).__name__,
                    "error_msg": str(fallback_error)[:300],
                },
            )
            raise LLMInvocationError(
                f"Fallback model call failed: {fallback_error}",
                provider=Provider.FALLBACK.value,
                rate_limited=is_rate_limit_error(fallback_error),
            ) from fallback_error
