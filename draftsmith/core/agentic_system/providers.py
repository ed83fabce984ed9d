"""
Chat model provider registry.

Lazily creates chat model handles once per (provider, temperature) and
hands the same handle back on every later call. Creation is guarded by a
lock so concurrent first calls never build two clients.

Dependencies: langchain_openai, langchain_google_genai, draftsmith.configs
System role: Process-wide LLM client singletons
"""

import logging
import threading
from enum import Enum

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from draftsmith.configs.llm import LLMSettings

logger = logging.getLogger(__name__)


class Provider(str, Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"


class ChatModelRegistry:
    """Lazy, thread-safe cache of chat model handles."""

    def __init__(self, settings: LLMSettings) -> None:
        self._settings = settings
        self._models: dict[tuple[Provider, float], BaseChatModel] = {}
        self._lock = threading.Lock()

    def get(self, provider: Provider, temperature: float) -> BaseChatModel:
        """
        Return the cached handle for a provider and temperature.

        Args:
            provider: PRIMARY (Groq, OpenAI-compatible) or FALLBACK (Gemini)
            temperature: Sampling temperature

        Returns:
            BaseChatModel: Shared chat model handle
        """
        key = (provider, round(float(temperature), 3))
        model = self._models.get(key)
        if model is not None:
            return model
        with self._lock:
            model = self._models.get(key)
            if model is None:
                model = self._build(provider, key[1])
                self._models[key] = model
                logger.info(
                    f"{__name__}:get - Created chat model",
                    extra={"provider": provider.value, "temperature": key[1]},
                )
        return model

    def clear(self) -> None:
        with self._lock:
            self._models.clear()

    def _build(self, provider: Provider, temperature: float) -> BaseChatModel:
        s = self._settings
        if provider is Provider.PRIMARY:
            # Retries disabled so a 429 reaches the invoker and triggers the fallback
            return ChatOpenAI(
                model=s.primary_model,
                base_url=s.primary_base_url,
                api_key=s.primary_api_key or None,
                temperature=temperature,
                timeout=s.request_timeout_seconds,
                max_retries=0,
            )
        return ChatGoogleGenerativeAI(
            model=s.fallback_model,
            google_api_key=s.fallback_api_key or None,
            temperature=temperature,
            timeout=s.request_timeout_seconds,
            max_retries=0,
        )
