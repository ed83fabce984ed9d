"""
LLM provider configuration settings.

Primary provider is Groq through its OpenAI-compatible endpoint; the fallback
is Google Gemini. API keys are read from the environment only.

Dependencies: pydantic, pydantic_settings
System role: Language-model provider configuration
"""

from pydantic import Field

from draftsmith.configs.base import BaseSettings, settings_config


class LLMSettings(BaseSettings):
    """Primary and fallback chat model configuration."""

    model_config = settings_config("LLM_")

    primary_model: str = Field(default="llama-3.3-70b-versatile")
    primary_base_url: str = Field(default="https://api.groq.com/openai/v1")
    primary_api_key: str = Field(default="", description="Groq API key")

    fallback_model: str = Field(default="gemini-2.5-flash-lite")
    fallback_api_key: str = Field(default="", description="Google API key")

    default_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    request_timeout_seconds: float = Field(default=120.0)
    profile_input_chars: int = Field(
        default=20000,
        description="Maximum document characters sent to profile extraction",
    )
