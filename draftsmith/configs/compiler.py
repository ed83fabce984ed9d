"""
Compilation service and repair loop configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Compile -> repair loop configuration
"""

from pydantic import Field

from draftsmith.configs.base import BaseSettings, settings_config


class CompilerSettings(BaseSettings):
    """External LaTeX compiler endpoint and repair loop limits."""

    model_config = settings_config("COMPILER_")

    url: str = Field(
        default="https://latexcompiler.onrender.com/compile",
        description="Endpoint accepting raw LaTeX as text/plain and returning PDF bytes",
    )
    timeout_seconds: float = Field(default=60.0)
    transport_retries: int = Field(
        default=3,
        ge=1,
        description="Attempts on connection/timeout errors (not on compile diagnostics)",
    )

    debounce_seconds: float = Field(default=1.5, ge=0.0)
    error_excerpt_chars: int = Field(
        default=1500,
        description="Diagnostic characters passed to the repair prompt",
    )
    max_auto_repairs: int = Field(
        default=1,
        ge=0,
        le=1,
        description="Automatic repairs per failure episode (0 disables them)",
    )
    max_repair_attempts: int = Field(
        default=3,
        ge=1,
        description="Hard ceiling on repairs (automatic + manual) per failure episode",
    )
    controller_cache_size: int = Field(
        default=256,
        ge=1,
        description="Controllers kept before idle ones are evicted; failing projects are always kept",
    )
