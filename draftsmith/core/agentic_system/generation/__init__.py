"""
Markup generation agent.

Exports: GenerationKind, GenerationRequest, GenerationResult, MarkupTarget
(GenerationAgent lives in .agent)
"""

from draftsmith.core.agentic_system.generation.schema import (
    GenerationKind,
    GenerationRequest,
    GenerationResult,
    MarkupTarget,
)

__all__ = [
    "GenerationKind",
    "GenerationRequest",
    "GenerationResult",
    "MarkupTarget",
]
