"""
Compilation repair loop.

Exports: RepairLoopController, Debouncer, CompileState, CompileOutcome, CompileStatus, CompilationAttempt
"""

from draftsmith.core.compilation.debouncer import Debouncer
from draftsmith.core.compilation.models import (
    CompilationAttempt,
    CompileOutcome,
    CompileState,
    CompileStatus,
)
from draftsmith.core.compilation.repair_loop import RepairLoopController

__all__ = [
    "CompilationAttempt",
    "CompileOutcome",
    "CompileState",
    "CompileStatus",
    "Debouncer",
    "RepairLoopController",
]
