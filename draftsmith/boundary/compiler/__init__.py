"""
Compilation service boundary.

Exports: LatexCompilerClient
"""

from draftsmith.boundary.compiler.latex_compiler_client import LatexCompilerClient

__all__ = ["LatexCompilerClient"]
