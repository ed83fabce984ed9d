"""
Context retrieval for generation requests.

Exports: ContextRetriever
"""

from .context_retriever import ContextRetriever

__all__ = ["ContextRetriever"]
