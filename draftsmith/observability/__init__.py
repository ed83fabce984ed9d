"""
Observability module.

Provides structured logging and correlation ID tracking.
"""

from draftsmith.observability.correlation import get_correlation_id, set_correlation_id
from draftsmith.observability.logger import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "set_correlation_id"]
