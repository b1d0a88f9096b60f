r"""Utility functions shared by the typedrest modules."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

from typedrest.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    correlation_id,
    get_correlation_id,
    log_structured,
    set_correlation_id,
)
