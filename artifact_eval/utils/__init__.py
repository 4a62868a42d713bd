"""Shared utilities."""

from .logger import (
    clear_evaluation_context,
    get_logger,
    set_evaluation_context,
)

__all__ = [
    "get_logger",
    "set_evaluation_context",
    "clear_evaluation_context",
]
