"""Shared data models for artifact evaluation."""

from .evaluation import (
    CompositeVerdict,
    EvalConfig,
    EvalDimension,
    EvalResult,
    EvalStatus,
    EvalSummary,
    Requirement,
    WeakDimension,
    dimension_name,
    utc_timestamp,
)

__all__ = [
    "EvalDimension",
    "EvalStatus",
    "EvalResult",
    "EvalConfig",
    "Requirement",
    "WeakDimension",
    "EvalSummary",
    "CompositeVerdict",
    "dimension_name",
    "utc_timestamp",
]
