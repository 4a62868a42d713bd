"""Evaluation data models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utc_timestamp() -> str:
    """Current time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class EvalDimension(str, Enum):
    """Quality dimensions an artifact can be scored on."""

    CORRECTNESS = "correctness"
    COMPLETENESS = "completeness"
    CONSISTENCY = "consistency"
    RELEVANCE = "relevance"
    FORMAT = "format"
    # Declared for custom evaluators; no built-in implementation
    COHERENCE = "coherence"
    GROUNDEDNESS = "groundedness"

    @classmethod
    def builtin(cls) -> tuple["EvalDimension", ...]:
        """Dimensions that ship with an evaluator, in declaration order."""
        return (
            cls.CORRECTNESS,
            cls.COMPLETENESS,
            cls.CONSISTENCY,
            cls.RELEVANCE,
            cls.FORMAT,
        )


class EvalStatus(str, Enum):
    """Per-dimension outcome."""

    PASS = "pass"
    FAIL = "fail"
    PARTIAL = "partial"
    SKIP = "skip"
    ERROR = "error"


def dimension_name(dimension: "EvalDimension | str") -> str:
    """Normalize a dimension enum or name to its string value."""
    if isinstance(dimension, EvalDimension):
        return dimension.value
    return str(dimension)


class EvalResult(BaseModel):
    """Result of scoring one artifact on one dimension."""

    model_config = ConfigDict(frozen=True)

    dimension: str = Field(..., description="Dimension that produced this result")
    status: EvalStatus
    score: float = Field(..., ge=0.0, le=1.0)
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
    confidence: float = Field(default=0.8, ge=0.0, le=1.0)
    timestamp: str = Field(default_factory=utc_timestamp)

    @field_validator("dimension", mode="before")
    @classmethod
    def _normalize_dimension(cls, value: Any) -> str:
        return dimension_name(value)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return self.model_dump(mode="json")

    def equals_ignoring_timestamp(self, other: "EvalResult") -> bool:
        """Compare two results on everything but generation time."""
        return self.model_dump(exclude={"timestamp"}) == other.model_dump(
            exclude={"timestamp"}
        )


class EvalConfig(BaseModel):
    """Evaluator configuration, fixed at construction time."""

    model_config = ConfigDict(frozen=True)

    passing_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    strict_mode: bool = False
    dimensions: tuple[str, ...] = Field(
        default_factory=lambda: tuple(d.value for d in EvalDimension.builtin())
    )
    parallel: bool = False
    max_workers: int = Field(default=5, ge=1)

    @field_validator("dimensions", mode="before")
    @classmethod
    def _normalize_dimensions(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, (str, EvalDimension)):
            value = [value]
        # Keep first occurrence order, drop duplicates
        seen: dict[str, None] = {}
        for item in value:
            seen.setdefault(dimension_name(item), None)
        return tuple(seen)

    @classmethod
    def from_settings(cls, settings: Any) -> "EvalConfig":
        """Build a config from application settings."""
        return cls(
            passing_threshold=settings.eval_passing_threshold,
            strict_mode=settings.eval_strict_mode,
            dimensions=settings.eval_dimension_list,
            parallel=settings.eval_parallel,
            max_workers=settings.eval_max_workers,
        )


class Requirement(BaseModel):
    """A structural element an artifact is expected to contain."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    path: str
    # array, object, string or number; other names only check presence
    type: str | None = None
    min_length: int | None = Field(default=None, alias="minLength", ge=0)

    @classmethod
    def coerce(cls, value: "Requirement | str | dict[str, Any]") -> "Requirement":
        """Accept a requirement, a bare path string, or a descriptor dict."""
        if isinstance(value, Requirement):
            return value
        if isinstance(value, str):
            return cls(name=value, path=value)
        data = dict(value)
        data.setdefault("path", data.get("name"))
        data.setdefault("name", data.get("path"))
        return cls.model_validate(data)


class WeakDimension(BaseModel):
    """A low-scoring dimension surfaced in the summary."""

    dimension: str
    score: float


class EvalSummary(BaseModel):
    """Counts and weakest dimensions of a composite evaluation."""

    passed: int = 0
    failed: int = 0
    partial: int = 0
    errors: int = 0
    total: int = 0
    weakest_dimensions: list[WeakDimension] = Field(default_factory=list)
    skipped: list[str] = Field(
        default_factory=list,
        description="Requested dimensions with no registered evaluator",
    )


class CompositeVerdict(BaseModel):
    """Aggregated multi-dimension verdict."""

    overall_status: EvalStatus
    overall_score: float
    passed: bool
    results: dict[str, EvalResult] = Field(default_factory=dict)
    summary: EvalSummary = Field(default_factory=EvalSummary)
    timestamp: str = Field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return self.model_dump(mode="json")

    def get_failed_dimensions(self) -> list[EvalResult]:
        """Get all results that did not pass."""
        return [r for r in self.results.values() if r.status != EvalStatus.PASS]
