"""Base class for dimension evaluators."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from artifact_eval.models import EvalConfig, EvalDimension, EvalResult, EvalStatus, dimension_name

# Confidence used when an evaluator does not state one
DEFAULT_CONFIDENCE = 0.8


def get_context_value(context: Mapping[str, Any] | None, *keys: str) -> Any:
    """
    Look up the first present key in an evaluation context.

    Context keys arrive either snake_case or in the camelCase spelling used by
    the content pipeline, so callers pass both.
    """
    if not context:
        return None
    for key in keys:
        if key in context and context[key] is not None:
            return context[key]
    return None


def as_list(value: Any) -> list[Any]:
    """Treat a bare string or mapping in a list-valued context key as a single item."""
    if value is None:
        return []
    if isinstance(value, (str, Mapping)):
        return [value]
    return list(value)


class BaseEvaluator(ABC):
    """Base class for all dimension evaluators."""

    def __init__(self, dimension: EvalDimension | str, config: EvalConfig | None = None):
        """
        Initialize evaluator.

        Args:
            dimension: Dimension this evaluator scores
            config: Evaluation config (threshold, strict mode, dimensions)
        """
        self.dimension = dimension_name(dimension)
        self.config = config or EvalConfig()

    @property
    def threshold(self) -> float:
        return self.config.passing_threshold

    @abstractmethod
    def evaluate(self, output: Any, context: Mapping[str, Any] | None = None) -> EvalResult:
        """
        Evaluate an artifact.

        Args:
            output: Artifact under test (text or parsed JSON)
            context: Optional reference material (ground truth, requirements,
                user prompt, previous outputs, ...)

        Returns:
            Evaluation result
        """

    def _status_for(self, score: float) -> EvalStatus:
        if score >= self.threshold:
            return EvalStatus.PASS
        if score >= self.threshold * 0.5:
            return EvalStatus.PARTIAL
        return EvalStatus.FAIL

    def _default_message(self, status: EvalStatus, score: float) -> str:
        pct = f"{score * 100:.1f}%"
        if status == EvalStatus.PASS:
            return f"{self.dimension} evaluation passed (score: {pct})"
        if status == EvalStatus.PARTIAL:
            return f"{self.dimension} evaluation partially passed (score: {pct})"
        if status == EvalStatus.FAIL:
            return f"{self.dimension} evaluation failed (score: {pct})"
        return f"{self.dimension} evaluation completed"

    def _create_result(
        self,
        score: float,
        details: dict[str, Any] | None = None,
        message: str | None = None,
        confidence: float | None = None,
    ) -> EvalResult:
        """Helper to create an evaluation result with status derived from the threshold."""
        score = max(0.0, min(1.0, score))
        status = self._status_for(score)
        return EvalResult(
            dimension=self.dimension,
            status=status,
            score=score,
            message=message or self._default_message(status, score),
            details=details or {},
            confidence=DEFAULT_CONFIDENCE if confidence is None else confidence,
        )
