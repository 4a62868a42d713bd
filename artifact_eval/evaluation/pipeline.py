"""Evaluation pipeline: verdicts plus improvement recommendations and batch reports."""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

from artifact_eval.models import CompositeVerdict, utc_timestamp
from artifact_eval.utils import get_logger

from .base import get_context_value
from .composite import CompositeEvaluator, get_evaluator

logger = get_logger(__name__)

DIMENSION_SUGGESTIONS = {
    "correctness": "Review source material and ensure claims are verifiable",
    "completeness": "Ensure all required sections and fields are populated",
    "consistency": "Check for contradictory statements or numbers",
    "relevance": "Focus output more closely on the user prompt",
    "format": "Verify output matches expected schema and structure",
    "coherence": "Improve logical flow between sections",
    "groundedness": "Ensure all statements are grounded in source material",
}
DEFAULT_SUGGESTION = "Review and improve this dimension"


def get_suggestion(dimension: str) -> str:
    """Get the improvement suggestion for a dimension."""
    return DIMENSION_SUGGESTIONS.get(dimension, DEFAULT_SUGGESTION)


class Recommendation(BaseModel):
    """Suggested follow-up for a weak dimension."""

    dimension: str
    score: float
    suggestion: str


class FullEvaluationReport(BaseModel):
    """Verdict for one artifact with recommendations."""

    timestamp: str = Field(default_factory=utc_timestamp)
    content_type: str | None = None
    session_id: str | None = None
    evaluation: CompositeVerdict | None = None
    passed: bool = True
    recommendations: list[Recommendation] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return self.model_dump(mode="json")


class BatchEvaluationReport(BaseModel):
    """Aggregate over several evaluated artifacts."""

    total_count: int = 0
    passed_count: int = 0
    failed_count: int = 0
    pass_rate: float = 0.0
    average_score: float = 0.0
    average_by_dimension: dict[str, float] = Field(default_factory=dict)
    verdicts: list[CompositeVerdict] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return self.model_dump(mode="json")


class EvaluationPipeline:
    """
    Wraps a composite evaluator for generation workflows.

    The pipeline never acts on a verdict; it only attaches recommendations
    so the caller can decide whether to retry, warn or store.
    """

    def __init__(self, evaluator: CompositeEvaluator | None = None, enabled: bool = True):
        """
        Initialize pipeline.

        Args:
            evaluator: Composite evaluator to use (default: shared instance,
                created on first use)
            enabled: When False, evaluation calls are no-ops
        """
        self._evaluator = evaluator
        self.enabled = enabled

    @property
    def evaluator(self) -> CompositeEvaluator:
        if self._evaluator is None:
            self._evaluator = get_evaluator()
        return self._evaluator

    def evaluate(
        self, output: Any, context: Mapping[str, Any] | None = None
    ) -> CompositeVerdict | None:
        """Evaluate an artifact, or return None when the pipeline is disabled."""
        if not self.enabled:
            return None
        return self.evaluator.evaluate(output, context)

    def run_full_evaluation(
        self, output: Any, context: Mapping[str, Any] | None = None
    ) -> FullEvaluationReport:
        """
        Evaluate an artifact and recommend fixes for its weakest dimensions.

        Args:
            output: Artifact under test
            context: Evaluation context; ``content_type`` and ``session_id``
                are copied onto the report

        Returns:
            Report with verdict and recommendations
        """
        report = FullEvaluationReport(
            content_type=get_context_value(context, "content_type", "contentType"),
            session_id=get_context_value(context, "session_id", "sessionId"),
        )
        if not self.enabled:
            return report

        verdict = self.evaluator.evaluate(output, context)
        threshold = self.evaluator.config.passing_threshold
        report.evaluation = verdict
        report.passed = verdict.passed
        report.recommendations = [
            Recommendation(
                dimension=weak.dimension,
                score=weak.score,
                suggestion=get_suggestion(weak.dimension),
            )
            for weak in verdict.summary.weakest_dimensions
            if weak.score < threshold
        ]

        if report.recommendations:
            logger.info(
                f"Evaluation flagged {len(report.recommendations)} weak dimension(s): "
                f"{', '.join(r.dimension for r in report.recommendations)}"
            )
        return report

    def evaluate_batch(
        self,
        outputs: Sequence[Any],
        contexts: Sequence[Mapping[str, Any] | None] | None = None,
    ) -> BatchEvaluationReport:
        """
        Evaluate several artifacts and aggregate the verdicts.

        Args:
            outputs: Artifacts to evaluate
            contexts: Per-artifact contexts (same length as outputs), or None

        Returns:
            Aggregated report
        """
        if contexts is None:
            contexts = [None] * len(outputs)
        if len(contexts) != len(outputs):
            raise ValueError(
                f"Mismatched outputs and contexts: {len(outputs)} vs {len(contexts)}"
            )
        if not self.enabled:
            return BatchEvaluationReport()

        logger.info(f"Starting batch evaluation of {len(outputs)} artifacts")

        verdicts = [self.evaluator.evaluate(o, c) for o, c in zip(outputs, contexts)]

        dimension_scores: dict[str, list[float]] = {}
        for verdict in verdicts:
            for dimension, result in verdict.results.items():
                dimension_scores.setdefault(dimension, []).append(result.score)

        total = len(verdicts)
        passed = sum(1 for v in verdicts if v.passed)
        report = BatchEvaluationReport(
            total_count=total,
            passed_count=passed,
            failed_count=total - passed,
            pass_rate=passed / total if total else 0.0,
            average_score=sum(v.overall_score for v in verdicts) / total if total else 0.0,
            average_by_dimension={
                dimension: sum(scores) / len(scores)
                for dimension, scores in dimension_scores.items()
            },
            verdicts=verdicts,
        )

        logger.info(
            f"Batch evaluation complete: {report.passed_count}/{report.total_count} passed "
            f"(avg score: {report.average_score:.3f})"
        )
        return report
