"""
Composite evaluation across dimensions.

Runs every configured dimension evaluator over one artifact, converts
evaluator exceptions into ``error`` results, and aggregates the results
into a single verdict.
"""

import threading
import time
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Protocol, runtime_checkable

from artifact_eval.config import get_settings
from artifact_eval.models import (
    CompositeVerdict,
    EvalConfig,
    EvalDimension,
    EvalResult,
    EvalStatus,
    EvalSummary,
    WeakDimension,
    dimension_name,
)
from artifact_eval.utils import get_logger

from .base import get_context_value
from .completeness import CompletenessEvaluator
from .consistency import ConsistencyEvaluator
from .correctness import CorrectnessEvaluator
from .format import FormatEvaluator
from .relevance import RelevanceEvaluator

logger = get_logger(__name__)

WEAKEST_DIMENSIONS = 2


@runtime_checkable
class Evaluator(Protocol):
    """Anything that scores one dimension of an artifact."""

    def evaluate(self, output: Any, context: Mapping[str, Any] | None = None) -> EvalResult:
        ...


class CompositeEvaluator:
    """Runs a registry of dimension evaluators and aggregates their results."""

    def __init__(self, config: EvalConfig | None = None):
        """
        Initialize composite evaluator.

        Args:
            config: Threshold, strict mode and dimensions to run. Defaults to
                ``EvalConfig()``.
        """
        self.config = config or EvalConfig()
        self._evaluators: dict[str, Evaluator] = {}
        self._dimensions: list[str] = list(self.config.dimensions)
        self._initialize_evaluators()

    def _initialize_evaluators(self) -> None:
        self._evaluators[EvalDimension.CORRECTNESS.value] = CorrectnessEvaluator(self.config)
        self._evaluators[EvalDimension.COMPLETENESS.value] = CompletenessEvaluator(self.config)
        self._evaluators[EvalDimension.CONSISTENCY.value] = ConsistencyEvaluator(self.config)
        self._evaluators[EvalDimension.RELEVANCE.value] = RelevanceEvaluator(self.config)
        self._evaluators[EvalDimension.FORMAT.value] = FormatEvaluator(self.config)

    @property
    def dimensions(self) -> list[str]:
        """Dimensions evaluated, in order."""
        return list(self._dimensions)

    def get_evaluator(self, dimension: EvalDimension | str) -> Evaluator | None:
        return self._evaluators.get(dimension_name(dimension))

    def set_evaluator(self, dimension: EvalDimension | str, evaluator: Evaluator) -> None:
        """
        Add or replace the evaluator for a dimension.

        A dimension that is not already configured is appended to the
        evaluation order.
        """
        if not callable(getattr(evaluator, "evaluate", None)):
            raise TypeError(
                f"Evaluator for '{dimension_name(dimension)}' must define evaluate(output, context)"
            )
        name = dimension_name(dimension)
        self._evaluators[name] = evaluator
        if name not in self._dimensions:
            self._dimensions.append(name)
        logger.debug(f"Registered evaluator for dimension: {name}")

    def evaluate(self, output: Any, context: Mapping[str, Any] | None = None) -> CompositeVerdict:
        """
        Evaluate an artifact across all configured dimensions.

        Args:
            output: Artifact under test (text or parsed JSON)
            context: Optional reference material shared by all evaluators

        Returns:
            Composite verdict

        Note:
            Only ``fail`` and ``partial`` results move the overall status.
            ``error`` results count as 0 in ``overall_score`` but leave the
            status alone, so a run where every evaluator raised reports
            ``pass`` with a score of 0.0. Check ``summary.errors`` before
            trusting ``passed``.
        """
        context = context or {}
        content_type = get_context_value(context, "content_type", "contentType")
        log = logger.with_context(content_type=content_type) if content_type else logger
        start_time = time.perf_counter()

        planned: list[tuple[str, Evaluator]] = []
        skipped: list[str] = []
        for dimension in self._dimensions:
            evaluator = self._evaluators.get(dimension)
            if evaluator is None:
                log.warning(f"No evaluator registered for dimension '{dimension}', skipping")
                skipped.append(dimension)
            else:
                planned.append((dimension, evaluator))

        if self.config.parallel and len(planned) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                outcomes = list(pool.map(
                    lambda item: self._run_evaluator(item[0], item[1], output, context),
                    planned,
                ))
        else:
            outcomes = [self._run_evaluator(d, e, output, context) for d, e in planned]

        results = {dimension: result for (dimension, _), result in zip(planned, outcomes)}
        for dimension, result in results.items():
            log.debug(f"{dimension}: {result.status.value} ({result.score:.3f})")

        verdict = self._aggregate(results, skipped)

        duration_ms = (time.perf_counter() - start_time) * 1000
        log.log_evaluation(
            verdict.overall_status.value, verdict.overall_score, len(results)
        )
        log.log_performance("composite_evaluate", duration_ms, dimensions=len(results))
        return verdict

    def _run_evaluator(
        self,
        dimension: str,
        evaluator: Evaluator,
        output: Any,
        context: Mapping[str, Any],
    ) -> EvalResult:
        try:
            result = evaluator.evaluate(output, context)
            if not isinstance(result, EvalResult):
                result = EvalResult.model_validate(result)
            return result
        except Exception as e:
            logger.log_error_with_context(
                f"Evaluator for '{dimension}' raised", e, dimension=dimension
            )
            return EvalResult(
                dimension=dimension,
                status=EvalStatus.ERROR,
                score=0.0,
                message=f"Evaluation error: {e}",
                details={"error": str(e), "error_type": type(e).__name__},
                confidence=0.0,
            )

    def _aggregate(self, results: dict[str, EvalResult], skipped: list[str]) -> CompositeVerdict:
        scores = [r.score for r in results.values()]
        overall_score = sum(scores) / len(scores) if scores else 0.0

        statuses = {r.status for r in results.values()}
        if not results:
            overall_status = EvalStatus.SKIP
        elif EvalStatus.FAIL in statuses:
            overall_status = EvalStatus.FAIL if self.config.strict_mode else EvalStatus.PARTIAL
        elif EvalStatus.PARTIAL in statuses:
            overall_status = EvalStatus.PARTIAL
        else:
            overall_status = EvalStatus.PASS

        return CompositeVerdict(
            overall_status=overall_status,
            overall_score=overall_score,
            passed=overall_status == EvalStatus.PASS,
            results=results,
            summary=self._generate_summary(results, skipped),
        )

    def _generate_summary(self, results: dict[str, EvalResult], skipped: list[str]) -> EvalSummary:
        values = list(results.values())
        # sorted() is stable, so equal scores keep evaluation order
        weakest = sorted(results.items(), key=lambda item: item[1].score)[:WEAKEST_DIMENSIONS]

        return EvalSummary(
            passed=sum(1 for r in values if r.status == EvalStatus.PASS),
            failed=sum(1 for r in values if r.status == EvalStatus.FAIL),
            partial=sum(1 for r in values if r.status == EvalStatus.PARTIAL),
            errors=sum(1 for r in values if r.status == EvalStatus.ERROR),
            total=len(values),
            weakest_dimensions=[
                WeakDimension(dimension=dimension, score=result.score)
                for dimension, result in weakest
            ],
            skipped=skipped,
        )


# Shared default instance
_evaluator: CompositeEvaluator | None = None
_evaluator_lock = threading.Lock()


def get_evaluator(config: EvalConfig | None = None) -> CompositeEvaluator:
    """
    Get or create the shared composite evaluator.

    ``config`` only takes effect when the instance is first created; without
    it the defaults come from application settings. Callers that need their
    own thresholds should construct ``CompositeEvaluator(config)`` directly.
    """
    global _evaluator

    with _evaluator_lock:
        if _evaluator is None:
            _evaluator = CompositeEvaluator(config or EvalConfig.from_settings(get_settings()))
            logger.debug(f"Created shared evaluator for dimensions: {_evaluator.dimensions}")
        elif config is not None and config != _evaluator.config:
            logger.warning("Shared evaluator already exists; ignoring new config")
        return _evaluator


def reset_evaluator() -> None:
    """Discard the shared evaluator (for test isolation)."""
    global _evaluator

    with _evaluator_lock:
        _evaluator = None


def evaluate_output(output: Any, context: Mapping[str, Any] | None = None) -> CompositeVerdict:
    """Evaluate an artifact with the shared evaluator."""
    return get_evaluator().evaluate(output, context)
