"""Automated quality evaluation for generated roadmaps, slide decks and documents."""

from artifact_eval.evaluation import (
    CompositeEvaluator,
    EvaluationPipeline,
    evaluate_output,
    get_evaluator,
    reset_evaluator,
)
from artifact_eval.models import (
    CompositeVerdict,
    EvalConfig,
    EvalDimension,
    EvalResult,
    EvalStatus,
)

__version__ = "0.1.0"

__all__ = [
    "CompositeEvaluator",
    "EvaluationPipeline",
    "evaluate_output",
    "get_evaluator",
    "reset_evaluator",
    "CompositeVerdict",
    "EvalConfig",
    "EvalDimension",
    "EvalResult",
    "EvalStatus",
]
