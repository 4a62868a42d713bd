"""
Multi-dimensional evaluation of generated artifacts.

This module provides:
- Dimension evaluators (correctness, completeness, consistency, relevance, format)
- Composite evaluation with deterministic aggregation
- A shared default evaluator and one-call entry point
- An evaluation pipeline with recommendations and batch reports
"""

from .base import BaseEvaluator, as_list, get_context_value
from .completeness import CompletenessEvaluator
from .composite import (
    CompositeEvaluator,
    Evaluator,
    evaluate_output,
    get_evaluator,
    reset_evaluator,
)
from .consistency import ConsistencyEvaluator
from .correctness import CorrectnessEvaluator
from .format import FormatEvaluator
from .pipeline import (
    BatchEvaluationReport,
    EvaluationPipeline,
    FullEvaluationReport,
    Recommendation,
)
from .relevance import RelevanceEvaluator

__all__ = [
    "BaseEvaluator",
    "Evaluator",
    "CorrectnessEvaluator",
    "CompletenessEvaluator",
    "ConsistencyEvaluator",
    "RelevanceEvaluator",
    "FormatEvaluator",
    "CompositeEvaluator",
    "get_evaluator",
    "reset_evaluator",
    "evaluate_output",
    "get_context_value",
    "as_list",
    "EvaluationPipeline",
    "FullEvaluationReport",
    "BatchEvaluationReport",
    "Recommendation",
]
