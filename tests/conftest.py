"""
Pytest Configuration and Shared Fixtures

Provides reusable fixtures for unit and integration tests.
"""

import os
from typing import Any

import pytest

from artifact_eval.config import get_settings
from artifact_eval.evaluation import BaseEvaluator, CompositeEvaluator, reset_evaluator
from artifact_eval.models import EvalConfig, EvalResult

# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure pytest."""
    os.environ["ENVIRONMENT"] = "development"
    os.environ["LOG_LEVEL"] = "DEBUG"
    os.environ["LOG_FORMAT"] = "text"


def pytest_collection_modifyitems(config, items):
    """Modify test items during collection."""
    # Auto-mark tests based on path
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


# ============================================================================
# Isolation Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def isolate_shared_state():
    """Drop the shared evaluator and cached settings around each test."""
    reset_evaluator()
    get_settings.cache_clear()
    yield
    reset_evaluator()
    get_settings.cache_clear()


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def eval_config() -> EvalConfig:
    """Default evaluation config."""
    return EvalConfig()


@pytest.fixture
def strict_config() -> EvalConfig:
    """Strict evaluation config."""
    return EvalConfig(strict_mode=True)


@pytest.fixture
def composite_evaluator(eval_config) -> CompositeEvaluator:
    """Composite evaluator with all built-in dimensions."""
    return CompositeEvaluator(eval_config)


# ============================================================================
# Sample Artifact Fixtures
# ============================================================================

@pytest.fixture
def sample_roadmap() -> dict[str, Any]:
    """Create a complete roadmap artifact."""
    return {
        "title": "Mobile Banking Launch Roadmap",
        "timeColumns": ["Q1 2025", "Q2 2025", "Q3 2025", "Q4 2025"],
        "data": [
            {"title": "Core Platform", "isSwimlane": True, "entity": "Engineering"},
            {
                "title": "Security review",
                "isSwimlane": False,
                "entity": "Engineering",
                "bar": {"startCol": 1, "endCol": 3, "color": "priority-red"},
            },
        ],
        "legend": [{"color": "priority-red", "label": "Critical path"}],
        "researchAnalysis": {
            "summary": "The mobile banking launch is planned for Q3 2025.",
            "themes": ["security", "onboarding"],
        },
    }


@pytest.fixture
def sample_slides() -> dict[str, Any]:
    """Create a slide deck artifact."""
    return {
        "title": "Quarterly Business Review",
        "slides": [
            {"title": "Overview", "content": ["Revenue grew 12% in 2024", "Churn fell"]},
            {"title": "Pipeline", "content": ["Three new enterprise deals"]},
            {"title": "Next steps", "content": ["Expand the sales team"]},
        ],
    }


@pytest.fixture
def sample_document() -> dict[str, Any]:
    """Create a document artifact."""
    return {
        "title": "Market Entry Assessment",
        "sections": [
            {"heading": "Summary", "content": "The market is growing steadily."},
            {"heading": "Risks", "content": "Regulatory approval may take a year."},
        ],
    }


@pytest.fixture
def ground_truth_text() -> str:
    """Reference text for correctness checks."""
    return "In 2024 the company revenue increased significantly across all regions."


# ============================================================================
# Evaluator Factories
# ============================================================================

class FixedScoreEvaluator(BaseEvaluator):
    """Evaluator that always returns the same score."""

    def __init__(self, dimension: str, score: float, config: EvalConfig | None = None):
        super().__init__(dimension, config)
        self.score = score
        self.calls = 0

    def evaluate(self, output, context=None) -> EvalResult:
        self.calls += 1
        return self._create_result(self.score, {"fixed": True})


class RaisingEvaluator(BaseEvaluator):
    """Evaluator that always raises."""

    def __init__(self, dimension: str, error: Exception):
        super().__init__(dimension)
        self.error = error

    def evaluate(self, output, context=None) -> EvalResult:
        raise self.error


@pytest.fixture
def fixed_evaluator():
    """Factory fixture for evaluators with a fixed score."""
    def _create(dimension: str, score: float, config: EvalConfig | None = None):
        return FixedScoreEvaluator(dimension, score, config)

    return _create


@pytest.fixture
def raising_evaluator():
    """Factory fixture for evaluators that raise."""
    def _create(dimension: str, error: Exception | None = None):
        return RaisingEvaluator(dimension, error or RuntimeError("boom"))

    return _create
