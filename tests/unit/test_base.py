"""
Unit Tests for the Base Evaluator

Tests status thresholds, result construction and context lookup.
"""

import pytest

from artifact_eval.evaluation import as_list, get_context_value
from artifact_eval.models import EvalConfig, EvalStatus


class TestStatusThresholds:
    """Tests for status derived from score and threshold."""

    @pytest.mark.parametrize(
        "score,expected",
        [
            (1.0, EvalStatus.PASS),
            (0.7, EvalStatus.PASS),
            (0.69, EvalStatus.PARTIAL),
            (0.35, EvalStatus.PARTIAL),
            (0.3499, EvalStatus.FAIL),
            (0.0, EvalStatus.FAIL),
        ],
    )
    def test_default_threshold(self, fixed_evaluator, score, expected):
        """Test pass at threshold, partial at half threshold, fail below."""
        result = fixed_evaluator("format", score).evaluate("{}")

        assert result.status == expected

    def test_custom_threshold(self, fixed_evaluator):
        """Test status follows the configured threshold."""
        config = EvalConfig(passing_threshold=0.9)

        assert fixed_evaluator("format", 0.85, config).evaluate("{}").status == EvalStatus.PARTIAL
        assert fixed_evaluator("format", 0.9, config).evaluate("{}").status == EvalStatus.PASS
        assert fixed_evaluator("format", 0.44, config).evaluate("{}").status == EvalStatus.FAIL


class TestCreateResult:
    """Tests for result construction helper."""

    def test_default_message(self, fixed_evaluator):
        """Test generated message includes dimension and percentage."""
        result = fixed_evaluator("relevance", 0.8).evaluate("x")

        assert result.message == "relevance evaluation passed (score: 80.0%)"
        assert result.dimension == "relevance"
        assert result.confidence == 0.8
        assert result.details == {"fixed": True}

    def test_partial_and_failed_messages(self, fixed_evaluator):
        """Test message wording for non-passing statuses."""
        partial = fixed_evaluator("format", 0.5).evaluate("x")
        failed = fixed_evaluator("format", 0.1).evaluate("x")

        assert partial.message == "format evaluation partially passed (score: 50.0%)"
        assert failed.message == "format evaluation failed (score: 10.0%)"

    @pytest.mark.parametrize("raw,clamped", [(1.7, 1.0), (-0.4, 0.0)])
    def test_score_clamped(self, fixed_evaluator, raw, clamped):
        """Test scores outside [0, 1] are clamped."""
        assert fixed_evaluator("format", raw).evaluate("x").score == clamped


class TestContextLookup:
    """Tests for context key lookup."""

    def test_first_present_key_wins(self):
        """Test snake_case and camelCase spellings are both found."""
        assert get_context_value({"userPrompt": "a"}, "user_prompt", "userPrompt") == "a"
        assert get_context_value(
            {"user_prompt": "b", "userPrompt": "a"}, "user_prompt", "userPrompt"
        ) == "b"

    def test_none_values_skipped(self):
        """Test explicit None falls through to the next key."""
        assert get_context_value({"user_prompt": None, "userPrompt": "a"}, "user_prompt", "userPrompt") == "a"

    def test_missing_context(self):
        """Test missing or empty context returns None."""
        assert get_context_value(None, "schema") is None
        assert get_context_value({}, "schema") is None


class TestAsList:
    """Tests for list-valued context normalization."""

    def test_bare_values_wrapped(self):
        """Test strings and mappings become single-item lists."""
        assert as_list("security") == ["security"]
        assert as_list({"content": "x"}) == [{"content": "x"}]

    def test_sequences_and_none(self):
        """Test sequences are copied and None is empty."""
        assert as_list(("a", "b")) == ["a", "b"]
        assert as_list(None) == []
