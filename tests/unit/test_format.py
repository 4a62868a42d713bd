"""
Unit Tests for Format Evaluator

Tests JSON validity, schema fragments and content-type structure.
"""

import json

import pytest

from artifact_eval.evaluation import FormatEvaluator
from artifact_eval.evaluation.format import json_type_name
from artifact_eval.models import EvalStatus


@pytest.fixture
def evaluator():
    """Format evaluator with default config."""
    return FormatEvaluator()


class TestJsonTypeName:
    """Tests for JSON type naming."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "null"),
            (True, "boolean"),
            (3, "integer"),
            (3.5, "number"),
            ("x", "string"),
            ([], "array"),
            ({}, "object"),
        ],
    )
    def test_type_names(self, value, expected):
        """Test decoded values map to JSON type names."""
        assert json_type_name(value) == expected


class TestFormatEvaluator:
    """Tests for format scoring."""

    def test_invalid_json(self, evaluator):
        """Test unparseable text scores zero."""
        result = evaluator.evaluate("not json")

        assert result.score == 0.0
        assert result.status == EvalStatus.FAIL
        assert result.details["is_valid_json"] is False
        assert result.details["format_issues"] == ["Output is not valid JSON"]

    @pytest.mark.parametrize("output", [42, None, 3.5])
    def test_non_container_values_invalid(self, evaluator, output):
        """Test in-memory scalars are not JSON artifacts."""
        result = evaluator.evaluate(output)

        assert result.details["is_valid_json"] is False
        assert result.score == 0.0

    def test_plain_object(self, evaluator):
        """Test valid JSON with no schema or content type."""
        result = evaluator.evaluate({"anything": 1})

        assert result.details["is_valid_json"] is True
        assert result.details["schema_valid"] is None
        assert result.details["structure_valid"] is True
        assert result.score == pytest.approx(1.0)

    def test_roadmap_json_string(self, evaluator, sample_roadmap):
        """Test serialized roadmap with its expected fields."""
        result = evaluator.evaluate(json.dumps(sample_roadmap), {"content_type": "roadmap"})

        assert result.score == pytest.approx(1.0)
        assert result.details["format_issues"] == []

    def test_missing_structure_field(self, evaluator):
        """Test roadmap missing its data field."""
        result = evaluator.evaluate({"title": "x", "timeColumns": []}, {"content_type": "roadmap"})

        assert result.details["structure_valid"] is False
        assert result.details["format_issues"] == ["Missing expected field for roadmap: data"]
        assert result.score == pytest.approx(0.55)

    def test_schema_type_mismatch(self, evaluator):
        """Test schema type check."""
        result = evaluator.evaluate([1, 2], {"schema": {"type": "object"}})

        assert result.details["schema_valid"] is False
        assert result.details["format_issues"] == ["Expected type object, got array"]
        assert result.score == pytest.approx(0.55)

    def test_schema_required_field(self, evaluator):
        """Test schema required fields."""
        result = evaluator.evaluate(
            '{"title": "Deck"}', {"schema": {"type": "object", "required": ["title", "slides"]}}
        )

        assert result.details["format_issues"] == ["Missing required field: slides"]
        assert result.score == pytest.approx(0.55)

    def test_array_lacks_structure_fields(self, evaluator):
        """Test an array carries none of a content type's expected fields."""
        result = evaluator.evaluate([], {"content_type": "roadmap"})

        assert result.details["structure_valid"] is False
        assert result.details["format_issues"] == [
            "Missing expected field for roadmap: title",
            "Missing expected field for roadmap: timeColumns",
            "Missing expected field for roadmap: data",
        ]
        assert result.score == pytest.approx(0.35)

    def test_array_lacks_required_fields(self, evaluator):
        """Test schema required fields are missing from an array."""
        result = evaluator.evaluate("[1,2]", {"schema": {"required": ["title"]}})

        assert result.details["schema_valid"] is False
        assert result.details["format_issues"] == ["Missing required field: title"]
        assert result.score == pytest.approx(0.55)

    def test_number_schema_accepts_integer(self, evaluator):
        """Test integers satisfy a number type."""
        result = evaluator.evaluate("42", {"schema": {"type": "number"}})

        assert result.details["schema_valid"] is True
        assert result.score == pytest.approx(1.0)

    def test_expected_format_fallback(self, evaluator):
        """Test expectedFormat selects structure fields when no content type is given."""
        result = evaluator.evaluate({"title": "x"}, {"expectedFormat": "slides"})

        assert result.details["format_issues"] == ["Missing expected field for slides: slides"]

    def test_many_issues_floor_at_zero(self, evaluator):
        """Test penalties cannot push the score below zero."""
        result = evaluator.evaluate(
            {},
            {
                "content_type": "roadmap",
                "schema": {"required": ["a", "b", "c", "d", "e"]},
            },
        )

        assert len(result.details["format_issues"]) == 8
        assert result.score == 0.0
