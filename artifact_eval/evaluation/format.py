"""Format: JSON validity, schema fragment and content-type structure."""

from collections.abc import Mapping
from typing import Any

from artifact_eval.models import EvalConfig, EvalDimension, EvalResult

from .base import BaseEvaluator, get_context_value
from .content_types import get_structure_fields
from .text import parse_json

VALID_JSON_BASE = 0.3
SCHEMA_BONUS = 0.35
STRUCTURE_BONUS = 0.35
ISSUE_PENALTY = 0.1


def json_type_name(value: Any) -> str:
    """JSON type name of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def has_field(parsed: Any, field: str) -> bool:
    """Whether a decoded object carries a field; arrays carry none."""
    return isinstance(parsed, Mapping) and field in parsed


def matches_json_type(value: Any, expected: str) -> bool:
    actual = json_type_name(value)
    if expected == "number":
        return actual in ("number", "integer")
    return actual == expected


class FormatEvaluator(BaseEvaluator):
    """
    Scores format compliance of a JSON artifact.

    Invalid JSON scores 0. Otherwise: 0.3 baseline, +0.35 unless the schema
    fragment failed, +0.35 if the content-type structure is present, minus
    0.1 per recorded issue.
    """

    def __init__(self, config: EvalConfig | None = None):
        super().__init__(EvalDimension.FORMAT, config)

    def evaluate(self, output: Any, context: Mapping[str, Any] | None = None) -> EvalResult:
        schema = get_context_value(context, "schema")
        content_type = get_context_value(
            context, "content_type", "contentType", "expected_format", "expectedFormat"
        )
        details: dict[str, Any] = {
            "is_valid_json": False,
            "schema_valid": None,
            "structure_valid": False,
            "format_issues": [],
        }

        parsed, is_valid = parse_json(output)
        details["is_valid_json"] = is_valid
        if not is_valid:
            details["format_issues"].append("Output is not valid JSON")
            return self._create_result(0.0, details)

        if schema:
            schema_valid, errors = self._validate_schema(parsed, schema)
            details["schema_valid"] = schema_valid
            details["format_issues"].extend(errors)

        structure_valid, issues = self._validate_structure(parsed, content_type)
        details["structure_valid"] = structure_valid
        details["format_issues"].extend(issues)

        score = VALID_JSON_BASE
        if details["schema_valid"] is not False:
            score += SCHEMA_BONUS
        if details["structure_valid"]:
            score += STRUCTURE_BONUS
        score -= len(details["format_issues"]) * ISSUE_PENALTY

        return self._create_result(max(0.0, min(1.0, score)), details)

    def _validate_schema(self, parsed: Any, schema: Mapping[str, Any]) -> tuple[bool, list[str]]:
        errors: list[str] = []

        expected_type = schema.get("type")
        if expected_type and not matches_json_type(parsed, expected_type):
            errors.append(f"Expected type {expected_type}, got {json_type_name(parsed)}")

        required = schema.get("required") or []
        if required and isinstance(parsed, (Mapping, list)):
            for field in required:
                if not has_field(parsed, field):
                    errors.append(f"Missing required field: {field}")

        return not errors, errors

    def _validate_structure(self, parsed: Any, content_type: str | None) -> tuple[bool, list[str]]:
        issues: list[str] = []
        expected_fields = get_structure_fields(content_type)
        if expected_fields and isinstance(parsed, (Mapping, list)):
            for field in expected_fields:
                if not has_field(parsed, field):
                    issues.append(f"Missing expected field for {content_type}: {field}")
        return not issues, issues
