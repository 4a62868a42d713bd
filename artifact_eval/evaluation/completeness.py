"""Completeness: coverage of required structural elements."""

from collections.abc import Mapping
from typing import Any

from artifact_eval.models import EvalConfig, EvalDimension, EvalResult, Requirement
from artifact_eval.utils import get_logger

from .base import BaseEvaluator, get_context_value
from .content_types import get_default_requirements
from .text import parse_json

logger = get_logger(__name__)

_TYPE_CHECKS = {
    "array": lambda v: isinstance(v, list),
    "object": lambda v: isinstance(v, dict),
    "string": lambda v: isinstance(v, str),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
}


def resolve_path(obj: Any, path: str) -> Any:
    """
    Resolve a dotted path against nested dicts and lists.

    ``"slides[].content"`` reads ``content`` of the first slide. Returns
    ``None`` when any segment is missing.
    """
    current = obj
    for part in path.replace("[]", ".0").split("."):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(part)
        elif isinstance(current, list) and part.isdigit():
            index = int(part)
            current = current[index] if index < len(current) else None
        else:
            return None
    return current


class CompletenessEvaluator(BaseEvaluator):
    """Scores the fraction of required elements present in a structured artifact."""

    def __init__(self, config: EvalConfig | None = None):
        super().__init__(EvalDimension.COMPLETENESS, config)

    def evaluate(self, output: Any, context: Mapping[str, Any] | None = None) -> EvalResult:
        explicit = get_context_value(context, "requirements")
        schema = get_context_value(context, "schema")
        content_type = get_context_value(context, "content_type", "contentType")
        details: dict[str, Any] = {
            "required_elements": 0,
            "present_elements": 0,
            "missing_elements": [],
        }

        invalid: list[str] = []
        if explicit is not None:
            requirements, invalid = self._coerce_requirements(explicit)
        else:
            requirements = list(get_default_requirements(content_type))

        if not requirements and not invalid:
            return self._create_result(
                1.0, details, "No requirements specified for completeness check", confidence=0.4
            )

        artifact = output
        if isinstance(output, str):
            artifact, _ = parse_json(output)

        details["required_elements"] = len(requirements) + len(invalid)
        for requirement in requirements:
            if self.check_requirement(artifact, requirement):
                details["present_elements"] += 1
            else:
                details["missing_elements"].append(requirement.name)

        # Unusable descriptors count as unmet
        details["missing_elements"].extend(invalid)

        if schema:
            details["schema_compliance"] = self._check_schema_completeness(artifact, schema)

        score = details["present_elements"] / details["required_elements"]
        return self._create_result(score, details)

    def check_requirement(self, artifact: Any, requirement: Requirement) -> bool:
        """Check that a requirement's value exists, has the declared type and minimum length."""
        value = resolve_path(artifact, requirement.path)
        if value is None:
            return False

        type_check = _TYPE_CHECKS.get(requirement.type or "")
        if type_check and not type_check(value):
            return False

        if requirement.min_length and isinstance(value, (list, str)):
            return len(value) >= requirement.min_length

        return True

    def _coerce_requirements(self, raw: Any) -> tuple[list[Requirement], list[str]]:
        """Coerce caller requirements one by one, collecting labels of unusable ones."""
        if isinstance(raw, (str, Mapping)):
            raw = [raw]
        requirements: list[Requirement] = []
        invalid: list[str] = []
        for index, item in enumerate(raw):
            try:
                requirements.append(Requirement.coerce(item))
            except (TypeError, ValueError) as e:
                label = None
                if isinstance(item, Mapping):
                    label = item.get("name") or item.get("path")
                invalid.append(str(label) if label else f"requirement[{index}]")
                logger.warning(f"Ignoring invalid requirement at index {index}: {e}")
        return requirements, invalid

    def _check_schema_completeness(self, artifact: Any, schema: Mapping[str, Any]) -> dict[str, Any]:
        required = list(schema.get("required") or [])
        present = set(artifact.keys()) if isinstance(artifact, Mapping) else set()
        missing = [f for f in required if f not in present]
        return {
            "required_fields": len(required),
            "present_fields": len(required) - len(missing),
            "missing_fields": missing,
        }
