"""Consistency: numeric and logical agreement within and across outputs."""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from artifact_eval.models import EvalConfig, EvalDimension, EvalResult

from .base import BaseEvaluator, as_list, get_context_value
from .text import split_sentences, to_text, words

# "growth is 10%", "growth = 10", "growth: 10%"
KEY_VALUE_PATTERN = re.compile(r"(\w+)\s*(?:is|=|:)\s*(\d+(?:\.\d+)?%?)", re.IGNORECASE)
# "10% growth"
VALUE_KEY_PATTERN = re.compile(r"(\d+(?:\.\d+)?%?)\s+(\w+)", re.IGNORECASE)

OPPOSITES = (
    ("increase", "decrease"),
    ("grow", "shrink"),
    ("more", "less"),
    ("higher", "lower"),
    ("better", "worse"),
)

MIN_STATEMENT_LENGTH = 10
MIN_SUBJECT_WORD_LENGTH = 4
NUMERIC_CONFLICT_PENALTY = 0.1
LOGICAL_CONFLICT_PENALTY = 0.15


def extract_numbers(text: str) -> list[tuple[str, str]]:
    """Extract (key, value) numeric pairs in match order, keys lowercased."""
    pairs = [(k.lower(), v) for k, v in KEY_VALUE_PATTERN.findall(text)]
    pairs.extend((k.lower(), v) for v, k in VALUE_KEY_PATTERN.findall(text))
    return pairs


class ConsistencyEvaluator(BaseEvaluator):
    """
    Scores internal consistency and, when ``previous_outputs`` are given,
    agreement with earlier outputs.

    Internal: -0.1 per key recorded with two different values, -0.15 per
    pair of statements sharing a subject word but using opposite terms.
    Cross-output: -0.1 per key whose value differs from a previous output.
    Each check is floored at 0; the score averages both when present.
    """

    def __init__(self, config: EvalConfig | None = None):
        super().__init__(EvalDimension.CONSISTENCY, config)

    def evaluate(self, output: Any, context: Mapping[str, Any] | None = None) -> EvalResult:
        previous_outputs = as_list(
            get_context_value(context, "previous_outputs", "previousOutputs")
        )
        text = to_text(output)

        internal_score, contradictions = self._check_internal_consistency(text)
        details: dict[str, Any] = {
            "internal_consistency": internal_score,
            "cross_output_consistency": None,
            "contradictions": contradictions,
        }

        score = internal_score
        if previous_outputs:
            cross_score, cross_contradictions = self._check_cross_consistency(
                text, previous_outputs
            )
            details["cross_output_consistency"] = cross_score
            details["contradictions"].extend(cross_contradictions)
            score = (internal_score + cross_score) / 2

        return self._create_result(score, details)

    def _check_internal_consistency(self, text: str) -> tuple[float, list[dict[str, str]]]:
        contradictions: list[dict[str, str]] = []
        score = 1.0

        conflicts = self._find_number_conflicts(extract_numbers(text))
        contradictions.extend({"type": "numerical", "message": c} for c in conflicts)
        score -= len(conflicts) * NUMERIC_CONFLICT_PENALTY

        logical = self._find_contradictions(split_sentences(text, MIN_STATEMENT_LENGTH))
        contradictions.extend({"type": "logical", "message": c} for c in logical)
        score -= len(logical) * LOGICAL_CONFLICT_PENALTY

        return max(0.0, score), contradictions

    def _check_cross_consistency(
        self, text: str, previous_outputs: Sequence[Any]
    ) -> tuple[float, list[dict[str, str]]]:
        contradictions: list[dict[str, str]] = []
        score = 1.0
        current = dict(extract_numbers(text))

        for previous in previous_outputs:
            earlier = dict(extract_numbers(to_text(previous)))
            for key, value in current.items():
                if key in earlier and earlier[key] != value:
                    contradictions.append({
                        "type": "cross_output",
                        "message": f'Inconsistent value for "{key}": {value} vs {earlier[key]}',
                    })
                    score -= NUMERIC_CONFLICT_PENALTY

        return max(0.0, score), contradictions

    def _find_number_conflicts(self, pairs: list[tuple[str, str]]) -> list[str]:
        conflicts = []
        seen: dict[str, str] = {}
        for key, value in pairs:
            if key in seen and seen[key] != value:
                conflicts.append(f'Conflicting values for "{key}": {seen[key]} vs {value}')
            seen[key] = value
        return conflicts

    def _find_contradictions(self, statements: list[str]) -> list[str]:
        contradictions = []
        lowered = [s.lower() for s in statements]

        for i, first in enumerate(lowered):
            for second in lowered[i + 1:]:
                for positive, negative in OPPOSITES:
                    opposed = (positive in first and negative in second) or (
                        negative in first and positive in second
                    )
                    if not opposed:
                        continue
                    second_words = set(words(second, MIN_SUBJECT_WORD_LENGTH))
                    shared = [
                        w for w in dict.fromkeys(words(first, MIN_SUBJECT_WORD_LENGTH))
                        if w in second_words
                    ]
                    if shared:
                        contradictions.append(
                            f'Potential contradiction about "{shared[0]}": "{positive}" vs "{negative}"'
                        )

        return contradictions
