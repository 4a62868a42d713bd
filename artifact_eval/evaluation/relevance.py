"""Relevance: how closely an artifact tracks the user's prompt."""

import re
from collections import Counter
from collections.abc import Mapping
from typing import Any

from artifact_eval.models import EvalConfig, EvalDimension, EvalResult

from .base import BaseEvaluator, as_list, get_context_value
from .text import to_text

STOP_WORDS = frozenset({
    "this", "that", "these", "those", "with", "from", "have", "been",
    "were", "what", "when", "where", "which", "while", "would", "could",
    "should", "about", "their", "there", "they", "will", "your", "more",
})

NON_WORD = re.compile(r"[^\w\s]")
MIN_CONCEPT_LENGTH = 3
OFF_TOPIC_MIN_COUNT = 3
OFF_TOPIC_LIMIT = 5
OFF_TOPIC_PENALTY = 0.05


def extract_concepts(text: str) -> list[str]:
    """Lowercase content words (longer than 3 chars, no stop words) in order."""
    tokens = NON_WORD.sub(" ", text.lower()).split()
    return [t for t in tokens if len(t) > MIN_CONCEPT_LENGTH and t not in STOP_WORDS]


class RelevanceEvaluator(BaseEvaluator):
    """
    Scores overlap between prompt concepts and output concepts.

    score = 0.4 * prompt coverage + 0.4 * topic alignment, blended 0.8/0.2
    with keyword matches when keywords are given, minus 0.05 per frequent
    off-topic concept.
    """

    def __init__(self, config: EvalConfig | None = None):
        super().__init__(EvalDimension.RELEVANCE, config)

    def evaluate(self, output: Any, context: Mapping[str, Any] | None = None) -> EvalResult:
        user_prompt = get_context_value(context, "user_prompt", "userPrompt")
        keywords = as_list(get_context_value(context, "keywords"))
        details: dict[str, Any] = {
            "prompt_coverage": 0.0,
            "keyword_matches": 0.0,
            "topic_alignment": 0.0,
            "off_topic_content": [],
        }

        if not user_prompt:
            return self._create_result(
                0.5, details, "Cannot evaluate relevance without user prompt", confidence=0.3
            )

        output_text = to_text(output)
        prompt_concepts = extract_concepts(str(user_prompt))
        output_concepts = extract_concepts(output_text)

        details["prompt_coverage"] = self._calculate_coverage(prompt_concepts, output_concepts)
        details["topic_alignment"] = self._calculate_topic_alignment(
            prompt_concepts, output_concepts
        )
        details["off_topic_content"] = self._identify_off_topic_content(
            prompt_concepts, output_concepts
        )

        score = details["prompt_coverage"] * 0.4 + details["topic_alignment"] * 0.4
        if keywords:
            lowered = output_text.lower()
            matches = sum(1 for k in keywords if str(k).lower() in lowered)
            details["keyword_matches"] = matches / len(keywords)
            score = score * 0.8 + details["keyword_matches"] * 0.2

        score -= len(details["off_topic_content"]) * OFF_TOPIC_PENALTY
        return self._create_result(max(0.0, min(1.0, score)), details)

    def _calculate_coverage(self, prompt_concepts: list[str], output_concepts: list[str]) -> float:
        """Fraction of prompt concepts present in the output."""
        if not prompt_concepts:
            return 1.0
        output_set = set(output_concepts)
        covered = sum(1 for c in prompt_concepts if c in output_set)
        return covered / len(prompt_concepts)

    def _calculate_topic_alignment(
        self, prompt_concepts: list[str], output_concepts: list[str]
    ) -> float:
        """Fraction of output concepts that come from the prompt."""
        if not output_concepts:
            return 0.0
        prompt_set = set(prompt_concepts)
        aligned = sum(1 for c in output_concepts if c in prompt_set)
        return aligned / len(output_concepts)

    def _identify_off_topic_content(
        self, prompt_concepts: list[str], output_concepts: list[str]
    ) -> list[str]:
        prompt_set = set(prompt_concepts)
        counts = Counter(output_concepts)
        off_topic = [
            concept for concept, count in counts.items()
            if concept not in prompt_set and count > OFF_TOPIC_MIN_COUNT
        ]
        return off_topic[:OFF_TOPIC_LIMIT]
