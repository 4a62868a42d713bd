"""Correctness: verify factual-looking claims against reference material."""

import json
import re
from collections.abc import Mapping
from typing import Any

from artifact_eval.models import EvalConfig, EvalDimension, EvalResult

from .base import BaseEvaluator, as_list, get_context_value
from .text import split_sentences, to_text, words

CLAIM_PATTERNS = (
    re.compile(r"\b\d+%"),  # percentages
    re.compile(r"\b\d{4}\b"),  # years
    re.compile(r"\$[\d,]+"),  # dollar amounts
    re.compile(r"\b(will|must|is|are|was|were)\b", re.IGNORECASE),
    re.compile(r"\b(increased|decreased|grew|fell|rose)\b", re.IGNORECASE),
)

# (positive, negative) polarity pairs
NEGATION_PATTERNS = (
    (re.compile(r"\bis\b"), re.compile(r"\bis not\b|\bisn't\b")),
    (re.compile(r"\bwill\b"), re.compile(r"\bwill not\b|\bwon't\b")),
    (re.compile(r"\bcan\b"), re.compile(r"\bcannot\b|\bcan't\b")),
    (re.compile(r"\bincreased\b"), re.compile(r"\bdecreased\b")),
    (re.compile(r"\bgrew\b"), re.compile(r"\bfell\b|\bshrank\b")),
)

MIN_CLAIM_LENGTH = 20
MIN_WORD_LENGTH = 3
VERIFIED_OVERLAP = 0.5
UNVERIFIABLE_OVERLAP = 0.2
CONTRADICTION_PENALTY = 0.2


class CorrectnessEvaluator(BaseEvaluator):
    """
    Scores factual accuracy of an artifact.

    Claims are sentences carrying a number, year, amount, declarative verb or
    trend verb. Each claim is matched against ``ground_truth`` (preferred) or
    the concatenated ``source_files`` by word overlap:

    - overlap > 0.5: verified
    - overlap < 0.2: unverifiable
    - otherwise: contradicted if claim and reference use opposite polarity,
      else unverifiable

    Score is verified / verifiable claims, minus 0.2 per contradiction.
    """

    def __init__(self, config: EvalConfig | None = None):
        super().__init__(EvalDimension.CORRECTNESS, config)

    def evaluate(self, output: Any, context: Mapping[str, Any] | None = None) -> EvalResult:
        ground_truth = get_context_value(context, "ground_truth", "groundTruth")
        source_files = as_list(get_context_value(context, "source_files", "sourceFiles"))
        details: dict[str, Any] = {
            "facts_claimed": 0,
            "facts_verified": 0,
            "facts_contradicted": 0,
            "facts_unverifiable": 0,
        }

        claims = self.extract_claims(output)
        details["facts_claimed"] = len(claims)

        if not claims:
            return self._create_result(
                1.0, details, "No factual claims found to verify", confidence=0.5
            )

        if ground_truth:
            reference = self._reference_text(ground_truth)
            confidence = 0.8
        elif source_files:
            reference = self._source_text(source_files)
            confidence = 0.6
        else:
            return self._create_result(
                0.5,
                details,
                "Unable to verify correctness without reference material",
                confidence=0.3,
            )

        verification = self._verify_claims(claims, reference)
        details["facts_verified"] = verification["verified"]
        details["facts_contradicted"] = verification["contradicted"]
        details["facts_unverifiable"] = verification["unverifiable"]

        verifiable = details["facts_claimed"] - details["facts_unverifiable"]
        score = details["facts_verified"] / verifiable if verifiable > 0 else 0.5
        score = max(0.0, score - details["facts_contradicted"] * CONTRADICTION_PENALTY)

        return self._create_result(score, details, confidence=confidence)

    def extract_claims(self, output: Any) -> list[str]:
        """Extract sentences that look like factual claims."""
        sentences = split_sentences(to_text(output), MIN_CLAIM_LENGTH)
        return [s for s in sentences if any(p.search(s) for p in CLAIM_PATTERNS)]

    def _reference_text(self, ground_truth: Any) -> str:
        if isinstance(ground_truth, str):
            return ground_truth.lower()
        return json.dumps(ground_truth, separators=(",", ":"), ensure_ascii=False, default=str).lower()

    def _source_text(self, source_files: Any) -> str:
        contents = []
        for source in source_files:
            if isinstance(source, Mapping):
                contents.append(str(source.get("content") or ""))
            else:
                contents.append(str(source))
        return "\n".join(contents).lower()

    def _verify_claims(self, claims: list[str], reference: str) -> dict[str, int]:
        result = {"verified": 0, "contradicted": 0, "unverifiable": 0}

        for claim in claims:
            claim_lower = claim.lower()
            claim_words = words(claim_lower, MIN_WORD_LENGTH)
            if not claim_words:
                result["unverifiable"] += 1
                continue

            overlap = sum(1 for w in claim_words if w in reference)
            ratio = overlap / len(claim_words)

            if ratio > VERIFIED_OVERLAP:
                result["verified"] += 1
            elif ratio < UNVERIFIABLE_OVERLAP:
                result["unverifiable"] += 1
            elif self._check_contradiction(claim_lower, reference):
                result["contradicted"] += 1
            else:
                result["unverifiable"] += 1

        return result

    def _check_contradiction(self, claim: str, reference: str) -> bool:
        for positive, negative in NEGATION_PATTERNS:
            claim_pos = bool(positive.search(claim))
            claim_neg = bool(negative.search(claim))
            ref_pos = bool(positive.search(reference))
            ref_neg = bool(negative.search(reference))
            if (claim_pos and ref_neg) or (claim_neg and ref_pos):
                return True
        return False
