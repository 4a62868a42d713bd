"""Text helpers shared by the dimension evaluators.

All extraction here is lexical: sentences are split on terminal punctuation
and words on non-word characters. Scores and thresholds elsewhere are tuned
against exactly this tokenization.
"""

import json
import re
from typing import Any

SENTENCE_SPLIT = re.compile(r"[.!?]+")
WORD_SPLIT = re.compile(r"\W+")


def to_text(output: Any) -> str:
    """Render an artifact as text; structured output is serialized to compact JSON."""
    if isinstance(output, str):
        return output
    return json.dumps(output, separators=(",", ":"), ensure_ascii=False, default=str)


def split_sentences(text: str, min_length: int = 0) -> list[str]:
    """Split text on runs of '.', '!' or '?' and keep stripped fragments longer than min_length."""
    sentences = (s.strip() for s in SENTENCE_SPLIT.split(text))
    return [s for s in sentences if len(s) > min_length]


def words(text: str, min_length: int = 0) -> list[str]:
    """Lowercased words longer than min_length, in order of appearance."""
    return [w for w in WORD_SPLIT.split(text.lower()) if len(w) > min_length]


def parse_json(output: Any) -> tuple[Any, bool]:
    """
    Parse a JSON artifact.

    Returns:
        (value, is_valid). Strings are decoded; dicts and lists are already
        parsed and returned as-is. Anything else is not JSON.
    """
    if isinstance(output, str):
        try:
            return json.loads(output), True
        except ValueError:
            return None, False
    if isinstance(output, (dict, list)):
        return output, True
    return None, False
