"""
Command-line evaluation of a generated artifact.

Usage:
    # Score a roadmap against its prompt
    artifact-eval --output roadmap.json --content-type roadmap --prompt "Plan the 2025 launch"

    # Use a full context file and a stricter gate, write the verdict
    artifact-eval --output deck.json --context context.json --threshold 0.8 --strict --report verdict.json

    # Include recommendations for weak dimensions
    artifact-eval --output document.json --context context.json --full

Exit codes: 0 when the verdict passed, 1 when it did not, 2 on unreadable input.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from artifact_eval.config import get_settings
from artifact_eval.evaluation import CompositeEvaluator, EvaluationPipeline
from artifact_eval.models import EvalConfig
from artifact_eval.utils import get_logger

logger = get_logger(__name__)

EXIT_PASSED = 0
EXIT_NOT_PASSED = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Evaluate a generated artifact across quality dimensions"
    )
    parser.add_argument(
        "--output", required=True, metavar="FILE", help="Artifact to evaluate (JSON or text)"
    )
    parser.add_argument(
        "--context", metavar="FILE", help="JSON file with evaluation context"
    )
    parser.add_argument(
        "--content-type",
        help="Content type (roadmap, slides, document, research-analysis)",
    )
    parser.add_argument("--prompt", help="User prompt the artifact was generated from")
    parser.add_argument("--threshold", type=float, help="Passing threshold (0-1)")
    parser.add_argument(
        "--strict", action="store_true", help="Fail the verdict when any dimension fails"
    )
    parser.add_argument(
        "--dimensions", help="Comma-separated dimensions to evaluate"
    )
    parser.add_argument("--report", metavar="FILE", help="Write the result as JSON")
    parser.add_argument(
        "--full",
        action="store_true",
        help="Include recommendations for weak dimensions",
    )
    return parser


def build_config(args: argparse.Namespace) -> EvalConfig:
    """Merge command-line options over settings defaults."""
    base = EvalConfig.from_settings(get_settings())
    overrides: dict[str, Any] = {}
    if args.threshold is not None:
        overrides["passing_threshold"] = args.threshold
    if args.strict:
        overrides["strict_mode"] = True
    if args.dimensions:
        overrides["dimensions"] = [d.strip() for d in args.dimensions.split(",") if d.strip()]
    return EvalConfig(**{**base.model_dump(), **overrides})


def load_context(args: argparse.Namespace) -> dict[str, Any]:
    context: dict[str, Any] = {}
    if args.context:
        context = json.loads(Path(args.context).read_text(encoding="utf-8"))
        if not isinstance(context, dict):
            raise ValueError("Context file must contain a JSON object")
    if args.content_type:
        context["content_type"] = args.content_type
    if args.prompt:
        context["user_prompt"] = args.prompt
    return context


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        output = Path(args.output).read_text(encoding="utf-8")
        context = load_context(args)
        config = build_config(args)
    except (OSError, ValueError, ValidationError) as e:
        logger.error(f"Cannot run evaluation: {e}")
        return EXIT_BAD_INPUT

    pipeline = EvaluationPipeline(CompositeEvaluator(config))

    if args.full:
        report = pipeline.run_full_evaluation(output, context)
        verdict = report.evaluation
        payload = report.to_dict()
        for rec in report.recommendations:
            logger.info(f"{rec.dimension} ({rec.score:.2f}): {rec.suggestion}")
    else:
        verdict = pipeline.evaluate(output, context)
        payload = verdict.to_dict()

    for dimension, result in verdict.results.items():
        logger.info(f"{dimension}: {result.status.value} ({result.score:.2f}) - {result.message}")
    logger.info(
        f"Overall: {verdict.overall_status.value} (score: {verdict.overall_score:.3f})"
    )

    if args.report:
        report_path = Path(args.report)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info(f"Report saved to: {report_path}")

    return EXIT_PASSED if verdict.passed else EXIT_NOT_PASSED


if __name__ == "__main__":
    sys.exit(main())
