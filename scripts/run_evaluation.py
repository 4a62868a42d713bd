#!/usr/bin/env python3
"""
Run artifact evaluation from a source checkout.

Usage:
    python scripts/run_evaluation.py --output roadmap.json --content-type roadmap
    python scripts/run_evaluation.py --output deck.json --context context.json --full --report verdict.json

See ``artifact_eval.cli`` for all options.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from artifact_eval.cli import main

if __name__ == "__main__":
    sys.exit(main())
