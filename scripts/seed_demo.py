#!/usr/bin/env python3
"""Write the synthetic demo dataset to a payload JSON file.

The file has the same shape as the upstream /api/ad-weeks payload and can
be served with COHORTBOARD_SOURCE_FILE.

Usage:
    python scripts/seed_demo.py [output.json] [--seed N]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from cohortboard.sources.demo import DemoObservationSource  # noqa: E402

# Constants
DEFAULT_OUTPUT = PROJECT_ROOT / "demo_payload.json"


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Write the demo ad-weeks payload")
    parser.add_argument("output", nargs="?", type=Path, default=DEFAULT_OUTPUT)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--cohorts", type=int, default=8)
    parser.add_argument("--ads-per-cohort", type=int, default=24)
    args = parser.parse_args()

    source = DemoObservationSource(
        seed=args.seed, cohorts=args.cohorts, ads_per_cohort=args.ads_per_cohort
    )
    payload = source.load()

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(payload.model_dump_json(indent=2))
    print(f"Wrote {payload.count} rows to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
