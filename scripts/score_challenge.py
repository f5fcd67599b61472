#!/usr/bin/env python
"""Score one mixing attempt against a bundled challenge.

Usage
-----
    # List bundled challenges (optionally one module)
    python scripts/score_challenge.py --list
    python scripts/score_challenge.py --list --module A1

    # Single-strip EQ challenge
    python scripts/score_challenge.py --challenge f1-01-warm-it-up --eq 3 0 -3

    # Compressor with timings (threshold amount attack release)
    python scripts/score_challenge.py --challenge f2-02-punchy-drums \
        --compressor -24 70 0.03 0.1

    # Multi-track challenge: per-track settings from a YAML or JSON file
    python scripts/score_challenge.py --challenge a1-05-stereo-kit --tracks mix.yaml

The tracks file maps track id to settings, e.g.::

    kick:  {volume: -3, pan: 0}
    hihat: {volume: -8, pan: -0.5, low: -2}

Exit codes
----------
    0  — attempt scored and passed (or --list)
    1  — attempt scored but did not pass
    2  — invalid arguments or input file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to sys.path
sys.path.insert(0, str(Path(__file__).parent.parent))

import yaml  # noqa: E402

from core.mixing_eval import (  # noqa: E402
    CompressorParams,
    EQParams,
    available_challenges,
    evaluate_challenge,
    load_challenge,
)
from core.mixing_eval.schema import parse_track_map  # noqa: E402
from core.mixing_eval.types import FLAT_EQ  # noqa: E402

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Score a mixing challenge attempt")
    p.add_argument(
        "--challenge",
        metavar="ID",
        default=None,
        help="Bundled challenge id (see --list)",
    )
    p.add_argument(
        "--list",
        action="store_true",
        help="List bundled challenges and exit",
    )
    p.add_argument(
        "--module",
        default=None,
        help="With --list: only challenges of this module (e.g. F1)",
    )
    p.add_argument(
        "--eq",
        nargs=3,
        type=float,
        metavar=("LOW", "MID", "HIGH"),
        default=None,
        help="Main-strip EQ gains in dB (default: flat)",
    )
    p.add_argument(
        "--compressor",
        nargs="+",
        type=float,
        metavar="VALUE",
        default=None,
        help="THRESHOLD AMOUNT [ATTACK RELEASE] (default: 0 0)",
    )
    p.add_argument(
        "--tracks",
        metavar="FILE",
        default=None,
        help="YAML/JSON file with per-track settings (multi-track challenges)",
    )
    p.add_argument(
        "--bus-eq",
        nargs=3,
        type=float,
        metavar=("LOW", "MID", "HIGH"),
        default=None,
        help="Bus EQ gains in dB",
    )
    p.add_argument(
        "--verbose",
        action="store_true",
        help="Log evaluation details",
    )
    args = p.parse_args(argv)

    if not args.list and args.challenge is None:
        p.error("--challenge is required unless --list is given")
    if args.compressor is not None and len(args.compressor) not in (2, 4):
        p.error("--compressor takes THRESHOLD AMOUNT or THRESHOLD AMOUNT ATTACK RELEASE")
    return args


def build_compressor(values: list[float] | None) -> CompressorParams:
    """Build CompressorParams from 2 or 4 CLI values; None → idle compressor."""
    if values is None:
        return CompressorParams(threshold=0.0, amount=0.0)
    if len(values) == 2:
        return CompressorParams(threshold=values[0], amount=values[1])
    return CompressorParams(
        threshold=values[0], amount=values[1], attack=values[2], release=values[3]
    )


def load_tracks(path: str):
    """Parse a YAML (or JSON) tracks file into TrackParams keyed by id."""
    text = Path(path).read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    if data is None:
        raise ValueError(f"{path}: empty tracks file")
    return parse_track_map(data)


def list_challenges(module: str | None) -> list[dict]:
    rows = []
    for challenge_id in available_challenges(module):
        challenge = load_challenge(challenge_id)
        rows.append(
            {
                "id": challenge.id,
                "title": challenge.title,
                "module": challenge.module,
                "difficulty": challenge.difficulty,
                "target_kind": challenge.target.kind,
            }
        )
    return rows


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        if args.list:
            print(json.dumps(list_challenges(args.module), indent=2))
            return 0

        challenge = load_challenge(args.challenge)
        eq = EQParams(*args.eq) if args.eq is not None else FLAT_EQ
        compressor = build_compressor(args.compressor)
        tracks = load_tracks(args.tracks) if args.tracks else None
        bus_eq = EQParams(*args.bus_eq) if args.bus_eq is not None else None
    except (ValueError, OSError, yaml.YAMLError) as e:
        logger.error("%s", e)
        return 2

    if challenge.is_multitrack and tracks is None:
        logger.warning("%s is a multi-track challenge; pass --tracks to score it", challenge.id)

    result = evaluate_challenge(challenge, eq, compressor, track_params=tracks, bus_eq=bus_eq)
    print(json.dumps({"challenge": challenge.id, **result.to_dict()}, indent=2))
    return 0 if result.passed else 1


if __name__ == "__main__":
    sys.exit(main())
