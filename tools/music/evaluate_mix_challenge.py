"""
evaluate_mix_challenge tool — score a learner's mix against a bundled challenge.

Pure computation: no LLM, no DB, no I/O beyond the bundled catalog.

Arguments are plain JSON-style dicts as a control surface would send them:
  - eq:         {"low": dB, "mid": dB, "high": dB}
  - compressor: {"threshold": dB, "amount": %, "attack"?: s, "release"?: s}
                (for multi-track challenges this is the bus compressor)
  - tracks:     {track_id: {"low", "mid", "high", "pan", "reverb_mix",
                 "volume", "compressor_amount", "parametric"}}
  - bus_eq:     {"low": dB, "mid": dB, "high": dB}

Omitted single-strip controls default to a flat EQ and an idle compressor
(threshold 0 dB, amount 0%).
"""

from typing import Any

from core.mixing_eval import evaluate_challenge, load_challenge
from core.mixing_eval.schema import parse_compressor, parse_eq, parse_track_map
from core.mixing_eval.types import FLAT_EQ, CompressorParams
from tools.base import MusicalTool, ToolParameter, ToolResult

IDLE_COMPRESSOR = CompressorParams(threshold=0.0, amount=0.0)


class EvaluateMixChallenge(MusicalTool):
    """
    Score one attempt at a mixing challenge.

    Returns the overall score (0–100), stars (1–3), pass flag, a
    per-kind breakdown and directional feedback lines.
    """

    @property
    def name(self) -> str:
        return "evaluate_mix_challenge"

    @property
    def description(self) -> str:
        return (
            "Score a learner's mixing attempt against a bundled mixing challenge. "
            "Pass the challenge id plus the current control values: 3-band EQ, "
            "compressor, per-track settings (EQ, pan, reverb mix, volume, "
            "compressor amount) and bus EQ. Returns overall score 0-100, stars, "
            "pass/fail, a score breakdown and concrete feedback such as "
            "'Raise the threshold' or 'Not met: kick panned center'. "
            "Use when the user submits a mix for a challenge or asks how close they are."
        )

    @property
    def parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="challenge_id",
                type=str,
                description="Challenge id, e.g. 'f1-01-warm-it-up'. See list_mix_challenges.",
            ),
            ToolParameter(
                name="eq",
                type=dict,
                description="Main-strip EQ: {'low', 'mid', 'high'} gains in dB.",
                required=False,
            ),
            ToolParameter(
                name="compressor",
                type=dict,
                description=(
                    "Compressor: {'threshold' dB, 'amount' %, optional 'attack' / 'release' s}. "
                    "For multi-track challenges this is the bus compressor."
                ),
                required=False,
            ),
            ToolParameter(
                name="tracks",
                type=dict,
                description="Per-track settings keyed by track id (multi-track challenges).",
                required=False,
            ),
            ToolParameter(
                name="bus_eq",
                type=dict,
                description="Bus EQ: {'low', 'mid', 'high'} gains in dB.",
                required=False,
            ),
        ]

    def execute(self, **kwargs: Any) -> ToolResult:
        challenge = load_challenge(kwargs["challenge_id"])

        eq = parse_eq(kwargs["eq"]) if kwargs.get("eq") is not None else FLAT_EQ
        compressor = (
            parse_compressor(kwargs["compressor"])
            if kwargs.get("compressor") is not None
            else IDLE_COMPRESSOR
        )
        tracks = parse_track_map(kwargs["tracks"]) if kwargs.get("tracks") is not None else None
        bus_eq = parse_eq(kwargs["bus_eq"], "bus_eq") if kwargs.get("bus_eq") is not None else None

        result = evaluate_challenge(challenge, eq, compressor, track_params=tracks, bus_eq=bus_eq)

        return ToolResult(
            success=True,
            data=result.to_dict(),
            metadata={
                "challenge_id": challenge.id,
                "title": challenge.title,
                "target_kind": challenge.target.kind,
                "multitrack": challenge.is_multitrack,
            },
        )
