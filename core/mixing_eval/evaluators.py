"""
core/mixing_eval/evaluators.py — Parameter-group scoring.

Implements the three single-strip evaluators:
    1. evaluate_eq          — 3-band EQ against a target curve
    2. evaluate_compressor  — threshold / amount (+ optional attack / release)
    3. evaluate_problem     — inclusive range checks for "fix this" challenges

Design:
    - Pure: learner params + target in → frozen score dataclass out.
    - Tolerances come from ScoringConfig, never inline literals.
"""

from __future__ import annotations

from core.mixing_eval.config import DEFAULT_CONFIG, ScoringConfig
from core.mixing_eval.similarity import mean_score, score_similarity
from core.mixing_eval.types import (
    CompressorParams,
    CompressorScore,
    CompressorTarget,
    EQParams,
    EQScore,
    ProblemScore,
    ProblemTarget,
    SolutionRange,
)

# Labels used in problem feedback, keyed by solution field.
_FIELD_LABELS: dict[str, str] = {
    "low": "Low EQ",
    "mid": "Mid EQ",
    "high": "High EQ",
    "threshold": "Threshold",
    "amount": "Compression amount",
}

_FIELD_UNITS: dict[str, str] = {
    "low": " dB",
    "mid": " dB",
    "high": " dB",
    "threshold": " dB",
    "amount": "%",
}


def _fmt(value: float) -> str:
    """Format a number without a trailing '.0'."""
    return f"{value:g}"


# ---------------------------------------------------------------------------
# EQ
# ---------------------------------------------------------------------------


def evaluate_eq(
    player: EQParams,
    target: EQParams,
    tolerance: float | None = None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> EQScore:
    """Score each band against the target with the same tolerance.

    Args:
        player:    Learner's EQ.
        target:    Target EQ curve.
        tolerance: Override for the per-band tolerance (dB). Defaults to
                   ``config.eq_tolerance_db``.
        config:    Scoring configuration.

    Returns:
        EQScore with per-band scores and their rounded mean as ``total``.
    """
    tol = config.eq_tolerance_db if tolerance is None else tolerance
    dz = config.dead_zone_ratio
    low = score_similarity(player.low, target.low, tol, dz)
    mid = score_similarity(player.mid, target.mid, tol, dz)
    high = score_similarity(player.high, target.high, tol, dz)
    return EQScore(low=low, mid=mid, high=high, total=mean_score((low, mid, high)))


# ---------------------------------------------------------------------------
# Compressor
# ---------------------------------------------------------------------------


def evaluate_compressor(
    player: CompressorParams,
    target: CompressorTarget,
    include_timings: bool = False,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> CompressorScore:
    """Score compressor settings against a target.

    Attack and release are graded only when ``include_timings`` is set AND the
    target declares both. A learner strip without timing controls
    (attack/release ``None``) scores 0 on the timing it cannot express.

    Returns:
        CompressorScore; ``attack`` / ``release`` are None when not graded.
    """
    dz = config.dead_zone_ratio
    threshold = score_similarity(
        player.threshold, target.threshold, config.threshold_tolerance_db, dz
    )
    amount = score_similarity(player.amount, target.amount, config.amount_tolerance, dz)

    if not include_timings or not target.includes_timings:
        return CompressorScore(
            threshold=threshold, amount=amount, total=mean_score((threshold, amount))
        )

    attack = (
        score_similarity(player.attack, target.attack, config.attack_tolerance_s, dz)
        if player.attack is not None
        else 0
    )
    release = (
        score_similarity(player.release, target.release, config.release_tolerance_s, dz)
        if player.release is not None
        else 0
    )
    return CompressorScore(
        threshold=threshold,
        amount=amount,
        attack=attack,
        release=release,
        total=mean_score((threshold, amount, attack, release)),
    )


# ---------------------------------------------------------------------------
# Problem solving
# ---------------------------------------------------------------------------


def _learner_value(field: str, eq: EQParams, compressor: CompressorParams) -> float:
    if field in ("threshold", "amount"):
        return float(getattr(compressor, field))
    return eq.get(field)


def _range_message(rng: SolutionRange) -> str:
    unit = _FIELD_UNITS[rng.field]
    if unit == "%":
        bounds = f"{_fmt(rng.minimum)}% and {_fmt(rng.maximum)}%"
    else:
        bounds = f"{_fmt(rng.minimum)} and {_fmt(rng.maximum)}{unit}"
    return f"{_FIELD_LABELS[rng.field]} should be between {bounds}"


def evaluate_problem(
    player_eq: EQParams,
    player_compressor: CompressorParams,
    target: ProblemTarget,
) -> ProblemScore:
    """Score each declared solution range as 100 (inside) or 0 (outside).

    Returns:
        ProblemScore whose ``feedback`` names every failed field and its
        required range. ``total`` is 0 when the solution declares no fields.
    """
    fields: list[tuple[str, int]] = []
    feedback: list[str] = []

    for rng in target.solution:
        value = _learner_value(rng.field, player_eq, player_compressor)
        if rng.contains(value):
            fields.append((rng.field, 100))
        else:
            fields.append((rng.field, 0))
            feedback.append(_range_message(rng))

    return ProblemScore(
        fields=tuple(fields),
        total=mean_score(score for _, score in fields),
        feedback=tuple(feedback),
    )
