"""
core/mixing_eval/feedback.py — Directional hints from scores.

Turns numeric breakdowns into short, actionable lines for the learner.
A hint is emitted only for sub-scores below ``config.hint_threshold``; the
direction comes from comparing the learner value against the target.
"""

from __future__ import annotations

from collections.abc import Mapping

from core.mixing_eval.config import DEFAULT_CONFIG, ScoringConfig
from core.mixing_eval.types import (
    BAND_NAMES,
    CompressorParams,
    CompressorScore,
    CompressorTarget,
    ConditionResult,
    EQParams,
    EQScore,
    TrackEQTarget,
)

_EQ_HINTS: dict[str, str] = {
    "low": "Try to {direction} the low frequencies more",
    "mid": "The mids need more {direction}",
    "high": "Adjust the highs - {direction} a bit more",
}


def _direction(player: float, target: float, below: str, above: str) -> str:
    return below if player < target else above


# ---------------------------------------------------------------------------
# Single strip
# ---------------------------------------------------------------------------


def eq_feedback(
    scores: EQScore,
    player: EQParams,
    target: EQParams,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> list[str]:
    """One boost/cut hint per weak band, or a single affirmation."""
    feedback: list[str] = []
    for band in BAND_NAMES:
        if scores.get(band) < config.hint_threshold:
            direction = _direction(player.get(band), target.get(band), "boost", "cut")
            feedback.append(_EQ_HINTS[band].format(direction=direction))
    if not feedback:
        feedback.append("Good EQ balance!")
    return feedback


def compressor_feedback(
    scores: CompressorScore,
    player: CompressorParams,
    target: CompressorTarget,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> list[str]:
    """Hints for threshold, amount and (when graded) attack / release."""
    limit = config.hint_threshold
    feedback: list[str] = []

    if scores.threshold < limit:
        direction = _direction(player.threshold, target.threshold, "Raise", "Lower")
        feedback.append(f"{direction} the threshold")
    if scores.amount < limit:
        direction = _direction(player.amount, target.amount, "Increase", "Decrease")
        feedback.append(f"{direction} the compression amount")
    if scores.attack is not None and scores.attack < limit and target.attack is not None:
        if player.attack is None:
            feedback.append("Set the attack time")
        else:
            direction = _direction(player.attack, target.attack, "slower", "faster")
            feedback.append(f"Try a {direction} attack")
    if scores.release is not None and scores.release < limit and target.release is not None:
        if player.release is None:
            feedback.append("Set the release time")
        else:
            direction = _direction(player.release, target.release, "slower", "faster")
            feedback.append(f"Adjust for a {direction} release")

    if not feedback:
        feedback.append("Compression settings look good!")
    return feedback


# ---------------------------------------------------------------------------
# Multi-track
# ---------------------------------------------------------------------------


def multitrack_eq_feedback(
    track_scores: Mapping[str, EQScore],
    player_eqs: Mapping[str, EQParams],
    targets: tuple[TrackEQTarget, ...],
    overall: int,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> list[str]:
    """Per-track hint bundles, prefixed by an affirmation for strong mixes."""
    feedback: list[str] = []
    if overall >= config.multitrack_praise_threshold:
        feedback.append("Great job balancing the tracks!")

    for target in targets:
        scores = track_scores.get(target.track_id)
        if scores is None or scores.total >= config.hint_threshold:
            continue
        player = player_eqs.get(target.track_id)
        if player is None:
            feedback.append(f"{target.track_id}: track settings missing")
            continue
        hints = [
            f"{_direction(player.get(band), target.eq.get(band), 'boost', 'cut')} {band}"
            for band in BAND_NAMES
            if scores.get(band) < config.hint_threshold
        ]
        feedback.append(f"{target.track_id}: {', '.join(hints)}")
    return feedback


def goal_feedback(
    results: tuple[ConditionResult, ...],
    overall: int,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> list[str]:
    """'Not met: …' per failed condition, prefixed by a progress summary."""
    feedback: list[str] = []
    if overall >= config.goal_excellent_threshold:
        feedback.append("Excellent balance!")
    elif overall >= config.goal_good_threshold:
        feedback.append("Good progress!")
    feedback.extend(f"Not met: {r.description}" for r in results if not r.passed)
    return feedback
