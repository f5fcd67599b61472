"""
core/mixing_eval/similarity.py — Tolerance-based scalar similarity.

Every "match the target" sub-score in the engine is built from
``score_similarity``: a linear ramp from 100 (on target) to 0 (one tolerance
away), with a small dead zone around the target that snaps to a perfect score
so learners are not punished for slider resolution.

Rounding is half-up (82.5 → 83) everywhere in the engine.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from core.mixing_eval.config import DEFAULT_CONFIG


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards +infinity."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Round and clamp a score to the integer range [0, 100]."""
    return max(0, min(100, round_half_up(value)))


def mean_score(scores: Iterable[float]) -> int:
    """Rounded mean of sub-scores; 0 when there are none."""
    values = list(scores)
    if not values:
        return 0
    return clamp_score(sum(values) / len(values))


def score_similarity(
    player: float,
    target: float,
    tolerance: float,
    dead_zone_ratio: float = DEFAULT_CONFIG.dead_zone_ratio,
) -> int:
    """Score how close a learner value is to its target.

    Args:
        player:          Learner's value.
        target:          Target value, same unit.
        tolerance:       Deviation at (and beyond) which the score is 0. Must be > 0.
        dead_zone_ratio: Fraction of tolerance treated as a perfect match.

    Returns:
        Integer score 0–100. 100 inside the dead zone, 0 beyond the tolerance,
        linear in between.
    """
    diff = abs(player - target)
    if diff <= tolerance * dead_zone_ratio:
        return 100
    if diff > tolerance:
        return 0
    return clamp_score(100.0 * (1.0 - diff / tolerance))
