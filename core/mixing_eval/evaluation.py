"""
core/mixing_eval/evaluation.py — Score one mixing challenge submission.

Dispatches on the challenge target kind:
    eq               → evaluate_eq
    compressor       → evaluate_compressor (timings iff target declares both)
    problem          → evaluate_problem
    multitrack-eq    → evaluate_eq per track (+ bus compressor when targeted)
    multitrack-goal  → condition engine over tracks and bus

then derives stars / pass from the overall score and assembles a fresh
ScoreResult. Multi-track kinds without per-track params score 0 with an
empty breakdown instead of raising.

Design:
    - Single pass, no retained state: identical inputs give equal results.
    - Per-track parametric EQ is reduced to low / mid / high before scoring.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace

from core.mixing_eval.conditions import evaluate_conditions
from core.mixing_eval.config import DEFAULT_CONFIG, ScoringConfig
from core.mixing_eval.evaluators import evaluate_compressor, evaluate_eq, evaluate_problem
from core.mixing_eval.feedback import (
    compressor_feedback,
    eq_feedback,
    goal_feedback,
    multitrack_eq_feedback,
)
from core.mixing_eval.parametric import reduce_parametric_eq
from core.mixing_eval.similarity import clamp_score, mean_score
from core.mixing_eval.types import (
    Breakdown,
    BusParams,
    Challenge,
    CompressorParams,
    CompressorTarget,
    EQParams,
    EQScore,
    EQTarget,
    GoalScore,
    MultitrackEQScore,
    MultitrackEQTarget,
    MultitrackGoalTarget,
    ProblemTarget,
    ScoreResult,
    Target,
    TrackParams,
)

logger = logging.getLogger(__name__)

_ZERO_EQ_SCORE = EQScore(low=0, mid=0, high=0, total=0)


# ---------------------------------------------------------------------------
# Grading
# ---------------------------------------------------------------------------


def compute_stars(overall: int, config: ScoringConfig = DEFAULT_CONFIG) -> int:
    """Stars for an overall score. Never 0: a failed attempt still gets 1."""
    if overall >= config.three_star_threshold:
        return 3
    if overall >= config.two_star_threshold:
        return 2
    return 1


def is_passing(overall: int, config: ScoringConfig = DEFAULT_CONFIG) -> bool:
    return overall >= config.pass_threshold


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def resolve_tracks(tracks: Mapping[str, TrackParams]) -> dict[str, TrackParams]:
    """Replace each parametric-EQ track's low / mid / high with its reduction."""
    resolved: dict[str, TrackParams] = {}
    for track_id, track in tracks.items():
        if track.parametric is not None:
            eq = reduce_parametric_eq(track.parametric)
            track = replace(track, low=eq.low, mid=eq.mid, high=eq.high)
        resolved[track_id] = track
    return resolved


def _evaluate_multitrack_eq(
    target: MultitrackEQTarget,
    tracks: Mapping[str, TrackParams],
    compressor: CompressorParams,
    config: ScoringConfig,
) -> tuple[MultitrackEQScore, int, list[str]]:
    track_scores: dict[str, EQScore] = {}
    player_eqs: dict[str, EQParams] = {}
    totals: list[int] = []

    for track_target in target.tracks:
        track = tracks.get(track_target.track_id)
        if track is None:
            scores = _ZERO_EQ_SCORE
        else:
            player_eqs[track_target.track_id] = track.eq
            scores = evaluate_eq(track.eq, track_target.eq, config=config)
        track_scores[track_target.track_id] = scores
        totals.append(scores.total)

    bus_score = None
    if target.bus_compressor is not None:
        bus_score = evaluate_compressor(
            compressor,
            target.bus_compressor,
            include_timings=target.bus_compressor.includes_timings,
            config=config,
        )
        totals.append(bus_score.total)

    overall = mean_score(totals)
    feedback = multitrack_eq_feedback(track_scores, player_eqs, target.tracks, overall, config)
    if bus_score is not None and bus_score.total < config.hint_threshold:
        feedback.extend(
            f"Bus: {line}"
            for line in compressor_feedback(bus_score, compressor, target.bus_compressor, config)
        )

    breakdown = MultitrackEQScore(
        tracks=tuple((t.track_id, track_scores[t.track_id]) for t in target.tracks),
        bus=bus_score,
    )
    return breakdown, overall, feedback


def _dispatch(
    target: Target,
    eq: EQParams,
    compressor: CompressorParams,
    tracks: Mapping[str, TrackParams] | None,
    bus_eq: EQParams | None,
    config: ScoringConfig,
) -> tuple[Breakdown | None, int, list[str]]:
    if isinstance(target, EQTarget):
        scores = evaluate_eq(eq, target.eq, config=config)
        return scores, scores.total, eq_feedback(scores, eq, target.eq, config)

    if isinstance(target, CompressorTarget):
        scores = evaluate_compressor(
            compressor, target, include_timings=target.includes_timings, config=config
        )
        return scores, scores.total, compressor_feedback(scores, compressor, target, config)

    if isinstance(target, ProblemTarget):
        problem = evaluate_problem(eq, compressor, target)
        feedback = list(problem.feedback) or ["Problem solved correctly!"]
        return problem, problem.total, feedback

    if isinstance(target, (MultitrackEQTarget, MultitrackGoalTarget)) and tracks is None:
        return None, 0, ["No track settings were provided for this multi-track challenge."]

    resolved = resolve_tracks(tracks or {})

    if isinstance(target, MultitrackEQTarget):
        return _evaluate_multitrack_eq(target, resolved, compressor, config)

    if isinstance(target, MultitrackGoalTarget):
        bus = BusParams(compressor_amount=compressor.amount, eq=bus_eq)
        results = evaluate_conditions(target.conditions, resolved, bus)
        passed_count = sum(1 for r in results if r.passed)
        total = clamp_score(100.0 * passed_count / len(results)) if results else 0
        breakdown = GoalScore(conditions=results, passed_count=passed_count, total=total)
        return breakdown, total, goal_feedback(results, total, config)

    raise ValueError(f"Unsupported target type: {type(target).__name__}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def evaluate_target(
    target: Target,
    player_eq: EQParams,
    player_compressor: CompressorParams,
    track_params: Mapping[str, TrackParams] | None = None,
    bus_eq: EQParams | None = None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> ScoreResult:
    """Score the learner's controls against a challenge target.

    Args:
        target:            Challenge target (any kind).
        player_eq:         Learner's main-strip 3-band EQ.
        player_compressor: Learner's compressor. For multi-track kinds this is
                           the bus compressor.
        track_params:      Per-track controls keyed by track id (multi-track kinds).
        bus_eq:            Learner's bus EQ (bus_eq_* conditions).
        config:            Tolerances and thresholds.

    Returns:
        ScoreResult with overall 0–100, stars 1–3, pass flag, breakdown, feedback.
    """
    breakdown, overall, feedback = _dispatch(
        target, player_eq, player_compressor, track_params, bus_eq, config
    )
    overall = clamp_score(overall)
    result = ScoreResult(
        overall=overall,
        stars=compute_stars(overall, config),
        passed=is_passing(overall, config),
        breakdown=breakdown,
        feedback=tuple(feedback),
        target_kind=target.kind,
    )
    logger.debug(
        "Scored %s target: overall=%d stars=%d passed=%s",
        target.kind,
        result.overall,
        result.stars,
        result.passed,
    )
    return result


def evaluate_challenge(
    challenge: Challenge,
    player_eq: EQParams,
    player_compressor: CompressorParams,
    track_params: Mapping[str, TrackParams] | None = None,
    bus_eq: EQParams | None = None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> ScoreResult:
    """Score a submission for ``challenge``. See ``evaluate_target``."""
    return evaluate_target(
        challenge.target,
        player_eq,
        player_compressor,
        track_params=track_params,
        bus_eq=bus_eq,
        config=config,
    )
