"""
core/mixing_eval — Mixing challenge evaluation engine.

Scores a learner's mixer settings (EQ, compression, panning, reverb, volume)
against a challenge target and returns an integer score, star rating, pass
verdict and directional feedback.

All scoring functions are pure: declared parameter values + target in →
frozen dataclasses out. No audio is analysed, nothing is persisted, and
identical inputs always give an equal ScoreResult. The only I/O in this
package is the bundled YAML challenge catalog (_challenge_loader.py).

Public API:
    Types:       EQParams, CompressorParams, ParametricBand, ParametricEQParams,
                 TrackParams, BusParams, Challenge, TrackSpec, ScoreResult,
                 EQScore, CompressorScore, ProblemScore, MultitrackEQScore,
                 GoalScore, ConditionResult
    Targets:     EQTarget, CompressorTarget, ProblemTarget, SolutionRange,
                 MultitrackEQTarget, TrackEQTarget, MultitrackGoalTarget
    Config:      ScoringConfig, DEFAULT_CONFIG
    Scoring:     score_similarity, evaluate_eq, evaluate_compressor,
                 evaluate_problem, reduce_parametric_eq, evaluate_conditions
    Orchestrate: evaluate_challenge, evaluate_target, compute_stars, is_passing
    Content:     parse_challenge, parse_target, parse_condition,
                 load_challenge, available_challenges
"""

from core.mixing_eval._challenge_loader import available_challenges, load_challenge
from core.mixing_eval.conditions import CONDITION_TYPES, Condition, evaluate_conditions
from core.mixing_eval.config import DEFAULT_CONFIG, ScoringConfig
from core.mixing_eval.evaluation import (
    compute_stars,
    evaluate_challenge,
    evaluate_target,
    is_passing,
)
from core.mixing_eval.evaluators import evaluate_compressor, evaluate_eq, evaluate_problem
from core.mixing_eval.parametric import DEFAULT_PARAMETRIC_EQ, reduce_parametric_eq
from core.mixing_eval.schema import (
    parse_challenge,
    parse_condition,
    parse_target,
    parse_track_params,
)
from core.mixing_eval.similarity import score_similarity
from core.mixing_eval.types import (
    BAND_NAMES,
    FLAT_EQ,
    BusParams,
    Challenge,
    CompressorParams,
    CompressorScore,
    CompressorTarget,
    ConditionResult,
    EQParams,
    EQScore,
    EQTarget,
    GoalScore,
    MultitrackEQScore,
    MultitrackEQTarget,
    MultitrackGoalTarget,
    ParametricBand,
    ParametricEQParams,
    ProblemScore,
    ProblemTarget,
    ScoreResult,
    SolutionRange,
    TrackEQTarget,
    TrackParams,
    TrackSpec,
)

__all__ = [
    # Types
    "BAND_NAMES",
    "FLAT_EQ",
    "EQParams",
    "CompressorParams",
    "ParametricBand",
    "ParametricEQParams",
    "TrackParams",
    "BusParams",
    "TrackSpec",
    "Challenge",
    "EQScore",
    "CompressorScore",
    "ProblemScore",
    "MultitrackEQScore",
    "ConditionResult",
    "GoalScore",
    "ScoreResult",
    # Targets
    "EQTarget",
    "CompressorTarget",
    "SolutionRange",
    "ProblemTarget",
    "TrackEQTarget",
    "MultitrackEQTarget",
    "MultitrackGoalTarget",
    "Condition",
    "CONDITION_TYPES",
    # Config
    "ScoringConfig",
    "DEFAULT_CONFIG",
    # Scoring
    "score_similarity",
    "evaluate_eq",
    "evaluate_compressor",
    "evaluate_problem",
    "reduce_parametric_eq",
    "DEFAULT_PARAMETRIC_EQ",
    "evaluate_conditions",
    # Orchestration
    "evaluate_target",
    "evaluate_challenge",
    "compute_stars",
    "is_passing",
    # Content
    "parse_challenge",
    "parse_target",
    "parse_condition",
    "parse_track_params",
    "load_challenge",
    "available_challenges",
]
