"""
core/mixing_eval/schema.py — Build typed values from plain mappings.

Challenge content and control-surface snapshots arrive as dicts (parsed
YAML / JSON). These helpers turn them into the frozen dataclasses in
types.py and conditions.py, raising ValueError with a precise message on
malformed input. Keys are snake_case; condition and target kinds use their
wire names under the ``type`` key.

Example:
    >>> target = parse_target({"type": "eq", "low": 3, "mid": 0, "high": -3})
    >>> target.eq.low
    3.0
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from core.mixing_eval.conditions import CONDITION_TYPES, Condition
from core.mixing_eval.types import (
    PROBLEM_FIELDS,
    TARGET_KINDS,
    Challenge,
    CompressorParams,
    CompressorTarget,
    EQParams,
    EQTarget,
    MultitrackEQTarget,
    MultitrackGoalTarget,
    ParametricBand,
    ParametricEQParams,
    ProblemTarget,
    SolutionRange,
    Target,
    TrackEQTarget,
    TrackParams,
    TrackSpec,
)

# Condition fields that hold track ids / labels rather than numbers.
_TEXT_FIELDS: frozenset[str] = frozenset(
    {
        "track",
        "track1",
        "track2",
        "louder",
        "quieter",
        "band",
        "position",
        "depth",
        "description",
        "dry_track",
        "wet_track",
        "more_compressed",
        "less_compressed",
    }
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _require(data: Mapping[str, Any], key: str, context: str) -> Any:
    if key not in data or data[key] is None:
        raise ValueError(f"{context}: missing required key {key!r}")
    return data[key]


def _number(value: Any, key: str, context: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{context}: {key!r} must be a number, got {value!r}")
    return float(value)


def _optional_number(data: Mapping[str, Any], key: str, context: str) -> float | None:
    value = data.get(key)
    if value is None:
        return None
    return _number(value, key, context)


def _expect_mapping(data: Any, context: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{context}: expected a mapping, got {type(data).__name__}")
    return data


# ---------------------------------------------------------------------------
# Learner parameters
# ---------------------------------------------------------------------------


def parse_eq(data: Mapping[str, Any], context: str = "eq") -> EQParams:
    data = _expect_mapping(data, context)
    return EQParams(
        low=_number(_require(data, "low", context), "low", context),
        mid=_number(_require(data, "mid", context), "mid", context),
        high=_number(_require(data, "high", context), "high", context),
    )


def parse_compressor(data: Mapping[str, Any], context: str = "compressor") -> CompressorParams:
    data = _expect_mapping(data, context)
    return CompressorParams(
        threshold=_number(_require(data, "threshold", context), "threshold", context),
        amount=_number(_require(data, "amount", context), "amount", context),
        attack=_optional_number(data, "attack", context),
        release=_optional_number(data, "release", context),
    )


def parse_parametric_eq(data: Mapping[str, Any], context: str = "parametric") -> ParametricEQParams:
    data = _expect_mapping(data, context)
    raw_bands = _require(data, "bands", context)
    bands = []
    for i, raw in enumerate(raw_bands):
        band_ctx = f"{context}.bands[{i}]"
        raw = _expect_mapping(raw, band_ctx)
        bands.append(
            ParametricBand(
                type=str(_require(raw, "type", band_ctx)),
                frequency=_number(_require(raw, "frequency", band_ctx), "frequency", band_ctx),
                gain=_number(_require(raw, "gain", band_ctx), "gain", band_ctx),
                q=_number(raw.get("q", 1.0), "q", band_ctx),
            )
        )
    return ParametricEQParams(bands=tuple(bands))  # type: ignore[arg-type]


def parse_track_params(data: Mapping[str, Any], context: str = "track") -> TrackParams:
    data = _expect_mapping(data, context)
    parametric = data.get("parametric")
    return TrackParams(
        low=_number(data.get("low", 0.0), "low", context),
        mid=_number(data.get("mid", 0.0), "mid", context),
        high=_number(data.get("high", 0.0), "high", context),
        pan=_optional_number(data, "pan", context),
        reverb_mix=_optional_number(data, "reverb_mix", context),
        volume=_optional_number(data, "volume", context),
        compressor_amount=_optional_number(data, "compressor_amount", context),
        parametric=(
            parse_parametric_eq(parametric, f"{context}.parametric")
            if parametric is not None
            else None
        ),
    )


def parse_track_map(data: Mapping[str, Any]) -> dict[str, TrackParams]:
    data = _expect_mapping(data, "tracks")
    return {
        str(track_id): parse_track_params(params, f"tracks.{track_id}")
        for track_id, params in data.items()
    }


# ---------------------------------------------------------------------------
# Conditions + targets
# ---------------------------------------------------------------------------


def parse_condition(data: Mapping[str, Any]) -> Condition:
    """Build a Condition from ``{"type": <kind>, ...fields}``.

    Raises:
        ValueError: Unknown kind, missing/unknown field, or bad value.
    """
    data = _expect_mapping(data, "condition")
    kind = _require(data, "type", "condition")
    cls = CONDITION_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown condition type {kind!r}. Valid: {sorted(CONDITION_TYPES)}")

    context = f"condition {kind!r}"
    fields = {f.name: f for f in dataclasses.fields(cls)}  # type: ignore[arg-type]
    unknown = set(data) - set(fields) - {"type"}
    if unknown:
        raise ValueError(f"{context}: unknown field(s) {sorted(unknown)}")

    kwargs: dict[str, Any] = {}
    for name, field in fields.items():
        required = (
            field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING
        )
        if name not in data or data[name] is None:
            if required:
                raise ValueError(f"{context}: missing required key {name!r}")
            continue
        value = data[name]
        kwargs[name] = str(value) if name in _TEXT_FIELDS else _number(value, name, context)
    return cls(**kwargs)


def _parse_solution(data: Mapping[str, Any]) -> tuple[SolutionRange, ...]:
    """Flatten ``{eq: {low: [min, max]}, compressor: {amount: [min, max]}}``."""
    flat: dict[str, Any] = {}
    for group in ("eq", "compressor"):
        section = data.get(group)
        if section is not None:
            flat.update(_expect_mapping(section, f"solution.{group}"))
    for key, value in data.items():
        if key not in ("eq", "compressor"):
            flat[key] = value

    ranges = []
    for name in PROBLEM_FIELDS:
        if name not in flat:
            continue
        bounds = flat.pop(name)
        if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
            raise ValueError(f"solution.{name}: expected [min, max], got {bounds!r}")
        lo = _number(bounds[0], name, "solution")
        hi = _number(bounds[1], name, "solution")
        ranges.append(SolutionRange(field=name, minimum=lo, maximum=hi))
    if flat:
        raise ValueError(f"solution: unknown field(s) {sorted(flat)}")
    return tuple(ranges)


def parse_target(data: Mapping[str, Any]) -> Target:
    """Build a Target from ``{"type": <kind>, ...}``.

    Raises:
        ValueError: Unknown kind or malformed fields.
    """
    data = _expect_mapping(data, "target")
    kind = _require(data, "type", "target")
    context = f"target {kind!r}"

    if kind == "eq":
        return EQTarget(eq=parse_eq(data, context))

    if kind == "compressor":
        params = parse_compressor(data, context)
        return CompressorTarget(
            threshold=params.threshold,
            amount=params.amount,
            attack=params.attack,
            release=params.release,
        )

    if kind == "problem":
        return ProblemTarget(
            description=str(data.get("description", "")),
            solution=_parse_solution(_expect_mapping(_require(data, "solution", context), context)),
        )

    if kind == "multitrack-eq":
        tracks = _expect_mapping(_require(data, "tracks", context), context)
        bus = data.get("bus_compressor")
        bus_target = None
        if bus is not None:
            bus_params = parse_compressor(bus, f"{context}.bus_compressor")
            bus_target = CompressorTarget(
                threshold=bus_params.threshold,
                amount=bus_params.amount,
                attack=bus_params.attack,
                release=bus_params.release,
            )
        return MultitrackEQTarget(
            tracks=tuple(
                TrackEQTarget(track_id=str(tid), eq=parse_eq(eq, f"{context}.tracks.{tid}"))
                for tid, eq in tracks.items()
            ),
            bus_compressor=bus_target,
        )

    if kind == "multitrack-goal":
        return MultitrackGoalTarget(
            description=str(data.get("description", "")),
            conditions=tuple(parse_condition(c) for c in _require(data, "conditions", context)),
        )

    raise ValueError(f"Unknown target type {kind!r}. Valid: {sorted(TARGET_KINDS)}")


def parse_challenge(data: Mapping[str, Any]) -> Challenge:
    """Build a Challenge from a catalog entry."""
    data = _expect_mapping(data, "challenge")
    challenge_id = str(_require(data, "id", "challenge"))
    context = f"challenge {challenge_id!r}"
    tracks = tuple(
        TrackSpec(
            id=str(_require(t, "id", f"{context}.tracks")),
            name=str(t.get("name", t["id"])),
            source_type=str(t.get("source_type", "tone")),
        )
        for t in data.get("tracks") or ()
    )
    difficulty = int(data.get("difficulty", 1))
    if difficulty not in (1, 2, 3):
        raise ValueError(f"{context}: difficulty must be 1, 2 or 3, got {difficulty}")
    return Challenge(
        id=challenge_id,
        title=str(data.get("title", challenge_id)),
        target=parse_target(_require(data, "target", context)),
        description=str(data.get("description", "")),
        difficulty=difficulty,
        module=str(data.get("module", "")),
        hints=tuple(str(h) for h in data.get("hints") or ()),
        tracks=tracks,
    )
