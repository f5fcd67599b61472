"""
core/mixing_eval/conditions.py — Rule engine for multi-track goal challenges.

Each condition kind is a frozen dataclass implementing the ``Condition``
interface:
    evaluate(tracks, bus) → bool   pass/fail against the learner's mix
    describe()            → str    human-readable goal for feedback

Track-scoped conditions read the per-track map; bus-scoped conditions
(``bus_compression``, ``bus_eq_boost``, ``bus_eq_cut``) read ``BusParams``.
A condition handed the wrong scope evaluates to False.

Missing data policy:
    Any referenced track id that is absent from the map, or any referenced
    optional field that is None (pan, reverb_mix, volume, compressor_amount,
    bus compressor / EQ), makes the condition evaluate to False. Incomplete
    challenge setups therefore produce a low score instead of an error.

Kinds:
    frequency_separation  relative_level   eq_cut          eq_boost
    balance               pan_position     pan_spread      pan_opposite
    reverb_amount         reverb_contrast  depth_placement volume_louder
    volume_range          volume_balanced  track_compression
    compression_contrast  bus_compression  bus_eq_boost    bus_eq_cut
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import ClassVar

from core.mixing_eval.types import (
    BAND_NAMES,
    BusParams,
    ConditionResult,
    TrackParams,
    check_band,
)

TrackMap = Mapping[str, TrackParams]

PAN_POSITIONS: tuple[str, ...] = ("left", "center", "right")
DEPTHS: tuple[str, ...] = ("front", "middle", "back")

# Pan thresholds: a side position needs |pan| >= 0.3, centre allows |pan| <= 0.2.
PAN_SIDE_MIN = 0.3
PAN_CENTER_MAX = 0.2
PAN_OPPOSITE_MIN = 0.2

# Reverb mix (%) bands per depth label. Middle and back overlap on 40–50.
DEPTH_RANGES: dict[str, tuple[float, float]] = {
    "front": (0.0, 20.0),
    "middle": (20.0, 50.0),
    "back": (40.0, 100.0),
}


def _fmt(value: float) -> str:
    return f"{value:g}"


# ---------------------------------------------------------------------------
# Missing-data lookups (None = condition not satisfied)
# ---------------------------------------------------------------------------


def _track_field(tracks: TrackMap | None, track_id: str, field: str) -> float | None:
    """Return a track's field, or None when the track or the field is absent."""
    if tracks is None:
        return None
    track = tracks.get(track_id)
    if track is None:
        return None
    if field in BAND_NAMES:
        return track.band(field)
    return getattr(track, field)


def _pair(
    tracks: TrackMap | None, first: str, second: str, field: str
) -> tuple[float, float] | None:
    a = _track_field(tracks, first, field)
    b = _track_field(tracks, second, field)
    if a is None or b is None:
        return None
    return a, b


# ---------------------------------------------------------------------------
# Interface
# ---------------------------------------------------------------------------


class Condition(ABC):
    """One named pass/fail rule of a multi-track goal challenge."""

    kind: ClassVar[str]
    bus_scoped: ClassVar[bool] = False

    def evaluate(self, tracks: TrackMap | None, bus: BusParams | None) -> bool:
        """Evaluate against the scope this condition reads."""
        if self.bus_scoped:
            return self.check_bus(bus)
        return self.check_tracks(tracks)

    def check_tracks(self, tracks: TrackMap | None) -> bool:
        """Per-track path. Bus-scoped conditions are never satisfied here."""
        return False

    def check_bus(self, bus: BusParams | None) -> bool:
        """Bus path. Track-scoped conditions are never satisfied here."""
        return False

    @abstractmethod
    def describe(self) -> str:
        """Human-readable statement of the goal."""

    def result(self, tracks: TrackMap | None, bus: BusParams | None) -> ConditionResult:
        return ConditionResult(
            kind=self.kind, description=self.describe(), passed=self.evaluate(tracks, bus)
        )


class _TrackCondition(Condition):
    def check_tracks(self, tracks: TrackMap | None) -> bool:
        return self._check(tracks)

    @abstractmethod
    def _check(self, tracks: TrackMap | None) -> bool: ...


class _BusCondition(Condition):
    bus_scoped: ClassVar[bool] = True

    def check_bus(self, bus: BusParams | None) -> bool:
        if bus is None:
            return False
        return self._check(bus)

    @abstractmethod
    def _check(self, bus: BusParams) -> bool: ...


# ---------------------------------------------------------------------------
# EQ conditions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FrequencySeparation(_TrackCondition):
    """At least one of two tracks is not boosting the shared band."""

    track1: str
    track2: str
    band: str
    kind: ClassVar[str] = "frequency_separation"

    def __post_init__(self) -> None:
        check_band(self.band)

    def _check(self, tracks: TrackMap | None) -> bool:
        values = _pair(tracks, self.track1, self.track2, self.band)
        if values is None:
            return False
        return values[0] <= 0 or values[1] <= 0

    def describe(self) -> str:
        return f"{self.track1} and {self.track2} separated in the {self.band} band"


@dataclass(frozen=True)
class RelativeLevel(_TrackCondition):
    louder: str
    quieter: str
    band: str
    kind: ClassVar[str] = "relative_level"

    def __post_init__(self) -> None:
        check_band(self.band)

    def _check(self, tracks: TrackMap | None) -> bool:
        values = _pair(tracks, self.louder, self.quieter, self.band)
        if values is None:
            return False
        return values[0] > values[1]

    def describe(self) -> str:
        return f"{self.louder} louder than {self.quieter} in the {self.band} band"


@dataclass(frozen=True)
class EQCut(_TrackCondition):
    track: str
    band: str
    min_cut: float
    kind: ClassVar[str] = "eq_cut"

    def __post_init__(self) -> None:
        check_band(self.band)

    def _check(self, tracks: TrackMap | None) -> bool:
        value = _track_field(tracks, self.track, self.band)
        return value is not None and value <= -self.min_cut

    def describe(self) -> str:
        return f"cut {self.track} {self.band} by at least {_fmt(self.min_cut)} dB"


@dataclass(frozen=True)
class EQBoost(_TrackCondition):
    track: str
    band: str
    min_boost: float
    kind: ClassVar[str] = "eq_boost"

    def __post_init__(self) -> None:
        check_band(self.band)

    def _check(self, tracks: TrackMap | None) -> bool:
        value = _track_field(tracks, self.track, self.band)
        return value is not None and value >= self.min_boost

    def describe(self) -> str:
        return f"boost {self.track} {self.band} by at least {_fmt(self.min_boost)} dB"


@dataclass(frozen=True)
class Balance(_TrackCondition):
    """Descriptive placeholder; always satisfied."""

    description: str
    kind: ClassVar[str] = "balance"

    def _check(self, tracks: TrackMap | None) -> bool:
        return True

    def describe(self) -> str:
        return self.description


# ---------------------------------------------------------------------------
# Panning
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PanPosition(_TrackCondition):
    track: str
    position: str
    kind: ClassVar[str] = "pan_position"

    def __post_init__(self) -> None:
        if self.position not in PAN_POSITIONS:
            raise ValueError(
                f"Unknown pan position {self.position!r}. Valid: {list(PAN_POSITIONS)}"
            )

    def _check(self, tracks: TrackMap | None) -> bool:
        pan = _track_field(tracks, self.track, "pan")
        if pan is None:
            return False
        if self.position == "left":
            return pan <= -PAN_SIDE_MIN
        if self.position == "right":
            return pan >= PAN_SIDE_MIN
        return -PAN_CENTER_MAX <= pan <= PAN_CENTER_MAX

    def describe(self) -> str:
        return f"{self.track} panned {self.position}"


@dataclass(frozen=True)
class PanSpread(_TrackCondition):
    track1: str
    track2: str
    min_spread: float
    kind: ClassVar[str] = "pan_spread"

    def _check(self, tracks: TrackMap | None) -> bool:
        values = _pair(tracks, self.track1, self.track2, "pan")
        if values is None:
            return False
        return abs(values[0] - values[1]) >= self.min_spread

    def describe(self) -> str:
        return f"{self.track1} and {self.track2} panned at least {_fmt(self.min_spread)} apart"


@dataclass(frozen=True)
class PanOpposite(_TrackCondition):
    track1: str
    track2: str
    kind: ClassVar[str] = "pan_opposite"

    def _check(self, tracks: TrackMap | None) -> bool:
        values = _pair(tracks, self.track1, self.track2, "pan")
        if values is None:
            return False
        p1, p2 = values
        return (p1 < -PAN_OPPOSITE_MIN and p2 > PAN_OPPOSITE_MIN) or (
            p1 > PAN_OPPOSITE_MIN and p2 < -PAN_OPPOSITE_MIN
        )

    def describe(self) -> str:
        return f"{self.track1} and {self.track2} panned to opposite sides"


# ---------------------------------------------------------------------------
# Reverb / depth
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReverbAmount(_TrackCondition):
    track: str
    min_mix: float
    max_mix: float | None = None
    kind: ClassVar[str] = "reverb_amount"

    def _check(self, tracks: TrackMap | None) -> bool:
        mix = _track_field(tracks, self.track, "reverb_mix")
        if mix is None:
            return False
        return mix >= self.min_mix and (self.max_mix is None or mix <= self.max_mix)

    def describe(self) -> str:
        if self.max_mix is None:
            return f"{self.track} reverb at {_fmt(self.min_mix)}%+"
        return f"{self.track} reverb at {_fmt(self.min_mix)}% to {_fmt(self.max_mix)}%"


@dataclass(frozen=True)
class ReverbContrast(_TrackCondition):
    dry_track: str
    wet_track: str
    min_difference: float
    kind: ClassVar[str] = "reverb_contrast"

    def _check(self, tracks: TrackMap | None) -> bool:
        values = _pair(tracks, self.dry_track, self.wet_track, "reverb_mix")
        if values is None:
            return False
        dry, wet = values
        return wet - dry >= self.min_difference

    def describe(self) -> str:
        return (
            f"{self.wet_track} at least {_fmt(self.min_difference)}% wetter "
            f"than {self.dry_track}"
        )


@dataclass(frozen=True)
class DepthPlacement(_TrackCondition):
    """Depth from reverb mix. The middle and back bands overlap on 40–50%."""

    track: str
    depth: str
    kind: ClassVar[str] = "depth_placement"

    def __post_init__(self) -> None:
        if self.depth not in DEPTHS:
            raise ValueError(f"Unknown depth {self.depth!r}. Valid: {list(DEPTHS)}")

    def _check(self, tracks: TrackMap | None) -> bool:
        mix = _track_field(tracks, self.track, "reverb_mix")
        if mix is None:
            return False
        if self.depth == "front":
            return mix <= DEPTH_RANGES["front"][1]
        if self.depth == "back":
            return mix >= DEPTH_RANGES["back"][0]
        low, high = DEPTH_RANGES["middle"]
        return low <= mix <= high

    def describe(self) -> str:
        return f"{self.track} placed in the {self.depth}"


# ---------------------------------------------------------------------------
# Volume
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VolumeLouder(_TrackCondition):
    track1: str
    track2: str
    kind: ClassVar[str] = "volume_louder"

    def _check(self, tracks: TrackMap | None) -> bool:
        values = _pair(tracks, self.track1, self.track2, "volume")
        if values is None:
            return False
        return values[0] > values[1]

    def describe(self) -> str:
        return f"{self.track1} louder than {self.track2}"


@dataclass(frozen=True)
class VolumeRange(_TrackCondition):
    track: str
    min_db: float
    max_db: float
    kind: ClassVar[str] = "volume_range"

    def _check(self, tracks: TrackMap | None) -> bool:
        vol = _track_field(tracks, self.track, "volume")
        return vol is not None and self.min_db <= vol <= self.max_db

    def describe(self) -> str:
        return f"{self.track} level between {_fmt(self.min_db)} and {_fmt(self.max_db)} dB"


@dataclass(frozen=True)
class VolumeBalanced(_TrackCondition):
    track1: str
    track2: str
    tolerance: float
    kind: ClassVar[str] = "volume_balanced"

    def _check(self, tracks: TrackMap | None) -> bool:
        values = _pair(tracks, self.track1, self.track2, "volume")
        if values is None:
            return False
        return abs(values[0] - values[1]) <= self.tolerance

    def describe(self) -> str:
        return f"{self.track1} and {self.track2} within {_fmt(self.tolerance)} dB"


# ---------------------------------------------------------------------------
# Compression
# ---------------------------------------------------------------------------


def _amount_range_text(min_amount: float, max_amount: float | None) -> str:
    if max_amount is None:
        return f"{_fmt(min_amount)}%+"
    return f"{_fmt(min_amount)}% to {_fmt(max_amount)}%"


@dataclass(frozen=True)
class TrackCompression(_TrackCondition):
    track: str
    min_amount: float
    max_amount: float | None = None
    kind: ClassVar[str] = "track_compression"

    def _check(self, tracks: TrackMap | None) -> bool:
        amount = _track_field(tracks, self.track, "compressor_amount")
        if amount is None:
            return False
        return amount >= self.min_amount and (
            self.max_amount is None or amount <= self.max_amount
        )

    def describe(self) -> str:
        return f"{self.track} compression at {_amount_range_text(self.min_amount, self.max_amount)}"


@dataclass(frozen=True)
class CompressionContrast(_TrackCondition):
    more_compressed: str
    less_compressed: str
    min_difference: float
    kind: ClassVar[str] = "compression_contrast"

    def _check(self, tracks: TrackMap | None) -> bool:
        values = _pair(tracks, self.more_compressed, self.less_compressed, "compressor_amount")
        if values is None:
            return False
        more, less = values
        return more - less >= self.min_difference

    def describe(self) -> str:
        return f"{self.more_compressed} more compressed than {self.less_compressed}"


# ---------------------------------------------------------------------------
# Bus
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BusCompression(_BusCondition):
    min_amount: float
    max_amount: float | None = None
    kind: ClassVar[str] = "bus_compression"

    def _check(self, bus: BusParams) -> bool:
        amount = bus.compressor_amount
        if amount is None:
            return False
        return amount >= self.min_amount and (
            self.max_amount is None or amount <= self.max_amount
        )

    def describe(self) -> str:
        return f"bus compression at {_amount_range_text(self.min_amount, self.max_amount)}"


@dataclass(frozen=True)
class BusEQBoost(_BusCondition):
    band: str
    min_boost: float
    kind: ClassVar[str] = "bus_eq_boost"

    def __post_init__(self) -> None:
        check_band(self.band)

    def _check(self, bus: BusParams) -> bool:
        return bus.eq is not None and bus.eq.get(self.band) >= self.min_boost

    def describe(self) -> str:
        return f"boost bus {self.band} by at least {_fmt(self.min_boost)} dB"


@dataclass(frozen=True)
class BusEQCut(_BusCondition):
    band: str
    min_cut: float
    kind: ClassVar[str] = "bus_eq_cut"

    def __post_init__(self) -> None:
        check_band(self.band)

    def _check(self, bus: BusParams) -> bool:
        return bus.eq is not None and bus.eq.get(self.band) <= -self.min_cut

    def describe(self) -> str:
        return f"cut bus {self.band} by at least {_fmt(self.min_cut)} dB"


# ---------------------------------------------------------------------------
# Registry + goal evaluation
# ---------------------------------------------------------------------------

CONDITION_TYPES: dict[str, type[Condition]] = {
    cls.kind: cls
    for cls in (
        FrequencySeparation,
        RelativeLevel,
        EQCut,
        EQBoost,
        Balance,
        PanPosition,
        PanSpread,
        PanOpposite,
        ReverbAmount,
        ReverbContrast,
        DepthPlacement,
        VolumeLouder,
        VolumeRange,
        VolumeBalanced,
        TrackCompression,
        CompressionContrast,
        BusCompression,
        BusEQBoost,
        BusEQCut,
    )
}


def evaluate_conditions(
    conditions: tuple[Condition, ...] | list[Condition],
    tracks: TrackMap | None,
    bus: BusParams | None,
) -> tuple[ConditionResult, ...]:
    """Evaluate every condition in order against tracks and bus."""
    return tuple(condition.result(tracks, bus) for condition in conditions)
