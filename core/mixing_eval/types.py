"""
core/mixing_eval/types.py — Frozen data types for mixing challenge evaluation.

All types are frozen dataclasses — immutable value objects that are safe
to share between callers and to evaluate concurrently.

Design:
    - No I/O, no side effects, no state.
    - Collections are stored as tuples (never dicts or lists) so every value
      stays hashable and cannot be mutated by the caller after scoring.
    - Optional learner fields are ``None`` when the control surface did not
      supply them; evaluators treat ``None`` as "not satisfied", never as 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from core.mixing_eval.conditions import Condition

# ---------------------------------------------------------------------------
# Canonical names
# ---------------------------------------------------------------------------

BAND_NAMES: tuple[str, ...] = ("low", "mid", "high")

PARAMETRIC_BAND_TYPES: tuple[str, ...] = ("lowshelf", "highshelf", "peaking")

PARAMETRIC_LAYOUT: tuple[str, ...] = ("lowshelf", "peaking", "peaking", "highshelf")
"""Band types of the 4-band parametric EQ, in strip order."""

PROBLEM_FIELDS: tuple[str, ...] = ("low", "mid", "high", "threshold", "amount")
"""Fields a problem solution may constrain, in evaluation order."""


def check_band(band: str) -> str:
    """Return ``band`` unchanged, or raise ValueError if it is not low / mid / high."""
    if band not in BAND_NAMES:
        raise ValueError(f"Unknown band: {band!r}. Valid: {list(BAND_NAMES)}")
    return band


# ---------------------------------------------------------------------------
# Learner parameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EQParams:
    """Simplified 3-band EQ gains in dB (nominal range −12 … +12)."""

    low: float
    mid: float
    high: float

    def as_dict(self) -> dict[str, float]:
        """Return band gains as an ordered dict keyed by band name."""
        return {"low": self.low, "mid": self.mid, "high": self.high}

    def get(self, band: str) -> float:
        """Return the gain for a named band.

        Raises:
            ValueError: If band name is not one of low / mid / high.
        """
        return self.as_dict()[check_band(band)]

    def to_dict(self) -> dict[str, Any]:
        return self.as_dict()


FLAT_EQ = EQParams(low=0.0, mid=0.0, high=0.0)


@dataclass(frozen=True)
class CompressorParams:
    """Compressor controls.

    ``attack`` and ``release`` are only graded by challenges that declare
    timing targets; simple compressor strips leave them as ``None``.
    """

    threshold: float
    """Threshold in dB (−60 … 0)."""

    amount: float
    """Compression amount in percent (0 … 100, maps to ratio)."""

    attack: float | None = None
    """Attack time in seconds (0.001 … 1)."""

    release: float | None = None
    """Release time in seconds (0.01 … 1)."""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"threshold": self.threshold, "amount": self.amount}
        if self.attack is not None:
            data["attack"] = self.attack
        if self.release is not None:
            data["release"] = self.release
        return data


@dataclass(frozen=True)
class ParametricBand:
    """One band of the 4-band parametric EQ."""

    type: str
    """Filter shape: 'lowshelf', 'highshelf' or 'peaking'."""

    frequency: float
    """Corner (shelf) or centre (peak) frequency in Hz (20 … 20000)."""

    gain: float
    """Gain in dB (−12 … +12)."""

    q: float = 1.0
    """Quality factor (0.3 … 12); a peaking band spans 1/Q octaves."""

    def __post_init__(self) -> None:
        if self.type not in PARAMETRIC_BAND_TYPES:
            raise ValueError(
                f"Unknown parametric band type {self.type!r}. "
                f"Valid: {list(PARAMETRIC_BAND_TYPES)}"
            )
        if self.frequency <= 0:
            raise ValueError(f"Parametric band frequency must be > 0 Hz, got {self.frequency}")
        if self.q <= 0:
            raise ValueError(f"Parametric band q must be > 0, got {self.q}")

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "frequency": self.frequency, "gain": self.gain, "q": self.q}


@dataclass(frozen=True)
class ParametricEQParams:
    """Four ordered bands: low-shelf, peak 1, peak 2, high-shelf."""

    bands: tuple[ParametricBand, ParametricBand, ParametricBand, ParametricBand]

    def __post_init__(self) -> None:
        if len(self.bands) != 4:
            raise ValueError(f"Parametric EQ needs exactly 4 bands, got {len(self.bands)}")
        layout = tuple(b.type for b in self.bands)
        if layout != PARAMETRIC_LAYOUT:
            raise ValueError(
                f"Parametric EQ bands must be {list(PARAMETRIC_LAYOUT)}, got {list(layout)}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {"bands": [b.to_dict() for b in self.bands]}


@dataclass(frozen=True)
class TrackParams:
    """Per-track controls of a multi-track mixing strip.

    Invariants (supplied by the control surface, not validated here):
        −1.0 <= pan <= 1.0
        0 <= reverb_mix <= 100
        0 <= compressor_amount <= 100
    """

    low: float = 0.0
    mid: float = 0.0
    high: float = 0.0
    pan: float | None = None
    """Stereo position: −1 hard left, 0 centre, +1 hard right."""

    reverb_mix: float | None = None
    """Reverb wet mix in percent."""

    volume: float | None = None
    """Fader level in dB."""

    compressor_amount: float | None = None
    """Track compressor amount in percent."""

    parametric: ParametricEQParams | None = None
    """4-band parametric EQ; when set it supersedes low / mid / high."""

    @property
    def eq(self) -> EQParams:
        return EQParams(low=self.low, mid=self.mid, high=self.high)

    def band(self, band: str) -> float:
        return self.eq.get(band)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = self.eq.as_dict()
        for key in ("pan", "reverb_mix", "volume", "compressor_amount"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.parametric is not None:
            data["parametric"] = self.parametric.to_dict()
        return data


@dataclass(frozen=True)
class BusParams:
    """Shared bus processing that every track feeds into."""

    compressor_amount: float | None = None
    eq: EQParams | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.compressor_amount is not None:
            data["compressor"] = {"amount": self.compressor_amount}
        if self.eq is not None:
            data["eq"] = self.eq.as_dict()
        return data


# ---------------------------------------------------------------------------
# Targets (tagged by ``kind``)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EQTarget:
    """Match a 3-band EQ curve."""

    eq: EQParams
    kind: str = "eq"


@dataclass(frozen=True)
class CompressorTarget:
    """Match compressor settings; timings are graded only when both are set."""

    threshold: float
    amount: float
    attack: float | None = None
    release: float | None = None
    kind: str = "compressor"

    @property
    def includes_timings(self) -> bool:
        return self.attack is not None and self.release is not None


@dataclass(frozen=True)
class SolutionRange:
    """Inclusive acceptable range for one learner field."""

    field: str
    minimum: float
    maximum: float

    def __post_init__(self) -> None:
        if self.field not in PROBLEM_FIELDS:
            raise ValueError(
                f"Unknown solution field {self.field!r}. Valid: {list(PROBLEM_FIELDS)}"
            )

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum


@dataclass(frozen=True)
class ProblemTarget:
    """Open-ended "fix this" challenge scored by range inclusion."""

    description: str
    solution: tuple[SolutionRange, ...]
    kind: str = "problem"


@dataclass(frozen=True)
class TrackEQTarget:
    track_id: str
    eq: EQParams


@dataclass(frozen=True)
class MultitrackEQTarget:
    """Per-track EQ curves plus an optional bus compressor target."""

    tracks: tuple[TrackEQTarget, ...]
    bus_compressor: CompressorTarget | None = None
    kind: str = "multitrack-eq"


@dataclass(frozen=True)
class MultitrackGoalTarget:
    """Ordered list of mix-balance conditions."""

    description: str
    conditions: tuple[Condition, ...]
    kind: str = "multitrack-goal"


Target = Union[EQTarget, CompressorTarget, ProblemTarget, MultitrackEQTarget, MultitrackGoalTarget]

TARGET_KINDS: tuple[str, ...] = ("eq", "compressor", "problem", "multitrack-eq", "multitrack-goal")


# ---------------------------------------------------------------------------
# Challenge definition (content; only ``target`` is consumed by scoring)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TrackSpec:
    id: str
    name: str
    source_type: str = "tone"


@dataclass(frozen=True)
class Challenge:
    """A mixing challenge as authored in the content catalog."""

    id: str
    title: str
    target: Target
    description: str = ""
    difficulty: int = 1
    module: str = ""
    hints: tuple[str, ...] = ()
    tracks: tuple[TrackSpec, ...] = ()

    @property
    def is_multitrack(self) -> bool:
        return self.target.kind in ("multitrack-eq", "multitrack-goal")


# ---------------------------------------------------------------------------
# Breakdowns
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EQScore:
    low: int
    mid: int
    high: int
    total: int

    def get(self, band: str) -> int:
        return {"low": self.low, "mid": self.mid, "high": self.high}[check_band(band)]

    def to_dict(self) -> dict[str, Any]:
        return {"low": self.low, "mid": self.mid, "high": self.high, "total": self.total}


@dataclass(frozen=True)
class CompressorScore:
    threshold: int
    amount: int
    total: int
    attack: int | None = None
    release: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"threshold": self.threshold, "amount": self.amount}
        if self.attack is not None:
            data["attack"] = self.attack
        if self.release is not None:
            data["release"] = self.release
        data["total"] = self.total
        return data


@dataclass(frozen=True)
class ProblemScore:
    fields: tuple[tuple[str, int], ...]
    """(field, 0 | 100) for every declared solution range, in order."""

    total: int
    feedback: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"fields": dict(self.fields), "total": self.total}


@dataclass(frozen=True)
class MultitrackEQScore:
    tracks: tuple[tuple[str, EQScore], ...]
    bus: CompressorScore | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"tracks": {tid: s.to_dict() for tid, s in self.tracks}}
        if self.bus is not None:
            data["bus"] = self.bus.to_dict()
        return data


@dataclass(frozen=True)
class ConditionResult:
    kind: str
    description: str
    passed: bool

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "description": self.description, "passed": self.passed}


@dataclass(frozen=True)
class GoalScore:
    conditions: tuple[ConditionResult, ...]
    passed_count: int
    total: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "conditions": [c.to_dict() for c in self.conditions],
            "passed_count": self.passed_count,
            "total": self.total,
        }


Breakdown = Union[EQScore, CompressorScore, ProblemScore, MultitrackEQScore, GoalScore]


# ---------------------------------------------------------------------------
# ScoreResult — top-level result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of one submission.

    Invariants:
        0 <= overall <= 100
        passed == (overall >= pass threshold)
        stars in (1, 2, 3) — there is no zero-star tier
    """

    overall: int
    stars: int
    passed: bool
    breakdown: Breakdown | None
    """Shape depends on the target kind. None when required inputs were absent."""

    feedback: tuple[str, ...]
    target_kind: str = ""

    @property
    def progress(self) -> tuple[int, bool]:
        """(stars, passed) pair for progress tracking."""
        return self.stars, self.passed

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall": self.overall,
            "stars": self.stars,
            "passed": self.passed,
            "target_kind": self.target_kind,
            "breakdown": self.breakdown.to_dict() if self.breakdown is not None else {},
            "feedback": list(self.feedback),
        }
