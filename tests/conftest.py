"""
Shared fixtures for the test suite.

Builders for learner parameters and small multi-track mixes so individual
test files don't repeat dataclass boilerplate.
"""

import pytest

from core.mixing_eval.types import (
    BusParams,
    CompressorParams,
    EQParams,
    ParametricBand,
    ParametricEQParams,
    TrackParams,
)

# ---------------------------------------------------------------------------
# Learner parameter builders
# ---------------------------------------------------------------------------


def make_eq(low: float = 0.0, mid: float = 0.0, high: float = 0.0) -> EQParams:
    return EQParams(low=low, mid=mid, high=high)


def make_compressor(
    threshold: float = 0.0,
    amount: float = 0.0,
    attack: float | None = None,
    release: float | None = None,
) -> CompressorParams:
    return CompressorParams(threshold=threshold, amount=amount, attack=attack, release=release)


def make_parametric(
    low_shelf: float = 0.0,
    peak1: float = 0.0,
    peak2: float = 0.0,
    high_shelf: float = 0.0,
    q: float = 1.0,
) -> ParametricEQParams:
    """Default 4-band layout (200 / 800 / 3000 / 8000 Hz) with the given gains."""
    return ParametricEQParams(
        bands=(
            ParametricBand(type="lowshelf", frequency=200.0, gain=low_shelf, q=q),
            ParametricBand(type="peaking", frequency=800.0, gain=peak1, q=q),
            ParametricBand(type="peaking", frequency=3000.0, gain=peak2, q=q),
            ParametricBand(type="highshelf", frequency=8000.0, gain=high_shelf, q=q),
        )
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def flat_eq() -> EQParams:
    return make_eq()


@pytest.fixture()
def idle_compressor() -> CompressorParams:
    return make_compressor()


@pytest.fixture()
def drum_mix() -> dict[str, TrackParams]:
    """Kick / snare / hi-hat mix that satisfies a typical foundation goal."""
    return {
        "kick": TrackParams(
            low=3.0, volume=-3.0, pan=0.0, reverb_mix=10.0, compressor_amount=60.0
        ),
        "snare": TrackParams(
            mid=2.0, volume=-4.0, pan=0.1, reverb_mix=30.0, compressor_amount=30.0
        ),
        "hihat": TrackParams(low=-4.0, volume=-8.0, pan=-0.5, reverb_mix=15.0),
    }


@pytest.fixture()
def warm_bus() -> BusParams:
    return BusParams(compressor_amount=25.0, eq=make_eq(low=2.0, high=-1.5))
