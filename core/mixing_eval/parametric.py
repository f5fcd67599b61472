"""
core/mixing_eval/parametric.py — Reduce a 4-band parametric EQ to 3 bands.

Challenges are authored against the simplified low / mid / high EQ, but
advanced strips expose a parametric EQ (low-shelf, two peaks, high-shelf).
``reduce_parametric_eq`` estimates what the parametric curve "means" in
3-band terms by summing each band's weighted gain at three fixed
measurement points.

The weighting is a deliberately simple octave-distance model, not a filter
transfer function:
    lowshelf   1 below the corner, then −0.5 per octave above it
    highshelf  1 above the corner, then −0.5 per octave below it
    peaking    1 at the centre, falling linearly to 0 at 1/Q octaves away

Properties relied on by callers:
    - flat input (all gains 0) → {0, 0, 0}
    - negating every gain negates every output (up to one-decimal rounding)
    - outputs are clamped to ±12 dB and rounded to one decimal
"""

from __future__ import annotations

import math

from core.mixing_eval.types import EQParams, ParametricBand, ParametricEQParams

# Measurement points standing in for the low / mid / high bands (Hz).
MEASUREMENT_FREQUENCIES: tuple[float, float, float] = (200.0, 1000.0, 5000.0)

SHELF_SLOPE_PER_OCTAVE = 0.5
OUTPUT_LIMIT_DB = 12.0

DEFAULT_PARAMETRIC_BANDS: tuple[ParametricBand, ParametricBand, ParametricBand, ParametricBand] = (
    ParametricBand(type="lowshelf", frequency=200.0, gain=0.0, q=1.0),
    ParametricBand(type="peaking", frequency=800.0, gain=0.0, q=1.0),
    ParametricBand(type="peaking", frequency=3000.0, gain=0.0, q=1.0),
    ParametricBand(type="highshelf", frequency=8000.0, gain=0.0, q=1.0),
)

DEFAULT_PARAMETRIC_EQ = ParametricEQParams(bands=DEFAULT_PARAMETRIC_BANDS)


def band_influence(band: ParametricBand, frequency: float) -> float:
    """Weight (0–1) of ``band``'s gain at a measurement ``frequency``."""
    octave_dist = abs(math.log2(frequency / band.frequency))

    if band.type == "lowshelf":
        if frequency <= band.frequency:
            return 1.0
        return max(0.0, 1.0 - SHELF_SLOPE_PER_OCTAVE * octave_dist)

    if band.type == "highshelf":
        if frequency >= band.frequency:
            return 1.0
        return max(0.0, 1.0 - SHELF_SLOPE_PER_OCTAVE * octave_dist)

    bandwidth = 1.0 / band.q
    return max(0.0, 1.0 - octave_dist / bandwidth)


def _round_tenth(value: float) -> float:
    return math.floor(value * 10.0 + 0.5) / 10.0


def _measure(params: ParametricEQParams, frequency: float) -> float:
    total = 0.0
    for band in params.bands:
        if band.gain == 0:
            continue
        total += band.gain * band_influence(band, frequency)
    value = _round_tenth(total)
    # "+ 0.0" folds -0.0 into 0.0
    return max(-OUTPUT_LIMIT_DB, min(OUTPUT_LIMIT_DB, value)) + 0.0


def reduce_parametric_eq(params: ParametricEQParams) -> EQParams:
    """Approximate a parametric EQ as an effective low / mid / high EQ.

    Args:
        params: Four-band parametric EQ.

    Returns:
        EQParams measured at 200 Hz, 1 kHz and 5 kHz, each rounded to one
        decimal and clamped to ±12 dB.
    """
    low, mid, high = (_measure(params, f) for f in MEASUREMENT_FREQUENCIES)
    return EQParams(low=low, mid=mid, high=high)
