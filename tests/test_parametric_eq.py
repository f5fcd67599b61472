"""Tests for core/mixing_eval/parametric.py — 4-band → 3-band reduction."""

from __future__ import annotations

import math

import pytest

from conftest import make_parametric
from core.mixing_eval.parametric import (
    DEFAULT_PARAMETRIC_EQ,
    OUTPUT_LIMIT_DB,
    band_influence,
    reduce_parametric_eq,
)
from core.mixing_eval.types import ParametricBand, ParametricEQParams


class TestBandInfluence:
    def test_lowshelf_full_below_corner(self) -> None:
        band = ParametricBand(type="lowshelf", frequency=200.0, gain=6.0)
        assert band_influence(band, 100.0) == pytest.approx(1.0)
        assert band_influence(band, 200.0) == pytest.approx(1.0)

    def test_lowshelf_slopes_above_corner(self) -> None:
        band = ParametricBand(type="lowshelf", frequency=200.0, gain=6.0)
        assert band_influence(band, 400.0) == pytest.approx(0.5)
        assert band_influence(band, 800.0) == pytest.approx(0.0)
        assert band_influence(band, 5000.0) == pytest.approx(0.0)

    def test_highshelf_mirror(self) -> None:
        band = ParametricBand(type="highshelf", frequency=8000.0, gain=6.0)
        assert band_influence(band, 10000.0) == pytest.approx(1.0)
        assert band_influence(band, 4000.0) == pytest.approx(0.5)

    def test_peaking_width_follows_q(self) -> None:
        wide = ParametricBand(type="peaking", frequency=1000.0, gain=6.0, q=1.0)
        narrow = ParametricBand(type="peaking", frequency=1000.0, gain=6.0, q=2.0)
        assert band_influence(wide, 1000.0) == pytest.approx(1.0)
        assert band_influence(wide, 2000.0) == pytest.approx(0.0)
        assert band_influence(narrow, 1000.0 * 2**0.25) == pytest.approx(0.5)

    def test_unknown_band_type_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown parametric band type"):
            ParametricBand(type="notch", frequency=1000.0, gain=-6.0)


class TestReduceParametricEQ:
    def test_flat_is_zero(self) -> None:
        eq = reduce_parametric_eq(DEFAULT_PARAMETRIC_EQ)
        assert (eq.low, eq.mid, eq.high) == (0.0, 0.0, 0.0)
        assert all(math.copysign(1.0, v) == 1.0 for v in (eq.low, eq.mid, eq.high))

    def test_low_shelf_drives_low(self) -> None:
        eq = reduce_parametric_eq(make_parametric(low_shelf=6.0))
        assert eq.low == pytest.approx(6.0)
        assert eq.mid == pytest.approx(0.0)
        assert eq.high == pytest.approx(0.0)

    def test_first_peak_drives_mid(self) -> None:
        # 1 kHz is log2(1.25) ≈ 0.32 octaves from 800 Hz.
        eq = reduce_parametric_eq(make_parametric(peak1=6.0))
        assert eq.mid == pytest.approx(4.1)
        assert eq.low == pytest.approx(0.0)

    def test_high_measurement_sums_peak_and_shelf(self) -> None:
        eq = reduce_parametric_eq(make_parametric(peak2=6.0, high_shelf=6.0))
        # 6 * 0.263 + 6 * 0.661 = 5.54
        assert eq.high == pytest.approx(5.5)

    def test_narrow_peak_misses_measurement_point(self) -> None:
        eq = reduce_parametric_eq(make_parametric(peak1=6.0, q=4.0))
        assert eq.mid == pytest.approx(0.0)

    def test_one_decimal_rounding(self) -> None:
        eq = reduce_parametric_eq(make_parametric(high_shelf=6.0))
        assert eq.high == pytest.approx(4.0)
        assert round(eq.high * 10) == pytest.approx(eq.high * 10)

    def test_output_clamped(self) -> None:
        stacked = ParametricEQParams(
            bands=(
                ParametricBand(type="lowshelf", frequency=200.0, gain=12.0),
                ParametricBand(type="peaking", frequency=200.0, gain=12.0),
                ParametricBand(type="peaking", frequency=5000.0, gain=-12.0),
                ParametricBand(type="highshelf", frequency=5000.0, gain=-12.0),
            )
        )
        eq = reduce_parametric_eq(stacked)
        assert eq.low == pytest.approx(OUTPUT_LIMIT_DB)
        assert eq.high == pytest.approx(-OUTPUT_LIMIT_DB)

    def test_odd_symmetry(self) -> None:
        gains = [(5.0, -3.0, 2.0, 7.0), (-12.0, 12.0, -7.5, 3.3), (1.1, 0.0, 0.0, -9.9)]
        for g in gains:
            pos = reduce_parametric_eq(make_parametric(*g))
            neg = reduce_parametric_eq(make_parametric(*(-x for x in g)))
            assert neg.low == pytest.approx(-pos.low, abs=0.1)
            assert neg.mid == pytest.approx(-pos.mid, abs=0.1)
            assert neg.high == pytest.approx(-pos.high, abs=0.1)

    def test_always_within_limits(self) -> None:
        for gain in (-12.0, -6.0, 6.0, 12.0):
            eq = reduce_parametric_eq(make_parametric(gain, gain, gain, gain, q=0.3))
            for value in (eq.low, eq.mid, eq.high):
                assert -OUTPUT_LIMIT_DB <= value <= OUTPUT_LIMIT_DB


class TestParametricLayout:
    def test_needs_four_bands(self) -> None:
        with pytest.raises(ValueError, match="exactly 4 bands"):
            ParametricEQParams(bands=DEFAULT_PARAMETRIC_EQ.bands[:3])  # type: ignore[arg-type]

    def test_default_layout(self) -> None:
        bands = DEFAULT_PARAMETRIC_EQ.bands
        assert [b.type for b in bands] == ["lowshelf", "peaking", "peaking", "highshelf"]
        assert [b.frequency for b in bands] == [200.0, 800.0, 3000.0, 8000.0]
        assert all(b.gain == 0.0 and b.q == 1.0 for b in bands)

    def test_bands_out_of_order_raise(self) -> None:
        low, peak1, peak2, high = DEFAULT_PARAMETRIC_EQ.bands
        with pytest.raises(ValueError, match="bands must be"):
            ParametricEQParams(bands=(high, peak1, peak2, low))

    def test_all_shelves_raise(self) -> None:
        high = DEFAULT_PARAMETRIC_EQ.bands[3]
        with pytest.raises(ValueError, match="bands must be"):
            ParametricEQParams(bands=(high, high, high, high))

    @pytest.mark.parametrize("q", [0.0, -1.0])
    def test_non_positive_q_raises(self, q: float) -> None:
        with pytest.raises(ValueError, match="q must be > 0"):
            ParametricBand(type="peaking", frequency=1000.0, gain=3.0, q=q)

    @pytest.mark.parametrize("frequency", [0.0, -200.0])
    def test_non_positive_frequency_raises(self, frequency: float) -> None:
        with pytest.raises(ValueError, match="frequency must be > 0"):
            ParametricBand(type="lowshelf", frequency=frequency, gain=3.0)

    def test_extreme_valid_band_scores(self) -> None:
        band = ParametricBand(type="peaking", frequency=20.0, gain=12.0, q=0.3)
        assert 0.0 <= band_influence(band, 200.0) <= 1.0
