"""Tests for core/mixing_eval/conditions.py — multi-track goal rule engine.

Every kind is checked for a passing mix, a failing mix, and missing data
(absent track or unset optional field), which must evaluate to False.
"""

from __future__ import annotations

import pytest

from core.mixing_eval.conditions import (
    CONDITION_TYPES,
    Balance,
    BusCompression,
    BusEQBoost,
    BusEQCut,
    CompressionContrast,
    DepthPlacement,
    EQBoost,
    EQCut,
    FrequencySeparation,
    PanOpposite,
    PanPosition,
    PanSpread,
    RelativeLevel,
    ReverbAmount,
    ReverbContrast,
    TrackCompression,
    VolumeBalanced,
    VolumeLouder,
    VolumeRange,
    evaluate_conditions,
)
from core.mixing_eval.types import BusParams, EQParams, TrackParams


def tracks(**kwargs: TrackParams) -> dict[str, TrackParams]:
    return dict(kwargs)


class TestRegistry:
    def test_all_kinds_registered(self) -> None:
        assert set(CONDITION_TYPES) == {
            "frequency_separation",
            "relative_level",
            "eq_cut",
            "eq_boost",
            "balance",
            "pan_position",
            "pan_spread",
            "pan_opposite",
            "reverb_amount",
            "reverb_contrast",
            "depth_placement",
            "volume_louder",
            "volume_range",
            "volume_balanced",
            "track_compression",
            "compression_contrast",
            "bus_compression",
            "bus_eq_boost",
            "bus_eq_cut",
        }

    def test_only_bus_kinds_are_bus_scoped(self) -> None:
        scoped = {kind for kind, cls in CONDITION_TYPES.items() if cls.bus_scoped}
        assert scoped == {"bus_compression", "bus_eq_boost", "bus_eq_cut"}


# ---------------------------------------------------------------------------
# EQ
# ---------------------------------------------------------------------------


class TestFrequencySeparation:
    def setup_method(self) -> None:
        self.cond = FrequencySeparation(track1="kick", track2="bass", band="low")

    def test_both_boosting_fails(self) -> None:
        mix = tracks(kick=TrackParams(low=3.0), bass=TrackParams(low=3.0))
        assert self.cond.evaluate(mix, None) is False

    def test_one_not_boosting_passes(self) -> None:
        mix = tracks(kick=TrackParams(low=3.0), bass=TrackParams(low=0.0))
        assert self.cond.evaluate(mix, None) is True
        mix = tracks(kick=TrackParams(low=-2.0), bass=TrackParams(low=4.0))
        assert self.cond.evaluate(mix, None) is True

    def test_missing_track_fails(self) -> None:
        assert self.cond.evaluate(tracks(kick=TrackParams(low=-3.0)), None) is False

    def test_describe(self) -> None:
        assert self.cond.describe() == "kick and bass separated in the low band"

    def test_unknown_band_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown band"):
            FrequencySeparation(track1="kick", track2="bass", band="sub")


class TestRelativeLevel:
    def test_strictly_louder(self) -> None:
        cond = RelativeLevel(louder="vocal", quieter="guitar", band="high")
        assert cond.evaluate(
            tracks(vocal=TrackParams(high=2.0), guitar=TrackParams(high=1.0)), None
        )
        assert not cond.evaluate(
            tracks(vocal=TrackParams(high=1.0), guitar=TrackParams(high=1.0)), None
        )
        assert not cond.evaluate(tracks(vocal=TrackParams(high=2.0)), None)


class TestEQCutBoost:
    def test_cut_threshold_inclusive(self) -> None:
        cond = EQCut(track="bass", band="mid", min_cut=2.0)
        assert cond.evaluate(tracks(bass=TrackParams(mid=-2.0)), None)
        assert not cond.evaluate(tracks(bass=TrackParams(mid=-1.9)), None)
        assert not cond.evaluate(tracks(), None)
        assert cond.describe() == "cut bass mid by at least 2 dB"

    def test_boost_threshold_inclusive(self) -> None:
        cond = EQBoost(track="kick", band="low", min_boost=1.5)
        assert cond.evaluate(tracks(kick=TrackParams(low=1.5)), None)
        assert not cond.evaluate(tracks(kick=TrackParams(low=1.0)), None)
        assert not cond.evaluate(None, None)
        assert cond.describe() == "boost kick low by at least 1.5 dB"


class TestBalance:
    def test_always_true(self) -> None:
        cond = Balance(description="Keep the vocal on top")
        assert cond.evaluate({}, None) is True
        assert cond.evaluate(None, None) is True
        assert cond.describe() == "Keep the vocal on top"


# ---------------------------------------------------------------------------
# Panning
# ---------------------------------------------------------------------------


class TestPanPosition:
    @pytest.mark.parametrize(
        "position, pan, expected",
        [
            ("left", -0.3, True),
            ("left", -0.29, False),
            ("right", 0.3, True),
            ("right", 0.2, False),
            ("center", 0.2, True),
            ("center", -0.2, True),
            ("center", 0.25, False),
        ],
    )
    def test_thresholds(self, position: str, pan: float, expected: bool) -> None:
        cond = PanPosition(track="hihat", position=position)
        assert cond.evaluate(tracks(hihat=TrackParams(pan=pan)), None) is expected

    def test_unset_pan_fails(self) -> None:
        cond = PanPosition(track="kick", position="center")
        assert cond.evaluate(tracks(kick=TrackParams()), None) is False

    def test_unknown_position_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown pan position"):
            PanPosition(track="kick", position="middle")


class TestPanSpreadOpposite:
    def test_spread(self) -> None:
        cond = PanSpread(track1="gl", track2="gr", min_spread=1.0)
        assert cond.evaluate(tracks(gl=TrackParams(pan=-0.5), gr=TrackParams(pan=0.5)), None)
        assert not cond.evaluate(tracks(gl=TrackParams(pan=-0.4), gr=TrackParams(pan=0.5)), None)
        assert not cond.evaluate(tracks(gl=TrackParams(pan=-0.5), gr=TrackParams()), None)

    def test_opposite(self) -> None:
        cond = PanOpposite(track1="gl", track2="gr")
        assert cond.evaluate(tracks(gl=TrackParams(pan=-0.5), gr=TrackParams(pan=0.5)), None)
        assert cond.evaluate(tracks(gl=TrackParams(pan=0.3), gr=TrackParams(pan=-0.3)), None)
        assert not cond.evaluate(tracks(gl=TrackParams(pan=-0.2), gr=TrackParams(pan=0.5)), None)
        assert not cond.evaluate(tracks(gl=TrackParams(pan=-0.5)), None)
        assert cond.describe() == "gl and gr panned to opposite sides"


# ---------------------------------------------------------------------------
# Reverb / depth
# ---------------------------------------------------------------------------


class TestReverb:
    def test_amount_without_max(self) -> None:
        cond = ReverbAmount(track="pad", min_mix=40.0)
        assert cond.evaluate(tracks(pad=TrackParams(reverb_mix=90.0)), None)
        assert not cond.evaluate(tracks(pad=TrackParams(reverb_mix=39.0)), None)
        assert not cond.evaluate(tracks(pad=TrackParams()), None)
        assert cond.describe() == "pad reverb at 40%+"

    def test_amount_with_max(self) -> None:
        cond = ReverbAmount(track="kick", min_mix=5.0, max_mix=20.0)
        assert cond.evaluate(tracks(kick=TrackParams(reverb_mix=20.0)), None)
        assert not cond.evaluate(tracks(kick=TrackParams(reverb_mix=21.0)), None)
        assert cond.describe() == "kick reverb at 5% to 20%"

    def test_contrast(self) -> None:
        cond = ReverbContrast(dry_track="kick", wet_track="snare", min_difference=10.0)
        mix = tracks(kick=TrackParams(reverb_mix=10.0), snare=TrackParams(reverb_mix=20.0))
        assert cond.evaluate(mix, None)
        mix = tracks(kick=TrackParams(reverb_mix=15.0), snare=TrackParams(reverb_mix=20.0))
        assert not cond.evaluate(mix, None)
        assert not cond.evaluate(tracks(snare=TrackParams(reverb_mix=90.0)), None)
        assert cond.describe() == "snare at least 10% wetter than kick"


class TestDepthPlacement:
    @pytest.mark.parametrize(
        "depth, mix, expected",
        [
            ("front", 20.0, True),
            ("front", 21.0, False),
            ("middle", 20.0, True),
            ("middle", 50.0, True),
            ("middle", 51.0, False),
            ("back", 40.0, True),
            ("back", 39.0, False),
        ],
    )
    def test_bands(self, depth: str, mix: float, expected: bool) -> None:
        cond = DepthPlacement(track="pad", depth=depth)
        assert cond.evaluate(tracks(pad=TrackParams(reverb_mix=mix)), None) is expected

    def test_middle_and_back_overlap(self) -> None:
        mix = tracks(pad=TrackParams(reverb_mix=45.0))
        assert DepthPlacement(track="pad", depth="middle").evaluate(mix, None)
        assert DepthPlacement(track="pad", depth="back").evaluate(mix, None)

    def test_missing_reverb_fails(self) -> None:
        assert not DepthPlacement(track="pad", depth="front").evaluate(
            tracks(pad=TrackParams()), None
        )

    def test_unknown_depth_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown depth"):
            DepthPlacement(track="pad", depth="far")


# ---------------------------------------------------------------------------
# Volume
# ---------------------------------------------------------------------------


class TestVolume:
    def test_louder_is_strict(self) -> None:
        cond = VolumeLouder(track1="kick", track2="hihat")
        assert cond.evaluate(
            tracks(kick=TrackParams(volume=-3), hihat=TrackParams(volume=-8)), None
        )
        assert not cond.evaluate(
            tracks(kick=TrackParams(volume=-3), hihat=TrackParams(volume=-3)), None
        )
        assert not cond.evaluate(tracks(kick=TrackParams(volume=-3), hihat=TrackParams()), None)

    def test_range_inclusive(self) -> None:
        cond = VolumeRange(track="hihat", min_db=-12.0, max_db=-3.0)
        assert cond.evaluate(tracks(hihat=TrackParams(volume=-12.0)), None)
        assert cond.evaluate(tracks(hihat=TrackParams(volume=-3.0)), None)
        assert not cond.evaluate(tracks(hihat=TrackParams(volume=-2.0)), None)
        assert not cond.evaluate(tracks(), None)
        assert cond.describe() == "hihat level between -12 and -3 dB"

    def test_balanced(self) -> None:
        cond = VolumeBalanced(track1="kick", track2="snare", tolerance=3.0)
        assert cond.evaluate(tracks(kick=TrackParams(volume=0), snare=TrackParams(volume=-3)), None)
        assert not cond.evaluate(
            tracks(kick=TrackParams(volume=0), snare=TrackParams(volume=-3.5)), None
        )
        assert not cond.evaluate(tracks(kick=TrackParams(volume=0)), None)
        assert cond.describe() == "kick and snare within 3 dB"


# ---------------------------------------------------------------------------
# Compression
# ---------------------------------------------------------------------------


class TestCompression:
    def test_track_compression_range(self) -> None:
        cond = TrackCompression(track="drums", min_amount=30.0, max_amount=70.0)
        assert cond.evaluate(tracks(drums=TrackParams(compressor_amount=50.0)), None)
        assert not cond.evaluate(tracks(drums=TrackParams(compressor_amount=75.0)), None)
        assert not cond.evaluate(tracks(drums=TrackParams()), None)
        assert cond.describe() == "drums compression at 30% to 70%"

    def test_track_compression_open_ended(self) -> None:
        cond = TrackCompression(track="drums", min_amount=20.0)
        assert cond.evaluate(tracks(drums=TrackParams(compressor_amount=100.0)), None)
        assert cond.describe() == "drums compression at 20%+"

    def test_contrast(self) -> None:
        cond = CompressionContrast(
            more_compressed="drums", less_compressed="vocal", min_difference=20.0
        )
        mix = tracks(
            drums=TrackParams(compressor_amount=60.0), vocal=TrackParams(compressor_amount=40.0)
        )
        assert cond.evaluate(mix, None)
        mix = tracks(
            drums=TrackParams(compressor_amount=50.0), vocal=TrackParams(compressor_amount=40.0)
        )
        assert not cond.evaluate(mix, None)
        assert not cond.evaluate(tracks(drums=TrackParams(compressor_amount=90.0)), None)
        assert cond.describe() == "drums more compressed than vocal"


# ---------------------------------------------------------------------------
# Bus
# ---------------------------------------------------------------------------


class TestBusConditions:
    def test_bus_compression(self) -> None:
        cond = BusCompression(min_amount=10.0, max_amount=40.0)
        assert cond.evaluate({}, BusParams(compressor_amount=25.0))
        assert not cond.evaluate({}, BusParams(compressor_amount=50.0))
        assert not cond.evaluate({}, BusParams())
        assert not cond.evaluate({}, None)
        assert cond.describe() == "bus compression at 10% to 40%"

    def test_bus_eq_boost_and_cut(self, warm_bus: BusParams) -> None:
        assert BusEQBoost(band="low", min_boost=1.0).evaluate({}, warm_bus)
        assert BusEQCut(band="high", min_cut=1.0).evaluate({}, warm_bus)
        assert not BusEQCut(band="high", min_cut=2.0).evaluate({}, warm_bus)
        assert not BusEQBoost(band="low", min_boost=1.0).evaluate({}, BusParams())

    def test_bus_kind_false_on_track_path(self, warm_bus: BusParams) -> None:
        cond = BusEQBoost(band="low", min_boost=1.0)
        assert cond.check_tracks({"bus": TrackParams(low=12.0)}) is False
        assert cond.check_bus(warm_bus) is True

    def test_track_kind_false_on_bus_path(self) -> None:
        cond = EQBoost(track="kick", band="low", min_boost=1.0)
        assert cond.check_bus(BusParams(eq=EQParams(low=6.0, mid=0.0, high=0.0))) is False


class TestEvaluateConditions:
    def test_results_in_order(self, drum_mix: dict[str, TrackParams], warm_bus: BusParams) -> None:
        conditions = (
            VolumeLouder(track1="kick", track2="hihat"),
            PanPosition(track="hihat", position="right"),
            BusCompression(min_amount=10.0),
        )
        results = evaluate_conditions(conditions, drum_mix, warm_bus)
        assert [r.kind for r in results] == ["volume_louder", "pan_position", "bus_compression"]
        assert [r.passed for r in results] == [True, False, True]
        assert results[1].description == "hihat panned right"

    def test_empty(self) -> None:
        assert evaluate_conditions((), {}, None) == ()
