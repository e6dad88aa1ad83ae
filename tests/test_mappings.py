"""
Offset mapping tests: rotation, overlay opacity, release decision.

Run:
    pytest tests/test_mappings.py -v
"""

import pytest

from swipe import (
    GestureConfig,
    accept_opacity,
    decide_release,
    feedback_for_offset,
    reject_opacity,
    rotation_for_offset,
)
from swipe.models import Direction


class TestRotation:
    @pytest.mark.parametrize(
        "offset,expected",
        [(-300, -30.0), (-150, -15.0), (0, 0.0), (150, 15.0), (300, 30.0)],
    )
    def test_anchor_points_and_interpolation(self, offset, expected):
        assert rotation_for_offset(offset) == pytest.approx(expected)

    @pytest.mark.parametrize("offset,expected", [(-1000, -30.0), (450, 30.0), (1e9, 30.0)])
    def test_clamped_outside_anchors(self, offset, expected):
        assert rotation_for_offset(offset) == pytest.approx(expected)

    def test_monotonic(self):
        offsets = [x * 7.5 for x in range(-60, 61)]
        values = [rotation_for_offset(x) for x in offsets]
        assert values == sorted(values)

    def test_custom_anchor(self):
        config = GestureConfig(exit_distance=200, max_rotation=20)
        assert rotation_for_offset(100, config) == pytest.approx(10.0)
        assert rotation_for_offset(250, config) == pytest.approx(20.0)


class TestOverlayOpacity:
    def test_zero_below_feedback_start(self):
        assert accept_opacity(0) == 0.0
        assert accept_opacity(10) == 0.0
        assert accept_opacity(-50) == 0.0

    def test_full_exactly_at_threshold(self):
        assert accept_opacity(100) == pytest.approx(1.0)
        assert reject_opacity(-100) == pytest.approx(1.0)

    def test_just_below_threshold_is_not_full(self):
        assert accept_opacity(99) < 1.0
        assert reject_opacity(-99) < 1.0

    def test_clamped_beyond_threshold(self):
        assert accept_opacity(250) == 1.0
        assert reject_opacity(-1000) == 1.0

    def test_linear_midpoint(self):
        assert accept_opacity(55) == pytest.approx(0.5)

    def test_reject_mirrors_accept(self):
        for offset in (0, 10, 33, 80, 100, 140):
            assert reject_opacity(-offset) == pytest.approx(accept_opacity(offset))
            assert reject_opacity(offset) == 0.0

    def test_monotonic(self):
        offsets = [x * 2.5 for x in range(0, 121)]
        values = [accept_opacity(x) for x in offsets]
        assert values == sorted(values)

    def test_custom_threshold_moves_full_point(self):
        config = GestureConfig(threshold=60)
        assert accept_opacity(60, config) == pytest.approx(1.0)
        assert decide_release(60, config) is None
        assert decide_release(60.5, config) is Direction.RIGHT


class TestFeedbackTuple:
    def test_drag_tuple(self):
        fb = feedback_for_offset(150)
        assert fb.offset == 150.0
        assert fb.rotation == pytest.approx(15.0)
        assert fb.accept_opacity == 1.0
        assert fb.reject_opacity == 0.0
        assert fb.card_opacity == 1.0

    def test_exit_fades_card(self):
        assert feedback_for_offset(300, exiting=True).card_opacity == 0.0


class TestDecideRelease:
    @pytest.mark.parametrize("offset", [0, 50, -50, 100, -100, 99.999])
    def test_at_or_below_threshold_snaps_back(self, offset):
        assert decide_release(offset) is None

    def test_beyond_threshold_commits_in_offset_direction(self):
        assert decide_release(100.01) is Direction.RIGHT
        assert decide_release(150) is Direction.RIGHT
        assert decide_release(-120) is Direction.LEFT


class TestGestureConfig:
    def test_defaults(self):
        config = GestureConfig()
        assert (config.threshold, config.exit_distance, config.max_rotation) == (100.0, 300.0, 30.0)
        assert config.exit_duration == pytest.approx(0.3)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"threshold": 5},  # below feedback_start
            {"threshold": 300},  # not below exit_distance
            {"feedback_start": -1},
            {"max_rotation": -5},
            {"exit_duration": -0.1},
        ],
    )
    def test_rejects_inconsistent_anchors(self, kwargs):
        with pytest.raises(ValueError):
            GestureConfig(**kwargs)

    def test_from_dict_ignores_unknown_keys(self):
        config = GestureConfig.from_dict({"threshold": 80, "color": "red", "exit_duration": None})
        assert config.threshold == 80
        assert config.exit_duration == pytest.approx(0.3)
