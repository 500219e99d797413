from __future__ import annotations

import math

import pytest

from tbi_navigator.core.threshold import METRIC_FIELDS, interpolate_threshold, threshold_anchors
from tbi_navigator.errors import ThresholdRangeError


def test_exact_at_anchor_points():
    assert interpolate_threshold(2.0).sensitivity == 84.4
    assert interpolate_threshold(10.0).specificity == 88.6
    for anchor in threshold_anchors():
        metrics = interpolate_threshold(anchor.threshold)
        for name in METRIC_FIELDS:
            assert getattr(metrics, name) == getattr(anchor, name)


def test_midpoint_is_linear_blend():
    lower, upper = threshold_anchors()[2], threshold_anchors()[3]
    assert (lower.threshold, upper.threshold) == (3.0, 5.0)
    metrics = interpolate_threshold(4.0)
    for name in METRIC_FIELDS:
        expected = getattr(lower, name) + 0.5 * (getattr(upper, name) - getattr(lower, name))
        assert getattr(metrics, name) == pytest.approx(expected)
    assert metrics.sensitivity == pytest.approx(69.1)


def test_fractional_position():
    metrics = interpolate_threshold(7.5)
    assert metrics.ct_rate == pytest.approx(18.8 + 0.5 * (12.9 - 18.8))
    metrics = interpolate_threshold(1.25)
    assert metrics.nns == pytest.approx(20.3 + 0.25 * (14.2 - 20.3))


def test_clamped_outside_table():
    assert interpolate_threshold(0.0) == interpolate_threshold(1.0)
    assert interpolate_threshold(0.5).sensitivity == 95.2
    assert interpolate_threshold(25.0) == interpolate_threshold(10.0)
    assert interpolate_threshold(100).nns == 6.4


@pytest.mark.parametrize("threshold", [-0.1, 100.5, math.nan, math.inf, -math.inf, "2", None, True])
def test_rejects_insane_thresholds(threshold):
    with pytest.raises(ThresholdRangeError):
        interpolate_threshold(threshold)


def test_sensitivity_never_increases_with_threshold():
    previous = interpolate_threshold(1.0).sensitivity
    t = 1.0
    while t <= 10.0:
        current = interpolate_threshold(t).sensitivity
        assert current <= previous + 1e-9
        previous = current
        t += 0.1
