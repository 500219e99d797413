"""Interpolate test-performance metrics for a continuous risk threshold."""

from __future__ import annotations

import logging
import math
from typing import Tuple

from ..errors import ThresholdRangeError
from ..schemas.results import ThresholdDataPoint, ThresholdMetrics
from .reference import THRESHOLD_TABLE

__all__ = ["interpolate_threshold", "threshold_anchors", "validate_threshold", "METRIC_FIELDS"]

logger = logging.getLogger(__name__)

METRIC_FIELDS = ("sensitivity", "specificity", "npv", "ct_rate", "nns")

MIN_THRESHOLD = 0.0
MAX_THRESHOLD = 100.0


def threshold_anchors() -> Tuple[ThresholdDataPoint, ...]:
    return THRESHOLD_TABLE


def validate_threshold(threshold_percent: float) -> float:
    if isinstance(threshold_percent, bool) or not isinstance(threshold_percent, (int, float)):
        raise ThresholdRangeError(
            f"threshold must be a number, got {type(threshold_percent).__name__}",
            details={"threshold": repr(threshold_percent)},
        )
    if not math.isfinite(threshold_percent) or not MIN_THRESHOLD <= threshold_percent <= MAX_THRESHOLD:
        logger.warning("Rejected threshold outside [0, 100]: %r", threshold_percent)
        raise ThresholdRangeError(
            f"threshold must be a percentage within [{MIN_THRESHOLD:g}, {MAX_THRESHOLD:g}], "
            f"got {threshold_percent!r}",
            details={"threshold": threshold_percent},
        )
    return float(threshold_percent)


def _metrics(point: ThresholdDataPoint) -> ThresholdMetrics:
    return ThresholdMetrics(**{name: getattr(point, name) for name in METRIC_FIELDS})


def interpolate_threshold(threshold_percent: float) -> ThresholdMetrics:
    """Linear interpolation between the bracketing anchors, clamped at both ends."""

    t = validate_threshold(threshold_percent)
    first, last = THRESHOLD_TABLE[0], THRESHOLD_TABLE[-1]
    if t <= first.threshold:
        if t < first.threshold:
            logger.debug("Threshold %.3f below table, clamped to %.1f", t, first.threshold)
        return _metrics(first)
    if t >= last.threshold:
        if t > last.threshold:
            logger.debug("Threshold %.3f above table, clamped to %.1f", t, last.threshold)
        return _metrics(last)

    for lower, upper in zip(THRESHOLD_TABLE, THRESHOLD_TABLE[1:]):
        if t == lower.threshold:
            return _metrics(lower)
        if lower.threshold < t < upper.threshold:
            break
    ratio = (t - lower.threshold) / (upper.threshold - lower.threshold)
    return ThresholdMetrics(
        **{
            name: getattr(lower, name) + ratio * (getattr(upper, name) - getattr(lower, name))
            for name in METRIC_FIELDS
        }
    )
