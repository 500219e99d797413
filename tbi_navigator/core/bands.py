"""Ordered (upper-bound, label) lookups shared by the tier classifiers."""

from __future__ import annotations

from typing import Sequence

from .reference import Band

__all__ = ["classify"]


def classify(value: float, bands: Sequence[Band]) -> Band:
    """Return the first band whose exclusive upper bound exceeds *value*."""

    for band in bands:
        if band.upper is None or value < band.upper:
            return band
    # build_bands guarantees an open-ended last band
    raise LookupError(f"no band covers {value!r}")
