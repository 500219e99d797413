"""Advisory CT-imaging guidance for a ciTBI probability.

These tiers are tuned independently of the risk categories in
``risk_model``; the two tables must not be merged.
"""

from __future__ import annotations

from ..schemas.results import AdvisoryTier
from .bands import classify
from .reference import ADVISORY_BANDS
from .risk_model import validate_probability

__all__ = ["recommend"]


def recommend(probability: float) -> AdvisoryTier:
    band = classify(validate_probability(probability), ADVISORY_BANDS)
    return AdvisoryTier(band=band.label, severity=band.payload["severity"], text=band.payload["text"])
