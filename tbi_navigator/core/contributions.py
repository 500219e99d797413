"""Rank the active risk factors of a patient by odds ratio."""

from __future__ import annotations

from typing import Any, Mapping, Tuple

from ..schemas.findings import PatientFindings, coerce_findings
from ..schemas.results import Contribution
from .reference import PREDICTORS

__all__ = ["rank_contributions", "has_findings"]


def rank_contributions(findings: PatientFindings | Mapping[str, Any]) -> Tuple[Contribution, ...]:
    """Active predictors, highest odds ratio first; ties keep registry order."""

    snapshot = coerce_findings(findings)
    active = [
        Contribution(
            key=predictor.key,
            label=predictor.label,
            odds_ratio=predictor.odds_ratio,
            coefficient=predictor.coefficient,
        )
        for predictor in PREDICTORS
        if getattr(snapshot, predictor.key) == 1
    ]
    # sorted() is stable
    return tuple(sorted(active, key=lambda item: item.odds_ratio, reverse=True))


def has_findings(findings: PatientFindings | Mapping[str, Any]) -> bool:
    return bool(coerce_findings(findings).active_keys())
