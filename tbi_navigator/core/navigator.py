"""High-level orchestrator producing a complete patient assessment."""

from __future__ import annotations

from typing import Any, Mapping

from ..schemas.findings import PatientFindings, coerce_findings
from ..schemas.results import PatientAssessment
from .contributions import rank_contributions
from .recommendation import recommend
from .risk_model import evaluate_risk
from .rules import evaluate_cdrs


def assess(findings: PatientFindings | Mapping[str, Any]) -> PatientAssessment:
    snapshot = coerce_findings(findings)
    risk = evaluate_risk(snapshot)
    return PatientAssessment(
        findings=snapshot,
        risk=risk,
        contributions=rank_contributions(snapshot),
        recommendation=recommend(risk.probability),
        cdrs=evaluate_cdrs(snapshot, risk.probability),
    )
