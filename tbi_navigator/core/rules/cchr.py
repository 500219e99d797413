"""Canadian CT Head Rule."""

from __future__ import annotations

from ...schemas.findings import PatientFindings
from ...schemas.results import CDRDecision
from .registry import register


@register("CCHR")
def compute(findings: PatientFindings) -> CDRDecision:
    if (
        findings.gcs_less_than_15
        or findings.skull_fracture
        or findings.vomiting_2_plus
        or findings.age_65_plus
    ):
        return CDRDecision(rule="CCHR", recommend_ct=True, tier="High Risk")
    if findings.dangerous_mechanism:
        return CDRDecision(rule="CCHR", recommend_ct=True, tier="Medium Risk")
    return CDRDecision(rule="CCHR", recommend_ct=False, tier="Low Risk")
