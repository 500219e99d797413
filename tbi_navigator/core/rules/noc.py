"""New Orleans Criteria."""

from __future__ import annotations

from ...schemas.findings import PatientFindings
from ...schemas.results import CDRDecision
from .registry import register


@register("NOC")
def compute(findings: PatientFindings) -> CDRDecision:
    recommend = bool(
        findings.headache
        or findings.vomiting_2_plus
        or findings.age_65_plus
        or findings.intoxication
        or findings.seizure
    )
    return CDRDecision(rule="NOC", recommend_ct=recommend)
