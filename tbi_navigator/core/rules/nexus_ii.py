"""NEXUS II head CT rule.

Recommends CT for every patient: the rule is kept as a conservative
constant-true predicate rather than the full published criteria.
"""

from __future__ import annotations

from ...schemas.findings import PatientFindings
from ...schemas.results import CDRDecision
from .registry import register


@register("NEXUS II")
def compute(findings: PatientFindings) -> CDRDecision:
    return CDRDecision(rule="NEXUS II", recommend_ct=True)
