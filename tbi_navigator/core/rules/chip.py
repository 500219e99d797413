"""CT in Head Injury Patients (CHIP) rule."""

from __future__ import annotations

from ...schemas.findings import PatientFindings
from ...schemas.results import CDRDecision
from .registry import register

MAJOR_CRITERIA = ("gcs_less_than_15", "skull_fracture", "seizure")
MINOR_CRITERIA = ("age_65_plus", "vomiting_2_plus", "dangerous_mechanism")


@register("CHIP")
def compute(findings: PatientFindings) -> CDRDecision:
    major = sum(getattr(findings, key) for key in MAJOR_CRITERIA)
    minor = sum(getattr(findings, key) for key in MINOR_CRITERIA)
    return CDRDecision(
        rule="CHIP",
        recommend_ct=major >= 1 or minor >= 2,
        major_count=major,
        minor_count=minor,
    )
