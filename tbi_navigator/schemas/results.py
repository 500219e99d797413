"""Schemas describing the engine's computed results.

Values are kept at full precision; rounding is left to the display layer.
"""

from __future__ import annotations

import math
from typing import Literal, Optional, Tuple

from pydantic import Field, computed_field, field_validator

from .common import StrictModel
from .findings import PatientFindings

RiskCategory = Literal["Very Low", "Low", "Moderate", "High"]
AdvisoryBand = Literal["no_imaging", "discretionary", "recommended", "strongly_recommended"]
Severity = Literal["info", "notice", "warning", "critical"]
CCHRTier = Literal["High Risk", "Medium Risk", "Low Risk"]


class RiskResult(StrictModel):
    probability: float = Field(ge=0, le=1)
    ci_lower: float = Field(ge=0, le=1)
    ci_upper: float = Field(ge=0, le=1)
    category: RiskCategory
    linear_predictor: float
    standard_error: float = Field(ge=0)

    @computed_field
    @property
    def percentage(self) -> float:
        return self.probability * 100

    @computed_field
    @property
    def ci_lower_pct(self) -> float:
        return self.ci_lower * 100

    @computed_field
    @property
    def ci_upper_pct(self) -> float:
        return self.ci_upper * 100


class Contribution(StrictModel):
    key: str
    label: str
    odds_ratio: float = Field(gt=0)
    coefficient: float


class AdvisoryTier(StrictModel):
    band: AdvisoryBand
    severity: Severity
    text: str


class RulePerformance(StrictModel):
    """Published accuracy of a decision rule or model cut-point (percent)."""

    title: str
    sensitivity: float = Field(ge=0, le=100)
    specificity: float = Field(ge=0, le=100)
    ct_rate: float = Field(ge=0, le=100)


class CDRDecision(StrictModel):
    rule: str
    recommend_ct: bool
    tier: Optional[CCHRTier] = None
    major_count: Optional[int] = Field(default=None, ge=0)
    minor_count: Optional[int] = Field(default=None, ge=0)
    performance: Optional[RulePerformance] = None


class ModelThresholdView(StrictModel):
    cutpoint_percent: float
    recommend_ct: bool
    performance: RulePerformance


class CDRComparison(StrictModel):
    probability: float = Field(ge=0, le=1)
    cchr: CDRDecision
    noc: CDRDecision
    nexus_ii: CDRDecision
    chip: CDRDecision
    model_views: Tuple[ModelThresholdView, ...]

    @property
    def rules(self) -> Tuple[CDRDecision, ...]:
        return (self.cchr, self.noc, self.nexus_ii, self.chip)

    @computed_field
    @property
    def rules_agree(self) -> bool:
        return len({decision.recommend_ct for decision in self.rules}) == 1


class ThresholdMetrics(StrictModel):
    """Sensitivity, specificity, NPV and CT rate in percent; NNS as a count."""

    sensitivity: float = Field(ge=0, le=100)
    specificity: float = Field(ge=0, le=100)
    npv: float = Field(ge=0, le=100)
    ct_rate: float = Field(ge=0, le=100)
    nns: float = Field(ge=0, allow_inf_nan=False)


class ThresholdDataPoint(ThresholdMetrics):
    threshold: float


class CostParameters(StrictModel):
    ct_cost: float = Field(default=1200.0, ge=0)
    citbi_treatment_cost: float = Field(default=150000.0, ge=0)
    false_positive_workup_cost: float = Field(default=200.0, ge=0)
    radiation_per_ct: float = Field(default=2.0, ge=0)

    @field_validator("*")
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("cost parameters must be finite")
        return value


class StrategyOutcome(StrictModel):
    citbi_cases: float
    scans: float
    detected: float
    missed: float
    false_positives: float
    true_negatives: float
    total_cost: float
    cost_per_detected: float
    total_radiation: float
    nns: float


class ConsequenceReport(StrictModel):
    threshold_percent: Optional[float] = None
    prevalence_percent: float
    population: int
    metrics: ThresholdMetrics
    cost_parameters: CostParameters
    selective: StrategyOutcome
    scan_all: StrategyOutcome

    @computed_field
    @property
    def scans_avoided(self) -> float:
        return self.scan_all.scans - self.selective.scans

    @computed_field
    @property
    def additional_missed(self) -> float:
        return self.selective.missed - self.scan_all.missed

    @computed_field
    @property
    def cost_difference(self) -> float:
        return self.selective.total_cost - self.scan_all.total_cost

    @computed_field
    @property
    def radiation_avoided(self) -> float:
        return self.scan_all.total_radiation - self.selective.total_radiation


class PatientAssessment(StrictModel):
    findings: PatientFindings
    risk: RiskResult
    contributions: Tuple[Contribution, ...]
    recommendation: AdvisoryTier
    cdrs: CDRComparison
