"""TBI Risk Navigator: ciTBI risk, decision-rule comparison and CT threshold analysis."""

from .core.consequences import simulate, simulate_consequences
from .core.contributions import has_findings, rank_contributions
from .core.navigator import assess
from .core.recommendation import recommend
from .core.reference import (
    DEFAULT_COST_PARAMETERS,
    DEFAULT_PREVALENCE_PERCENT,
    DEFAULT_THRESHOLD_PERCENT,
    EFFECTIVE_SAMPLE_SIZE,
    REFERENCE_POPULATION,
)
from .core.risk_model import evaluate_risk
from .core.rules import disagreement_notice, evaluate_cdrs
from .core.threshold import interpolate_threshold
from .schemas.findings import PREDICTOR_KEYS, PatientFindings, reset_findings, toggle_finding
from .schemas.results import (
    AdvisoryTier,
    CDRComparison,
    CDRDecision,
    ConsequenceReport,
    Contribution,
    CostParameters,
    PatientAssessment,
    RiskResult,
    StrategyOutcome,
    ThresholdMetrics,
)

__version__ = "1.0.0"

__all__ = [
    "assess",
    "evaluate_risk",
    "rank_contributions",
    "has_findings",
    "recommend",
    "evaluate_cdrs",
    "disagreement_notice",
    "interpolate_threshold",
    "simulate",
    "simulate_consequences",
    "reset_findings",
    "toggle_finding",
    "PREDICTOR_KEYS",
    "DEFAULT_COST_PARAMETERS",
    "DEFAULT_PREVALENCE_PERCENT",
    "DEFAULT_THRESHOLD_PERCENT",
    "EFFECTIVE_SAMPLE_SIZE",
    "REFERENCE_POPULATION",
    "AdvisoryTier",
    "CDRComparison",
    "CDRDecision",
    "ConsequenceReport",
    "Contribution",
    "CostParameters",
    "PatientAssessment",
    "PatientFindings",
    "RiskResult",
    "StrategyOutcome",
    "ThresholdMetrics",
]
