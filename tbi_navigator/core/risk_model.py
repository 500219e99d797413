"""Logistic ciTBI risk model with a Wald confidence interval."""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from ..errors import ProbabilityRangeError
from ..schemas.findings import PatientFindings, coerce_findings
from ..schemas.results import RiskResult
from .bands import classify
from .reference import (
    COEFFICIENTS,
    EFFECTIVE_SAMPLE_SIZE,
    INTERCEPT,
    RISK_CATEGORY_BANDS,
    Z_SCORE,
)

__all__ = ["evaluate_risk", "linear_predictor", "categorize", "validate_probability"]

logger = logging.getLogger(__name__)


def validate_probability(probability: float) -> float:
    if isinstance(probability, bool) or not isinstance(probability, (int, float)):
        raise ProbabilityRangeError(
            f"probability must be a number, got {type(probability).__name__}",
            details={"probability": repr(probability)},
        )
    if not math.isfinite(probability) or not 0.0 <= probability <= 1.0:
        logger.warning("Rejected probability outside [0, 1]: %r", probability)
        raise ProbabilityRangeError(
            f"probability must be within [0, 1], got {probability!r}",
            details={"probability": probability},
        )
    return float(probability)


def linear_predictor(findings: PatientFindings) -> float:
    z = INTERCEPT
    for key, coefficient in COEFFICIENTS.items():
        z += getattr(findings, key) * coefficient
    return z


def categorize(probability: float) -> str:
    return classify(probability, RISK_CATEGORY_BANDS).label


def evaluate_risk(findings: PatientFindings | Mapping[str, Any]) -> RiskResult:
    """Compute ciTBI probability, its 95% Wald interval and severity category."""

    snapshot = coerce_findings(findings)
    z = linear_predictor(snapshot)
    probability = 1.0 / (1.0 + math.exp(-z))
    standard_error = math.sqrt(probability * (1.0 - probability) / EFFECTIVE_SAMPLE_SIZE)
    ci_lower = max(0.0, probability - Z_SCORE * standard_error)
    ci_upper = min(1.0, probability + Z_SCORE * standard_error)
    category = categorize(probability)
    logger.debug("Risk evaluated: z=%.4f p=%.6f category=%s", z, probability, category)
    return RiskResult(
        probability=probability,
        ci_lower=ci_lower,
        ci_upper=ci_upper,
        category=category,
        linear_predictor=z,
        standard_error=standard_error,
    )
