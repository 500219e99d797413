"""Side-by-side comparison of decision rules and fixed model cut-points."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ...schemas.findings import PatientFindings, coerce_findings
from ...schemas.results import CDRComparison, ModelThresholdView
from ..reference import MODEL_CUTPOINTS
from ..risk_model import evaluate_risk, validate_probability
from .registry import run_rules

__all__ = ["evaluate_cdrs", "disagreement_notice"]

logger = logging.getLogger(__name__)


def _model_views(probability: float) -> tuple[ModelThresholdView, ...]:
    return tuple(
        ModelThresholdView(
            cutpoint_percent=percent,
            recommend_ct=probability >= percent / 100,
            performance=performance,
        )
        for percent, performance in MODEL_CUTPOINTS
    )


def evaluate_cdrs(
    findings: PatientFindings | Mapping[str, Any],
    probability: Optional[float] = None,
) -> CDRComparison:
    """Apply CCHR, NOC, NEXUS II and CHIP plus the model at 1/2/3/5 %.

    When *probability* is omitted it is computed with the risk model.
    """

    snapshot = coerce_findings(findings)
    if probability is None:
        probability = evaluate_risk(snapshot).probability
    else:
        probability = validate_probability(probability)

    decisions = run_rules(snapshot)
    comparison = CDRComparison(
        probability=probability,
        cchr=decisions["CCHR"],
        noc=decisions["NOC"],
        nexus_ii=decisions["NEXUS II"],
        chip=decisions["CHIP"],
        model_views=_model_views(probability),
    )
    logger.debug(
        "CDRs evaluated: %s agree=%s",
        {name: decision.recommend_ct for name, decision in decisions.items()},
        comparison.rules_agree,
    )
    return comparison


def disagreement_notice(comparison: CDRComparison) -> Optional[str]:
    """Text shown when the four rules do not all give the same answer."""

    if comparison.rules_agree:
        return None
    return (
        "The clinical decision rules do not all agree on the recommendation for this "
        f"patient. The predictive model provides a continuous risk estimate "
        f"({comparison.probability * 100:.2f}%) that can help inform decision-making "
        "when CDRs disagree."
    )
