"""Population-level consequences of a CT risk threshold.

Projects interpolated test performance onto a reference population and
compares selective scanning against scanning every patient. All values are
returned at full precision.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from ..errors import (
    CostParametersError,
    MetricsValidationError,
    PopulationRangeError,
    PrevalenceRangeError,
)
from ..schemas.results import ConsequenceReport, CostParameters, StrategyOutcome, ThresholdMetrics
from .reference import DEFAULT_COST_PARAMETERS, DEFAULT_PREVALENCE_PERCENT, REFERENCE_POPULATION
from .threshold import interpolate_threshold

__all__ = [
    "simulate",
    "simulate_consequences",
    "selective_outcome",
    "scan_all_outcome",
    "coerce_cost_parameters",
    "coerce_metrics",
]

logger = logging.getLogger(__name__)

CostInput = Union[CostParameters, Mapping[str, Any], None]
MetricsInput = Union[ThresholdMetrics, Mapping[str, Any]]


def _safe_ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def coerce_cost_parameters(cost_params: CostInput) -> CostParameters:
    """Defaults when omitted; mappings are validated at the boundary."""

    if cost_params is None:
        return DEFAULT_COST_PARAMETERS
    if isinstance(cost_params, CostParameters):
        return cost_params
    if not isinstance(cost_params, Mapping):
        raise CostParametersError(
            "cost parameters must be a mapping", details={"type": type(cost_params).__name__}
        )
    try:
        return CostParameters.model_validate({**DEFAULT_COST_PARAMETERS.model_dump(), **cost_params})
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False)
        logger.warning("Rejected cost parameters with %d error(s)", len(errors))
        raise CostParametersError("invalid cost parameters", details={"errors": errors}) from exc


def coerce_metrics(metrics: MetricsInput) -> ThresholdMetrics:
    if isinstance(metrics, ThresholdMetrics):
        return metrics
    if not isinstance(metrics, Mapping):
        raise MetricsValidationError(
            "threshold metrics must be a mapping", details={"type": type(metrics).__name__}
        )
    try:
        return ThresholdMetrics.model_validate(dict(metrics))
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False)
        logger.warning("Rejected threshold metrics with %d error(s)", len(errors))
        raise MetricsValidationError("invalid threshold metrics", details={"errors": errors}) from exc


def _validate_population(population: int) -> int:
    if isinstance(population, bool) or not isinstance(population, int) or population <= 0:
        logger.warning("Rejected population: %r", population)
        raise PopulationRangeError(
            f"population must be a positive integer, got {population!r}",
            details={"population": repr(population)},
        )
    return population


def _validate_prevalence(prevalence_percent: float) -> float:
    if isinstance(prevalence_percent, bool) or not isinstance(prevalence_percent, (int, float)):
        raise PrevalenceRangeError(
            f"prevalence must be a number, got {type(prevalence_percent).__name__}",
            details={"prevalence": repr(prevalence_percent)},
        )
    if not math.isfinite(prevalence_percent) or not 0.0 <= prevalence_percent <= 100.0:
        logger.warning("Rejected prevalence outside [0, 100]: %r", prevalence_percent)
        raise PrevalenceRangeError(
            f"prevalence must be a percentage within [0, 100], got {prevalence_percent!r}",
            details={"prevalence": prevalence_percent},
        )
    return float(prevalence_percent)


def selective_outcome(
    metrics: ThresholdMetrics,
    costs: CostParameters,
    citbi_cases: float,
    population: int,
) -> StrategyOutcome:
    scans = metrics.ct_rate / 100 * population
    detected = citbi_cases * metrics.sensitivity / 100
    missed = citbi_cases - detected
    false_positives = scans - detected
    true_negatives = (population - citbi_cases) * metrics.specificity / 100
    if false_positives < 0:
        logger.warning(
            "Detected cases (%.2f) exceed scans (%.2f); prevalence is too high for this threshold",
            detected,
            scans,
        )
    total_cost = (
        scans * costs.ct_cost
        + missed * costs.citbi_treatment_cost
        + false_positives * costs.false_positive_workup_cost
    )
    return StrategyOutcome(
        citbi_cases=citbi_cases,
        scans=scans,
        detected=detected,
        missed=missed,
        false_positives=false_positives,
        true_negatives=true_negatives,
        total_cost=total_cost,
        cost_per_detected=_safe_ratio(total_cost, detected),
        total_radiation=scans * costs.radiation_per_ct,
        nns=metrics.nns,
    )


def scan_all_outcome(costs: CostParameters, citbi_cases: float, population: int) -> StrategyOutcome:
    scans = float(population)
    false_positives = population - citbi_cases
    total_cost = scans * costs.ct_cost + false_positives * costs.false_positive_workup_cost
    return StrategyOutcome(
        citbi_cases=citbi_cases,
        scans=scans,
        detected=citbi_cases,
        missed=0.0,
        false_positives=false_positives,
        true_negatives=0.0,
        total_cost=total_cost,
        cost_per_detected=_safe_ratio(total_cost, citbi_cases),
        total_radiation=scans * costs.radiation_per_ct,
        nns=_safe_ratio(scans, citbi_cases),
    )


def simulate(
    metrics: MetricsInput,
    cost_params: CostInput = None,
    prevalence_percent: float = DEFAULT_PREVALENCE_PERCENT,
    *,
    population: int = REFERENCE_POPULATION,
    threshold_percent: Optional[float] = None,
) -> ConsequenceReport:
    """Selective-scanning and scan-all outcomes for *population* patients."""

    metrics = coerce_metrics(metrics)
    population = _validate_population(population)
    costs = coerce_cost_parameters(cost_params)
    prevalence = _validate_prevalence(prevalence_percent)
    citbi_cases = prevalence / 100 * population
    report = ConsequenceReport(
        threshold_percent=threshold_percent,
        prevalence_percent=prevalence,
        population=population,
        metrics=metrics,
        cost_parameters=costs,
        selective=selective_outcome(metrics, costs, citbi_cases, population),
        scan_all=scan_all_outcome(costs, citbi_cases, population),
    )
    logger.debug(
        "Simulated %d patients: scans=%.2f detected=%.2f missed=%.2f",
        population,
        report.selective.scans,
        report.selective.detected,
        report.selective.missed,
    )
    return report


def simulate_consequences(
    threshold_percent: float,
    cost_params: CostInput = None,
    prevalence_percent: float = DEFAULT_PREVALENCE_PERCENT,
) -> ConsequenceReport:
    metrics = interpolate_threshold(threshold_percent)
    return simulate(metrics, cost_params, prevalence_percent, threshold_percent=float(threshold_percent))
