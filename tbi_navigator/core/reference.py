"""Predictor registry and frozen reference tables built from the ``citbi`` pack.

The pack is validated once at import time; every table exposed here is an
immutable structure (tuples, ``MappingProxyType`` views, frozen models).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from pydantic import ValidationError

from ..content import load_pack
from ..errors import ReferenceDataError
from ..schemas.findings import PREDICTOR_KEYS
from ..schemas.results import CostParameters, RulePerformance, ThresholdDataPoint

__all__ = [
    "PACK_ID",
    "Predictor",
    "Band",
    "PREDICTORS",
    "COEFFICIENTS",
    "ODDS_RATIOS",
    "LABELS",
    "INTERCEPT",
    "EFFECTIVE_SAMPLE_SIZE",
    "Z_SCORE",
    "RISK_CATEGORY_BANDS",
    "ADVISORY_BANDS",
    "MODEL_CUTPOINTS",
    "RULE_PERFORMANCE",
    "THRESHOLD_TABLE",
    "REFERENCE_POPULATION",
    "DEFAULT_PREVALENCE_PERCENT",
    "DEFAULT_THRESHOLD_PERCENT",
    "DEFAULT_COST_PARAMETERS",
    "build_predictors",
    "build_bands",
    "build_threshold_table",
]

PACK_ID = "citbi"


@dataclass(frozen=True)
class Predictor:
    key: str
    label: str
    coefficient: float
    odds_ratio: float


@dataclass(frozen=True)
class Band:
    """One row of an ordered lookup; ``upper`` is exclusive, ``None`` is open-ended."""

    upper: Optional[float]
    label: str
    payload: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


def build_predictors(rows: Iterable[Mapping[str, Any]]) -> Tuple[Predictor, ...]:
    predictors = []
    for row in rows:
        try:
            predictor = Predictor(
                key=str(row["key"]),
                label=str(row["label"]),
                coefficient=float(row["coefficient"]),
                odds_ratio=float(row["odds_ratio"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ReferenceDataError(f"malformed predictor row: {row!r}") from exc
        if predictor.odds_ratio <= 0:
            raise ReferenceDataError(f"odds ratio for '{predictor.key}' must be positive")
        predictors.append(predictor)

    keys = tuple(p.key for p in predictors)
    if keys != PREDICTOR_KEYS:
        raise ReferenceDataError(
            "predictor keys must match the registry exactly and in order",
            details={"expected": list(PREDICTOR_KEYS), "found": list(keys)},
        )
    return tuple(predictors)


def build_bands(rows: Iterable[Mapping[str, Any]], label_field: str = "label") -> Tuple[Band, ...]:
    bands = []
    for row in rows:
        upper = row.get("upper")
        payload = {k: v for k, v in row.items() if k not in ("upper", label_field)}
        bands.append(
            Band(
                upper=None if upper is None else float(upper),
                label=str(row[label_field]),
                payload=MappingProxyType(payload),
            )
        )
    if not bands:
        raise ReferenceDataError("band table is empty")
    if bands[-1].upper is not None:
        raise ReferenceDataError("last band must be open-ended")
    bounds = [band.upper for band in bands[:-1]]
    if any(bound is None for bound in bounds):
        raise ReferenceDataError("only the last band may be open-ended")
    if any(lower >= upper for lower, upper in zip(bounds, bounds[1:])):
        raise ReferenceDataError("band upper bounds must be strictly ascending")
    return tuple(bands)


def build_threshold_table(rows: Iterable[Mapping[str, Any]]) -> Tuple[ThresholdDataPoint, ...]:
    try:
        table = tuple(ThresholdDataPoint.model_validate(row) for row in rows)
    except ValidationError as exc:
        raise ReferenceDataError("malformed threshold table") from exc
    if not table:
        raise ReferenceDataError("threshold table is empty")
    thresholds = [point.threshold for point in table]
    if any(lower >= upper for lower, upper in zip(thresholds, thresholds[1:])):
        raise ReferenceDataError(
            "threshold anchors must be strictly ascending",
            details={"thresholds": thresholds},
        )
    return table


def _build_rule_performance(rows: Mapping[str, Mapping[str, Any]]) -> Mapping[str, RulePerformance]:
    try:
        return MappingProxyType({name: RulePerformance.model_validate(row) for name, row in rows.items()})
    except ValidationError as exc:
        raise ReferenceDataError("malformed rule performance table") from exc


def _build_cutpoints(rows: Iterable[Mapping[str, Any]]) -> Tuple[Tuple[float, RulePerformance], ...]:
    cutpoints = []
    for row in rows:
        percent = float(row["percent"])
        performance = RulePerformance(
            title=f"Predictive Model ({percent:g}%)",
            sensitivity=row["sensitivity"],
            specificity=row["specificity"],
            ct_rate=row["ct_rate"],
        )
        cutpoints.append((percent, performance))
    return tuple(cutpoints)


def _load() -> Dict[str, Any]:
    pack = load_pack(PACK_ID)
    try:
        model = pack["model"]
        simulation = pack["simulation"]
        return {
            "predictors": build_predictors(pack["predictors"]),
            "intercept": float(model["intercept"]),
            "effective_sample_size": int(model["effective_sample_size"]),
            "z_score": float(model["z_score"]),
            "risk_categories": build_bands(pack["risk_categories"]),
            "advisory_tiers": build_bands(pack["advisory_tiers"], label_field="band"),
            "model_cutpoints": _build_cutpoints(pack["model_cutpoints"]),
            "rules": _build_rule_performance(pack["rules"]),
            "threshold_table": build_threshold_table(pack["threshold_table"]),
            "population": int(simulation["population"]),
            "prevalence_percent": float(simulation["prevalence_percent"]),
            "threshold_percent": float(simulation["default_threshold_percent"]),
            "cost_parameters": CostParameters.model_validate(simulation["cost_parameters"]),
        }
    except (KeyError, TypeError, ValueError) as exc:
        raise ReferenceDataError(f"reference pack '{PACK_ID}' is incomplete: {exc}") from exc


_REFERENCE = _load()

PREDICTORS: Tuple[Predictor, ...] = _REFERENCE["predictors"]
COEFFICIENTS: Mapping[str, float] = MappingProxyType({p.key: p.coefficient for p in PREDICTORS})
ODDS_RATIOS: Mapping[str, float] = MappingProxyType({p.key: p.odds_ratio for p in PREDICTORS})
LABELS: Mapping[str, str] = MappingProxyType({p.key: p.label for p in PREDICTORS})

INTERCEPT: float = _REFERENCE["intercept"]
EFFECTIVE_SAMPLE_SIZE: int = _REFERENCE["effective_sample_size"]
Z_SCORE: float = _REFERENCE["z_score"]

RISK_CATEGORY_BANDS: Tuple[Band, ...] = _REFERENCE["risk_categories"]
ADVISORY_BANDS: Tuple[Band, ...] = _REFERENCE["advisory_tiers"]
MODEL_CUTPOINTS: Tuple[Tuple[float, RulePerformance], ...] = _REFERENCE["model_cutpoints"]
RULE_PERFORMANCE: Mapping[str, RulePerformance] = _REFERENCE["rules"]
THRESHOLD_TABLE: Tuple[ThresholdDataPoint, ...] = _REFERENCE["threshold_table"]

REFERENCE_POPULATION: int = _REFERENCE["population"]
DEFAULT_PREVALENCE_PERCENT: float = _REFERENCE["prevalence_percent"]
DEFAULT_THRESHOLD_PERCENT: float = _REFERENCE["threshold_percent"]
DEFAULT_COST_PARAMETERS: CostParameters = _REFERENCE["cost_parameters"]
