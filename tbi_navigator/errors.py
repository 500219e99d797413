"""Exception hierarchy for the navigator engine.

Input problems are raised immediately as ``ContractViolation`` subclasses so
that no partially computed clinical result ever reaches the caller.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "NavigatorError",
    "ContractViolation",
    "FindingsValidationError",
    "UnknownPredictorError",
    "ThresholdRangeError",
    "PrevalenceRangeError",
    "ProbabilityRangeError",
    "CostParametersError",
    "MetricsValidationError",
    "PopulationRangeError",
    "ReferenceDataError",
]


class NavigatorError(Exception):
    """Base exception for all navigator errors."""

    code = "NAVIGATOR_ERROR"

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message, "details": self.details}


class ContractViolation(NavigatorError, ValueError):
    """Caller supplied input outside the engine's contract."""

    code = "CONTRACT_VIOLATION"


class FindingsValidationError(ContractViolation):
    """Findings record is missing keys, has extra keys or non-binary values."""

    code = "INVALID_FINDINGS"


class UnknownPredictorError(ContractViolation):
    code = "UNKNOWN_PREDICTOR"


class ThresholdRangeError(ContractViolation):
    code = "THRESHOLD_OUT_OF_RANGE"


class PrevalenceRangeError(ContractViolation):
    code = "PREVALENCE_OUT_OF_RANGE"


class ProbabilityRangeError(ContractViolation):
    code = "PROBABILITY_OUT_OF_RANGE"


class CostParametersError(ContractViolation):
    code = "INVALID_COST_PARAMETERS"


class MetricsValidationError(ContractViolation):
    """Threshold metrics are missing fields or fall outside their percent range."""

    code = "INVALID_METRICS"


class PopulationRangeError(ContractViolation):
    code = "POPULATION_OUT_OF_RANGE"


class ReferenceDataError(NavigatorError):
    """The packaged reference data violates one of its invariants."""

    code = "REFERENCE_DATA_ERROR"
