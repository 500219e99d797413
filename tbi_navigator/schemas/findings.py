"""Patient findings snapshot passed into every engine call."""

from __future__ import annotations

import logging
from typing import Any, Literal, Mapping, Tuple, get_args

from pydantic import ValidationError, field_validator

from ..errors import FindingsValidationError, UnknownPredictorError
from .common import StrictModel

__all__ = [
    "PredictorKey",
    "PREDICTOR_KEYS",
    "PatientFindings",
    "coerce_findings",
    "reset_findings",
    "toggle_finding",
]

logger = logging.getLogger(__name__)

PredictorKey = Literal[
    "age_65_plus",
    "vomiting_2_plus",
    "gcs_less_than_15",
    "skull_fracture",
    "dangerous_mechanism",
    "headache",
    "intoxication",
    "seizure",
    "anticoagulant",
]

PREDICTOR_KEYS: Tuple[str, ...] = get_args(PredictorKey)


class PatientFindings(StrictModel):
    """Binary presence (1) or absence (0) of each predictor. All keys required."""

    age_65_plus: int
    vomiting_2_plus: int
    gcs_less_than_15: int
    skull_fracture: int
    dangerous_mechanism: int
    headache: int
    intoxication: int
    seizure: int
    anticoagulant: int

    @field_validator(*PREDICTOR_KEYS, mode="before")
    @classmethod
    def _binary(cls, value: Any) -> int:
        if isinstance(value, bool):
            return int(value)
        if type(value) is int and value in (0, 1):
            return value
        raise ValueError(f"finding must be 0 or 1, got {value!r}")

    @classmethod
    def empty(cls) -> "PatientFindings":
        return cls(**{key: 0 for key in PREDICTOR_KEYS})

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PatientFindings":
        """Validate *data* at the boundary, raising ``FindingsValidationError``."""

        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping):
            logger.warning("Rejected findings of type %s", type(data).__name__)
            raise FindingsValidationError(
                "findings must be a mapping of predictor keys to 0/1",
                details={"type": type(data).__name__},
            )
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            errors = exc.errors(include_url=False, include_context=False)
            logger.warning("Rejected findings record with %d error(s)", len(errors))
            fields = sorted({str(err["loc"][0]) for err in errors if err.get("loc")})
            raise FindingsValidationError(
                f"invalid findings record: {', '.join(fields) or 'malformed input'}",
                details={"errors": errors},
            ) from exc

    def toggle(self, key: str) -> "PatientFindings":
        """Return a new snapshot with *key* flipped."""

        if key not in PREDICTOR_KEYS:
            raise UnknownPredictorError(f"unknown predictor '{key}'", details={"key": key})
        return self.model_copy(update={key: 1 - getattr(self, key)})

    def active_keys(self) -> Tuple[str, ...]:
        return tuple(key for key in PREDICTOR_KEYS if getattr(self, key) == 1)


def coerce_findings(findings: PatientFindings | Mapping[str, Any]) -> PatientFindings:
    return PatientFindings.from_mapping(findings)


def reset_findings() -> PatientFindings:
    return PatientFindings.empty()


def toggle_finding(findings: PatientFindings | Mapping[str, Any], key: str) -> PatientFindings:
    return coerce_findings(findings).toggle(key)
