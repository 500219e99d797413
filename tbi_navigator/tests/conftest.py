from __future__ import annotations

from typing import Dict

import pytest

from tbi_navigator.schemas.findings import PREDICTOR_KEYS, PatientFindings


@pytest.fixture
def no_findings() -> PatientFindings:
    return PatientFindings.empty()


@pytest.fixture
def findings_dict() -> Dict[str, int]:
    return {key: 0 for key in PREDICTOR_KEYS}


@pytest.fixture
def make_findings():
    def _make(*active: str) -> PatientFindings:
        return PatientFindings(**{key: int(key in active) for key in PREDICTOR_KEYS})

    return _make
