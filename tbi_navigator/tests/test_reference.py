from __future__ import annotations

import copy

import pytest

from tbi_navigator.content import load_pack
from tbi_navigator.core import reference
from tbi_navigator.core.reference import (
    ADVISORY_BANDS,
    COEFFICIENTS,
    ODDS_RATIOS,
    PREDICTORS,
    RISK_CATEGORY_BANDS,
    THRESHOLD_TABLE,
    build_bands,
    build_predictors,
    build_threshold_table,
)
from tbi_navigator.errors import ReferenceDataError
from tbi_navigator.schemas.findings import PREDICTOR_KEYS


def test_coefficient_and_odds_ratio_keys_match_registry():
    assert tuple(COEFFICIENTS) == PREDICTOR_KEYS
    assert tuple(ODDS_RATIOS) == PREDICTOR_KEYS
    assert all(coefficient >= 0 for coefficient in COEFFICIENTS.values())
    assert all(odds_ratio > 0 for odds_ratio in ODDS_RATIOS.values())


def test_model_constants():
    assert reference.INTERCEPT == -4.74
    assert reference.EFFECTIVE_SAMPLE_SIZE == 15000
    assert reference.Z_SCORE == 1.96
    assert COEFFICIENTS["skull_fracture"] == 2.242
    assert ODDS_RATIOS["skull_fracture"] == 9.41


def test_reference_tables_are_read_only():
    with pytest.raises(TypeError):
        COEFFICIENTS["headache"] = 5.0  # type: ignore[index]
    assert isinstance(PREDICTORS, tuple)
    assert isinstance(THRESHOLD_TABLE, tuple)


def test_threshold_anchors():
    assert [point.threshold for point in THRESHOLD_TABLE] == [1.0, 2.0, 3.0, 5.0, 10.0]


def test_category_and_advisory_tables_are_independent():
    assert [band.upper for band in RISK_CATEGORY_BANDS] == [0.01, 0.03, 0.07, None]
    assert [band.upper for band in ADVISORY_BANDS] == [0.01, 0.02, 0.05, None]


def test_defaults():
    assert reference.REFERENCE_POPULATION == 1000
    assert reference.DEFAULT_PREVALENCE_PERCENT == 4.2
    assert reference.DEFAULT_COST_PARAMETERS.ct_cost == 1200
    assert reference.DEFAULT_COST_PARAMETERS.citbi_treatment_cost == 150000
    assert reference.DEFAULT_COST_PARAMETERS.false_positive_workup_cost == 200
    assert reference.DEFAULT_COST_PARAMETERS.radiation_per_ct == 2.0


def test_missing_pack_raises():
    with pytest.raises(ReferenceDataError):
        load_pack("does_not_exist")


def test_predictors_must_cover_registry():
    rows = [
        {"key": key, "label": key, "coefficient": 0.1, "odds_ratio": 1.1}
        for key in PREDICTOR_KEYS[:-1]
    ]
    with pytest.raises(ReferenceDataError):
        build_predictors(rows)


def test_predictor_odds_ratio_must_be_positive():
    rows = [
        {"key": key, "label": key, "coefficient": 0.1, "odds_ratio": 0.0}
        for key in PREDICTOR_KEYS
    ]
    with pytest.raises(ReferenceDataError):
        build_predictors(rows)


def test_bands_must_ascend_and_end_open():
    with pytest.raises(ReferenceDataError):
        build_bands([{"upper": 0.05, "label": "a"}, {"upper": 0.01, "label": "b"}, {"upper": None, "label": "c"}])
    with pytest.raises(ReferenceDataError):
        build_bands([{"upper": 0.05, "label": "a"}])
    with pytest.raises(ReferenceDataError):
        build_bands([])


def test_threshold_table_must_ascend():
    row = {"sensitivity": 1, "specificity": 1, "npv": 1, "ct_rate": 1, "nns": 1}
    with pytest.raises(ReferenceDataError):
        build_threshold_table([{**row, "threshold": 2.0}, {**row, "threshold": 2.0}])


def test_default_threshold():
    assert reference.DEFAULT_THRESHOLD_PERCENT == 2.0
    assert THRESHOLD_TABLE[0].threshold <= reference.DEFAULT_THRESHOLD_PERCENT <= THRESHOLD_TABLE[-1].threshold


def _corrupt_pack(section: str, index: int, field: str, value: object) -> dict:
    pack = copy.deepcopy(load_pack(reference.PACK_ID))
    pack[section][index][field] = value
    return pack


@pytest.mark.parametrize(
    "section, index, field",
    [
        ("risk_categories", 0, "upper"),
        ("model_cutpoints", 0, "percent"),
        ("threshold_table", 1, "sensitivity"),
    ],
)
def test_malformed_pack_values_raise_reference_error(monkeypatch: pytest.MonkeyPatch, section, index, field):
    pack = _corrupt_pack(section, index, field, "abc")
    monkeypatch.setattr(reference, "load_pack", lambda pack_id: pack)
    with pytest.raises(ReferenceDataError):
        reference._load()


def test_malformed_default_threshold_raises_reference_error(monkeypatch: pytest.MonkeyPatch):
    pack = copy.deepcopy(load_pack(reference.PACK_ID))
    pack["simulation"]["default_threshold_percent"] = "x"
    monkeypatch.setattr(reference, "load_pack", lambda pack_id: pack)
    with pytest.raises(ReferenceDataError):
        reference._load()
