from __future__ import annotations

import math

import pytest

import tbi_navigator
from tbi_navigator import assess, evaluate_cdrs, evaluate_risk, rank_contributions, recommend


def test_skull_fracture_end_to_end(make_findings):
    assessment = assess(make_findings("skull_fracture"))
    expected = 1 / (1 + math.exp(-(-4.74 + 2.242)))
    assert assessment.risk.probability == pytest.approx(expected)
    assert assessment.risk.category == "High"
    assert assessment.recommendation.band == "strongly_recommended"
    assert [item.key for item in assessment.contributions] == ["skull_fracture"]
    assert assessment.cdrs.cchr.recommend_ct is True
    assert assessment.cdrs.cchr.tier == "High Risk"
    assert assessment.cdrs.chip.major_count == 1
    assert assessment.cdrs.chip.recommend_ct is True
    assert assessment.cdrs.noc.recommend_ct is False


def test_no_findings_end_to_end(findings_dict):
    assessment = assess(findings_dict)
    assert assessment.risk.category == "Very Low"
    assert assessment.recommendation.band == "no_imaging"
    assert assessment.contributions == ()
    assert not any(view.recommend_ct for view in assessment.cdrs.model_views)


def test_assessment_matches_individual_calls(make_findings):
    findings = make_findings("age_65_plus", "anticoagulant", "headache")
    assessment = assess(findings)
    risk = evaluate_risk(findings)
    assert assessment.risk == risk
    assert assessment.contributions == rank_contributions(findings)
    assert assessment.recommendation == recommend(risk.probability)
    assert assessment.cdrs == evaluate_cdrs(findings, risk.probability)


def test_toggle_and_reset_workflow():
    findings = tbi_navigator.reset_findings()
    findings = tbi_navigator.toggle_finding(findings, "vomiting_2_plus")
    findings = tbi_navigator.toggle_finding(findings, "gcs_less_than_15")
    assert assess(findings).risk.probability > assess(tbi_navigator.reset_findings()).risk.probability


def test_public_facade():
    assert tbi_navigator.DEFAULT_PREVALENCE_PERCENT == 4.2
    assert tbi_navigator.DEFAULT_THRESHOLD_PERCENT == 2.0
    assert tbi_navigator.EFFECTIVE_SAMPLE_SIZE == 15000
    assert tbi_navigator.REFERENCE_POPULATION == 1000
    report = tbi_navigator.simulate_consequences(2.0, tbi_navigator.DEFAULT_COST_PARAMETERS, 4.2)
    assert report.threshold_percent == 2.0
    assert tbi_navigator.interpolate_threshold(2.0) == report.metrics


def test_assessment_serialises(make_findings):
    dumped = assess(make_findings("seizure")).model_dump()
    assert dumped["risk"]["category"] in {"Very Low", "Low", "Moderate", "High"}
    assert "rules_agree" in dumped["cdrs"]
    assert dumped["findings"]["seizure"] == 1
