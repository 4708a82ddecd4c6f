import pytest
from pydantic import ValidationError

from common.pay_equity import ComplianceConfig
from common.pay_equity.models import VerdictState
from common.pay_equity.scenario import SalaryAdjustment, WhatIfScenario, percent_adjustments, run_scenario


def _underpaid_jurisdiction(male_job, female_job):
    # Female-dominated classes average 2250 against 3500 for male classes: salary range fails.
    jobs = [male_job(points=100 * (i + 1), max_salary=2000 + 1000 * i) for i in range(4)]
    jobs += [female_job(points=100 * (i + 1), max_salary=1500 + 500 * i) for i in range(4)]
    return jobs


def _raise_female_classes_to_parity():
    return {4: 2000, 5: 3000, 6: 4000, 7: 5000}


def test_adjustments_bring_jurisdiction_into_compliance(male_job, female_job):
    jobs = _underpaid_jurisdiction(male_job, female_job)
    result = run_scenario(jobs, _raise_female_classes_to_parity())

    assert result.baseline.state == VerdictState.EVALUATED
    assert not result.baseline.is_compliant
    assert not result.baseline.salary_range_test.passed
    assert result.scenario.is_compliant
    assert result.scenario.salary_range_test.passed
    assert result.compliance_improved


def test_annual_cost_scales_by_incumbents_and_months(male_job, female_job):
    jobs = _underpaid_jurisdiction(male_job, female_job)
    result = run_scenario(jobs, _raise_female_classes_to_parity())

    assert [a.job_index for a in result.adjustments] == [4, 5, 6, 7]
    assert [a.adjustment for a in result.adjustments] == [500, 1000, 1500, 2000]
    # (500 + 1000 + 1500 + 2000) * 10 incumbents * 12 months
    assert result.annual_cost == pytest.approx(600_000)


def test_inputs_are_not_modified(male_job, female_job):
    jobs = _underpaid_jurisdiction(male_job, female_job)
    result = run_scenario(jobs, _raise_female_classes_to_parity())

    assert [j.max_salary for j in jobs[4:]] == [1500, 2000, 2500, 3000]
    assert [j.max_salary for j in result.jobs[4:]] == [2000, 3000, 4000, 5000]
    assert result.jobs[:4] == jobs[:4]
    assert result.jobs[4].females == jobs[4].females


def test_unchanged_salary_is_not_an_adjustment(male_job, female_job):
    jobs = _underpaid_jurisdiction(male_job, female_job)
    result = run_scenario(jobs, {0: jobs[0].max_salary})

    assert result.adjustments == []
    assert result.annual_cost == 0
    assert result.scenario.is_compliant == result.baseline.is_compliant
    assert not result.compliance_improved


def test_salary_cut_has_negative_cost(male_job, female_job):
    jobs = _underpaid_jurisdiction(male_job, female_job)
    result = run_scenario(jobs, {3: 4000})

    assert result.annual_cost == pytest.approx(-1000 * 10 * 12)
    assert result.adjustments[0].adjustment_percent == pytest.approx(-20)


def test_unknown_index_rejected(male_job, female_job):
    jobs = _underpaid_jurisdiction(male_job, female_job)
    with pytest.raises(ValueError, match="unknown job index"):
        run_scenario(jobs, {8: 1000})
    with pytest.raises(ValueError):
        run_scenario(jobs, {-1: 1000})


def test_negative_salary_rejected(male_job, female_job):
    with pytest.raises(ValidationError):
        run_scenario(_underpaid_jurisdiction(male_job, female_job), {0: -1})


def test_accepts_dict_inputs():
    jobs = [{"points": 100 * (i + 1), "males": 10, "females": 0, "max_salary": 2000 + 1000 * i} for i in range(4)]
    jobs += [{"points": 100 * (i + 1), "males": 0, "females": 10, "max_salary": 1500 + 500 * i} for i in range(4)]
    result = run_scenario(jobs, {4: 2000})

    assert result.annual_cost == pytest.approx(500 * 10 * 12)
    assert result.jobs[4].max_salary == 2000


def test_scenario_uses_configured_analyzer(male_job, female_job):
    jobs = _underpaid_jurisdiction(male_job, female_job)
    config = ComplianceConfig(manual_review_max_male_classes=4)
    result = WhatIfScenario(config=config).run(jobs, _raise_female_classes_to_parity())

    assert result.baseline.requires_manual_review
    assert result.scenario.requires_manual_review
    assert not result.scenario.is_compliant
    # The salary range sub-test still runs and newly passes under manual review.
    assert result.compliance_improved


def test_percent_adjustments(male_job, female_job):
    jobs = _underpaid_jurisdiction(male_job, female_job)

    assert percent_adjustments(jobs, 10, [4, 5]) == pytest.approx({4: 1650, 5: 2200})
    assert len(percent_adjustments(jobs, 5)) == len(jobs)


def test_adjustment_percent_of_zero_salary():
    adj = SalaryAdjustment(job_index=0, original_max_salary=0, adjusted_max_salary=100)
    assert adj.adjustment == 100
    assert adj.adjustment_percent == 0
