import pytest

from common.pay_equity.models import RuleStatus
from common.pay_equity.rules.pe_salary_range import PE_SALARY_RANGE


def test_salary_range_ratio_at_threshold_passes(male_job, female_job, make_ctx):
    jobs = [
        male_job(points=100, max_salary=4500),
        male_job(points=200, max_salary=5500),
        female_job(points=100, max_salary=3500),
        female_job(points=200, max_salary=4500),
    ]
    res = PE_SALARY_RANGE().evaluate(make_ctx(jobs=jobs))

    assert res.male_average == pytest.approx(5000)
    assert res.female_average == pytest.approx(4000)
    assert res.ratio == pytest.approx(0.80)
    assert res.passed
    assert res.status == RuleStatus.PASS
    assert res.threshold == 0.80


def test_salary_range_below_threshold_fails(male_job, female_job, make_ctx):
    jobs = [male_job(max_salary=5000), female_job(points=200, max_salary=3950)]
    res = PE_SALARY_RANGE().evaluate(make_ctx(jobs=jobs))

    assert res.ratio == pytest.approx(0.79)
    assert not res.passed
    assert res.status == RuleStatus.FAIL
    assert "only" in res.summary


def test_salary_range_compares_max_salary_not_years_to_max(male_job, female_job, make_ctx):
    jobs = [
        male_job(max_salary=5000, years_to_max=2),
        female_job(points=200, max_salary=5000, years_to_max=10),
    ]
    res = PE_SALARY_RANGE().evaluate(make_ctx(jobs=jobs))

    assert res.ratio == pytest.approx(1.0)
    assert res.passed
    assert res.male_avg_years_to_max == 2
    assert res.female_avg_years_to_max == 10


def test_zero_male_average_resolves_ratio_to_zero(male_job, female_job, make_ctx):
    jobs = [male_job(max_salary=0), female_job(points=200, max_salary=3000)]
    res = PE_SALARY_RANGE().evaluate(make_ctx(jobs=jobs))

    assert res.ratio == 0
    assert not res.passed


def test_vacuous_pass_without_male_classes(female_job, make_job, make_ctx):
    jobs = [
        female_job(max_salary=1000, esp="Longevity"),
        female_job(points=200, max_salary=1200),
        make_job(males=5, females=5, points=300, max_salary=9000),
    ]
    res = PE_SALARY_RANGE().evaluate(make_ctx(jobs=jobs))

    assert res.passed
    assert not res.applicable
    assert res.status == RuleStatus.NOT_APPLICABLE


def test_threshold_comes_from_configuration(male_job, female_job, make_ctx):
    jobs = [male_job(max_salary=5000), female_job(points=200, max_salary=3950)]
    res = PE_SALARY_RANGE().evaluate(
        make_ctx(jobs=jobs, client_rules={"PE-SALARY-RANGE": {"threshold": 0.75}})
    )
    assert res.passed
    assert res.threshold == 0.75
