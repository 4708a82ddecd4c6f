import pytest

from common.pay_equity.models import RuleStatus
from common.pay_equity.rules.pe_exceptional_service_pay import PE_EXCEPTIONAL_SERVICE_PAY


def _jobs(male_job, female_job, *, male_total, male_esp, female_total, female_esp):
    jobs = [male_job(points=100 + i, esp="Longevity" if i < male_esp else None) for i in range(male_total)]
    jobs += [female_job(points=200 + i, esp="Longevity" if i < female_esp else None) for i in range(female_total)]
    return jobs


def test_not_applicable_when_no_class_offers_esp(male_job, female_job, make_ctx):
    jobs = _jobs(male_job, female_job, male_total=4, male_esp=0, female_total=4, female_esp=0)
    res = PE_EXCEPTIONAL_SERVICE_PAY().evaluate(make_ctx(jobs=jobs))

    assert res.status == RuleStatus.NOT_APPLICABLE
    assert res.passed
    assert not res.applicable
    assert "not offered" in res.summary


def test_blank_category_does_not_count_as_esp(male_job, female_job, make_ctx):
    jobs = [male_job(esp="   "), male_job(esp=""), female_job(points=200, esp=None)]
    res = PE_EXCEPTIONAL_SERVICE_PAY().evaluate(make_ctx(jobs=jobs))

    assert res.male_with_esp == 0
    assert res.status == RuleStatus.NOT_APPLICABLE


def test_low_male_incidence_passes_regardless_of_female(male_job, female_job, make_ctx):
    jobs = _jobs(male_job, female_job, male_total=10, male_esp=1, female_total=5, female_esp=0)
    res = PE_EXCEPTIONAL_SERVICE_PAY().evaluate(make_ctx(jobs=jobs))

    assert res.male_percentage == pytest.approx(10)
    assert res.passed
    assert res.status == RuleStatus.PASS
    assert res.ratio == 0


def test_exactly_twenty_percent_male_incidence_passes(male_job, female_job, make_ctx):
    jobs = _jobs(male_job, female_job, male_total=5, male_esp=1, female_total=4, female_esp=0)
    res = PE_EXCEPTIONAL_SERVICE_PAY().evaluate(make_ctx(jobs=jobs))

    assert res.male_percentage == 20
    assert res.passed


def test_fails_when_only_male_classes_receive_esp(male_job, female_job, make_ctx):
    jobs = _jobs(male_job, female_job, male_total=4, male_esp=2, female_total=4, female_esp=0)
    res = PE_EXCEPTIONAL_SERVICE_PAY().evaluate(make_ctx(jobs=jobs))

    assert res.male_percentage == 50
    assert res.female_percentage == 0
    assert not res.passed
    assert res.status == RuleStatus.FAIL


def test_ratio_at_threshold_passes(male_job, female_job, make_ctx):
    jobs = _jobs(male_job, female_job, male_total=4, male_esp=2, female_total=5, female_esp=2)
    res = PE_EXCEPTIONAL_SERVICE_PAY().evaluate(make_ctx(jobs=jobs))

    assert res.female_percentage == 40
    assert res.ratio == pytest.approx(0.80)
    assert res.passed


def test_ratio_below_threshold_fails(male_job, female_job, make_ctx):
    jobs = _jobs(male_job, female_job, male_total=4, male_esp=2, female_total=4, female_esp=1)
    res = PE_EXCEPTIONAL_SERVICE_PAY().evaluate(make_ctx(jobs=jobs))

    assert res.ratio == pytest.approx(0.5)
    assert not res.passed
    assert res.details[0].values["status"] == "FAIL"


def test_not_applicable_without_female_classes(male_job, make_ctx):
    jobs = [male_job(points=100 + i, esp="Longevity") for i in range(4)]
    res = PE_EXCEPTIONAL_SERVICE_PAY().evaluate(make_ctx(jobs=jobs))

    assert res.passed
    assert not res.applicable
