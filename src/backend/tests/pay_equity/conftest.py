import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest

from common.pay_equity.classifier import classify_jobs
from common.pay_equity.config import ComplianceConfig
from common.pay_equity.context import AnalysisContext
from common.pay_equity.models import JobClassification, RegressionResult
from common.pay_equity.regression import fit_predicted_pay_model


@pytest.fixture
def make_job():
    def _make(
        *,
        males: int = 0,
        females: int = 0,
        points: float = 100,
        max_salary: float = 3000,
        min_salary: float = 0,
        years_to_max: float = 0,
        esp: str | None = None,
        title: str = "",
    ) -> JobClassification:
        return JobClassification(
            males=males,
            females=females,
            points=points,
            max_salary=max_salary,
            min_salary=min_salary,
            years_to_max=years_to_max,
            exceptional_service_category=esp,
            title=title,
        )

    return _make


@pytest.fixture
def male_job(make_job):
    def _make(**kwargs) -> JobClassification:
        kwargs.setdefault("males", 10)
        return make_job(**kwargs)

    return _make


@pytest.fixture
def female_job(make_job):
    def _make(**kwargs) -> JobClassification:
        kwargs.setdefault("females", 10)
        return make_job(**kwargs)

    return _make


@pytest.fixture
def make_ctx():
    def _make(
        *,
        jobs,
        model: RegressionResult | None = None,
        client_rules: dict | None = None,
    ) -> AnalysisContext:
        cfg = ComplianceConfig(rules=client_rules or {})
        job_tuple = tuple(jobs)
        return AnalysisContext(
            jobs=job_tuple,
            classified=classify_jobs(job_tuple, cfg),
            model=model if model is not None else fit_predicted_pay_model(job_tuple),
            config=cfg,
        )

    return _make
