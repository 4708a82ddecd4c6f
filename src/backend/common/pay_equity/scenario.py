from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import ComplianceConfig
from .models import ComplianceVerdict, JobClassification
from .runner import ComplianceAnalyzer, JobInput, coerce_job

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


class SalaryAdjustment(BaseModel):
    model_config = ConfigDict(frozen=True)

    job_index: int
    original_max_salary: float
    adjusted_max_salary: float

    @property
    def adjustment(self) -> float:
        return self.adjusted_max_salary - self.original_max_salary

    @property
    def adjustment_percent(self) -> float:
        if self.original_max_salary == 0:
            return 0.0
        return self.adjustment / self.original_max_salary * 100


class ScenarioResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    adjustments: List[SalaryAdjustment] = Field(default_factory=list)
    jobs: List[JobClassification] = Field(default_factory=list)
    baseline: ComplianceVerdict
    scenario: ComplianceVerdict
    # Monthly max salary adjustments scaled by incumbents and 12 months.
    annual_cost: float = 0

    @property
    def compliance_improved(self) -> bool:
        """True when the scenario newly passes the verdict or a gating sub-test."""
        before, after = self.baseline, self.scenario
        if after.is_compliant and not before.is_compliant:
            return True
        for name in ("salary_range_test", "exceptional_service_test"):
            was, now = getattr(before, name), getattr(after, name)
            if now is not None and now.passed and not (was is not None and was.passed):
                return True
        return False


def percent_adjustments(
    jobs: Iterable[JobInput],
    percent: float,
    indices: Optional[Iterable[int]] = None,
) -> Dict[int, float]:
    """New max salaries raising (or cutting) the selected jobs by `percent`; all jobs when no indices are given."""
    job_list = [coerce_job(job) for job in jobs]
    selected = range(len(job_list)) if indices is None else indices
    return {i: job_list[i].max_salary * (1 + percent / 100) for i in selected}


class WhatIfScenario:
    """Re-run the compliance analysis with some maximum salaries changed.

    Adjustments map a job's position in the input to its new monthly maximum
    salary. The input jobs are never modified; adjusted copies are revalidated,
    so a negative salary raises `pydantic.ValidationError`.
    """

    def __init__(self, config: Optional[ComplianceConfig] = None, analyzer: Optional[ComplianceAnalyzer] = None):
        self._analyzer = analyzer or ComplianceAnalyzer(config=config)

    def run(self, jobs: Iterable[JobInput], adjustments: Mapping[int, float]) -> ScenarioResult:
        job_list = [coerce_job(job) for job in jobs]
        unknown = sorted(i for i in adjustments if not 0 <= i < len(job_list))
        if unknown:
            raise ValueError(f"Adjustment for unknown job index: {', '.join(str(i) for i in unknown)}")

        applied: List[SalaryAdjustment] = []
        adjusted_jobs: List[JobClassification] = []
        for index, job in enumerate(job_list):
            new_max = adjustments.get(index)
            if new_max is None or new_max == job.max_salary:
                adjusted_jobs.append(job)
                continue
            adjusted_jobs.append(JobClassification.model_validate({**job.model_dump(), "max_salary": new_max}))
            applied.append(
                SalaryAdjustment(job_index=index, original_max_salary=job.max_salary, adjusted_max_salary=new_max)
            )

        annual_cost = sum(
            adj.adjustment * job_list[adj.job_index].total_employees * MONTHS_PER_YEAR for adj in applied
        )
        logger.debug("What-if scenario: %d adjustments, annual cost %.2f", len(applied), annual_cost)

        return ScenarioResult(
            adjustments=applied,
            jobs=adjusted_jobs,
            baseline=self._analyzer.analyze(job_list),
            scenario=self._analyzer.analyze(adjusted_jobs),
            annual_cost=annual_cost,
        )


def run_scenario(
    jobs: Iterable[JobInput],
    adjustments: Mapping[int, float],
    config: Optional[ComplianceConfig] = None,
) -> ScenarioResult:
    return WhatIfScenario(config=config).run(jobs, adjustments)
