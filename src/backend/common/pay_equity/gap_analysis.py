from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .config import ComplianceConfig
from .models import JobClassification, JobGroup, JobWithPredictedPay, RegressionResult
from .regression import enrich_jobs_with_predicted_pay

# Underpayment (percent below predicted pay) beyond which a gap is prioritised.
HIGH_PRIORITY_GAP_PERCENT = 10.0
MEDIUM_PRIORITY_GAP_PERCENT = 5.0


class GapPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class JobGap(BaseModel):
    model_config = ConfigDict(frozen=True)

    job: JobClassification
    job_type: Optional[JobGroup] = None
    predicted_pay: float
    actual_pay: float
    gap: float
    gap_percent: float
    priority: GapPriority

    @property
    def is_underpaid(self) -> bool:
        return self.gap < 0


class GapAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    # One entry per input job, in input order.
    gaps: List[JobGap] = Field(default_factory=list)
    underpaid_jobs: int = 0
    high_priority_jobs: int = 0
    # Sum of |gap| over underpaid jobs.
    total_gap_amount: float = 0
    male_underpaid: int = 0
    female_underpaid: int = 0

    def select(
        self,
        *,
        job_type: Optional[JobGroup] = None,
        priority: Optional[GapPriority] = None,
    ) -> List[JobGap]:
        """Gaps matching the filters, largest underpayment first."""
        selected = [
            g
            for g in self.gaps
            if (job_type is None or g.job_type == job_type) and (priority is None or g.priority == priority)
        ]
        return sorted(selected, key=lambda g: g.gap)


def gap_priority(gap: float, gap_percent: float) -> GapPriority:
    if gap < 0 and abs(gap_percent) > HIGH_PRIORITY_GAP_PERCENT:
        return GapPriority.HIGH
    if gap < 0 and abs(gap_percent) > MEDIUM_PRIORITY_GAP_PERCENT:
        return GapPriority.MEDIUM
    return GapPriority.LOW


def _job_gap(entry: JobWithPredictedPay) -> JobGap:
    predicted = entry.predicted_pay
    gap = entry.pay_difference
    gap_percent = gap / predicted * 100 if predicted > 0 else 0.0
    return JobGap(
        job=entry.job,
        job_type=entry.job_type,
        predicted_pay=predicted,
        actual_pay=entry.job.max_salary,
        gap=gap,
        gap_percent=gap_percent,
        priority=gap_priority(gap, gap_percent),
    )


def analyze_gaps(
    jobs: Sequence[JobClassification],
    config: Optional[ComplianceConfig] = None,
    model: Optional[RegressionResult] = None,
) -> GapAnalysis:
    """Measure how far each job's maximum salary sits from the predicted pay line.

    `gap = max_salary - predicted` (negative means underpaid) and `gap_percent`
    is relative to the prediction, or 0 when the prediction is not positive.
    Male and female counts use the same dominance thresholds as the sub-tests.
    """
    gaps = [_job_gap(entry) for entry in enrich_jobs_with_predicted_pay(jobs, config=config, model=model)]
    underpaid: Tuple[JobGap, ...] = tuple(g for g in gaps if g.is_underpaid)
    return GapAnalysis(
        gaps=gaps,
        underpaid_jobs=len(underpaid),
        high_priority_jobs=sum(1 for g in underpaid if g.priority == GapPriority.HIGH),
        total_gap_amount=sum(abs(g.gap) for g in underpaid),
        male_underpaid=sum(1 for g in underpaid if g.job_type == JobGroup.MALE),
        female_underpaid=sum(1 for g in underpaid if g.job_type == JobGroup.FEMALE),
    )
