from __future__ import annotations

import logging
from typing import Optional, Sequence

from .classifier import classify_job
from .config import ComplianceConfig
from .models import JobClassification, JobWithPredictedPay, RegressionResult

logger = logging.getLogger(__name__)


def fit_predicted_pay_model(jobs: Sequence[JobClassification]) -> RegressionResult:
    """Fit the jurisdiction-wide pay line (points -> max salary) by ordinary least squares.

    With fewer than two jobs the line is undefined and every prediction is 0.
    When all jobs share one points value the slope is undefined; the line falls
    back to a flat line through the mean max salary and `degenerate` is set.
    """
    n = len(jobs)
    if n < 2:
        return RegressionResult(n=n)

    min_points = min(job.points for job in jobs)
    max_points = max(job.points for job in jobs)

    sum_x = sum(job.points for job in jobs)
    sum_y = sum(job.max_salary for job in jobs)
    sum_xy = sum(job.points * job.max_salary for job in jobs)
    sum_x2 = sum(job.points * job.points for job in jobs)

    # n*Sxx - Sx^2 is not exactly 0 for repeated non-integer points.
    degenerate = min_points == max_points
    if degenerate:
        slope = 0.0
        intercept = sum_y / n
        logger.debug("All %d jobs share the same points value; using a flat predicted pay line", n)
    else:
        slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)
        intercept = (sum_y - slope * sum_x) / n

    mean_y = sum_y / n
    ss_residual = sum((job.max_salary - (slope * job.points + intercept)) ** 2 for job in jobs)
    ss_total = sum((job.max_salary - mean_y) ** 2 for job in jobs)
    r_squared = 1 - ss_residual / ss_total if ss_total > 0 else 0.0

    return RegressionResult(
        slope=slope,
        intercept=intercept,
        r_squared=r_squared,
        n=n,
        min_points=min_points,
        max_points=max_points,
        min_predicted_pay=slope * min_points + intercept,
        max_predicted_pay=slope * max_points + intercept,
        degenerate=degenerate,
    )


def predicted_pay(points: float, jobs: Sequence[JobClassification]) -> float:
    return fit_predicted_pay_model(jobs).predict(points)


def enrich_jobs_with_predicted_pay(
    jobs: Sequence[JobClassification],
    config: Optional[ComplianceConfig] = None,
    model: Optional[RegressionResult] = None,
) -> list[JobWithPredictedPay]:
    cfg = config or ComplianceConfig()
    fitted = model or fit_predicted_pay_model(jobs)
    enriched = []
    for job in jobs:
        predicted = fitted.predict(job.points)
        enriched.append(
            JobWithPredictedPay(
                job=job,
                predicted_pay=predicted,
                pay_difference=job.max_salary - predicted,
                job_type=classify_job(job, cfg),
            )
        )
    return enriched
