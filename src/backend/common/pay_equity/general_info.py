from __future__ import annotations

from typing import Sequence

from .classifier import ClassifiedJobs
from .models import GeneralInfo, JobClassification


def average_max_salary(jobs: Sequence[JobClassification]) -> float:
    if not jobs:
        return 0.0
    return sum(job.max_salary for job in jobs) / len(jobs)


def calculate_general_info(classified: ClassifiedJobs, all_jobs: Sequence[JobClassification]) -> GeneralInfo:
    # Male/female groups count only their dominant gender; balanced and "all" count everyone.
    return GeneralInfo(
        male_classes=len(classified.male),
        female_classes=len(classified.female),
        balanced_classes=len(classified.balanced),
        total_classes=len(all_jobs),
        male_employees=sum(job.males for job in classified.male),
        female_employees=sum(job.females for job in classified.female),
        balanced_employees=sum(job.total_employees for job in classified.balanced),
        total_employees=sum(job.total_employees for job in all_jobs),
        avg_max_pay_male=average_max_salary(classified.male),
        avg_max_pay_female=average_max_salary(classified.female),
        avg_max_pay_balanced=average_max_salary(classified.balanced),
        avg_max_pay_all=average_max_salary(all_jobs),
    )
