from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .config import ComplianceConfig
from .models import JobClassification, JobGroup


@dataclass(frozen=True)
class ClassifiedJobs:
    male: tuple[JobClassification, ...] = ()
    female: tuple[JobClassification, ...] = ()
    balanced: tuple[JobClassification, ...] = ()
    # Jobs with no incumbents belong to no group.
    unclassified: tuple[JobClassification, ...] = ()

    def group(self, job_group: JobGroup) -> tuple[JobClassification, ...]:
        return {
            JobGroup.MALE: self.male,
            JobGroup.FEMALE: self.female,
            JobGroup.BALANCED: self.balanced,
        }[job_group]

    @property
    def has_comparable_groups(self) -> bool:
        return bool(self.male) and bool(self.female)


def classify_job(job: JobClassification, config: Optional[ComplianceConfig] = None) -> Optional[JobGroup]:
    cfg = config or ComplianceConfig()
    total = job.total_employees
    if total == 0:
        return None
    if job.males / total >= cfg.male_dominance_threshold:
        return JobGroup.MALE
    if job.females / total >= cfg.female_dominance_threshold:
        return JobGroup.FEMALE
    return JobGroup.BALANCED


def classify_jobs(
    jobs: Iterable[JobClassification],
    config: Optional[ComplianceConfig] = None,
) -> ClassifiedJobs:
    cfg = config or ComplianceConfig()
    buckets: dict[Optional[JobGroup], list[JobClassification]] = {
        JobGroup.MALE: [],
        JobGroup.FEMALE: [],
        JobGroup.BALANCED: [],
        None: [],
    }
    for job in jobs:
        buckets[classify_job(job, cfg)].append(job)

    return ClassifiedJobs(
        male=tuple(buckets[JobGroup.MALE]),
        female=tuple(buckets[JobGroup.FEMALE]),
        balanced=tuple(buckets[JobGroup.BALANCED]),
        unclassified=tuple(buckets[None]),
    )
