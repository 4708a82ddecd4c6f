from __future__ import annotations

from dataclasses import dataclass, field

from .classifier import ClassifiedJobs
from .config import ComplianceConfig
from .models import JobClassification, RegressionResult


@dataclass(frozen=True)
class AnalysisContext:
    jobs: tuple[JobClassification, ...]
    classified: ClassifiedJobs
    model: RegressionResult
    config: ComplianceConfig = field(default_factory=ComplianceConfig)

    @property
    def male_jobs(self) -> tuple[JobClassification, ...]:
        return self.classified.male

    @property
    def female_jobs(self) -> tuple[JobClassification, ...]:
        return self.classified.female


def percentage(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return count * 100 / total


def safe_ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator
