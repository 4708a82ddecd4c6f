from __future__ import annotations

from typing import Sequence

from ..config import SalaryRangeTestConfig
from ..context import AnalysisContext, safe_ratio
from ..general_info import average_max_salary
from ..models import JobClassification, RuleResultDetail, RuleStatus, SalaryRangeTestResult
from ..registry import register_rule
from ..rule import Rule


def _average_years_to_max(jobs: Sequence[JobClassification]) -> float:
    if not jobs:
        return 0.0
    return sum(job.years_to_max for job in jobs) / len(jobs)


@register_rule
class PE_SALARY_RANGE(Rule):
    rule_id = "PE-SALARY-RANGE"
    rule_title = "Salary range test"
    statute_reference = "Local Government Pay Equity Act: salary range test"
    config_model = SalaryRangeTestConfig

    def evaluate(self, ctx: AnalysisContext) -> SalaryRangeTestResult:
        cfg = ctx.config.get_rule_config(self.rule_id, SalaryRangeTestConfig)
        if not cfg.enabled:
            return self._not_applicable(cfg, "Rule disabled by configuration.")
        if not ctx.classified.has_comparable_groups:
            return self._not_applicable(
                cfg,
                "No comparable male- and female-dominated classes; salary range test passes by default.",
            )

        # Compared on average maximum monthly salary; years to max is reported alongside but does not decide.
        male_average = average_max_salary(ctx.male_jobs)
        female_average = average_max_salary(ctx.female_jobs)
        ratio = safe_ratio(female_average, male_average)
        passed = ratio >= cfg.threshold
        status = RuleStatus.PASS if passed else RuleStatus.FAIL

        if passed:
            summary = (
                f"Female-dominated classes average {ratio:.1%} of male-dominated maximum pay "
                f"(at least {cfg.threshold:.0%} required)."
            )
        else:
            summary = (
                f"Female-dominated classes average only {ratio:.1%} of male-dominated maximum pay "
                f"({cfg.threshold:.0%} required)."
            )

        return SalaryRangeTestResult(
            rule_id=self.rule_id,
            rule_title=self.rule_title,
            status=status,
            passed=passed,
            summary=summary,
            details=[
                RuleResultDetail(
                    key="average_max_salary",
                    message="Average maximum monthly salary by group.",
                    values={
                        "male_classes": len(ctx.male_jobs),
                        "female_classes": len(ctx.female_jobs),
                        "male_average": male_average,
                        "female_average": female_average,
                        "ratio": ratio,
                        "status": status.value,
                    },
                )
            ],
            male_average=male_average,
            female_average=female_average,
            ratio=ratio,
            threshold=cfg.threshold,
            male_avg_years_to_max=_average_years_to_max(ctx.male_jobs),
            female_avg_years_to_max=_average_years_to_max(ctx.female_jobs),
        )

    def _not_applicable(self, cfg: SalaryRangeTestConfig, summary: str) -> SalaryRangeTestResult:
        return SalaryRangeTestResult(
            rule_id=self.rule_id,
            rule_title=self.rule_title,
            status=RuleStatus.NOT_APPLICABLE,
            passed=True,
            applicable=False,
            summary=summary,
            threshold=cfg.threshold,
        )
