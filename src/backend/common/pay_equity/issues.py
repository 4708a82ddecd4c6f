from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict

from .models import ComplianceVerdict


class ComplianceIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_id: str
    name: str
    issue: str
    threshold: str
    gates_compliance: bool = True


def collect_compliance_issues(verdict: ComplianceVerdict) -> List[ComplianceIssue]:
    """List the sub-tests a jurisdiction should look at before submitting.

    The statistical test is reported when the underpayment ratio exceeds its
    threshold. It is advisory only: it never affects `is_compliant`.
    """
    issues: List[ComplianceIssue] = []

    stat = verdict.statistical_test
    if stat is not None and stat.applicable and stat.underpayment_ratio > stat.underpayment_ratio_threshold:
        issues.append(
            ComplianceIssue(
                rule_id=stat.rule_id,
                name="Statistical Analysis Test",
                issue=f"{stat.underpayment_ratio:.1f}% of underpayment concentrated in female-dominated classes",
                threshold=f"Must be {stat.underpayment_ratio_threshold:.0f}% or less",
                gates_compliance=False,
            )
        )

    salary = verdict.salary_range_test
    if salary is not None and not salary.passed:
        issues.append(
            ComplianceIssue(
                rule_id=salary.rule_id,
                name="Salary Range Test",
                issue=(
                    f"Female-dominated classes average {salary.ratio:.1%} of male-dominated maximum pay "
                    f"({salary.female_average:,.2f} vs {salary.male_average:,.2f})"
                ),
                threshold=f"Must be {salary.threshold:.0%} or more",
            )
        )

    esp = verdict.exceptional_service_test
    if esp is not None and not esp.passed:
        issues.append(
            ComplianceIssue(
                rule_id=esp.rule_id,
                name="Exceptional Service Pay Test",
                issue=(
                    f"{esp.female_percentage:.1f}% of female-dominated classes receive exceptional service pay "
                    f"vs {esp.male_percentage:.1f}% of male-dominated classes"
                ),
                threshold=f"Ratio must be {esp.threshold:.0%} or more",
            )
        )

    return issues
