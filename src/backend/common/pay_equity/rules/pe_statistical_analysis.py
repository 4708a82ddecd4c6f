from __future__ import annotations

import math
from typing import Sequence

from ..config import StatisticalTestConfig
from ..context import AnalysisContext, percentage, safe_ratio
from ..critical_values import critical_value
from ..models import RuleResultDetail, RuleStatus, StatisticalTestResult
from ..registry import register_rule
from ..rule import Rule


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _sample_variance(values: Sequence[float], mean: float) -> float:
    # A single observation has no spread to estimate.
    if len(values) < 2:
        return 0.0
    return sum((v - mean) ** 2 for v in values) / (len(values) - 1)


@register_rule
class PE_STATISTICAL_ANALYSIS(Rule):
    rule_id = "PE-STATISTICAL-ANALYSIS"
    rule_title = "Statistical analysis: underpayment ratio and t-test"
    statute_reference = "Local Government Pay Equity Act: statistical analysis test"
    config_model = StatisticalTestConfig
    gates_compliance = False

    def evaluate(self, ctx: AnalysisContext) -> StatisticalTestResult:
        cfg = ctx.config.get_rule_config(self.rule_id, StatisticalTestConfig)
        if not cfg.enabled:
            return self._not_applicable(ctx, cfg, "Rule disabled by configuration.")
        if not ctx.classified.has_comparable_groups:
            return self._not_applicable(
                ctx,
                cfg,
                "Statistical analysis requires at least one male-dominated and one female-dominated class.",
            )

        male_diffs = [job.max_salary - ctx.model.predict(job.points) for job in ctx.male_jobs]
        female_diffs = [job.max_salary - ctx.model.predict(job.points) for job in ctx.female_jobs]
        n_male = len(male_diffs)
        n_female = len(female_diffs)

        male_below = sum(1 for d in male_diffs if d < 0)
        female_below = sum(1 for d in female_diffs if d < 0)
        male_pct = percentage(male_below, n_male)
        female_pct = percentage(female_below, n_female)
        underpayment_ratio = safe_ratio(male_pct, female_pct) * 100

        avg_diff_male = _mean(male_diffs)
        avg_diff_female = _mean(female_diffs)
        var_male = _sample_variance(male_diffs, avg_diff_male)
        var_female = _sample_variance(female_diffs, avg_diff_female)
        standard_error = math.sqrt(var_male / n_male + var_female / n_female)
        t_value = (avg_diff_male - avg_diff_female) / standard_error if standard_error > 0 else 0.0
        df = n_male + n_female - 2
        t_critical = critical_value(df)
        t_passed = abs(t_value) <= t_critical

        status = RuleStatus.PASS if t_passed else RuleStatus.FAIL
        if t_passed:
            summary = (
                f"Difference in pay relative to predicted pay is not statistically significant "
                f"(|t| = {abs(t_value):.3f} <= {t_critical:.3f}, df {df})."
            )
        else:
            summary = (
                f"Difference in pay relative to predicted pay is statistically significant "
                f"(|t| = {abs(t_value):.3f} > {t_critical:.3f}, df {df})."
            )

        return StatisticalTestResult(
            rule_id=self.rule_id,
            rule_title=self.rule_title,
            status=status,
            passed=t_passed,
            summary=summary,
            details=[
                RuleResultDetail(
                    key="underpayment_ratio",
                    message="Share of male classes below predicted pay relative to female classes.",
                    values={
                        "male_percent_below_predicted": male_pct,
                        "female_percent_below_predicted": female_pct,
                        "underpayment_ratio": underpayment_ratio,
                        "threshold": cfg.underpayment_ratio_threshold,
                    },
                ),
                RuleResultDetail(
                    key="t_test",
                    message="Two-sample t-test on differences from predicted pay.",
                    values={
                        "df": df,
                        "t_value": t_value,
                        "critical_value": t_critical,
                        "var_male": var_male,
                        "var_female": var_female,
                        "status": status.value,
                    },
                ),
            ],
            underpayment_ratio=underpayment_ratio,
            underpayment_ratio_threshold=cfg.underpayment_ratio_threshold,
            underpayment_ratio_passed=underpayment_ratio >= cfg.underpayment_ratio_threshold,
            male_classes_below_predicted=male_below,
            female_classes_below_predicted=female_below,
            male_total_classes=n_male,
            female_total_classes=n_female,
            male_percent_below_predicted=male_pct,
            female_percent_below_predicted=female_pct,
            t_test_df=df,
            t_test_value=t_value,
            critical_value=t_critical,
            t_test_passed=t_passed,
            avg_diff_male=avg_diff_male,
            avg_diff_female=avg_diff_female,
        )

    def _not_applicable(
        self,
        ctx: AnalysisContext,
        cfg: StatisticalTestConfig,
        summary: str,
    ) -> StatisticalTestResult:
        return StatisticalTestResult(
            rule_id=self.rule_id,
            rule_title=self.rule_title,
            status=RuleStatus.NOT_APPLICABLE,
            passed=True,
            applicable=False,
            summary=summary,
            underpayment_ratio_threshold=cfg.underpayment_ratio_threshold,
            male_total_classes=len(ctx.male_jobs),
            female_total_classes=len(ctx.female_jobs),
        )
