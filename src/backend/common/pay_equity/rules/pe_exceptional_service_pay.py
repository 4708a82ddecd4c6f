from __future__ import annotations

from ..config import ExceptionalServiceTestConfig
from ..context import AnalysisContext, percentage
from ..models import ExceptionalServiceTestResult, RuleResultDetail, RuleStatus
from ..registry import register_rule
from ..rule import Rule


@register_rule
class PE_EXCEPTIONAL_SERVICE_PAY(Rule):
    rule_id = "PE-EXCEPTIONAL-SERVICE-PAY"
    rule_title = "Exceptional service pay test"
    statute_reference = "Local Government Pay Equity Act: exceptional service pay test"
    config_model = ExceptionalServiceTestConfig

    def evaluate(self, ctx: AnalysisContext) -> ExceptionalServiceTestResult:
        cfg = ctx.config.get_rule_config(self.rule_id, ExceptionalServiceTestConfig)
        if not cfg.enabled:
            return self._result(cfg, RuleStatus.NOT_APPLICABLE, "Rule disabled by configuration.")
        if not ctx.classified.has_comparable_groups:
            return self._result(
                cfg,
                RuleStatus.NOT_APPLICABLE,
                "No comparable male- and female-dominated classes; exceptional service pay test passes by default.",
            )

        n_male = len(ctx.male_jobs)
        n_female = len(ctx.female_jobs)
        male_with_esp = sum(1 for job in ctx.male_jobs if job.has_exceptional_service_pay)
        female_with_esp = sum(1 for job in ctx.female_jobs if job.has_exceptional_service_pay)
        male_pct = percentage(male_with_esp, n_male)
        female_pct = percentage(female_with_esp, n_female)
        counts = dict(
            male_with_esp=male_with_esp,
            female_with_esp=female_with_esp,
            male_percentage=male_pct,
            female_percentage=female_pct,
        )

        if male_with_esp == 0 and female_with_esp == 0:
            return self._result(
                cfg,
                RuleStatus.NOT_APPLICABLE,
                "Exceptional service pay is not offered; test not applicable.",
                **counts,
            )

        if male_pct <= cfg.min_male_percentage:
            return self._result(
                cfg,
                RuleStatus.PASS,
                (
                    f"Only {male_pct:.1f}% of male-dominated classes receive exceptional service pay "
                    f"({cfg.min_male_percentage:.0f}% or less); test passes automatically."
                ),
                **counts,
            )

        if female_pct == 0:
            return self._result(
                cfg,
                RuleStatus.FAIL,
                (
                    f"{male_pct:.1f}% of male-dominated classes receive exceptional service pay "
                    "but no female-dominated classes do."
                ),
                **counts,
            )

        ratio = female_pct / male_pct
        status = RuleStatus.PASS if ratio >= cfg.threshold else RuleStatus.FAIL
        summary = (
            f"Female-dominated ESP incidence is {ratio:.1%} of male-dominated incidence "
            f"({cfg.threshold:.0%} required)."
        )
        return self._result(cfg, status, summary, ratio=ratio, **counts)

    def _result(
        self,
        cfg: ExceptionalServiceTestConfig,
        status: RuleStatus,
        summary: str,
        *,
        male_with_esp: int = 0,
        female_with_esp: int = 0,
        male_percentage: float = 0.0,
        female_percentage: float = 0.0,
        ratio: float = 0.0,
    ) -> ExceptionalServiceTestResult:
        applicable = status != RuleStatus.NOT_APPLICABLE
        details = []
        if applicable:
            details.append(
                RuleResultDetail(
                    key="exceptional_service_pay",
                    message="Classes receiving exceptional service pay by group.",
                    values={
                        "male_with_esp": male_with_esp,
                        "female_with_esp": female_with_esp,
                        "male_percentage": male_percentage,
                        "female_percentage": female_percentage,
                        "ratio": ratio,
                        "status": status.value,
                    },
                )
            )
        return ExceptionalServiceTestResult(
            rule_id=self.rule_id,
            rule_title=self.rule_title,
            status=status,
            passed=status != RuleStatus.FAIL,
            applicable=applicable,
            summary=summary,
            details=details,
            male_with_esp=male_with_esp,
            female_with_esp=female_with_esp,
            male_percentage=male_percentage,
            female_percentage=female_percentage,
            ratio=ratio,
            threshold=cfg.threshold,
        )
