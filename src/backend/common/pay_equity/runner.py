from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional, Union

from .classifier import classify_jobs
from .config import ComplianceConfig
from .context import AnalysisContext
from .general_info import calculate_general_info
from .models import (
    ComplianceVerdict,
    ExceptionalServiceTestResult,
    GeneralInfo,
    JobClassification,
    SalaryRangeTestResult,
    StatisticalTestResult,
    VerdictState,
)
from .regression import fit_predicted_pay_model
from .registry import registry
from .rule import Rule
from .rules import PE_EXCEPTIONAL_SERVICE_PAY, PE_SALARY_RANGE, PE_STATISTICAL_ANALYSIS

logger = logging.getLogger(__name__)

JobInput = Union[JobClassification, Mapping[str, Any]]

EMPTY_MESSAGE = "No job classifications to analyze"
MANUAL_REVIEW_MESSAGE = (
    "Your jurisdiction has three or fewer male classes. Alternative Analysis (manual review) is required."
)
COMPLIANT_MESSAGE = "Your jurisdiction is in compliance with pay equity requirements."
NON_COMPLIANT_MESSAGE = "Your jurisdiction is out of compliance. Please review the test results below."


def coerce_job(job: JobInput) -> JobClassification:
    if isinstance(job, JobClassification):
        return job
    return JobClassification.model_validate(job)


class ComplianceAnalyzer:
    def __init__(self, config: Optional[ComplianceConfig] = None, rules: Optional[Iterable[Rule]] = None):
        self._config = config or ComplianceConfig()
        self._rules = tuple(rules) if rules is not None else tuple(registry.create_all())

    @property
    def config(self) -> ComplianceConfig:
        return self._config

    def analyze(self, jobs: Iterable[JobInput]) -> ComplianceVerdict:
        job_list = tuple(coerce_job(job) for job in jobs)
        run_id = str(uuid.uuid4())
        generated_at = datetime.now(timezone.utc)

        if not job_list:
            logger.debug("Compliance run %s: no job classifications supplied", run_id)
            return ComplianceVerdict(
                run_id=run_id,
                generated_at=generated_at,
                state=VerdictState.EMPTY,
                is_compliant=False,
                requires_manual_review=False,
                general_info=GeneralInfo(),
                message=EMPTY_MESSAGE,
            )

        classified = classify_jobs(job_list, self._config)
        general_info = calculate_general_info(classified, job_list)
        model = fit_predicted_pay_model(job_list)
        logger.debug(
            "Compliance run %s: %d jobs (%d male, %d female, %d balanced, %d without incumbents); "
            "predicted pay = %.4f * points + %.2f",
            run_id,
            len(job_list),
            len(classified.male),
            len(classified.female),
            len(classified.balanced),
            len(classified.unclassified),
            model.slope,
            model.intercept,
        )

        ctx = AnalysisContext(jobs=job_list, classified=classified, model=model, config=self._config)
        results = {rule.rule_id: rule.evaluate(ctx) for rule in self._rules}

        statistical = results.get(PE_STATISTICAL_ANALYSIS.rule_id)
        salary_range = results.get(PE_SALARY_RANGE.rule_id)
        exceptional_service = results.get(PE_EXCEPTIONAL_SERVICE_PAY.rule_id)

        # Sub-tests always run so the caller has the full diagnostics even when manual review overrides them.
        if len(classified.male) <= self._config.manual_review_max_male_classes:
            state = VerdictState.MANUAL_REVIEW_REQUIRED
            is_compliant = False
            message = MANUAL_REVIEW_MESSAGE
        else:
            state = VerdictState.EVALUATED
            gating = [rule for rule in self._rules if rule.gates_compliance]
            is_compliant = all(results[rule.rule_id].passed for rule in gating)
            message = COMPLIANT_MESSAGE if is_compliant else NON_COMPLIANT_MESSAGE

        logger.debug("Compliance run %s finished: state=%s compliant=%s", run_id, state.value, is_compliant)

        return ComplianceVerdict(
            run_id=run_id,
            generated_at=generated_at,
            state=state,
            is_compliant=is_compliant,
            requires_manual_review=state == VerdictState.MANUAL_REVIEW_REQUIRED,
            general_info=general_info,
            statistical_test=statistical if isinstance(statistical, StatisticalTestResult) else None,
            salary_range_test=salary_range if isinstance(salary_range, SalaryRangeTestResult) else None,
            exceptional_service_test=(
                exceptional_service if isinstance(exceptional_service, ExceptionalServiceTestResult) else None
            ),
            predicted_pay_model=model,
            total_jobs=len(job_list),
            male_jobs=len(classified.male),
            female_jobs=len(classified.female),
            message=message,
        )


def analyze_compliance(
    jobs: Iterable[JobInput],
    config: Optional[ComplianceConfig] = None,
) -> ComplianceVerdict:
    return ComplianceAnalyzer(config=config).analyze(jobs)
