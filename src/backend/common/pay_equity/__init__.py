"""Pay equity compliance analysis engine.

This package intentionally contains only domain logic:
- Input is a jurisdiction's job classifications; output is a compliance verdict.
- No persistence, rendering, or network calls live here.
"""

from .classifier import ClassifiedJobs, classify_job, classify_jobs
from .config import ComplianceConfig, load_config
from .critical_values import critical_value
from .gap_analysis import GapAnalysis, GapPriority, JobGap, analyze_gaps
from .general_info import calculate_general_info
from .issues import ComplianceIssue, collect_compliance_issues
from .models import (
    ComplianceVerdict,
    ExceptionalServiceTestResult,
    GeneralInfo,
    JobClassification,
    JobGroup,
    JobWithPredictedPay,
    RegressionResult,
    RuleStatus,
    SalaryRangeTestResult,
    StatisticalTestResult,
    VerdictState,
)
from .regression import enrich_jobs_with_predicted_pay, fit_predicted_pay_model, predicted_pay
from .runner import ComplianceAnalyzer, analyze_compliance
from .scenario import SalaryAdjustment, ScenarioResult, WhatIfScenario, percent_adjustments, run_scenario

# Import built-in sub-tests so they self-register with the global registry.
from . import rules as _builtin_rules  # noqa: F401
