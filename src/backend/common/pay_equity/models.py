from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class JobGroup(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    BALANCED = "BALANCED"


class RuleStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class VerdictState(str, Enum):
    EMPTY = "EMPTY"
    MANUAL_REVIEW_REQUIRED = "MANUAL_REVIEW_REQUIRED"
    EVALUATED = "EVALUATED"


class JobClassification(BaseModel):
    model_config = ConfigDict(frozen=True)

    points: float = Field(ge=0)
    males: int = Field(ge=0)
    females: int = Field(ge=0)
    min_salary: float = Field(default=0, ge=0)
    max_salary: float = Field(ge=0)
    years_to_max: float = Field(default=0, ge=0)
    exceptional_service_category: Optional[str] = None

    # Descriptive fields carried through from the job entry screens; not used by the analysis.
    job_number: Optional[int] = None
    title: str = ""
    years_service_pay: float = 0
    is_part_time: bool = False
    hours_per_week: Optional[float] = None
    days_per_year: Optional[float] = None
    additional_cash_compensation: float = 0

    @property
    def total_employees(self) -> int:
        return self.males + self.females

    @property
    def has_exceptional_service_pay(self) -> bool:
        return bool(self.exceptional_service_category and self.exceptional_service_category.strip())


class JobWithPredictedPay(BaseModel):
    model_config = ConfigDict(frozen=True)

    job: JobClassification
    predicted_pay: float
    pay_difference: float
    job_type: Optional[JobGroup] = None


class GeneralInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    male_classes: int = 0
    female_classes: int = 0
    balanced_classes: int = 0
    total_classes: int = 0
    male_employees: int = 0
    female_employees: int = 0
    balanced_employees: int = 0
    total_employees: int = 0
    avg_max_pay_male: float = 0
    avg_max_pay_female: float = 0
    avg_max_pay_balanced: float = 0
    avg_max_pay_all: float = 0


class RegressionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    slope: float = 0
    intercept: float = 0
    r_squared: float = 0
    n: int = 0
    min_points: float = 0
    max_points: float = 0
    min_predicted_pay: float = 0
    max_predicted_pay: float = 0
    # Set when every job shares the same points value and the OLS slope is undefined.
    degenerate: bool = False

    def predict(self, points: float) -> float:
        return self.slope * points + self.intercept


class RuleResultDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    message: str
    values: Dict[str, Any] = Field(default_factory=dict)


class RuleResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_id: str
    rule_title: str
    status: RuleStatus
    passed: bool
    applicable: bool = True
    summary: str = ""
    details: List[RuleResultDetail] = Field(default_factory=list)


class StatisticalTestResult(RuleResult):
    underpayment_ratio: float = 0
    underpayment_ratio_threshold: float = 80
    underpayment_ratio_passed: bool = False
    male_classes_below_predicted: int = 0
    female_classes_below_predicted: int = 0
    male_total_classes: int = 0
    female_total_classes: int = 0
    male_percent_below_predicted: float = 0
    female_percent_below_predicted: float = 0
    t_test_df: int = 0
    t_test_value: float = 0
    critical_value: float = 0
    t_test_passed: bool = True
    avg_diff_male: float = 0
    avg_diff_female: float = 0


class SalaryRangeTestResult(RuleResult):
    male_average: float = 0
    female_average: float = 0
    ratio: float = 0
    threshold: float = 0.80
    male_avg_years_to_max: float = 0
    female_avg_years_to_max: float = 0


class ExceptionalServiceTestResult(RuleResult):
    male_with_esp: int = 0
    female_with_esp: int = 0
    male_percentage: float = 0
    female_percentage: float = 0
    ratio: float = 0
    threshold: float = 0.80


class ComplianceVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    run_id: str
    generated_at: datetime
    state: VerdictState

    is_compliant: bool
    requires_manual_review: bool
    general_info: GeneralInfo = Field(default_factory=GeneralInfo)

    # None only for an EMPTY verdict; a sub-test without comparable data is a result with applicable=False.
    statistical_test: Optional[StatisticalTestResult] = None
    salary_range_test: Optional[SalaryRangeTestResult] = None
    exceptional_service_test: Optional[ExceptionalServiceTestResult] = None
    predicted_pay_model: Optional[RegressionResult] = None

    total_jobs: int = 0
    male_jobs: int = 0
    female_jobs: int = 0
    message: str = ""
