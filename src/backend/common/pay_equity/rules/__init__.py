from .pe_statistical_analysis import PE_STATISTICAL_ANALYSIS
from .pe_salary_range import PE_SALARY_RANGE
from .pe_exceptional_service_pay import PE_EXCEPTIONAL_SERVICE_PAY

__all__ = [
    "PE_STATISTICAL_ANALYSIS",
    "PE_SALARY_RANGE",
    "PE_EXCEPTIONAL_SERVICE_PAY",
]
