from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Type

from pydantic import BaseModel

from .context import AnalysisContext
from .models import RuleResult


class Rule(ABC):
    rule_id: str
    rule_title: str
    statute_reference: str
    config_model: Type[BaseModel]
    # Whether a failing result makes the jurisdiction out of compliance.
    gates_compliance: bool = True

    def __init__(self):
        if not getattr(self, "rule_id", None):
            raise ValueError("Rule must define rule_id")

    @abstractmethod
    def evaluate(self, ctx: AnalysisContext) -> RuleResult:  # pragma: no cover
        raise NotImplementedError
