from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, Field, model_validator

T = TypeVar("T", bound=BaseModel)


class RuleConfigBase(BaseModel):
    enabled: bool = True


class StatisticalTestConfig(RuleConfigBase):
    # Stored pass condition is `ratio >= threshold`; the advisory issue list reads it the other way (see issues.py).
    underpayment_ratio_threshold: float = 80.0


class SalaryRangeTestConfig(RuleConfigBase):
    threshold: float = Field(default=0.80, gt=0)


class ExceptionalServiceTestConfig(RuleConfigBase):
    threshold: float = Field(default=0.80, gt=0)
    # At or below this share (percent) of male classes with ESP the comparison is not meaningful.
    min_male_percentage: float = Field(default=20.0, ge=0, le=100)


class ComplianceConfig(BaseModel):
    """Jurisdiction-wide analysis settings.

    Defaults follow the Local Government Pay Equity Act. Sub-tests pull their
    typed settings via `get_rule_config`.
    """

    male_dominance_threshold: float = Field(default=0.80, gt=0, le=1)
    female_dominance_threshold: float = Field(default=0.70, gt=0, le=1)
    manual_review_max_male_classes: int = Field(default=3, ge=0)

    rules: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _thresholds_exclusive(self) -> "ComplianceConfig":
        # A job must not be able to qualify as both male- and female-dominated.
        if self.male_dominance_threshold + self.female_dominance_threshold <= 1:
            raise ValueError("male_dominance_threshold + female_dominance_threshold must exceed 1")
        return self

    def get_rule_config(
        self,
        rule_id: str,
        model: Type[T],
        default: Optional[T] = None,
    ) -> T:
        if rule_id not in self.rules:
            if default is not None:
                return default
            return model()  # type: ignore[call-arg]
        raw = self.rules.get(rule_id, {})
        return model.model_validate(raw)


def load_config(path: Path) -> ComplianceConfig:
    text = path.read_text()
    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            import yaml  # type: ignore
        except ModuleNotFoundError as exc:
            raise SystemExit(
                "PyYAML is required for YAML config files. Install it in your backend venv (e.g., `uv add pyyaml`)."
            ) from exc
        raw = yaml.safe_load(text) or {}
    else:
        raw = json.loads(text) if text.strip() else {}
    return ComplianceConfig.model_validate(raw)
