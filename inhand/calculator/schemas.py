"""
schemas.py — calculator Pydantic v2 data contracts.

Defines:
  - Bounded, Unbounded, Ceiling  (tagged slab ceiling, no None/Infinity sentinels)
  - TaxSlab, RebateRule, TaxSlabConfiguration  (one assessment year's new-regime rules)
  - PFMode, PFPolicy             (provident fund policy, supplied per calculation)
  - SlabLine, IncomeBreakdown    (TaxEngine output)
  - ComparisonResult, StructuredCalculation, StructuredSummary, OfferComparison
                                 (ComparisonReporter output)

All monetary fields are in INR. Annual unless the name says monthly.
Every model is frozen: a breakdown is a value, recomputed on demand and never
mutated in place.

Slab configuration documents may use the camelCase keys of the configuration
store (upTo, incomeThreshold, assessmentYear, standardDeduction, cessRate);
populate_by_name lets Python callers use the snake_case names as well.
Range checks on configuration live in validator.py, not here, so a malformed
document surfaces as InvalidConfigurationError with every violation listed.
"""
from __future__ import annotations

import math
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

_UNBOUNDED_STRINGS = ("inf", "+inf", "infinity", "+infinity", "unbounded")


# ---------------------------------------------------------------------------
# Slab ceiling: explicit tagged variant
# ---------------------------------------------------------------------------

class Bounded(BaseModel):
    """Bracket closes at `limit` (cumulative income ceiling)."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["bounded"] = "bounded"
    limit: float


class Unbounded(BaseModel):
    """Final bracket, no upper bound."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["unbounded"] = "unbounded"


Ceiling = Annotated[Union[Bounded, Unbounded], Field(discriminator="kind")]


def coerce_ceiling(value: Any) -> Any:
    """
    Map store-style ceilings onto the tagged variant.

    number            → Bounded(limit)
    None / inf / "inf" → Unbounded()
    anything else is passed through for the discriminated union to validate.
    """
    if value is None:
        return Unbounded()
    if isinstance(value, str) and value.strip().lower() in _UNBOUNDED_STRINGS:
        return Unbounded()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if math.isinf(value) and value > 0:
            return Unbounded()
        return Bounded(limit=float(value))
    return value


# ---------------------------------------------------------------------------
# TaxSlab / RebateRule / TaxSlabConfiguration
# ---------------------------------------------------------------------------

class TaxSlab(BaseModel):
    """One progressive bracket: income up to `up_to` is taxed at `rate` (fraction, not %)."""
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    up_to: Ceiling = Field(..., alias="upTo")
    rate: float

    @field_validator("up_to", mode="before")
    @classmethod
    def _coerce_up_to(cls, value: Any) -> Any:
        return coerce_ceiling(value)

    @property
    def is_unbounded(self) -> bool:
        return isinstance(self.up_to, Unbounded)

    @property
    def limit(self) -> Optional[float]:
        """Bounded ceiling, or None for the final bracket."""
        return None if isinstance(self.up_to, Unbounded) else self.up_to.limit


class RebateRule(BaseModel):
    """
    Section 87A rebate: up to `amount` rupees when taxable income is at or
    below `income_threshold`. Cliff rule, no marginal relief above it.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    amount: float
    income_threshold: float = Field(..., alias="incomeThreshold")


class TaxSlabConfiguration(BaseModel):
    """
    New-regime rules for one assessment year. Read-only to the engine.
    Identified by (assessment_year, regime).
    """
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    assessment_year: str = Field(..., alias="assessmentYear")   # e.g. "2026-27"
    regime: Literal["new"] = "new"
    standard_deduction: float = Field(..., alias="standardDeduction")
    cess_rate: float = Field(..., alias="cessRate")               # 0.04 = 4% health & education cess
    slabs: List[TaxSlab]
    rebate: Optional[RebateRule] = None

    @property
    def key(self) -> Tuple[str, str]:
        return (self.assessment_year, self.regime)


# ---------------------------------------------------------------------------
# PF policy
# ---------------------------------------------------------------------------

class PFMode(str, Enum):
    percentage = "percentage"
    fixed = "fixed"


class PFPolicy(BaseModel):
    """
    percentage: value is a percent of CTC (employer) and of gross-after-employer-PF (employee).
    fixed:      value is the employee's monthly rupee contribution; employer matches it.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: PFMode = PFMode.percentage
    value: float = Field(default=12.0, ge=0)


# ---------------------------------------------------------------------------
# TaxEngine output
# ---------------------------------------------------------------------------

class SlabLine(BaseModel):
    """Audit line for one bracket the slab walk visited."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    lower: float              # previous bracket's ceiling (0 for the first)
    up_to: Ceiling
    taxable_amount: float     # income falling inside this bracket
    rate: float
    tax: float                # taxable_amount * rate


class IncomeBreakdown(BaseModel):
    """
    Full new-regime computation for one CTC.

    Computation sequence (order determines correctness):
      1. PF split → employer_pf_monthly, gross_annual_after_employer_pf, employee_pf_monthly
      2. taxable_income = max(0, gross_annual_after_employer_pf - standard_deduction)
      3. per_slab_lines / slab_tax_total = progressive bracket walk
      4. rebate_applied = 87A cliff rebate (0 above the income threshold)
      5. tax_after_rebate = max(0, slab_tax_total - rebate_applied)
      6. cess = tax_after_rebate * cess_rate   ← NOT on slab_tax_total
      7. total_tax_annual = tax_after_rebate + cess; monthly figures = annual / 12
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    assessment_year: str
    ctc: float
    employer_pf_monthly: float
    employee_pf_monthly: float
    gross_annual_after_employer_pf: float
    taxable_income: float
    per_slab_lines: List[SlabLine] = []
    slab_tax_total: float
    rebate_applied: float
    tax_after_rebate: float
    cess: float
    total_tax_annual: float
    gross_monthly: float
    tax_monthly: float
    net_monthly: float                  # in-hand; may be negative for pathological input
    effective_tax_rate: float           # % of gross_annual_after_employer_pf
    warnings: List[str] = []            # degenerate-input flags for the UI, never errors


# ---------------------------------------------------------------------------
# ComparisonReporter output
# ---------------------------------------------------------------------------

class ComparisonResult(BaseModel):
    """One option measured against the baseline (previous) salary."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    ctc: float
    net_monthly: float
    hike_percent: float          # 0 when baseline CTC is 0
    extra_monthly_cash: float    # signed: negative means less in-hand than baseline


class StructuredCalculation(BaseModel):
    """Rounded per-option figures for machine-readable summaries."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    ctc: int
    gross_monthly: int
    monthly_tax: int
    monthly_pf: int
    in_hand_monthly: int
    annual_tax: int
    effective_tax_rate: float    # two decimals


class StructuredSummary(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    assessment_year: str
    regime: str = "new"
    summary: str
    calculations: List[StructuredCalculation] = []
    generated_at: Optional[datetime] = None


class OfferComparison(BaseModel):
    """Previous salary vs. up to N expected salaries: the salary negotiation view."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    assessment_year: str
    pf_policy: PFPolicy
    previous: IncomeBreakdown
    options: List[IncomeBreakdown] = []
    comparisons: List[ComparisonResult] = []
    summary: str = ""


__all__ = [
    "Bounded",
    "Unbounded",
    "Ceiling",
    "coerce_ceiling",
    "TaxSlab",
    "RebateRule",
    "TaxSlabConfiguration",
    "PFMode",
    "PFPolicy",
    "SlabLine",
    "IncomeBreakdown",
    "ComparisonResult",
    "StructuredCalculation",
    "StructuredSummary",
    "OfferComparison",
]
