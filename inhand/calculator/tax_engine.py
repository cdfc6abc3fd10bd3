"""
In-hand Tax Engine — India new regime, any assessment year.
Pure Python, deterministic. Same input → same output. No I/O, no module state.

Slab breakpoints, standard deduction, cess and the 87A rebate all come from the
TaxSlabConfiguration passed in; nothing year-specific is hardcoded here.
For AY 2026-27 the configuration store carries the Budget 2025 breakpoints:
  4L/8L/12L/16L/20L/24L, ₹75K standard deduction, 87A ₹60K up to ₹12L taxable.

Only PF and the standard deduction reduce the taxable base (no Chapter VI-A
deductions in the new regime). Residency is fixed to resident individual, so
87A eligibility depends on the income test alone.
"""
from __future__ import annotations

import logging
import math
from typing import List, NamedTuple, Sequence, Tuple

from inhand.calculator.schemas import (
    IncomeBreakdown,
    PFMode,
    PFPolicy,
    SlabLine,
    TaxSlab,
    TaxSlabConfiguration,
    Unbounded,
)
from inhand.calculator.validator import validate_configuration

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12

# ===========================================================================
# WARNING FLAGS — degenerate-but-valid input, surfaced to the UI, never raised
# ===========================================================================

WARN_NEGATIVE_COMPENSATION = "negative_compensation"
WARN_NEGATIVE_GROSS        = "negative_gross"          # PF exceeds CTC
WARN_NEGATIVE_NET          = "negative_net"            # in-hand below zero
WARN_PF_OVER_100           = "pf_percentage_over_100"


class PFSplit(NamedTuple):
    employer_monthly: float
    employee_monthly: float
    gross_annual: float       # CTC minus the employer's annual contribution; may be negative


# ===========================================================================
# INTERNAL HELPERS (pure functions — no side effects, no I/O)
# ===========================================================================

def _round_half_up(value: float) -> float:
    """Nearest whole rupee, halves away from zero (non-negative inputs only)."""
    return float(math.floor(value + 0.5))


def split_pf(annual_compensation: float, pf_policy: PFPolicy) -> PFSplit:
    """
    Split CTC into employer PF, employee PF and gross salary.

    percentage: employer PF is taken on CTC; employee PF is then taken on the
                smaller gross-after-employer-PF base (two stages, not 12% + 12%
                of the same base).
    fixed:      employee PF is the literal monthly amount; employer matches it.

    PF figures are reported as computed, never clamped.
    """
    if pf_policy.mode == PFMode.fixed:
        employee_monthly = pf_policy.value
        employer_monthly = employee_monthly    # matching-contribution assumption
        gross_annual = annual_compensation - employer_monthly * MONTHS_PER_YEAR
        return PFSplit(employer_monthly, employee_monthly, gross_annual)

    employer_monthly = annual_compensation * pf_policy.value / 100 / MONTHS_PER_YEAR
    gross_annual = annual_compensation - employer_monthly * MONTHS_PER_YEAR
    employee_monthly = gross_annual * pf_policy.value / 100 / MONTHS_PER_YEAR
    return PFSplit(employer_monthly, employee_monthly, gross_annual)


def calculate_slab_tax(
    taxable_income: float, slabs: Sequence[TaxSlab]
) -> Tuple[List[SlabLine], float]:
    """
    Progressive slab tax. Walks the brackets in order, consuming taxable income
    bracket by bracket; stops once nothing remains.

    Returns (per-bracket lines, total). The total is accumulated in line order,
    so sum(line.tax for line in lines) reproduces it exactly.
    """
    lines: List[SlabLine] = []
    total = 0.0
    previous_limit = 0.0
    remaining = taxable_income

    for slab in slabs:
        if remaining <= 0:
            break
        if isinstance(slab.up_to, Unbounded):
            amount = remaining
        else:
            width = slab.up_to.limit - previous_limit
            amount = width if remaining > width else remaining

        tax = amount * slab.rate
        lines.append(SlabLine(
            lower=previous_limit,
            up_to=slab.up_to,
            taxable_amount=amount,
            rate=slab.rate,
            tax=tax,
        ))
        total += tax
        remaining -= amount
        if not isinstance(slab.up_to, Unbounded):
            previous_limit = slab.up_to.limit

    return lines, total


def apply_rebate(
    taxable_income: float, slab_tax: float, config: TaxSlabConfiguration
) -> float:
    """
    Section 87A rebate — cliff rule.

    taxable_income <= threshold → slab_tax <= amount: the whole slab tax (paise included)
                                  slab_tax >  amount: amount, rounded to whole rupees
    taxable_income >  threshold → no rebate at all (₹1 over loses all of it).
    Result always satisfies 0 <= rebate <= slab_tax, and tax stays zero up to
    the point where slab tax first exceeds the rebate amount.
    """
    rule = config.rebate
    if rule is None:
        return 0.0
    if taxable_income > rule.income_threshold:
        return 0.0
    if slab_tax <= 0:
        return 0.0
    if slab_tax <= rule.amount:
        return slab_tax
    return min(_round_half_up(rule.amount), slab_tax)


# ===========================================================================
# PUBLIC API
# ===========================================================================

def compute_breakdown(
    annual_compensation: float,
    pf_policy: PFPolicy,
    config: TaxSlabConfiguration,
) -> IncomeBreakdown:
    """
    Full new-regime breakdown for one annual CTC.

    Raises:
        InvalidConfigurationError: config is malformed (checked before computing).
    """
    validate_configuration(config)

    # Step 1: PF split
    pf = split_pf(annual_compensation, pf_policy)

    # Step 2: Taxable income (never negative)
    taxable_income = max(0.0, pf.gross_annual - config.standard_deduction)

    # Step 3: Slab tax
    lines, slab_tax = calculate_slab_tax(taxable_income, config.slabs)

    # Step 4: 87A rebate
    rebate = apply_rebate(taxable_income, slab_tax, config)

    # Step 5: Tax after rebate
    tax_after_rebate = max(0.0, slab_tax - rebate)

    # Step 6: Cess (on post-87A tax, NOT on slab tax)
    cess = tax_after_rebate * config.cess_rate

    # Step 7: Totals
    total_tax = tax_after_rebate + cess
    gross_monthly = pf.gross_annual / MONTHS_PER_YEAR
    tax_monthly = total_tax / MONTHS_PER_YEAR
    net_monthly = gross_monthly - tax_monthly - pf.employee_monthly
    effective_rate = total_tax / pf.gross_annual * 100 if pf.gross_annual > 0 else 0.0

    warnings: List[str] = []
    if annual_compensation < 0:
        warnings.append(WARN_NEGATIVE_COMPENSATION)
    if pf_policy.mode == PFMode.percentage and pf_policy.value > 100:
        warnings.append(WARN_PF_OVER_100)
    if pf.gross_annual < 0:
        warnings.append(WARN_NEGATIVE_GROSS)
    if net_monthly < 0:
        warnings.append(WARN_NEGATIVE_NET)

    logger.debug(
        "Computed breakdown ay=%s pf_mode=%s brackets=%d rebate_applied=%s warnings=%s",
        config.assessment_year,
        pf_policy.mode.value,
        len(lines),
        rebate > 0,
        warnings,
    )

    return IncomeBreakdown(
        assessment_year=config.assessment_year,
        ctc=annual_compensation,
        employer_pf_monthly=pf.employer_monthly,
        employee_pf_monthly=pf.employee_monthly,
        gross_annual_after_employer_pf=pf.gross_annual,
        taxable_income=taxable_income,
        per_slab_lines=lines,
        slab_tax_total=slab_tax,
        rebate_applied=rebate,
        tax_after_rebate=tax_after_rebate,
        cess=cess,
        total_tax_annual=total_tax,
        gross_monthly=gross_monthly,
        tax_monthly=tax_monthly,
        net_monthly=net_monthly,
        effective_tax_rate=effective_rate,
        warnings=warnings,
    )
