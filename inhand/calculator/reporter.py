"""
ComparisonReporter — offer comparison and natural-language summaries.
Pure functions over IncomeBreakdown values. No engine calls, no I/O.

Display conventions (shared with the machine-readable summaries, which must
match the interactive UI bit-for-bit):
  - Rupees: rounded to the nearest rupee with halves rounded up, Indian digit
    grouping (₹17,00,000), sign after the symbol (₹-1,234).
  - Percentages: always two decimals (12.50%).
"""
from __future__ import annotations

import math
from datetime import datetime
from typing import List, Optional, Sequence

from inhand.calculator.schemas import (
    ComparisonResult,
    IncomeBreakdown,
    SlabLine,
    StructuredCalculation,
    StructuredSummary,
    Unbounded,
)

RUPEE = "₹"


# ===========================================================================
# FORMATTING
# ===========================================================================

def round_rupees(amount: float) -> int:
    """Nearest whole rupee, halves rounded up (2.5 → 3, -2.5 → -2), as the UI's Math.round."""
    return int(math.floor(amount + 0.5))


def _group_indian(digits: str) -> str:
    """'1700000' → '17,00,000' (last three digits, then pairs)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: List[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_inr(amount: float) -> str:
    """'₹17,00,000'; negatives keep the sign after the symbol, as the UI prints them ('₹-1,234')."""
    rupees = round_rupees(amount)
    sign = "-" if rupees < 0 else ""
    return f"{RUPEE}{sign}{_group_indian(str(abs(rupees)))}"


def slab_label(line: SlabLine) -> str:
    """'₹4,00,000 – ₹8,00,000', or 'Above ₹24,00,000' for the final bracket."""
    if isinstance(line.up_to, Unbounded):
        return f"Above {format_inr(line.lower)}"
    return f"{format_inr(line.lower)} – {format_inr(line.up_to.limit)}"


def format_percent(value: float) -> str:
    return f"{value:.2f}%"


# ===========================================================================
# COMPARISON
# ===========================================================================

def compare(
    breakdowns: Sequence[IncomeBreakdown], baseline: IncomeBreakdown
) -> List[ComparisonResult]:
    """
    Measure each breakdown against the baseline (previous salary).

    hike_percent is 0 when the baseline CTC is 0 or negative, never inf/NaN.
    extra_monthly_cash is signed; negative means less in-hand than today.
    """
    results: List[ComparisonResult] = []
    for breakdown in breakdowns:
        if baseline.ctc > 0:
            hike = (breakdown.ctc - baseline.ctc) / baseline.ctc * 100
        else:
            hike = 0.0
        results.append(ComparisonResult(
            ctc=breakdown.ctc,
            net_monthly=breakdown.net_monthly,
            hike_percent=hike,
            extra_monthly_cash=breakdown.net_monthly - baseline.net_monthly,
        ))
    return results


# ===========================================================================
# NATURAL-LANGUAGE SUMMARIES
# ===========================================================================

def summarize_salary(breakdown: IncomeBreakdown, assessment_year: str) -> str:
    """One sentence block describing a single CTC."""
    return (
        f"For AY {assessment_year}, a CTC of {format_inr(breakdown.ctc)} results in an "
        f"in-hand monthly salary of {format_inr(breakdown.net_monthly)}. "
        f"This accounts for an annual tax liability of {format_inr(breakdown.total_tax_annual)} "
        f"(effective rate: {format_percent(breakdown.effective_tax_rate)}), "
        f"monthly PF deduction of {format_inr(breakdown.employee_pf_monthly)}, "
        f"and monthly tax deduction of {format_inr(breakdown.tax_monthly)}. "
        f"The gross monthly income before deductions is {format_inr(breakdown.gross_monthly)}."
    )


def summarize(breakdowns: Sequence[IncomeBreakdown], assessment_year: str) -> str:
    """
    Deterministic comparison summary.

    0 breakdowns → "" ; 1 → summarize_salary(); several → one clause per option
    followed by the spread between the lowest and highest monthly in-hand.
    """
    if not breakdowns:
        return ""
    if len(breakdowns) == 1:
        return summarize_salary(breakdowns[0], assessment_year)

    options = [
        f"Option {index}: CTC {format_inr(b.ctc)} → In-hand {format_inr(b.net_monthly)}/month "
        f"(Tax: {format_inr(b.total_tax_annual)}/year, "
        f"{format_percent(b.effective_tax_rate)} effective rate)"
        for index, b in enumerate(breakdowns, start=1)
    ]
    in_hand = [b.net_monthly for b in breakdowns]
    lowest, highest = min(in_hand), max(in_hand)

    return (
        f"India Income Tax Calculator for AY {assessment_year} (New Regime). "
        f"Comparing {len(breakdowns)} salary options: {'; '.join(options)}. "
        f"Monthly in-hand ranges from {format_inr(lowest)} to {format_inr(highest)}, "
        f"a difference of {format_inr(highest - lowest)} between the lowest and highest options."
    )


def build_structured_summary(
    breakdowns: Sequence[IncomeBreakdown],
    assessment_year: str,
    regime: str = "new",
    generated_at: Optional[datetime] = None,
) -> StructuredSummary:
    """Machine-readable summary: the prose summary plus rounded per-option figures."""
    calculations = [
        StructuredCalculation(
            ctc=round_rupees(b.ctc),
            gross_monthly=round_rupees(b.gross_monthly),
            monthly_tax=round_rupees(b.tax_monthly),
            monthly_pf=round_rupees(b.employee_pf_monthly),
            in_hand_monthly=round_rupees(b.net_monthly),
            annual_tax=round_rupees(b.total_tax_annual),
            effective_tax_rate=float(f"{b.effective_tax_rate:.2f}"),
        )
        for b in breakdowns
    ]
    return StructuredSummary(
        assessment_year=assessment_year,
        regime=regime,
        summary=summarize(breakdowns, assessment_year),
        calculations=calculations,
        generated_at=generated_at,
    )
