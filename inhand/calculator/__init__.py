"""
calculator — the pure new-regime tax core.

Re-exports the two operations presentation code calls (compute_breakdown and
the reporter functions) so callers never reach into module internals.
"""
from inhand.calculator.reporter import (
    build_structured_summary,
    compare,
    format_inr,
    format_percent,
    slab_label,
    summarize,
    summarize_salary,
)
from inhand.calculator.schemas import (
    IncomeBreakdown,
    PFMode,
    PFPolicy,
    TaxSlabConfiguration,
)
from inhand.calculator.tax_engine import compute_breakdown
from inhand.calculator.validator import load_configuration, validate_configuration

__all__ = [
    "IncomeBreakdown",
    "PFMode",
    "PFPolicy",
    "TaxSlabConfiguration",
    "build_structured_summary",
    "compare",
    "compute_breakdown",
    "format_inr",
    "format_percent",
    "slab_label",
    "load_configuration",
    "summarize",
    "summarize_salary",
    "validate_configuration",
]
