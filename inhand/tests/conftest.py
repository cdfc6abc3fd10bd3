"""
Shared fixtures for the in-hand calculator tests.

AY 2026-27 (Budget 2025) new-regime values are used throughout:
  slabs 4L/8L/12L/16L/20L/24L at 0/5/10/15/20/25/30%, std deduction ₹75K,
  cess 4%, 87A rebate up to ₹60K when taxable income <= ₹12L.
"""
from __future__ import annotations

import copy
from typing import Any, Callable

import pytest

from inhand.calculator.schemas import PFMode, PFPolicy, TaxSlabConfiguration
from inhand.calculator.validator import load_configuration
from inhand.slabs.resolver import get_config

AY_2026_27_DOCUMENT: dict[str, Any] = {
    "assessmentYear": "2026-27",
    "regime": "new",
    "standardDeduction": 75_000,
    "cessRate": 0.04,
    "rebate": {"amount": 60_000, "incomeThreshold": 1_200_000},
    "slabs": [
        {"upTo": 400_000,   "rate": 0.00},
        {"upTo": 800_000,   "rate": 0.05},
        {"upTo": 1_200_000, "rate": 0.10},
        {"upTo": 1_600_000, "rate": 0.15},
        {"upTo": 2_000_000, "rate": 0.20},
        {"upTo": 2_400_000, "rate": 0.25},
        {"upTo": None,      "rate": 0.30},
    ],
}


@pytest.fixture
def ay2026() -> TaxSlabConfiguration:
    """AY 2026-27 configuration as served by the resolver."""
    return get_config("2026-27")


@pytest.fixture
def make_document() -> Callable[..., dict[str, Any]]:
    """Return a fresh AY 2026-27 document with top-level keys overridden."""
    def _make(**overrides: Any) -> dict[str, Any]:
        document = copy.deepcopy(AY_2026_27_DOCUMENT)
        document.update(overrides)
        return document
    return _make


@pytest.fixture
def make_config(make_document) -> Callable[..., TaxSlabConfiguration]:
    """Validated configuration built from an overridden AY 2026-27 document."""
    def _make(**overrides: Any) -> TaxSlabConfiguration:
        return load_configuration(make_document(**overrides))
    return _make


@pytest.fixture
def pf12() -> PFPolicy:
    return PFPolicy(mode=PFMode.percentage, value=12)


@pytest.fixture
def no_pf() -> PFPolicy:
    """PF switched off: CTC equals gross, so taxable = CTC - 75,000."""
    return PFPolicy(mode=PFMode.percentage, value=0)
