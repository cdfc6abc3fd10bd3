"""
seed.py — new-regime tax slab documents, one per assessment year.

Stored in the configuration-store document shape (camelCase keys, numeric
ceilings, float("inf") for the final bracket). The resolver parses each
document through load_configuration(), so a typo here fails loudly at load
time instead of producing wrong numbers.

Tax law changes annually: add a new document per Finance Act, never edit a
past year in place.
"""
from __future__ import annotations

from typing import Any

TAX_SLAB_DOCUMENTS: list[dict[str, Any]] = [
    # AY 2023-24 (FY 2022-23) — 6-slab structure, no standard deduction
    {
        "assessmentYear": "2023-24",
        "regime": "new",
        "standardDeduction": 0,
        "cessRate": 0.04,
        "rebate": {"amount": 12_500, "incomeThreshold": 500_000},   # 87A: ≤ ₹5L
        "slabs": [
            {"upTo": 250_000,      "rate": 0.00},
            {"upTo": 500_000,      "rate": 0.05},
            {"upTo": 750_000,      "rate": 0.10},
            {"upTo": 1_000_000,    "rate": 0.15},
            {"upTo": 1_250_000,    "rate": 0.20},
            {"upTo": 1_500_000,    "rate": 0.25},
            {"upTo": float("inf"), "rate": 0.30},
        ],
    },
    # AY 2024-25 (FY 2023-24) — revised slabs, ₹50K standard deduction, 87A up to ₹7L
    {
        "assessmentYear": "2024-25",
        "regime": "new",
        "standardDeduction": 50_000,
        "cessRate": 0.04,
        "rebate": {"amount": 25_000, "incomeThreshold": 700_000},
        "slabs": [
            {"upTo": 300_000,      "rate": 0.00},
            {"upTo": 600_000,      "rate": 0.05},
            {"upTo": 900_000,      "rate": 0.10},
            {"upTo": 1_200_000,    "rate": 0.15},
            {"upTo": 1_500_000,    "rate": 0.20},
            {"upTo": float("inf"), "rate": 0.30},
        ],
    },
    # AY 2025-26 (FY 2024-25) — same slabs as AY 2024-25
    {
        "assessmentYear": "2025-26",
        "regime": "new",
        "standardDeduction": 50_000,
        "cessRate": 0.04,
        "rebate": {"amount": 25_000, "incomeThreshold": 700_000},
        "slabs": [
            {"upTo": 300_000,      "rate": 0.00},
            {"upTo": 600_000,      "rate": 0.05},
            {"upTo": 900_000,      "rate": 0.10},
            {"upTo": 1_200_000,    "rate": 0.15},
            {"upTo": 1_500_000,    "rate": 0.20},
            {"upTo": float("inf"), "rate": 0.30},
        ],
    },
    # AY 2026-27 (FY 2025-26) — Budget 2025: zero tax up to ₹12L taxable
    # (₹12.75L salaried after the ₹75K standard deduction)
    {
        "assessmentYear": "2026-27",
        "regime": "new",
        "standardDeduction": 75_000,
        "cessRate": 0.04,
        "rebate": {"amount": 60_000, "incomeThreshold": 1_200_000},
        "slabs": [
            {"upTo": 400_000,      "rate": 0.00},
            {"upTo": 800_000,      "rate": 0.05},
            {"upTo": 1_200_000,    "rate": 0.10},
            {"upTo": 1_600_000,    "rate": 0.15},
            {"upTo": 2_000_000,    "rate": 0.20},
            {"upTo": 2_400_000,    "rate": 0.25},
            {"upTo": float("inf"), "rate": 0.30},
        ],
    },
]
