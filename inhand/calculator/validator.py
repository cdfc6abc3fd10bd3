"""
Tax slab configuration validator.

Checks a TaxSlabConfiguration's shape AFTER Pydantic has parsed the types.
Collects all violations in a single pass and raises InvalidConfigurationError,
whose message is a JSON-encoded list of {field, issue} dicts.

Rules enforced:
  1. slabs is non-empty
  2. exactly one slab is Unbounded, and it is the last
  3. bounded ceilings are finite, positive, and strictly ascending
  4. every rate is within [0, 1]
  5. standard_deduction >= 0
  6. cess_rate within [0, 1]
  7. rebate.amount >= 0 and rebate.income_threshold >= 0 (when a rebate is present)

A configuration that passes partitions [0, ∞) into brackets with no gaps:
bracket i runs from slab[i-1].limit (0 for the first) to slab[i].limit.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from pydantic import ValidationError

from inhand.calculator.schemas import TaxSlabConfiguration, Unbounded
from inhand.exceptions import InvalidConfigurationError

logger = logging.getLogger(__name__)


def _in_unit_interval(value: float) -> bool:
    return math.isfinite(value) and 0.0 <= value <= 1.0


def validate_configuration(config: TaxSlabConfiguration) -> None:
    """
    Validate a parsed configuration against the slab partition rules.

    Raises:
        InvalidConfigurationError: listing every violated rule.
    """
    violations: list[dict[str, Any]] = []

    # ---- 1. Non-empty --------------------------------------------------------
    if not config.slabs:
        violations.append({"field": "slabs", "issue": "At least one tax slab is required."})

    # ---- 2-4. Ordering, unbounded tail, rates ------------------------------
    previous_limit = 0.0
    last_index = len(config.slabs) - 1
    for index, slab in enumerate(config.slabs):
        field = f"slabs.{index}"
        if isinstance(slab.up_to, Unbounded):
            if index != last_index:
                violations.append({
                    "field": f"{field}.up_to",
                    "issue": "Only the final slab may be unbounded.",
                })
        else:
            limit = slab.up_to.limit
            if not math.isfinite(limit):
                violations.append({
                    "field": f"{field}.up_to",
                    "issue": f"Slab ceiling must be a finite number, got {limit!r}.",
                })
            elif limit <= previous_limit:
                violations.append({
                    "field": f"{field}.up_to",
                    "issue": (
                        f"Slab ceilings must be strictly ascending from 0: "
                        f"{limit:,.0f} does not exceed {previous_limit:,.0f}."
                    ),
                })
            else:
                previous_limit = limit
            if index == last_index:
                violations.append({
                    "field": f"{field}.up_to",
                    "issue": "The final slab must be unbounded.",
                })

        if not _in_unit_interval(slab.rate):
            violations.append({
                "field": f"{field}.rate",
                "issue": f"Rate must be a fraction within [0, 1], got {slab.rate!r}.",
            })

    # ---- 5. Standard deduction ---------------------------------------------
    if not (math.isfinite(config.standard_deduction) and config.standard_deduction >= 0):
        violations.append({
            "field": "standard_deduction",
            "issue": f"Standard deduction must be >= 0, got {config.standard_deduction!r}.",
        })

    # ---- 6. Cess ------------------------------------------------------------
    if not _in_unit_interval(config.cess_rate):
        violations.append({
            "field": "cess_rate",
            "issue": f"Cess rate must be a fraction within [0, 1], got {config.cess_rate!r}.",
        })

    # ---- 7. Rebate -----------------------------------------------------------
    if config.rebate is not None:
        if not (math.isfinite(config.rebate.amount) and config.rebate.amount >= 0):
            violations.append({
                "field": "rebate.amount",
                "issue": f"Rebate amount must be >= 0, got {config.rebate.amount!r}.",
            })
        if not (math.isfinite(config.rebate.income_threshold) and config.rebate.income_threshold >= 0):
            violations.append({
                "field": "rebate.income_threshold",
                "issue": (
                    f"Rebate income threshold must be >= 0, "
                    f"got {config.rebate.income_threshold!r}."
                ),
            })

    if violations:
        logger.warning(
            "Invalid tax slab configuration ay=%s regime=%s violations=%d",
            config.assessment_year,
            config.regime,
            len(violations),
        )
        raise InvalidConfigurationError(violations)


def load_configuration(document: Mapping[str, Any]) -> TaxSlabConfiguration:
    """
    Parse and validate a configuration document from the store.

    Pydantic type errors are converted to InvalidConfigurationError so callers
    only need to handle one error type for a bad document.
    """
    try:
        config = TaxSlabConfiguration.model_validate(dict(document))
    except ValidationError as exc:
        violations = [
            {
                "field": ".".join(str(loc) for loc in error["loc"]) or None,
                "issue": error["msg"],
            }
            for error in exc.errors()
        ]
        raise InvalidConfigurationError(violations) from exc
    validate_configuration(config)
    return config
