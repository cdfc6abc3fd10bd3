"""
exceptions.py — error taxonomy for the in-hand calculator.

  - InvalidConfigurationError  malformed TaxSlabConfiguration (fails before any computation)
  - ConfigurationNotFoundError resolver miss for (assessment_year, regime)
  - ScenarioValidationError    saved salary scenario violates input rules
  - ScenarioNotFoundError      saved scenario version does not exist

Validation errors carry every violation found in a single pass as a list of
{"field": str | None, "issue": str} dicts. The exception message is the
JSON-encoded list so a presentation layer can rebuild the standard
{error: {code, message, details}} envelope without re-parsing prose.
"""
from __future__ import annotations

import json
from typing import Any, Optional


class _ViolationError(ValueError):
    """ValueError carrying a list of {field, issue} violations."""

    def __init__(self, violations: list[dict[str, Any]]) -> None:
        self.violations = violations
        super().__init__(json.dumps(violations, ensure_ascii=False))


class InvalidConfigurationError(_ViolationError):
    """Tax slab configuration is empty, unordered, unbounded in the wrong place, or out of range."""


class ScenarioValidationError(_ViolationError):
    """Saved scenario input is unusable (e.g. negative salary, no expected salaries)."""


class ScenarioNotFoundError(LookupError):
    """Requested saved scenario version does not exist (None = store is empty)."""

    def __init__(self, version: Optional[int] = None) -> None:
        self.version = version
        super().__init__(
            "No saved scenario found" if version is None else f"Scenario version {version} not found"
        )


class ConfigurationNotFoundError(LookupError):
    """No tax slab configuration exists for the requested assessment year and regime."""

    def __init__(self, assessment_year: str, regime: str) -> None:
        self.assessment_year = assessment_year
        self.regime = regime
        super().__init__(
            f"Tax slab configuration not found for AY {assessment_year} ({regime} regime)"
        )


__all__ = [
    "InvalidConfigurationError",
    "ScenarioValidationError",
    "ConfigurationNotFoundError",
    "ScenarioNotFoundError",
]
