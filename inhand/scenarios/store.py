"""
store.py — versioned key-value store for saved salary scenarios.

Design:
  - ScenarioStore is the interface the calculator facade is given; any
    backing (file, embedded DB, remote store) implements the same six methods
  - Versions are integers: next version = highest existing + 1, starting at 1
    (deleting the newest version frees its number for reuse)
  - expected_salaries is truncated to max_salaries on save
  - Last write wins; no contract for concurrent writers (single-user local tool)
  - Logs only version numbers, never salary values
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from inhand.config import settings
from inhand.exceptions import ScenarioValidationError
from inhand.scenarios.schemas import ScenarioConfiguration, ScenarioDraft, ScenarioVersion

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_draft(draft: ScenarioDraft) -> None:
    """
    Reject drafts the comparison view cannot use.
    Collects every violation before raising.
    """
    violations: list[dict[str, Any]] = []

    if draft.previous_salary < 0:
        violations.append({
            "field": "previous_salary",
            "issue": "Previous salary cannot be negative.",
        })
    if not draft.expected_salaries:
        violations.append({
            "field": "expected_salaries",
            "issue": "At least one expected salary is required.",
        })
    for index, salary in enumerate(draft.expected_salaries):
        if salary < 0:
            violations.append({
                "field": f"expected_salaries.{index}",
                "issue": "Expected salary cannot be negative.",
            })

    if violations:
        raise ScenarioValidationError(violations)


# ---------------------------------------------------------------------------
# Interface
# ---------------------------------------------------------------------------

class ScenarioStore(ABC):
    """save / get / get_latest / delete / list_versions / clear."""

    @abstractmethod
    def save(self, draft: ScenarioDraft) -> ScenarioConfiguration:
        """Store the draft as a new version and return it."""

    @abstractmethod
    def get(self, version: int) -> Optional[ScenarioConfiguration]:
        """Return the given version, or None if it does not exist."""

    @abstractmethod
    def get_latest(self) -> Optional[ScenarioConfiguration]:
        """Return the highest version, or None when the store is empty."""

    @abstractmethod
    def delete(self, version: int) -> None:
        """Remove a version. Deleting a missing version is a no-op."""

    @abstractmethod
    def list_versions(self) -> List[ScenarioVersion]:
        """All versions, newest first."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every version."""


# ---------------------------------------------------------------------------
# In-memory backing
# ---------------------------------------------------------------------------

class InMemoryScenarioStore(ScenarioStore):

    def __init__(
        self,
        max_salaries: Optional[int] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if max_salaries is None:
            max_salaries = settings.max_salary_variations
        if max_salaries < 1:
            raise ValueError(f"max_salaries must be at least 1, got {max_salaries}")
        self._max_salaries = max_salaries
        self._clock = clock
        self._scenarios: Dict[int, ScenarioConfiguration] = {}

    def save(self, draft: ScenarioDraft) -> ScenarioConfiguration:
        validate_draft(draft)
        version = max(self._scenarios, default=0) + 1
        scenario = ScenarioConfiguration(
            **draft.model_dump(exclude={"expected_salaries"}),
            expected_salaries=draft.expected_salaries[: self._max_salaries],
            version=version,
            timestamp=self._clock(),
        )
        self._scenarios[version] = scenario
        if len(draft.expected_salaries) > self._max_salaries:
            logger.info(
                "Truncated expected salaries version=%d kept=%d dropped=%d",
                version,
                self._max_salaries,
                len(draft.expected_salaries) - self._max_salaries,
            )
        logger.info("Saved scenario version=%d ay=%s", version, scenario.assessment_year)
        return scenario

    def get(self, version: int) -> Optional[ScenarioConfiguration]:
        return self._scenarios.get(version)

    def get_latest(self) -> Optional[ScenarioConfiguration]:
        if not self._scenarios:
            return None
        return self._scenarios[max(self._scenarios)]

    def delete(self, version: int) -> None:
        if self._scenarios.pop(version, None) is not None:
            logger.info("Deleted scenario version=%d", version)

    def list_versions(self) -> List[ScenarioVersion]:
        return [
            ScenarioVersion(version=s.version, timestamp=s.timestamp)
            for s in sorted(self._scenarios.values(), key=lambda s: s.version, reverse=True)
        ]

    def clear(self) -> None:
        self._scenarios.clear()
        logger.info("Cleared all scenarios")
