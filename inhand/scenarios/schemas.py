"""
schemas.py — saved salary scenario contracts.

Defines:
  - ScenarioDraft          (user input before the store assigns version/timestamp)
  - ScenarioConfiguration  (stored version, what load/compare operate on)
  - ScenarioVersion        (version list entry)

A scenario holds the inputs of one salary negotiation session: the
assessment year, the PF policy, today's CTC and up to five expected CTCs.
The presentation layer maps these onto compute_breakdown() unchanged.
"""
from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from inhand.calculator.schemas import PFPolicy


class ScenarioDraft(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    assessment_year: str
    pf_policy: PFPolicy = Field(default_factory=PFPolicy)
    previous_salary: float = 0
    expected_salaries: List[float] = []


class ScenarioConfiguration(ScenarioDraft):
    """Stored scenario. version is assigned by the store, starting at 1."""

    version: int = Field(..., ge=1)
    timestamp: datetime


class ScenarioVersion(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    version: int
    timestamp: datetime
