"""
service.py — InHandCalculator, the entry point for presentation code.

Wires the pure core (tax_engine + reporter) to its collaborators:
  - a ConfigResolver   (assessment year → TaxSlabConfiguration)
  - a ScenarioStore    (saved salary-comparison inputs)
  - Settings           (default assessment year, PF percentage, variation cap)

The UI, the crawler-facing JSON summary and any image renderer call this
facade and never re-implement the tax formula. The facade holds no mutable
state of its own; the scenario store is the only stateful collaborator.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from inhand.calculator.reporter import build_structured_summary, compare, summarize
from inhand.calculator.schemas import (
    IncomeBreakdown,
    OfferComparison,
    PFMode,
    PFPolicy,
    StructuredSummary,
    TaxSlabConfiguration,
)
from inhand.calculator.tax_engine import compute_breakdown
from inhand.config import Settings, settings as default_settings
from inhand.exceptions import ScenarioNotFoundError
from inhand.scenarios.schemas import ScenarioConfiguration, ScenarioDraft
from inhand.scenarios.store import InMemoryScenarioStore, ScenarioStore
from inhand.slabs.resolver import ConfigResolver, default_resolver

logger = logging.getLogger(__name__)


class InHandCalculator:

    def __init__(
        self,
        resolver: Optional[ConfigResolver] = None,
        store: Optional[ScenarioStore] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or default_settings
        self.resolver = resolver or default_resolver
        self.store = store or InMemoryScenarioStore(
            max_salaries=self.settings.max_salary_variations
        )

    # ------------------------------------------------------------------
    # Resolution helpers
    # ------------------------------------------------------------------

    def config_for(self, assessment_year: Optional[str] = None) -> TaxSlabConfiguration:
        """Raises ConfigurationNotFoundError for unknown years."""
        return self.resolver.get_config(
            assessment_year or self.settings.default_assessment_year,
            self.settings.default_regime,
        )

    def default_pf_policy(self) -> PFPolicy:
        return PFPolicy(mode=PFMode.percentage, value=self.settings.default_pf_percentage)

    # ------------------------------------------------------------------
    # Calculations
    # ------------------------------------------------------------------

    def breakdown(
        self,
        ctc: float,
        pf_policy: Optional[PFPolicy] = None,
        assessment_year: Optional[str] = None,
    ) -> IncomeBreakdown:
        return compute_breakdown(ctc, pf_policy or self.default_pf_policy(), self.config_for(assessment_year))

    def compare_offers(
        self,
        previous_salary: float,
        expected_salaries: Sequence[float],
        pf_policy: Optional[PFPolicy] = None,
        assessment_year: Optional[str] = None,
    ) -> OfferComparison:
        """
        Today's CTC vs. each expected CTC (at most max_salary_variations are used).

        The summary covers the expected options only; the previous salary is the
        baseline the hike and extra-cash figures are measured against.
        """
        config = self.config_for(assessment_year)
        policy = pf_policy or self.default_pf_policy()
        limit = self.settings.max_salary_variations
        if len(expected_salaries) > limit:
            logger.info(
                "Comparing first %d of %d expected salaries", limit, len(expected_salaries)
            )

        previous = compute_breakdown(previous_salary, policy, config)
        options = [compute_breakdown(ctc, policy, config) for ctc in expected_salaries[:limit]]

        return OfferComparison(
            assessment_year=config.assessment_year,
            pf_policy=policy,
            previous=previous,
            options=options,
            comparisons=compare(options, previous),
            summary=summarize(options, config.assessment_year),
        )

    def summary(
        self,
        salaries: Sequence[float],
        pf_policy: Optional[PFPolicy] = None,
        assessment_year: Optional[str] = None,
        generated_at: Optional[datetime] = None,
    ) -> StructuredSummary:
        """Machine-readable summary for the crawler-facing endpoint."""
        config = self.config_for(assessment_year)
        policy = pf_policy or self.default_pf_policy()
        breakdowns = [compute_breakdown(ctc, policy, config) for ctc in salaries]
        return build_structured_summary(
            breakdowns,
            config.assessment_year,
            regime=config.regime,
            generated_at=generated_at,
        )

    # ------------------------------------------------------------------
    # Saved scenarios
    # ------------------------------------------------------------------

    def save_scenario(
        self,
        previous_salary: float,
        expected_salaries: Sequence[float],
        pf_policy: Optional[PFPolicy] = None,
        assessment_year: Optional[str] = None,
    ) -> ScenarioConfiguration:
        """Persist the inputs. The assessment year must resolve before anything is stored."""
        config = self.config_for(assessment_year)
        draft = ScenarioDraft(
            assessment_year=config.assessment_year,
            pf_policy=pf_policy or self.default_pf_policy(),
            previous_salary=previous_salary,
            expected_salaries=list(expected_salaries),
        )
        return self.store.save(draft)

    def load_latest_scenario(self) -> Optional[ScenarioConfiguration]:
        return self.store.get_latest()

    def compare_scenario(self, version: Optional[int] = None) -> OfferComparison:
        """
        Re-run the comparison for a saved scenario (latest when version is None).

        Raises:
            ScenarioNotFoundError: the requested version (or any version) does not exist.
        """
        scenario = self.store.get_latest() if version is None else self.store.get(version)
        if scenario is None:
            raise ScenarioNotFoundError(version)
        return self.compare_offers(
            scenario.previous_salary,
            scenario.expected_salaries,
            pf_policy=scenario.pf_policy,
            assessment_year=scenario.assessment_year,
        )


__all__ = ["InHandCalculator"]
