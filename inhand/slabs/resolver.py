"""
resolver.py — assessment year → TaxSlabConfiguration lookup.

The calculator never reads slab data directly; it asks a resolver. Any object
with get_config() / list_assessment_years() satisfies ConfigResolver. The
bundled StaticConfigResolver serves the seed table, a document-database
backed resolver only needs the same two methods.

Lookups are keyed uniquely by (assessment_year, regime). A miss raises
ConfigurationNotFoundError and is never recovered here.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from pydantic import BaseModel, ConfigDict

from inhand.calculator.schemas import TaxSlabConfiguration
from inhand.calculator.validator import load_configuration
from inhand.exceptions import ConfigurationNotFoundError, InvalidConfigurationError
from inhand.slabs.seed import TAX_SLAB_DOCUMENTS

logger = logging.getLogger(__name__)


class AssessmentYearOption(BaseModel):
    """Selectable assessment year, e.g. {year: "2026-27", label: "AY 2026-27"}."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    year: str
    label: str


class ConfigResolver(Protocol):
    def get_config(self, assessment_year: str, regime: str = "new") -> TaxSlabConfiguration: ...

    def list_assessment_years(self, regime: str = "new") -> List[AssessmentYearOption]: ...


def _start_year(assessment_year: str) -> int:
    """'2026-27' → 2026. Unparseable years sort last."""
    try:
        return int(assessment_year.split("-")[0])
    except ValueError:
        return -1


class StaticConfigResolver:
    """
    Resolver over an in-process table of configuration documents.

    Every document is parsed and validated once at construction; the resolved
    configurations are frozen, so the same instance is handed to every caller.
    """

    def __init__(self, documents: Optional[Iterable[Mapping[str, Any]]] = None) -> None:
        source = TAX_SLAB_DOCUMENTS if documents is None else list(documents)
        configs: Dict[Tuple[str, str], TaxSlabConfiguration] = {}
        for document in source:
            config = load_configuration(document)
            if config.key in configs:
                raise InvalidConfigurationError([{
                    "field": "assessment_year",
                    "issue": (
                        f"Duplicate configuration for AY {config.assessment_year} "
                        f"({config.regime} regime)."
                    ),
                }])
            configs[config.key] = config
        self._configs = configs
        logger.info("Loaded %d tax slab configurations", len(configs))

    def get_config(self, assessment_year: str, regime: str = "new") -> TaxSlabConfiguration:
        config = self._configs.get((assessment_year, regime))
        if config is None:
            logger.info("No tax slab configuration ay=%s regime=%s", assessment_year, regime)
            raise ConfigurationNotFoundError(assessment_year, regime)
        return config

    def list_assessment_years(self, regime: str = "new") -> List[AssessmentYearOption]:
        """Assessment years available for `regime`, newest first."""
        years = sorted(
            {year for year, r in self._configs if r == regime},
            key=_start_year,
            reverse=True,
        )
        return [AssessmentYearOption(year=year, label=f"AY {year}") for year in years]


# Seed-table resolver shared by callers that do not inject their own
default_resolver = StaticConfigResolver()


def get_config(assessment_year: str, regime: str = "new") -> TaxSlabConfiguration:
    return default_resolver.get_config(assessment_year, regime)


def list_assessment_years(regime: str = "new") -> List[AssessmentYearOption]:
    return default_resolver.list_assessment_years(regime)
