"""slabs — tax slab configuration store (seed table + resolver)."""
from inhand.slabs.resolver import (
    AssessmentYearOption,
    ConfigResolver,
    StaticConfigResolver,
    get_config,
    list_assessment_years,
)

__all__ = [
    "AssessmentYearOption",
    "ConfigResolver",
    "StaticConfigResolver",
    "get_config",
    "list_assessment_years",
]
