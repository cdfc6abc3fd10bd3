"""
InHandCalculator facade tests — defaults from settings, offer comparison,
structured summaries, saved scenario round trip.
"""
from __future__ import annotations

import pytest

from inhand.calculator.schemas import PFMode, PFPolicy
from inhand.config import Settings
from inhand.exceptions import ConfigurationNotFoundError, ScenarioNotFoundError
from inhand.service import InHandCalculator
from inhand.slabs.resolver import StaticConfigResolver


@pytest.fixture
def calculator() -> InHandCalculator:
    return InHandCalculator(settings=Settings(
        default_assessment_year="2026-27", default_pf_percentage=12, max_salary_variations=5,
    ))


# ===========================================================================
# Single breakdown
# ===========================================================================

def test_breakdown_uses_default_year_and_pf(calculator: InHandCalculator) -> None:
    result = calculator.breakdown(1_700_000)
    assert result.assessment_year == "2026-27"
    assert result.employer_pf_monthly == pytest.approx(17_000, abs=0.01)
    assert result.total_tax_annual == pytest.approx(96_876, abs=0.01)


def test_breakdown_for_other_year(calculator: InHandCalculator) -> None:
    result = calculator.breakdown(
        775_000, pf_policy=PFPolicy(mode=PFMode.percentage, value=0), assessment_year="2025-26",
    )
    # AY 2025-26: taxable 725000 is above the 7L rebate threshold
    # slab: 15000 + 12500 = 27500, cess 1100
    assert result.taxable_income == 725_000
    assert result.rebate_applied == 0
    assert result.total_tax_annual == pytest.approx(28_600, abs=0.01)


def test_unknown_year_propagates_not_found(calculator: InHandCalculator) -> None:
    with pytest.raises(ConfigurationNotFoundError):
        calculator.breakdown(1_000_000, assessment_year="1999-00")


# ===========================================================================
# Offer comparison
# ===========================================================================

def test_compare_offers(calculator: InHandCalculator) -> None:
    comparison = calculator.compare_offers(1_200_000, [1_700_000, 1_000_000])

    assert comparison.assessment_year == "2026-27"
    assert comparison.previous.net_monthly == pytest.approx(77_440, abs=0.01)
    assert [o.ctc for o in comparison.options] == [1_700_000, 1_000_000]

    up, down = comparison.comparisons
    assert up.hike_percent == pytest.approx(41.6667, abs=1e-4)
    assert up.extra_monthly_cash == pytest.approx(24_193.67, abs=0.01)
    assert down.hike_percent == pytest.approx(-16.6667, abs=1e-4)
    assert down.extra_monthly_cash < 0
    assert comparison.summary.startswith("India Income Tax Calculator for AY 2026-27")


def test_compare_offers_caps_variations() -> None:
    calculator = InHandCalculator(settings=Settings(max_salary_variations=2))
    comparison = calculator.compare_offers(1_000_000, [1_100_000, 1_200_000, 1_300_000])
    assert len(comparison.options) == 2
    assert len(comparison.comparisons) == 2


def test_compare_offers_zero_previous_salary(calculator: InHandCalculator) -> None:
    comparison = calculator.compare_offers(0, [1_700_000])
    assert comparison.comparisons[0].hike_percent == 0


# ===========================================================================
# Structured summary
# ===========================================================================

def test_summary_matches_breakdowns(calculator: InHandCalculator) -> None:
    salaries = [1_700_000, 1_900_000, 2_100_000, 2_300_000, 2_400_000]
    summary = calculator.summary(salaries)
    assert summary.assessment_year == "2026-27"
    assert [c.ctc for c in summary.calculations] == salaries
    assert summary.calculations[0].in_hand_monthly == 101_634
    assert "Comparing 5 salary options" in summary.summary


# ===========================================================================
# Saved scenarios
# ===========================================================================

def test_save_and_compare_latest_scenario(calculator: InHandCalculator) -> None:
    saved = calculator.save_scenario(1_200_000, [1_700_000])
    assert saved.version == 1
    assert calculator.load_latest_scenario() == saved

    comparison = calculator.compare_scenario()
    direct = calculator.compare_offers(1_200_000, [1_700_000])
    assert comparison == direct


def test_compare_specific_scenario_version(calculator: InHandCalculator) -> None:
    calculator.save_scenario(1_000_000, [1_500_000])
    calculator.save_scenario(
        1_200_000, [1_700_000], pf_policy=PFPolicy(mode=PFMode.fixed, value=1_800),
    )
    comparison = calculator.compare_scenario(1)
    assert comparison.previous.ctc == 1_000_000
    assert comparison.pf_policy.value == 12


def test_compare_scenario_not_found(calculator: InHandCalculator) -> None:
    with pytest.raises(ScenarioNotFoundError):
        calculator.compare_scenario()
    with pytest.raises(ScenarioNotFoundError) as exc_info:
        calculator.compare_scenario(7)
    assert exc_info.value.version == 7


def test_save_scenario_rejects_unknown_year(calculator: InHandCalculator) -> None:
    with pytest.raises(ConfigurationNotFoundError):
        calculator.save_scenario(1_000_000, [1_200_000], assessment_year="2099-00")
    assert calculator.store.list_versions() == []


def test_injected_resolver_is_used(make_document) -> None:
    resolver = StaticConfigResolver([make_document(assessmentYear="2030-31", standardDeduction=0)])
    calculator = InHandCalculator(
        resolver=resolver, settings=Settings(default_assessment_year="2030-31"),
    )
    result = calculator.breakdown(500_000, pf_policy=PFPolicy(value=0))
    assert result.assessment_year == "2030-31"
    assert result.taxable_income == 500_000


# ===========================================================================
# Settings
# ===========================================================================

def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INHAND_DEFAULT_PF_PERCENTAGE", "10")
    monkeypatch.setenv("INHAND_DEFAULT_ASSESSMENT_YEAR", "2025-26")
    settings = Settings()
    assert settings.default_pf_percentage == 10
    assert settings.default_assessment_year == "2025-26"
