import pytest

from wealthplan.insurance import annuity_present_value, compute_insurance_needs, real_return_pct
from wealthplan.schema import InsuranceSettings, NamedAmount


def _settings(**overrides) -> InsuranceSettings:
    values = {
        "monthly_expenses": 100_000,
        "discounting_factor_pct": 0,
        "spouse_age": 40,
        "spouse_life_expectancy": 80,
        "inflation_pct": 6,
        "post_tax_return_pct": 8,
    }
    values.update(overrides)
    return InsuranceSettings(**values)


def test_future_expenses_use_annuity_at_real_return():
    needs = compute_insurance_needs(_settings())

    r = 1.08 / 1.06 - 1
    expected = 1_200_000 * (1 - (1 + r) ** -40) / r
    assert needs.remaining_years == 40
    assert needs.real_return_pct == pytest.approx(r * 100)
    assert needs.corpus_for_future_expenses == pytest.approx(expected)
    assert needs.total_insurance_required == pytest.approx(expected)
    assert needs.additional_cover_required == pytest.approx(expected)
    assert needs.coverage_gap_pct == pytest.approx(100.0)


def test_non_positive_real_return_falls_back_to_flat_sum():
    needs = compute_insurance_needs(_settings(post_tax_return_pct=6))

    assert needs.real_return_pct == pytest.approx(0.0)
    assert needs.corpus_for_future_expenses == pytest.approx(1_200_000 * 40)


def test_remaining_years_never_negative():
    needs = compute_insurance_needs(_settings(spouse_age=80, spouse_life_expectancy=70))

    assert needs.remaining_years == 0
    assert needs.corpus_for_future_expenses == 0


def test_resources_offset_need_and_gap_is_floored_at_zero():
    settings = _settings(
        spouse_age=70,
        spouse_life_expectancy=70,
        loans=[NamedAmount("Home loan", 3_000_000)],
        goals=[NamedAmount("Education", 2_000_000)],
        investment_assets=4_000_000,
        existing_insurance=2_000_000,
    )
    needs = compute_insurance_needs(settings)

    assert needs.total_insurance_required == 5_000_000
    assert needs.total_resources_available == 6_000_000
    assert needs.additional_cover_required == 0
    assert needs.coverage_gap_pct == 0
    assert needs.is_fully_covered


def test_discounting_factor_reduces_expenses():
    needs = compute_insurance_needs(_settings(discounting_factor_pct=25))

    assert needs.net_monthly_expenses == pytest.approx(75_000)
    assert needs.net_annual_expenses == pytest.approx(900_000)


def test_empty_settings_need_nothing():
    needs = compute_insurance_needs(InsuranceSettings())

    assert needs.total_insurance_required == 0
    assert needs.coverage_gap_pct == 0


def test_annuity_helpers():
    assert real_return_pct(8, 6) == pytest.approx((1.08 / 1.06 - 1) * 100)
    assert annuity_present_value(100, 0.1, 1) == pytest.approx(100 / 1.1)
    assert annuity_present_value(100, -0.01, 3) == 300
