import dataclasses

import pytest

from tests.helpers import make_input
from wealthplan.projection import (
    FundStatus,
    Readiness,
    auto_post_retirement_expense,
    build_projection_input,
    is_blank,
    lump_sums_by_age,
    set_lump_sum,
    simulate,
    summarize,
)
from wealthplan.schema import LumpSum


def _row(rows, age):
    return next(row for row in rows if row.age == age)


def test_ages_are_consecutive_from_current_age_to_horizon():
    rows = simulate(make_input(current_savings=1_000_000))

    assert [row.age for row in rows] == list(range(40, 56))


def test_zero_growth_corpus_at_retirement_is_savings_plus_contributions():
    inp = make_input(current_savings=100_000, monthly_saving=1_000)
    rows = simulate(inp)

    assert _row(rows, 45).corpus_at_beginning == pytest.approx(100_000 + 1_000 * 12 * 5)


def test_retirement_year_boundary():
    rows = simulate(make_input(current_savings=100_000, monthly_saving=1_000))

    retirement_row = _row(rows, 45)
    assert retirement_row.fund_status is FundStatus.RETIREMENT_YEAR
    assert retirement_row.incremental_savings == 12_000
    assert retirement_row.withdrawals == 0

    first_retired = _row(rows, 46)
    assert first_retired.fund_status is FundStatus.RETIRED
    assert first_retired.incremental_savings == 0


def test_withdrawal_rate_is_zero_when_corpus_at_beginning_is_not_positive():
    rows = simulate(make_input(current_age=40, retirement_age=40, post_retirement_monthly_expense=1_000))

    for row in rows:
        if row.corpus_at_beginning <= 0:
            assert row.withdrawal_rate_pct == 0.0


def test_exhaustion_appends_three_zero_rows_and_stops():
    inp = make_input(
        current_age=60,
        retirement_age=60,
        life_expectancy=90,
        current_savings=1_000_000,
        post_retirement_monthly_expense=100_000,
    )
    rows = simulate(inp)

    assert [row.age for row in rows] == [60, 61, 62, 63, 64]
    assert rows[1].withdrawals == 1_200_000
    assert rows[1].withdrawal_rate_pct == pytest.approx(120.0)
    assert rows[1].fund_status is FundStatus.RAN_OUT_OF_FUNDS
    for row in rows[2:]:
        assert row.corpus_at_beginning == 0
        assert row.withdrawals == 0
        assert row.fund_status is FundStatus.RAN_OUT_OF_FUNDS

    summary = summarize(inp, rows)
    assert summary.money_lasts_until_age == 61
    assert summary.years_covered == 1
    assert summary.years_needed == 30
    assert summary.coverage_pct == pytest.approx(100 / 30)
    assert summary.readiness is Readiness.NEEDS_IMPROVEMENT
    assert summary.legacy_amount == 0
    assert summary.shortfall_years == 29
    assert summary.delay_retirement_years == 15
    assert summary.extra_monthly_saving == pytest.approx(1_000_000 / 360)
    assert summary.expense_reduction_pct == pytest.approx(100 - 100 / 30)


def test_money_outliving_life_expectancy_is_a_legacy():
    inp = make_input(current_savings=1_000_000)
    rows = simulate(inp)

    assert rows[-1].age == 55
    assert all(row.fund_status is FundStatus.LEGACY_PASSED_ON for row in rows if row.age > 50)
    assert all(not row.is_alive for row in rows if row.age > 50)

    summary = summarize(inp, rows)
    assert summary.money_lasts_until_age == 55
    assert summary.legacy_amount == pytest.approx(1_000_000)
    assert summary.coverage_pct == pytest.approx(200.0)
    assert summary.readiness is Readiness.COMFORTABLE
    assert summary.shortfall_years == 0
    assert summary.extra_monthly_saving == 0


def test_out_of_funds_after_death_is_not_a_legacy():
    rows = simulate(make_input(current_savings=100, lump_sums={52: 500}))

    row = _row(rows, 52)
    assert not row.is_alive
    assert row.fund_status is FundStatus.RAN_OUT_OF_FUNDS
    assert [r.age for r in rows][-3:] == [53, 54, 55]


def test_exhaustion_tail_can_run_past_the_horizon():
    rows = simulate(make_input(current_savings=100, lump_sums={55: 500}))

    assert [row.age for row in rows][-4:] == [55, 56, 57, 58]


def test_lump_sum_is_deducted_and_counted_in_withdrawal_rate():
    rows = simulate(make_input(current_savings=1_000, lump_sums={42: 300}))

    assert _row(rows, 42).lump_sum_withdrawal == 300
    assert _row(rows, 42).withdrawal_rate_pct == pytest.approx(30.0)
    assert _row(rows, 43).corpus_at_beginning == pytest.approx(700)


def test_example_scenario_matches_closed_form(example_retirement):
    inp = build_projection_input(example_retirement)
    rows = simulate(inp)

    expense = 250_000 * 1.07**10
    assert inp.post_retirement_monthly_expense == pytest.approx(expense)
    assert inp.post_tax_return_pct == pytest.approx(11.375)

    savings = 600_000 * 12
    expected_c60 = 70_000_000 * 1.13**10 + sum(savings * 1.1**k * 1.13 ** (9 - k) for k in range(10))
    row60 = _row(rows, 60)
    assert row60.corpus_at_beginning == pytest.approx(expected_c60, rel=1e-9)
    assert row60.incremental_savings == pytest.approx(savings * 1.1**10, rel=1e-9)
    assert row60.fund_status is FundStatus.RETIREMENT_YEAR

    row61 = _row(rows, 61)
    expected_c61 = expected_c60 * 1.13 + savings * 1.1**10
    assert row61.corpus_at_beginning == pytest.approx(expected_c61, rel=1e-9)
    assert row61.return_on_investment == pytest.approx(expected_c61 * 0.11375, rel=1e-9)
    assert row61.withdrawals == pytest.approx(expense * 12 * 1.07**11, rel=1e-9)
    assert _row(rows, 62).withdrawals == pytest.approx(row61.withdrawals * 1.07, rel=1e-9)


def test_manual_post_retirement_expense_overrides_auto(example_retirement):
    manual = dataclasses.replace(example_retirement, post_retirement_monthly_expense=300_000)

    assert build_projection_input(manual).post_retirement_monthly_expense == 300_000


def test_auto_post_retirement_expense_inflates_to_retirement():
    assert auto_post_retirement_expense(30, 32, 100, 10) == pytest.approx(121)


def test_retirement_age_equal_to_life_expectancy_reports_full_coverage():
    inp = make_input(retirement_age=50, life_expectancy=50, current_savings=10)
    summary = summarize(inp, simulate(inp))

    assert summary.years_needed == 0
    assert summary.coverage_pct == 100.0
    assert summary.readiness is Readiness.COMFORTABLE


def test_zero_retirement_years_with_corpus_emptied_before_retirement_has_no_shortfall():
    inp = make_input(
        current_age=30,
        retirement_age=40,
        life_expectancy=40,
        current_savings=100_000,
        lump_sums={35: 200_000},
    )
    summary = summarize(inp, simulate(inp))

    assert summary.years_needed == 0
    assert summary.years_covered < 0
    assert summary.coverage_pct == 100.0
    assert summary.shortfall_years == 0
    assert summary.extra_monthly_saving == 0
    assert summary.delay_retirement_years == 0


def test_projection_input_lump_sums_are_read_only_copy():
    events = {42: 300.0}
    inp = make_input(current_savings=1_000, lump_sums=events)

    events[43] = 500.0
    assert dict(inp.lump_sums) == {42: 300.0}
    with pytest.raises(TypeError):
        inp.lump_sums[44] = 1.0
    assert _row(simulate(inp), 43).lump_sum_withdrawal == 0


def test_lump_sums_by_age_last_entry_wins():
    assert lump_sums_by_age([LumpSum(55, 1_000), LumpSum(60, 5), LumpSum(55, 2_000)]) == {55: 2_000, 60: 5}


def test_set_lump_sum_returns_copy_and_clears_non_positive():
    original = {55: 1_000.0}

    updated = set_lump_sum(original, 60, 500)
    assert updated == {55: 1_000.0, 60: 500}
    assert original == {55: 1_000.0}

    assert set_lump_sum(updated, 55, 0) == {60: 500}


def test_is_blank_detects_all_zero_settings(example_retirement):
    blank = dataclasses.replace(
        example_retirement,
        current_age=0,
        retirement_age=0,
        life_expectancy=0,
        current_savings=0,
        monthly_saving=0,
        savings_annual_growth_pct=0,
        pre_retirement_return_pct=0,
        capital_gains_tax_pct=0,
        pre_retirement_monthly_expense=0,
        household_inflation_pct=0,
    )

    assert is_blank(blank)
    assert not is_blank(example_retirement)
