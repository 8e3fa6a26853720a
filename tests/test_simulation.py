import logging

from tests.helpers import clone_plan, write_plan
from wealthplan.projection import Readiness
from wealthplan.schema import load_plan
from wealthplan.simulation import run_simulation


def test_sample_plan_runs_every_section():
    result = run_simulation(load_plan("sample_plan.json"))

    assert result.rows[0].age == 50
    assert result.summary is not None
    assert result.summary.readiness in set(Readiness)
    assert result.insurance is not None
    assert len(result.goals) == 2
    assert result.risk_profile.total_score == 23
    assert result.risk_profile.category == "Moderate"
    assert result.net_worth.net_worth == 82_000_000
    assert result.cash_flow.net_flow == 655_000
    assert not result.calculators.is_empty
    assert len(result.calculators.amortization) == 12
    assert result.calculators.emergency_fund == 1_500_000


def test_lump_sum_from_plan_reaches_projection():
    result = run_simulation(load_plan("sample_plan.json"))

    row = next(row for row in result.rows if row.age == 65)
    assert row.lump_sum_withdrawal == 5_000_000


def test_blank_retirement_has_no_summary(tmp_path, sample_plan_dict, caplog):
    data = clone_plan(sample_plan_dict)
    for key in data["retirement"]:
        if key != "lump_sums":
            data["retirement"][key] = 0
    data["retirement"]["lump_sums"] = []
    path = write_plan(tmp_path, data)

    with caplog.at_level(logging.WARNING, logger="wealthplan.simulation"):
        result = run_simulation(load_plan(path))

    assert result.summary is None
    assert "retirement section is blank" in caplog.text


def test_exhausted_ages_lists_out_of_funds_rows(tmp_path, sample_plan_dict):
    data = clone_plan(sample_plan_dict)
    data["retirement"].update(
        {
            "current_age": 60,
            "retirement_age": 60,
            "current_savings": 1_000_000,
            "monthly_saving": 0,
            "pre_retirement_return_pct": 0,
            "post_retirement_monthly_expense": 100_000,
            "household_inflation_pct": 0,
            "lump_sums": [],
        }
    )
    path = write_plan(tmp_path, data)
    result = run_simulation(load_plan(path))

    assert result.exhausted_ages == [61, 62, 63, 64]


def test_optional_sections_are_empty_when_absent(tmp_path, sample_plan_dict):
    data = {"profile": sample_plan_dict["profile"], "retirement": sample_plan_dict["retirement"]}
    path = write_plan(tmp_path, data)
    result = run_simulation(load_plan(path))

    assert result.insurance is None
    assert result.goals == []
    assert result.risk_profile.category is None
    assert result.calculators.is_empty
