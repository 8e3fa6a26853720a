import json
from pathlib import Path

import pytest

from wealthplan.schema import RetirementSettings


@pytest.fixture
def sample_plan_dict() -> dict:
    return json.loads(Path("sample_plan.json").read_text(encoding="utf-8"))


@pytest.fixture
def example_retirement() -> RetirementSettings:
    return RetirementSettings(
        current_age=50,
        retirement_age=60,
        life_expectancy=90,
        current_savings=70_000_000,
        monthly_saving=600_000,
        savings_annual_growth_pct=10,
        pre_retirement_return_pct=13,
        capital_gains_tax_pct=12.5,
        pre_retirement_monthly_expense=250_000,
        household_inflation_pct=7,
    )
