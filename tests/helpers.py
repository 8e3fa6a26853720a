import copy
import json
from pathlib import Path

from wealthplan.projection import ProjectionInput


def write_plan(tmp_path: Path, data: dict, filename: str = "plan.json") -> Path:
    path = tmp_path / filename
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def clone_plan(data: dict) -> dict:
    return copy.deepcopy(data)


def make_input(**overrides) -> ProjectionInput:
    """Flat, zero-return projection input; override fields per test."""
    values = {
        "current_age": 40,
        "retirement_age": 45,
        "life_expectancy": 50,
        "current_savings": 0.0,
        "monthly_saving": 0.0,
        "savings_annual_growth_pct": 0.0,
        "pre_retirement_return_pct": 0.0,
        "capital_gains_tax_pct": 0.0,
        "post_retirement_monthly_expense": 0.0,
        "household_inflation_pct": 0.0,
    }
    values.update(overrides)
    return ProjectionInput(**values)
