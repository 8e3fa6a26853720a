"""Semantic validation for plans."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .calculators import parse_flow_date
from .projection import HORIZON_AFTER_LIFE_EXPECTANCY, is_blank
from .risk_profile import QUESTIONS_BY_ID
from .schema import Plan

GROUPING = {"indian", "western"}
GOAL_PRIORITY = {"High", "Medium", "Low"}


@dataclass(slots=True)
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _check_enum(result: ValidationResult, path: str, value: str, allowed: Iterable[str]) -> None:
    allowed_set = set(allowed)
    if value not in allowed_set:
        expected = ", ".join(sorted(allowed_set))
        result.errors.append(f"{path}: '{value}' is not valid; expected one of [{expected}]")


def _check_non_negative(result: ValidationResult, path: str, value: float) -> None:
    if value < 0:
        result.errors.append(f"{path}: must be >= 0")


def _check_percent(result: ValidationResult, path: str, value: float) -> None:
    if value < 0:
        result.errors.append(f"{path}: must be >= 0")
    elif value > 100:
        result.errors.append(f"{path}: must be <= 100")


def _check_positive(result: ValidationResult, path: str, value: float) -> None:
    if value <= 0:
        result.errors.append(f"{path}: must be > 0")


def _is_flow_date(value: str) -> bool:
    try:
        parse_flow_date(value)
    except ValueError:
        return False
    return True


def _validate_retirement(plan: Plan, result: ValidationResult) -> None:
    r = plan.retirement
    base = "retirement"
    if is_blank(r):
        result.warnings.append(f"{base}: all values are zero; no retirement summary will be produced")
        return

    for name in ("current_age", "retirement_age", "life_expectancy"):
        _check_non_negative(result, f"{base}.{name}", getattr(r, name))
    if r.retirement_age < r.current_age:
        result.errors.append(f"{base}.retirement_age: must be >= current_age")
    if r.life_expectancy < r.current_age:
        result.errors.append(f"{base}.life_expectancy: must be >= current_age")
    if r.life_expectancy < r.retirement_age:
        result.warnings.append(f"{base}.life_expectancy: earlier than retirement_age; no withdrawals will be simulated")
    elif r.life_expectancy == r.retirement_age:
        result.warnings.append(f"{base}.life_expectancy: equals retirement_age; coverage is reported as 100%")

    for name in ("current_savings", "monthly_saving", "pre_retirement_monthly_expense", "household_inflation_pct"):
        _check_non_negative(result, f"{base}.{name}", getattr(r, name))
    _check_percent(result, f"{base}.capital_gains_tax_pct", r.capital_gains_tax_pct)
    if r.post_retirement_monthly_expense is not None:
        _check_non_negative(result, f"{base}.post_retirement_monthly_expense", r.post_retirement_monthly_expense)

    last_age = r.life_expectancy + HORIZON_AFTER_LIFE_EXPECTANCY
    seen_ages: set[int] = set()
    for idx, event in enumerate(r.lump_sums):
        path = f"{base}.lump_sums[{idx}]"
        _check_non_negative(result, f"{path}.amount", event.amount)
        if not r.current_age <= event.age <= last_age:
            result.warnings.append(f"{path}.age: {event.age} is outside the simulated ages {r.current_age}-{last_age}")
        if event.age in seen_ages:
            result.warnings.append(f"{path}.age: duplicate lump sum at age {event.age}; the last one wins")
        seen_ages.add(event.age)


def _validate_insurance(plan: Plan, result: ValidationResult) -> None:
    ins = plan.insurance
    if ins is None:
        return
    base = "insurance"
    for name in ("monthly_expenses", "investment_assets", "existing_insurance", "spouse_age", "inflation_pct"):
        _check_non_negative(result, f"{base}.{name}", getattr(ins, name))
    _check_percent(result, f"{base}.discounting_factor_pct", ins.discounting_factor_pct)
    if ins.spouse_life_expectancy < ins.spouse_age:
        result.warnings.append(f"{base}.spouse_life_expectancy: earlier than spouse_age; no future expenses are covered")
    for key in ("loans", "goals"):
        for idx, item in enumerate(getattr(ins, key)):
            _check_non_negative(result, f"{base}.{key}[{idx}].amount", item.amount)


def _validate_goals(plan: Plan, result: ValidationResult) -> None:
    for idx, goal in enumerate(plan.goals):
        base = f"goals[{idx}]"
        _check_enum(result, f"{base}.priority", goal.priority, GOAL_PRIORITY)
        _check_non_negative(result, f"{base}.time_horizon_years", goal.time_horizon_years)
        for name in ("present_value", "initial_amount", "monthly_amount"):
            _check_non_negative(result, f"{base}.{name}", getattr(goal, name))


def _validate_risk_profile(plan: Plan, result: ValidationResult) -> None:
    for question_id, score in sorted(plan.risk_profile.answers.items()):
        path = f"risk_profile.answers.{question_id}"
        question = QUESTIONS_BY_ID.get(question_id)
        if question is None:
            result.errors.append(f"{path}: unknown question id")
            continue
        allowed = {option.score for option in question.options}
        if score not in allowed:
            expected = ", ".join(str(value) for value in sorted(allowed))
            result.errors.append(f"{path}: score {score} is not valid; expected one of [{expected}]")


def _validate_calculators(plan: Plan, result: ValidationResult) -> None:
    calc = plan.calculators
    base = "calculators"
    if calc.loan is not None:
        _check_positive(result, f"{base}.loan.tenure_years", calc.loan.tenure_years)
        _check_non_negative(result, f"{base}.loan.amount", calc.loan.amount)
    if calc.mortgage is not None:
        _check_positive(result, f"{base}.mortgage.tenure_years", calc.mortgage.tenure_years)
        if calc.mortgage.down_payment > calc.mortgage.loan_amount:
            result.errors.append(f"{base}.mortgage.down_payment: must be <= loan_amount")
    for key in ("sip", "step_up_sip"):
        block = getattr(calc, key)
        if block is not None:
            _check_positive(result, f"{base}.{key}.tenure_years", block.tenure_years)
    if calc.compound_interest is not None:
        _check_positive(result, f"{base}.compound_interest.compound_frequency", calc.compound_interest.compound_frequency)
    if calc.present_value is not None and calc.present_value.discount_rate_pct <= -100:
        result.errors.append(f"{base}.present_value.discount_rate_pct: must be > -100")
    if calc.xirr is not None:
        if len(calc.xirr) < 2:
            result.warnings.append(f"{base}.xirr: at least two cash flows are needed for a rate")
        for idx, flow in enumerate(calc.xirr):
            if not _is_flow_date(flow.date):
                result.errors.append(f"{base}.xirr[{idx}].date: '{flow.date}' is not valid; expected YYYY-MM-DD")
    if calc.emergency_fund is not None:
        _check_non_negative(result, f"{base}.emergency_fund.months", calc.emergency_fund.months)


def validate_plan(plan: Plan) -> ValidationResult:
    result = ValidationResult()

    _check_enum(result, "display.grouping", plan.display.grouping, GROUPING)
    _validate_retirement(plan, result)
    _validate_insurance(plan, result)
    _validate_goals(plan, result)

    for key in ("assets", "liabilities"):
        for idx, item in enumerate(getattr(plan.balance_sheet, key)):
            _check_non_negative(result, f"balance_sheet.{key}[{idx}].amount", item.amount)
    for key in ("income", "expenses"):
        for idx, item in enumerate(getattr(plan.cash_flow, key)):
            _check_non_negative(result, f"cash_flow.{key}[{idx}].amount", item.amount)

    _validate_risk_profile(plan, result)
    _validate_calculators(plan, result)
    return result
