"""Plan schema dataclasses and JSON loading."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any


class SchemaError(ValueError):
    """Raised when raw JSON cannot be parsed into schema objects."""


def _expect_dict(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(f"{path}: expected object")
    return value


def _expect_list(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise SchemaError(f"{path}: expected array")
    return value


def _require(data: dict[str, Any], key: str, path: str) -> Any:
    if key not in data:
        raise SchemaError(f"{path}.{key}: missing required field")
    return data[key]


def _optional(data: dict[str, Any], key: str, default: Any = None) -> Any:
    return data.get(key, default)


def _number(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"{path}: expected number")
    return float(value)


def _integer(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
        raise SchemaError(f"{path}: expected integer")
    return int(value)


@dataclass(slots=True)
class Profile:
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "profile") -> "Profile":
        return cls(name=str(_require(data, "name", path)))


@dataclass(slots=True)
class DisplaySettings:
    currency_symbol: str = "Rs. "
    grouping: str = "indian"

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "display") -> "DisplaySettings":
        return cls(
            currency_symbol=str(_optional(data, "currency_symbol", "Rs. ")),
            grouping=str(_optional(data, "grouping", "indian")),
        )


@dataclass(slots=True)
class LumpSum:
    age: int
    amount: float

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "LumpSum":
        return cls(
            age=_integer(_require(data, "age", path), f"{path}.age"),
            amount=_number(_require(data, "amount", path), f"{path}.amount"),
        )


@dataclass(slots=True)
class RetirementSettings:
    current_age: int
    retirement_age: int
    life_expectancy: int
    current_savings: float
    monthly_saving: float
    savings_annual_growth_pct: float
    pre_retirement_return_pct: float
    capital_gains_tax_pct: float
    pre_retirement_monthly_expense: float
    household_inflation_pct: float
    post_retirement_monthly_expense: float | None = None
    lump_sums: list[LumpSum] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "retirement") -> "RetirementSettings":
        def num(key: str) -> float:
            return _number(_require(data, key, path), f"{path}.{key}")

        def whole(key: str) -> int:
            return _integer(_require(data, key, path), f"{path}.{key}")

        manual = _optional(data, "post_retirement_monthly_expense")
        return cls(
            current_age=whole("current_age"),
            retirement_age=whole("retirement_age"),
            life_expectancy=whole("life_expectancy"),
            current_savings=num("current_savings"),
            monthly_saving=num("monthly_saving"),
            savings_annual_growth_pct=num("savings_annual_growth_pct"),
            pre_retirement_return_pct=num("pre_retirement_return_pct"),
            capital_gains_tax_pct=num("capital_gains_tax_pct"),
            pre_retirement_monthly_expense=num("pre_retirement_monthly_expense"),
            household_inflation_pct=num("household_inflation_pct"),
            post_retirement_monthly_expense=(
                _number(manual, f"{path}.post_retirement_monthly_expense") if manual is not None else None
            ),
            lump_sums=[
                LumpSum.from_dict(_expect_dict(item, f"{path}.lump_sums[{idx}]"), f"{path}.lump_sums[{idx}]")
                for idx, item in enumerate(_expect_list(_optional(data, "lump_sums", []), f"{path}.lump_sums"))
            ],
        )


@dataclass(slots=True)
class NamedAmount:
    name: str
    amount: float

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "NamedAmount":
        return cls(
            name=str(_optional(data, "name", "")),
            amount=_number(_require(data, "amount", path), f"{path}.amount"),
        )


def _named_amounts(data: dict[str, Any], key: str, path: str) -> list[NamedAmount]:
    return [
        NamedAmount.from_dict(_expect_dict(item, f"{path}.{key}[{idx}]"), f"{path}.{key}[{idx}]")
        for idx, item in enumerate(_expect_list(_optional(data, key, []), f"{path}.{key}"))
    ]


@dataclass(slots=True)
class InsuranceSettings:
    monthly_expenses: float = 0.0
    discounting_factor_pct: float = 0.0
    spouse_age: int = 0
    spouse_life_expectancy: int = 0
    inflation_pct: float = 0.0
    post_tax_return_pct: float = 0.0
    investment_assets: float = 0.0
    existing_insurance: float = 0.0
    loans: list[NamedAmount] = field(default_factory=list)
    goals: list[NamedAmount] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "insurance") -> "InsuranceSettings":
        def num(key: str) -> float:
            return _number(_optional(data, key, 0), f"{path}.{key}")

        return cls(
            monthly_expenses=num("monthly_expenses"),
            discounting_factor_pct=num("discounting_factor_pct"),
            spouse_age=_integer(_optional(data, "spouse_age", 0), f"{path}.spouse_age"),
            spouse_life_expectancy=_integer(_optional(data, "spouse_life_expectancy", 0), f"{path}.spouse_life_expectancy"),
            inflation_pct=num("inflation_pct"),
            post_tax_return_pct=num("post_tax_return_pct"),
            investment_assets=num("investment_assets"),
            existing_insurance=num("existing_insurance"),
            loans=_named_amounts(data, "loans", path),
            goals=_named_amounts(data, "goals", path),
        )


@dataclass(slots=True)
class Goal:
    description: str
    priority: str
    present_value: float
    time_horizon_years: int
    inflation_pct: float
    initial_amount: float
    monthly_amount: float
    yearly_increase_pct: float
    annual_return_pct: float

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "Goal":
        def num(key: str) -> float:
            return _number(_optional(data, key, 0), f"{path}.{key}")

        return cls(
            description=str(_require(data, "description", path)),
            priority=str(_optional(data, "priority", "Medium")),
            present_value=_number(_require(data, "present_value", path), f"{path}.present_value"),
            time_horizon_years=_integer(_require(data, "time_horizon_years", path), f"{path}.time_horizon_years"),
            inflation_pct=num("inflation_pct"),
            initial_amount=num("initial_amount"),
            monthly_amount=num("monthly_amount"),
            yearly_increase_pct=num("yearly_increase_pct"),
            annual_return_pct=num("annual_return_pct"),
        )


@dataclass(slots=True)
class BalanceSheet:
    assets: list[NamedAmount] = field(default_factory=list)
    liabilities: list[NamedAmount] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "balance_sheet") -> "BalanceSheet":
        return cls(assets=_named_amounts(data, "assets", path), liabilities=_named_amounts(data, "liabilities", path))


@dataclass(slots=True)
class CashFlow:
    income: list[NamedAmount] = field(default_factory=list)
    expenses: list[NamedAmount] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "cash_flow") -> "CashFlow":
        return cls(income=_named_amounts(data, "income", path), expenses=_named_amounts(data, "expenses", path))


@dataclass(slots=True)
class RiskProfileAnswers:
    answers: dict[int, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "risk_profile") -> "RiskProfileAnswers":
        raw = _expect_dict(_optional(data, "answers", {}), f"{path}.answers")
        answers: dict[int, int] = {}
        for key, value in raw.items():
            try:
                question_id = int(key)
            except ValueError:
                raise SchemaError(f"{path}.answers.{key}: question id must be an integer") from None
            answers[question_id] = _integer(value, f"{path}.answers.{key}")
        return cls(answers=answers)


@dataclass(slots=True)
class LoanInputs:
    amount: float
    annual_rate_pct: float
    tenure_years: float

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "LoanInputs":
        return cls(
            amount=_number(_require(data, "amount", path), f"{path}.amount"),
            annual_rate_pct=_number(_require(data, "annual_rate_pct", path), f"{path}.annual_rate_pct"),
            tenure_years=_number(_require(data, "tenure_years", path), f"{path}.tenure_years"),
        )


@dataclass(slots=True)
class MortgageInputs:
    loan_amount: float
    annual_rate_pct: float
    tenure_years: float
    down_payment: float

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "MortgageInputs":
        return cls(
            loan_amount=_number(_require(data, "loan_amount", path), f"{path}.loan_amount"),
            annual_rate_pct=_number(_require(data, "annual_rate_pct", path), f"{path}.annual_rate_pct"),
            tenure_years=_number(_require(data, "tenure_years", path), f"{path}.tenure_years"),
            down_payment=_number(_optional(data, "down_payment", 0), f"{path}.down_payment"),
        )


@dataclass(slots=True)
class SIPInputs:
    monthly_investment: float
    expected_return_pct: float
    tenure_years: int
    annual_step_up_pct: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "SIPInputs":
        return cls(
            monthly_investment=_number(_require(data, "monthly_investment", path), f"{path}.monthly_investment"),
            expected_return_pct=_number(_require(data, "expected_return_pct", path), f"{path}.expected_return_pct"),
            tenure_years=_integer(_require(data, "tenure_years", path), f"{path}.tenure_years"),
            annual_step_up_pct=_number(_optional(data, "annual_step_up_pct", 0), f"{path}.annual_step_up_pct"),
        )


@dataclass(slots=True)
class CompoundInterestInputs:
    principal: float
    rate_pct: float
    years: float
    compound_frequency: int = 1

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "CompoundInterestInputs":
        return cls(
            principal=_number(_require(data, "principal", path), f"{path}.principal"),
            rate_pct=_number(_require(data, "rate_pct", path), f"{path}.rate_pct"),
            years=_number(_require(data, "years", path), f"{path}.years"),
            compound_frequency=_integer(_optional(data, "compound_frequency", 1), f"{path}.compound_frequency"),
        )


@dataclass(slots=True)
class PresentValueInputs:
    future_value: float
    discount_rate_pct: float
    years: float

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "PresentValueInputs":
        return cls(
            future_value=_number(_require(data, "future_value", path), f"{path}.future_value"),
            discount_rate_pct=_number(_require(data, "discount_rate_pct", path), f"{path}.discount_rate_pct"),
            years=_number(_require(data, "years", path), f"{path}.years"),
        )


@dataclass(slots=True)
class DatedFlow:
    date: str
    amount: float

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "DatedFlow":
        return cls(
            date=str(_require(data, "date", path)),
            amount=_number(_require(data, "amount", path), f"{path}.amount"),
        )


@dataclass(slots=True)
class EmergencyFundInputs:
    monthly_expenses: float
    months: int = 6

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "EmergencyFundInputs":
        return cls(
            monthly_expenses=_number(_require(data, "monthly_expenses", path), f"{path}.monthly_expenses"),
            months=_integer(_optional(data, "months", 6), f"{path}.months"),
        )


@dataclass(slots=True)
class CalculatorSettings:
    loan: LoanInputs | None = None
    mortgage: MortgageInputs | None = None
    sip: SIPInputs | None = None
    step_up_sip: SIPInputs | None = None
    compound_interest: CompoundInterestInputs | None = None
    present_value: PresentValueInputs | None = None
    xirr: list[DatedFlow] | None = None
    emergency_fund: EmergencyFundInputs | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str = "calculators") -> "CalculatorSettings":
        def block(key: str, kind: Any) -> Any:
            raw = _optional(data, key)
            if raw is None:
                return None
            return kind.from_dict(_expect_dict(raw, f"{path}.{key}"), f"{path}.{key}")

        xirr_raw = _optional(data, "xirr")
        xirr = None
        if xirr_raw is not None:
            xirr = [
                DatedFlow.from_dict(_expect_dict(item, f"{path}.xirr[{idx}]"), f"{path}.xirr[{idx}]")
                for idx, item in enumerate(_expect_list(xirr_raw, f"{path}.xirr"))
            ]
        return cls(
            loan=block("loan", LoanInputs),
            mortgage=block("mortgage", MortgageInputs),
            sip=block("sip", SIPInputs),
            step_up_sip=block("step_up_sip", SIPInputs),
            compound_interest=block("compound_interest", CompoundInterestInputs),
            present_value=block("present_value", PresentValueInputs),
            xirr=xirr,
            emergency_fund=block("emergency_fund", EmergencyFundInputs),
        )


@dataclass(slots=True)
class Plan:
    profile: Profile
    retirement: RetirementSettings
    display: DisplaySettings = field(default_factory=DisplaySettings)
    insurance: InsuranceSettings | None = None
    goals: list[Goal] = field(default_factory=list)
    balance_sheet: BalanceSheet = field(default_factory=BalanceSheet)
    cash_flow: CashFlow = field(default_factory=CashFlow)
    risk_profile: RiskProfileAnswers = field(default_factory=RiskProfileAnswers)
    calculators: CalculatorSettings = field(default_factory=CalculatorSettings)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Plan":
        insurance_raw = _optional(data, "insurance")
        insurance = None
        if insurance_raw is not None:
            insurance = InsuranceSettings.from_dict(_expect_dict(insurance_raw, "insurance"))
        return cls(
            profile=Profile.from_dict(_expect_dict(_require(data, "profile", "plan"), "profile")),
            retirement=RetirementSettings.from_dict(_expect_dict(_require(data, "retirement", "plan"), "retirement")),
            display=DisplaySettings.from_dict(_expect_dict(_optional(data, "display", {}), "display")),
            insurance=insurance,
            goals=[
                Goal.from_dict(_expect_dict(item, f"goals[{idx}]"), f"goals[{idx}]")
                for idx, item in enumerate(_expect_list(_optional(data, "goals", []), "goals"))
            ],
            balance_sheet=BalanceSheet.from_dict(_expect_dict(_optional(data, "balance_sheet", {}), "balance_sheet")),
            cash_flow=CashFlow.from_dict(_expect_dict(_optional(data, "cash_flow", {}), "cash_flow")),
            risk_profile=RiskProfileAnswers.from_dict(_expect_dict(_optional(data, "risk_profile", {}), "risk_profile")),
            calculators=CalculatorSettings.from_dict(_expect_dict(_optional(data, "calculators", {}), "calculators")),
        )


def load_plan(path: str | Path) -> Plan:
    """Load plan JSON into strongly-typed dataclasses."""
    source = Path(path)
    raw = json.loads(source.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise SchemaError("plan: root must be a JSON object")
    return Plan.from_dict(raw)
