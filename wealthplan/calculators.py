"""Standalone loan, savings and return calculators."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

XIRR_INITIAL_GUESS = 0.1
XIRR_MAX_ITERATIONS = 100
XIRR_TOLERANCE = 1e-6


@dataclass(slots=True)
class LoanResult:
    emi: float
    total: float
    interest: float
    principal: float
    monthly_rate: float
    total_months: int


@dataclass(slots=True)
class AmortizationRow:
    month: int
    emi: float
    principal: float
    interest: float
    balance: float


@dataclass(slots=True)
class SIPResult:
    total_invested: float
    estimated_returns: float
    total_value: float
    final_monthly_investment: float


@dataclass(slots=True)
class CompoundInterestResult:
    future_value: float
    total_interest: float
    effective_rate_pct: float


@dataclass(slots=True)
class PresentValueResult:
    present_value: float
    total_discount: float
    effective_discount_rate_pct: float


@dataclass(slots=True)
class CashFlowEntry:
    date: date
    amount: float


@dataclass(slots=True)
class XIRRResult:
    rate_pct: float
    total_invested: float
    total_returned: float
    net_gain: float


@dataclass(slots=True)
class GrowthRow:
    year: int
    invested: float
    value: float
    gains: float


def _months(tenure_years: float) -> int:
    if tenure_years <= 0:
        raise ValueError("tenure must be > 0")
    return round(tenure_years * 12)


def loan_emi(amount: float, annual_rate_pct: float, tenure_years: float) -> LoanResult:
    """Equated monthly instalment: P r (1+r)^n / ((1+r)^n - 1)."""
    n = _months(tenure_years)
    r = annual_rate_pct / 12 / 100
    if r == 0:
        emi = amount / n
        return LoanResult(emi=emi, total=amount, interest=0.0, principal=amount, monthly_rate=0.0, total_months=n)

    growth = (1 + r) ** n
    emi = amount * r * growth / (growth - 1)
    total = emi * n
    return LoanResult(emi=emi, total=total, interest=total - amount, principal=amount, monthly_rate=r, total_months=n)


def amortization_schedule(amount: float, annual_rate_pct: float, tenure_years: float) -> list[AmortizationRow]:
    loan = loan_emi(amount, annual_rate_pct, tenure_years)
    balance = amount
    schedule: list[AmortizationRow] = []
    for month in range(1, loan.total_months + 1):
        interest = balance * loan.monthly_rate
        principal = loan.emi - interest
        balance -= principal
        # Rounding can leave a tiny negative balance on the last instalment.
        schedule.append(AmortizationRow(month=month, emi=loan.emi, principal=principal, interest=interest, balance=max(0.0, balance)))
    return schedule


def mortgage(loan_amount: float, annual_rate_pct: float, tenure_years: float, down_payment: float = 0.0) -> LoanResult:
    return loan_emi(loan_amount - down_payment, annual_rate_pct, tenure_years)


def sip(monthly_investment: float, expected_return_pct: float, tenure_years: int) -> SIPResult:
    """Future value of a monthly investment made at the start of each month."""
    n = _months(tenure_years)
    r = expected_return_pct / 100 / 12
    if r == 0:
        future_value = monthly_investment * n
    else:
        future_value = monthly_investment * ((1 + r) ** n - 1) / r * (1 + r)
    invested = monthly_investment * n
    return SIPResult(
        total_invested=invested,
        estimated_returns=future_value - invested,
        total_value=future_value,
        final_monthly_investment=monthly_investment,
    )


def step_up_sip(
    initial_monthly_investment: float,
    expected_return_pct: float,
    tenure_years: int,
    annual_step_up_pct: float,
) -> SIPResult:
    _months(tenure_years)
    monthly_rate = expected_return_pct / 100 / 12
    invested = 0.0
    value = 0.0
    monthly = initial_monthly_investment
    for year in range(1, tenure_years + 1):
        for _ in range(12):
            value = (value + monthly) * (1 + monthly_rate)
            invested += monthly
        if year < tenure_years:
            monthly *= 1 + annual_step_up_pct / 100
    return SIPResult(
        total_invested=invested,
        estimated_returns=value - invested,
        total_value=value,
        final_monthly_investment=monthly,
    )


def compound_interest(principal: float, rate_pct: float, years: float, compound_frequency: int = 1) -> CompoundInterestResult:
    r = rate_pct / 100
    n = compound_frequency
    future_value = principal * (1 + r / n) ** (n * years)
    return CompoundInterestResult(
        future_value=future_value,
        total_interest=future_value - principal,
        effective_rate_pct=((1 + r / n) ** n - 1) * 100,
    )


def simple_interest(principal: float, rate_pct: float, years: float) -> float:
    return principal * rate_pct * years / 100


def present_value(future_value: float, discount_rate_pct: float, years: float) -> PresentValueResult:
    r = discount_rate_pct / 100
    pv = future_value / (1 + r) ** years
    if years > 0 and pv != 0:
        effective = ((future_value / pv) ** (1 / years) - 1) * 100
    else:
        effective = 0.0
    return PresentValueResult(present_value=pv, total_discount=future_value - pv, effective_discount_rate_pct=effective)


def xirr(cash_flows: list[CashFlowEntry]) -> XIRRResult:
    """Annualised return of irregular dated cash flows (Newton-Raphson).

    Outflows are negative, inflows positive. Day counts use a 365-day year.
    Iterates are kept above -100% so the rate is always a real number.
    """
    if len(cash_flows) < 2:
        return XIRRResult(rate_pct=0.0, total_invested=0.0, total_returned=0.0, net_gain=0.0)

    ordered = sorted(cash_flows, key=lambda flow: flow.date)
    first = ordered[0].date
    flows = [((flow.date - first).days / 365, flow.amount) for flow in ordered]

    guess = XIRR_INITIAL_GUESS
    for _ in range(XIRR_MAX_ITERATIONS):
        npv = 0.0
        dnpv = 0.0
        for years, amount in flows:
            factor = (1 + guess) ** years
            npv += amount / factor
            dnpv -= amount * years / (factor * (1 + guess))
        if dnpv == 0:
            break
        new_guess = guess - npv / dnpv
        if new_guess <= -1:
            # Rates must stay above -100%; step halfway toward the bound instead.
            guess = (guess - 1) / 2
            continue
        if abs(new_guess - guess) < XIRR_TOLERANCE:
            guess = new_guess
            break
        guess = new_guess

    invested = sum(-flow.amount for flow in ordered if flow.amount < 0)
    returned = sum(flow.amount for flow in ordered if flow.amount > 0)
    return XIRRResult(rate_pct=guess * 100, total_invested=invested, total_returned=returned, net_gain=returned - invested)


def irr(amounts: list[float], period_years: int = 1, start: date | None = None) -> float:
    """IRR of evenly spaced cash flows, in percent."""
    origin = start or date.today()
    flows = []
    for idx, amount in enumerate(amounts):
        year = origin.year + idx * period_years
        # Feb 29 has no counterpart in most years.
        day = min(origin.day, 28) if origin.month == 2 else origin.day
        flows.append(CashFlowEntry(date=date(year, origin.month, day), amount=amount))
    return xirr(flows).rate_pct


def parse_flow_date(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()


def investment_growth(initial_amount: float, monthly_contribution: float, annual_return_pct: float, years: int) -> list[GrowthRow]:
    monthly_rate = annual_return_pct / 100 / 12
    invested = initial_amount
    value = initial_amount
    rows: list[GrowthRow] = []
    for year in range(1, years + 1):
        for _ in range(12):
            value = value * (1 + monthly_rate) + monthly_contribution
            invested += monthly_contribution
        rows.append(GrowthRow(year=year, invested=invested, value=value, gains=value - invested))
    return rows


def retirement_corpus_estimate(
    current_age: int,
    retirement_age: int,
    current_monthly_expense: float,
    inflation_pct: float,
    life_expectancy: int,
) -> float:
    # Rough estimate: inflated expense times months in retirement, no growth.
    years_to_retirement = retirement_age - current_age
    retirement_years = life_expectancy - retirement_age
    future_expense = current_monthly_expense * (1 + inflation_pct / 100) ** years_to_retirement
    return future_expense * retirement_years * 12


def emergency_fund(monthly_expenses: float, months: int = 6) -> float:
    return monthly_expenses * months


def percentage(part: float, whole: float) -> float:
    if whole == 0:
        return 0.0
    return part / whole * 100
