"""Year-by-year retirement corpus projection."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import math
from types import MappingProxyType
from typing import Mapping

from .schema import LumpSum, RetirementSettings

logger = logging.getLogger(__name__)

HORIZON_AFTER_LIFE_EXPECTANCY = 5
EXHAUSTION_TAIL_YEARS = 3
COMFORTABLE_COVERAGE_PCT = 100.0
NEARLY_THERE_COVERAGE_PCT = 80.0


class FundStatus(Enum):
    WORKING = "Working"
    RETIREMENT_YEAR = "Retirement Year"
    RETIRED = "Retired"
    RAN_OUT_OF_FUNDS = "Ran out of funds"
    LEGACY_PASSED_ON = "Legacy passed on"

    @property
    def label(self) -> str:
        return self.value


class Readiness(Enum):
    COMFORTABLE = "Comfortable Retirement"
    NEARLY_THERE = "Nearly There"
    NEEDS_IMPROVEMENT = "Needs Improvement"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ProjectionInput:
    current_age: int
    retirement_age: int
    life_expectancy: int
    current_savings: float
    monthly_saving: float
    savings_annual_growth_pct: float
    pre_retirement_return_pct: float
    capital_gains_tax_pct: float
    post_retirement_monthly_expense: float
    household_inflation_pct: float
    lump_sums: Mapping[int, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Events are fixed for the lifetime of the input.
        object.__setattr__(self, "lump_sums", MappingProxyType(dict(self.lump_sums)))

    @property
    def post_tax_return_pct(self) -> float:
        # Capital gains tax only applies once withdrawals start.
        return self.pre_retirement_return_pct * (1 - self.capital_gains_tax_pct / 100)


@dataclass(slots=True)
class ProjectionRow:
    age: int
    corpus_at_beginning: float
    incremental_savings: float
    return_on_investment: float
    withdrawals: float
    lump_sum_withdrawal: float
    withdrawal_rate_pct: float
    is_alive: bool
    fund_status: FundStatus


@dataclass(slots=True)
class RetirementSummary:
    corpus_at_retirement: float
    money_lasts_until_age: int
    legacy_amount: float
    years_covered: int
    years_needed: int
    coverage_pct: float
    readiness: Readiness
    shortfall_years: int
    extra_monthly_saving: float
    delay_retirement_years: int
    expense_reduction_pct: float


def auto_post_retirement_expense(
    current_age: int,
    retirement_age: int,
    pre_retirement_monthly_expense: float,
    household_inflation_pct: float,
) -> float:
    """Inflate today's monthly expense to the retirement age."""
    years_to_retirement = retirement_age - current_age
    return pre_retirement_monthly_expense * (1 + household_inflation_pct / 100) ** years_to_retirement


def lump_sums_by_age(events: list[LumpSum]) -> dict[int, float]:
    # Later entries for the same age replace earlier ones.
    by_age: dict[int, float] = {}
    for event in events:
        by_age[event.age] = event.amount
    return by_age


def set_lump_sum(lump_sums: Mapping[int, float], age: int, amount: float) -> dict[int, float]:
    """Return a copy with ``amount`` registered at ``age``; non-positive amounts clear the age."""
    updated = dict(lump_sums)
    if amount > 0:
        updated[age] = amount
    else:
        updated.pop(age, None)
    return updated


def is_blank(settings: RetirementSettings) -> bool:
    return all(
        value == 0
        for value in (
            settings.current_age,
            settings.retirement_age,
            settings.life_expectancy,
            settings.current_savings,
            settings.monthly_saving,
            settings.savings_annual_growth_pct,
            settings.pre_retirement_return_pct,
            settings.capital_gains_tax_pct,
            settings.pre_retirement_monthly_expense,
            settings.household_inflation_pct,
        )
    )


def build_projection_input(settings: RetirementSettings) -> ProjectionInput:
    if settings.post_retirement_monthly_expense is not None:
        monthly_expense = settings.post_retirement_monthly_expense
    else:
        monthly_expense = auto_post_retirement_expense(
            settings.current_age,
            settings.retirement_age,
            settings.pre_retirement_monthly_expense,
            settings.household_inflation_pct,
        )
    return ProjectionInput(
        current_age=settings.current_age,
        retirement_age=settings.retirement_age,
        life_expectancy=settings.life_expectancy,
        current_savings=settings.current_savings,
        monthly_saving=settings.monthly_saving,
        savings_annual_growth_pct=settings.savings_annual_growth_pct,
        pre_retirement_return_pct=settings.pre_retirement_return_pct,
        capital_gains_tax_pct=settings.capital_gains_tax_pct,
        post_retirement_monthly_expense=monthly_expense,
        household_inflation_pct=settings.household_inflation_pct,
        lump_sums=lump_sums_by_age(settings.lump_sums),
    )


def _fund_status(inp: ProjectionInput, age: int, is_alive: bool, corpus_end: float) -> FundStatus:
    # Order matters: a person past life expectancy with nothing left is
    # reported as out of funds, not as passing on a legacy.
    if not is_alive and corpus_end > 0:
        return FundStatus.LEGACY_PASSED_ON
    if age < inp.retirement_age:
        return FundStatus.WORKING
    if age == inp.retirement_age:
        return FundStatus.RETIREMENT_YEAR
    if corpus_end <= 0:
        return FundStatus.RAN_OUT_OF_FUNDS
    return FundStatus.RETIRED


def _exhausted_row(inp: ProjectionInput, age: int) -> ProjectionRow:
    return ProjectionRow(
        age=age,
        corpus_at_beginning=0.0,
        incremental_savings=0.0,
        return_on_investment=0.0,
        withdrawals=0.0,
        lump_sum_withdrawal=0.0,
        withdrawal_rate_pct=0.0,
        is_alive=age <= inp.life_expectancy,
        fund_status=FundStatus.RAN_OUT_OF_FUNDS,
    )


def simulate(inp: ProjectionInput) -> list[ProjectionRow]:
    """Step the corpus forward one age at a time.

    Returns are earned on the corpus at the start of each year. Savings are
    added up to and including the retirement age; ordinary withdrawals start
    the year after it and stop after life expectancy. The run covers ages up
    to ``life_expectancy + 5``, or ends three zero rows after the corpus is
    exhausted during retirement.
    """
    rows: list[ProjectionRow] = []
    corpus = inp.current_savings
    annual_savings = inp.monthly_saving * 12
    annual_expenses = inp.post_retirement_monthly_expense * 12
    post_tax_return_pct = inp.post_tax_return_pct

    for age in range(inp.current_age, inp.life_expectancy + HORIZON_AFTER_LIFE_EXPECTANCY + 1):
        is_retired = age > inp.retirement_age
        is_alive = age <= inp.life_expectancy
        corpus_at_beginning = corpus

        applicable_return_pct = post_tax_return_pct if is_retired else inp.pre_retirement_return_pct
        return_on_investment = corpus_at_beginning * applicable_return_pct / 100
        incremental_savings = annual_savings if age <= inp.retirement_age else 0.0
        corpus += incremental_savings + return_on_investment

        lump_sum = inp.lump_sums.get(age, 0.0)
        corpus -= lump_sum

        withdrawals = annual_expenses if (is_retired and is_alive) else 0.0
        corpus -= withdrawals

        if corpus_at_beginning > 0:
            withdrawal_rate_pct = (withdrawals + lump_sum) / corpus_at_beginning * 100
        else:
            withdrawal_rate_pct = 0.0

        rows.append(
            ProjectionRow(
                age=age,
                corpus_at_beginning=corpus_at_beginning,
                incremental_savings=incremental_savings,
                return_on_investment=return_on_investment,
                withdrawals=withdrawals,
                lump_sum_withdrawal=lump_sum,
                withdrawal_rate_pct=withdrawal_rate_pct,
                is_alive=is_alive,
                fund_status=_fund_status(inp, age, is_alive, corpus),
            )
        )

        if corpus <= 0 and is_retired:
            logger.debug("corpus exhausted at age %d (shortfall %.2f)", age, -corpus)
            rows.extend(_exhausted_row(inp, age + offset) for offset in range(1, EXHAUSTION_TAIL_YEARS + 1))
            break

        if age < inp.retirement_age:
            annual_savings *= 1 + inp.savings_annual_growth_pct / 100
        # Expenses inflate from today, not from retirement.
        annual_expenses *= 1 + inp.household_inflation_pct / 100

    return rows


def _readiness(coverage_pct: float) -> Readiness:
    if coverage_pct >= COMFORTABLE_COVERAGE_PCT:
        return Readiness.COMFORTABLE
    if coverage_pct >= NEARLY_THERE_COVERAGE_PCT:
        return Readiness.NEARLY_THERE
    return Readiness.NEEDS_IMPROVEMENT


def summarize(inp: ProjectionInput, rows: list[ProjectionRow]) -> RetirementSummary:
    retirement_row = next((row for row in rows if row.age == inp.retirement_age), None)
    corpus_at_retirement = retirement_row.corpus_at_beginning if retirement_row else 0.0

    last_positive = next((row for row in reversed(rows) if row.corpus_at_beginning > 0), None)
    money_lasts_until_age = last_positive.age if last_positive else inp.retirement_age
    legacy_amount = 0.0
    if last_positive is not None and last_positive.age >= inp.life_expectancy:
        legacy_amount = last_positive.corpus_at_beginning

    years_covered = money_lasts_until_age - inp.retirement_age
    years_needed = inp.life_expectancy - inp.retirement_age
    if years_needed > 0:
        coverage_pct = years_covered / years_needed * 100
    else:
        coverage_pct = 100.0

    # No retirement years to fund means nothing can fall short.
    shortfall_years = max(0, years_needed - years_covered) if years_needed > 0 else 0
    if shortfall_years > 0:
        extra_monthly_saving = (corpus_at_retirement * (shortfall_years / years_needed)) / (12 * shortfall_years)
        delay_retirement_years = math.ceil(shortfall_years / 2)
        expense_reduction_pct = 100 - coverage_pct
    else:
        extra_monthly_saving = 0.0
        delay_retirement_years = 0
        expense_reduction_pct = 0.0

    summary = RetirementSummary(
        corpus_at_retirement=corpus_at_retirement,
        money_lasts_until_age=money_lasts_until_age,
        legacy_amount=legacy_amount,
        years_covered=years_covered,
        years_needed=years_needed,
        coverage_pct=coverage_pct,
        readiness=_readiness(coverage_pct),
        shortfall_years=shortfall_years,
        extra_monthly_saving=extra_monthly_saving,
        delay_retirement_years=delay_retirement_years,
        expense_reduction_pct=expense_reduction_pct,
    )
    logger.debug(
        "money lasts until %d, coverage %.1f%%, readiness %s",
        summary.money_lasts_until_age,
        summary.coverage_pct,
        summary.readiness.label,
    )
    return summary
