"""Life insurance needs analysis."""

from __future__ import annotations

from dataclasses import dataclass

from .schema import InsuranceSettings


@dataclass(slots=True)
class InsuranceNeeds:
    total_outstanding_liabilities: float
    total_goal_funding: float
    net_monthly_expenses: float
    net_annual_expenses: float
    remaining_years: int
    real_return_pct: float
    corpus_for_future_expenses: float
    total_insurance_required: float
    total_resources_available: float
    additional_cover_required: float
    coverage_gap_pct: float

    @property
    def is_fully_covered(self) -> bool:
        return self.additional_cover_required <= 0


def real_return_pct(post_tax_return_pct: float, inflation_pct: float) -> float:
    return ((1 + post_tax_return_pct / 100) / (1 + inflation_pct / 100) - 1) * 100


def annuity_present_value(annual_amount: float, rate: float, years: int) -> float:
    """Present value of ``years`` level annual payments discounted at ``rate``.

    Falls back to a flat ``annual_amount * years`` when the rate is not
    positive or there are no years to cover.
    """
    if rate > 0 and years > 0:
        return annual_amount * (1 - (1 + rate) ** -years) / rate
    return annual_amount * years


def compute_insurance_needs(settings: InsuranceSettings) -> InsuranceNeeds:
    total_loans = sum(loan.amount for loan in settings.loans)
    total_goals = sum(goal.amount for goal in settings.goals)

    net_monthly = settings.monthly_expenses * (1 - settings.discounting_factor_pct / 100)
    net_annual = net_monthly * 12
    remaining_years = max(0, settings.spouse_life_expectancy - settings.spouse_age)
    real_pct = real_return_pct(settings.post_tax_return_pct, settings.inflation_pct)
    corpus = annuity_present_value(net_annual, real_pct / 100, remaining_years)

    total_required = total_loans + total_goals + corpus
    resources = settings.investment_assets + settings.existing_insurance
    additional_cover = max(0.0, total_required - resources)
    gap_pct = additional_cover / total_required * 100 if total_required > 0 else 0.0

    return InsuranceNeeds(
        total_outstanding_liabilities=total_loans,
        total_goal_funding=total_goals,
        net_monthly_expenses=net_monthly,
        net_annual_expenses=net_annual,
        remaining_years=remaining_years,
        real_return_pct=real_pct,
        corpus_for_future_expenses=corpus,
        total_insurance_required=total_required,
        total_resources_available=resources,
        additional_cover_required=additional_cover,
        coverage_gap_pct=gap_pct,
    )
