"""Plan orchestration: run every calculation for a loaded plan."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

from . import calculators
from .balance_sheet import CashFlowSummary, NetWorth, compute_cash_flow, compute_net_worth
from .goals import GoalProjection, project_goals
from .insurance import InsuranceNeeds, compute_insurance_needs
from .projection import (
    FundStatus,
    ProjectionInput,
    ProjectionRow,
    RetirementSummary,
    build_projection_input,
    is_blank,
    simulate,
    summarize,
)
from .risk_profile import RiskProfileResult, score_risk_profile
from .schema import CalculatorSettings, Plan

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CalculatorResults:
    loan: calculators.LoanResult | None = None
    amortization: list[calculators.AmortizationRow] = field(default_factory=list)
    mortgage: calculators.LoanResult | None = None
    sip: calculators.SIPResult | None = None
    step_up_sip: calculators.SIPResult | None = None
    compound_interest: calculators.CompoundInterestResult | None = None
    present_value: calculators.PresentValueResult | None = None
    xirr: calculators.XIRRResult | None = None
    emergency_fund: float | None = None

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.loan,
                self.mortgage,
                self.sip,
                self.step_up_sip,
                self.compound_interest,
                self.present_value,
                self.xirr,
                self.emergency_fund,
            )
        )


@dataclass(slots=True)
class SimulationResult:
    projection_input: ProjectionInput
    rows: list[ProjectionRow]
    summary: RetirementSummary | None
    insurance: InsuranceNeeds | None
    goals: list[GoalProjection]
    risk_profile: RiskProfileResult
    net_worth: NetWorth
    cash_flow: CashFlowSummary
    calculators: CalculatorResults

    @property
    def exhausted_ages(self) -> list[int]:
        return [row.age for row in self.rows if row.fund_status is FundStatus.RAN_OUT_OF_FUNDS]


def run_calculators(settings: CalculatorSettings) -> CalculatorResults:
    results = CalculatorResults()
    if settings.loan is not None:
        loan = settings.loan
        results.loan = calculators.loan_emi(loan.amount, loan.annual_rate_pct, loan.tenure_years)
        results.amortization = calculators.amortization_schedule(loan.amount, loan.annual_rate_pct, loan.tenure_years)
    if settings.mortgage is not None:
        m = settings.mortgage
        results.mortgage = calculators.mortgage(m.loan_amount, m.annual_rate_pct, m.tenure_years, m.down_payment)
    if settings.sip is not None:
        s = settings.sip
        results.sip = calculators.sip(s.monthly_investment, s.expected_return_pct, s.tenure_years)
    if settings.step_up_sip is not None:
        s = settings.step_up_sip
        results.step_up_sip = calculators.step_up_sip(
            s.monthly_investment, s.expected_return_pct, s.tenure_years, s.annual_step_up_pct
        )
    if settings.compound_interest is not None:
        c = settings.compound_interest
        results.compound_interest = calculators.compound_interest(c.principal, c.rate_pct, c.years, c.compound_frequency)
    if settings.present_value is not None:
        p = settings.present_value
        results.present_value = calculators.present_value(p.future_value, p.discount_rate_pct, p.years)
    if settings.xirr is not None:
        flows = [
            calculators.CashFlowEntry(date=calculators.parse_flow_date(flow.date), amount=flow.amount)
            for flow in settings.xirr
        ]
        results.xirr = calculators.xirr(flows)
    if settings.emergency_fund is not None:
        e = settings.emergency_fund
        results.emergency_fund = calculators.emergency_fund(e.monthly_expenses, e.months)
    return results


def run_simulation(plan: Plan) -> SimulationResult:
    projection_input = build_projection_input(plan.retirement)
    rows = simulate(projection_input)
    summary = None
    if is_blank(plan.retirement):
        logger.warning("retirement section is blank; skipping summary")
    else:
        summary = summarize(projection_input, rows)

    insurance = compute_insurance_needs(plan.insurance) if plan.insurance is not None else None
    logger.info(
        "simulated %d ages for %s (%d goals, insurance=%s)",
        len(rows),
        plan.profile.name,
        len(plan.goals),
        insurance is not None,
    )
    return SimulationResult(
        projection_input=projection_input,
        rows=rows,
        summary=summary,
        insurance=insurance,
        goals=project_goals(plan.goals),
        risk_profile=score_risk_profile(plan.risk_profile.answers),
        net_worth=compute_net_worth(plan.balance_sheet),
        cash_flow=compute_cash_flow(plan.cash_flow),
        calculators=run_calculators(plan.calculators),
    )
