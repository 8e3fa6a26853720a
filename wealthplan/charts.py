"""Chart payload generation for the self-contained report."""

from __future__ import annotations

from .projection import FundStatus, ProjectionRow
from .simulation import SimulationResult


def _flows_by_age(rows: list[ProjectionRow]) -> dict[str, list[float]]:
    return {
        "savings": [row.incremental_savings for row in rows],
        "returns": [max(0.0, row.return_on_investment) for row in rows],
        "withdrawals": [row.withdrawals for row in rows],
        "lumpSums": [row.lump_sum_withdrawal for row in rows],
    }


def _goal_funding(result: SimulationResult) -> dict[str, object]:
    return {
        "labels": [goal.description for goal in result.goals],
        "target": [goal.future_value for goal in result.goals],
        "capital": [goal.final_capital for goal in result.goals],
    }


def _insurance_breakdown(result: SimulationResult) -> dict[str, float]:
    if result.insurance is None:
        return {}
    needs = result.insurance
    return {
        "loans": needs.total_outstanding_liabilities,
        "goals": needs.total_goal_funding,
        "futureExpenses": needs.corpus_for_future_expenses,
    }


def build_chart_payload(result: SimulationResult) -> dict[str, object]:
    rows = result.rows
    retirement_age = result.projection_input.retirement_age
    return {
        "ages": [row.age for row in rows],
        "corpus": [row.corpus_at_beginning for row in rows],
        "withdrawalRate": [row.withdrawal_rate_pct for row in rows],
        "flows": _flows_by_age(rows),
        "retirementIndex": next((idx for idx, row in enumerate(rows) if row.age == retirement_age), None),
        "exhaustedIndex": next(
            (idx for idx, row in enumerate(rows) if row.fund_status is FundStatus.RAN_OUT_OF_FUNDS),
            None,
        ),
        "goals": _goal_funding(result),
        "insurance": _insurance_breakdown(result),
    }
