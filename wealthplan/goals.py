"""Goal funding projections."""

from __future__ import annotations

from dataclasses import dataclass

from .schema import Goal


@dataclass(slots=True)
class GoalProjection:
    description: str
    priority: str
    future_value: float
    final_capital: float
    total_investment: float
    shortfall_surplus: float

    @property
    def is_funded(self) -> bool:
        return self.shortfall_surplus >= 0


def project_goal(goal: Goal) -> GoalProjection:
    future_value = goal.present_value * (1 + goal.inflation_pct / 100) ** goal.time_horizon_years

    monthly_rate = goal.annual_return_pct / 100 / 12
    capital = goal.initial_amount
    total_investment = goal.initial_amount
    monthly = goal.monthly_amount
    for _ in range(goal.time_horizon_years):
        for _ in range(12):
            capital = capital * (1 + monthly_rate) + monthly
        total_investment += monthly * 12
        monthly *= 1 + goal.yearly_increase_pct / 100

    return GoalProjection(
        description=goal.description,
        priority=goal.priority,
        future_value=future_value,
        final_capital=capital,
        total_investment=total_investment,
        shortfall_surplus=capital - future_value,
    )


def project_goals(goals: list[Goal]) -> list[GoalProjection]:
    return [project_goal(goal) for goal in goals]
