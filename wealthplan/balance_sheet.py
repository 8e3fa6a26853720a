"""Net worth and monthly cash-flow totals."""

from __future__ import annotations

from dataclasses import dataclass

from .schema import BalanceSheet, CashFlow


@dataclass(slots=True)
class NetWorth:
    total_assets: float
    total_liabilities: float

    @property
    def net_worth(self) -> float:
        return self.total_assets - self.total_liabilities


@dataclass(slots=True)
class CashFlowSummary:
    total_income: float
    total_expenses: float

    @property
    def net_flow(self) -> float:
        return self.total_income - self.total_expenses


def compute_net_worth(sheet: BalanceSheet) -> NetWorth:
    return NetWorth(
        total_assets=sum(item.amount for item in sheet.assets),
        total_liabilities=sum(item.amount for item in sheet.liabilities),
    )


def compute_cash_flow(flow: CashFlow) -> CashFlowSummary:
    return CashFlowSummary(
        total_income=sum(item.amount for item in flow.income),
        total_expenses=sum(item.amount for item in flow.expenses),
    )
