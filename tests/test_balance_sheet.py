from wealthplan.balance_sheet import compute_cash_flow, compute_net_worth
from wealthplan.schema import BalanceSheet, CashFlow, NamedAmount


def test_net_worth_is_assets_less_liabilities():
    sheet = BalanceSheet(
        assets=[NamedAmount("Equity", 500), NamedAmount("Gold", 250)],
        liabilities=[NamedAmount("Car loan", 300)],
    )
    result = compute_net_worth(sheet)

    assert result.total_assets == 750
    assert result.total_liabilities == 300
    assert result.net_worth == 450


def test_cash_flow_can_be_negative():
    flow = CashFlow(income=[NamedAmount("Salary", 100)], expenses=[NamedAmount("Rent", 80), NamedAmount("Food", 40)])
    result = compute_cash_flow(flow)

    assert result.total_income == 100
    assert result.total_expenses == 120
    assert result.net_flow == -20


def test_empty_sections_total_zero():
    assert compute_net_worth(BalanceSheet()).net_worth == 0
    assert compute_cash_flow(CashFlow()).net_flow == 0
