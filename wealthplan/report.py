"""HTML report generation."""

from __future__ import annotations

from datetime import UTC, datetime
from functools import partial
import hashlib
import html
import json
from pathlib import Path

from .calculators import simple_interest
from .charts import build_chart_payload
from .projection import FundStatus, Readiness
from .risk_profile import QUESTIONS
from .schema import DisplaySettings, Plan
from .simulation import CalculatorResults, SimulationResult
from .templates import render_html_document
from .validate import validate_plan

READINESS_CLASS = {
    Readiness.COMFORTABLE: "ok",
    Readiness.NEARLY_THERE: "caution",
    Readiness.NEEDS_IMPROVEMENT: "warn",
}

STATUS_CLASS = {
    FundStatus.RAN_OUT_OF_FUNDS: "insolvent",
    FundStatus.RETIREMENT_YEAR: "retirement-year",
    FundStatus.LEGACY_PASSED_ON: "legacy",
}


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs: list[str] = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs) + "," + tail


def format_money(value: float, display: DisplaySettings | None = None) -> str:
    settings = display or DisplaySettings()
    rounded = round(value)
    sign = "-" if rounded < 0 else ""
    digits = str(abs(rounded))
    if settings.grouping == "indian":
        grouped = _group_indian(digits)
    else:
        grouped = f"{abs(rounded):,}"
    return f"{sign}{settings.currency_symbol}{grouped}"


def _pct(value: float) -> str:
    return f"{value:.1f}%"


def _cards(items: list[tuple[str, str]]) -> str:
    return "".join(
        f'<div class="card"><div class="k">{html.escape(k)}</div><div class="v">{html.escape(v)}</div></div>'
        for k, v in items
    )


def _table(headers: list[str], rows: list[str]) -> str:
    head = "".join(f"<th>{html.escape(h)}</th>" for h in headers)
    return f"<table><thead><tr>{head}</tr></thead><tbody>" + "".join(rows) + "</tbody></table>"


def _dashboard_cards(plan: Plan, result: SimulationResult) -> str:
    money = partial(format_money, display=plan.display)
    summary = result.summary
    if summary is None:
        return '<div class="panel subtle">Please enter your retirement details to see your summary.</div>'
    return _cards(
        [
            ("Corpus at Retirement", f"{money(summary.corpus_at_retirement)} at age {result.projection_input.retirement_age}"),
            ("Money Lasts Until", f"Age {summary.money_lasts_until_age}"),
            ("Years Covered", f"{summary.years_covered} of {summary.years_needed}"),
            ("Coverage", _pct(summary.coverage_pct)),
            ("Legacy Amount", money(summary.legacy_amount)),
            ("Post-Retirement Expense", f"{money(result.projection_input.post_retirement_monthly_expense)}/month"),
        ]
    )


def _readiness_panel(plan: Plan, result: SimulationResult) -> str:
    summary = result.summary
    if summary is None:
        return ""
    money = partial(format_money, display=plan.display)
    css = READINESS_CLASS[summary.readiness]
    banner = f'<div class="banner {css}">{html.escape(summary.readiness.label)}</div>'
    if summary.readiness is Readiness.COMFORTABLE:
        items = [
            f"You will have {money(summary.legacy_amount)} remaining; consider estate or legacy planning.",
            "Review asset allocation annually and account for healthcare inflation.",
        ]
    else:
        items = [
            f"Shortfall of {summary.shortfall_years} years.",
            f"Increase monthly savings by approx {money(summary.extra_monthly_saving)} for the next {summary.shortfall_years} years.",
            f"Delay retirement by {summary.delay_retirement_years} years.",
            f"Reduce post-retirement expenses by {_pct(summary.expense_reduction_pct)}.",
            "Rebalance toward higher-growth assets prudently.",
        ]
    return banner + "<ul>" + "".join(f"<li>{html.escape(item)}</li>" for item in items) + "</ul>"


def _retirement_table(plan: Plan, result: SimulationResult) -> str:
    money = partial(format_money, display=plan.display)
    rows: list[str] = []
    for row in result.rows:
        css = STATUS_CLASS.get(row.fund_status, "")
        rows.append(
            f'<tr class="{css}">'
            + f"<td>{row.age}</td>"
            + f"<td>{money(row.corpus_at_beginning)}</td>"
            + f"<td>{money(row.incremental_savings)}</td>"
            + f"<td>{money(row.return_on_investment)}</td>"
            + f"<td>{money(row.withdrawals)}</td>"
            + f"<td>{money(row.lump_sum_withdrawal)}</td>"
            + f"<td>{row.withdrawal_rate_pct:.2f}%</td>"
            + f"<td>{'Alive' if row.is_alive else 'Deceased'}</td>"
            + f"<td>{html.escape(row.fund_status.label)}</td>"
            + "</tr>"
        )
    return _table(
        [
            "Age",
            "Corpus at Beginning",
            "Incremental Savings",
            "Return on Investment",
            "Withdrawals",
            "Lump Sum",
            "Withdrawal Rate",
            "Alive",
            "Fund Status",
        ],
        rows,
    )


def _insurance_panel(plan: Plan, result: SimulationResult) -> str:
    needs = result.insurance
    if needs is None or plan.insurance is None:
        return '<p class="subtle">No insurance section in this plan.</p>'
    money = partial(format_money, display=plan.display)
    gap_label = "Fully Covered" if needs.is_fully_covered else "Coverage Gap"
    cards = _cards(
        [
            ("Total Insurance Needed", money(needs.total_insurance_required)),
            ("Current Coverage", money(needs.total_resources_available)),
            (gap_label, money(needs.additional_cover_required)),
            ("Gap", _pct(needs.coverage_gap_pct)),
        ]
    )
    breakdown = [
        ("Outstanding loans", needs.total_outstanding_liabilities),
        ("Goal funding", needs.total_goal_funding),
        (
            f"Future expenses ({needs.remaining_years} years at {needs.real_return_pct:.2f}% real return)",
            needs.corpus_for_future_expenses,
        ),
        ("Investment assets", -plan.insurance.investment_assets),
        ("Existing insurance", -plan.insurance.existing_insurance),
    ]
    rows = [f"<tr><td>{html.escape(label)}</td><td>{money(amount)}</td></tr>" for label, amount in breakdown]
    return f'<div class="cards">{cards}</div>' + _table(["Component", "Amount"], rows)


def _goals_table(plan: Plan, result: SimulationResult) -> str:
    if not result.goals:
        return '<p class="subtle">No goals in this plan.</p>'
    money = partial(format_money, display=plan.display)
    rows = []
    for goal in result.goals:
        css = "" if goal.is_funded else "insolvent"
        rows.append(
            f'<tr class="{css}">'
            + f"<td>{html.escape(goal.description)}</td>"
            + f"<td>{html.escape(goal.priority)}</td>"
            + f"<td>{money(goal.future_value)}</td>"
            + f"<td>{money(goal.total_investment)}</td>"
            + f"<td>{money(goal.final_capital)}</td>"
            + f"<td>{money(goal.shortfall_surplus)}</td>"
            + "</tr>"
        )
    return _table(["Goal", "Priority", "Future Value", "Total Investment", "Final Capital", "Shortfall/Surplus"], rows)


def _calculators_panel(plan: Plan, calc: CalculatorResults) -> str:
    if calc.is_empty:
        return '<p class="subtle">No calculators in this plan.</p>'
    money = partial(format_money, display=plan.display)
    rows: list[str] = []

    def add(section: str, label: str, value: str) -> None:
        rows.append(f"<tr><td>{html.escape(section)}</td><td>{html.escape(label)}</td><td>{html.escape(value)}</td></tr>")

    if calc.loan is not None:
        add("Loan EMI", "Monthly EMI", money(calc.loan.emi))
        add("Loan EMI", "Total payment", money(calc.loan.total))
        add("Loan EMI", "Total interest", money(calc.loan.interest))
    if calc.mortgage is not None:
        add("Home Loan", "Monthly payment", money(calc.mortgage.emi))
        add("Home Loan", "Total interest", money(calc.mortgage.interest))
    for section, sip_result in (("SIP", calc.sip), ("Step-up SIP", calc.step_up_sip)):
        if sip_result is None:
            continue
        add(section, "Total invested", money(sip_result.total_invested))
        add(section, "Estimated returns", money(sip_result.estimated_returns))
        add(section, "Total value", money(sip_result.total_value))
        if section == "Step-up SIP":
            add(section, "Final monthly investment", money(sip_result.final_monthly_investment))
    if calc.compound_interest is not None:
        add("Compound Interest", "Future value", money(calc.compound_interest.future_value))
        add("Compound Interest", "Effective annual rate", _pct(calc.compound_interest.effective_rate_pct))
        inputs = plan.calculators.compound_interest
        if inputs is not None:
            add("Compound Interest", "Simple interest at same rate", money(simple_interest(inputs.principal, inputs.rate_pct, inputs.years)))
    if calc.present_value is not None:
        add("Present Value", "Present value", money(calc.present_value.present_value))
        add("Present Value", "Total discount", money(calc.present_value.total_discount))
    if calc.xirr is not None:
        add("XIRR", "Annualised return", f"{calc.xirr.rate_pct:.2f}%")
        add("XIRR", "Net gain", money(calc.xirr.net_gain))
    if calc.emergency_fund is not None:
        add("Emergency Fund", "Recommended reserve", money(calc.emergency_fund))

    out = _table(["Calculator", "Metric", "Value"], rows)
    if calc.amortization:
        schedule_rows = [
            "<tr>"
            + f"<td>{item.month}</td><td>{money(item.emi)}</td><td>{money(item.principal)}</td>"
            + f"<td>{money(item.interest)}</td><td>{money(item.balance)}</td>"
            + "</tr>"
            for item in calc.amortization
        ]
        out += "<h3>Amortization Schedule</h3>" + f'<div class="table-wrap">{_table(["Month", "EMI", "Principal", "Interest", "Balance"], schedule_rows)}</div>'
    return out


def _net_worth_panel(plan: Plan, result: SimulationResult) -> str:
    money = partial(format_money, display=plan.display)
    cards = _cards(
        [
            ("Total Assets", money(result.net_worth.total_assets)),
            ("Total Liabilities", money(result.net_worth.total_liabilities)),
            ("Net Worth", money(result.net_worth.net_worth)),
            ("Monthly Income", money(result.cash_flow.total_income)),
            ("Monthly Expenses", money(result.cash_flow.total_expenses)),
            ("Net Monthly Flow", money(result.cash_flow.net_flow)),
        ]
    )
    rows = []
    for kind, items in (
        ("Asset", plan.balance_sheet.assets),
        ("Liability", plan.balance_sheet.liabilities),
        ("Income", plan.cash_flow.income),
        ("Expense", plan.cash_flow.expenses),
    ):
        rows.extend(
            f"<tr><td>{kind}</td><td>{html.escape(item.name)}</td><td>{money(item.amount)}</td></tr>" for item in items
        )
    return f'<div class="cards">{cards}</div>' + _table(["Type", "Name", "Amount"], rows)


def _risk_profile_panel(plan: Plan, result: SimulationResult) -> str:
    profile = result.risk_profile
    if profile.category is None:
        return '<p class="subtle">Risk profile questionnaire not answered.</p>'
    answers = plan.risk_profile.answers
    rows = []
    for question in QUESTIONS:
        score = answers.get(question.id)
        label = next((option.label for option in question.options if option.score == score), "-")
        rows.append(f"<tr><td>{question.id}. {html.escape(question.text)}</td><td>{html.escape(label)}</td><td>{score or '-'}</td></tr>")
    cards = _cards(
        [
            ("Risk Profile", profile.category),
            ("Score", f"{profile.total_score} / {len(QUESTIONS) * 3}"),
            ("Answered", f"{profile.answered} of {len(QUESTIONS)}"),
        ]
    )
    return f'<div class="cards">{cards}</div>' + _table(["Question", "Answer", "Score"], rows)


def _validation_panel(plan: Plan) -> str:
    validation = validate_plan(plan)

    rows: list[str] = []
    for msg in validation.errors:
        rows.append(f"<tr><td>Error</td><td>{html.escape(msg)}</td></tr>")
    for msg in validation.warnings:
        rows.append(f"<tr><td>Warning</td><td>{html.escape(msg)}</td></tr>")
    if not rows:
        rows.append("<tr><td>OK</td><td>No validation issues detected.</td></tr>")
    return _table(["Type", "Detail"], rows)


def _report_payload(result: SimulationResult) -> dict[str, object]:
    summary = result.summary
    return {
        "currentAge": result.projection_input.current_age,
        "retirementAge": result.projection_input.retirement_age,
        "lifeExpectancy": result.projection_input.life_expectancy,
        "readiness": summary.readiness.label if summary else None,
        "coveragePct": summary.coverage_pct if summary else None,
        "charts": build_chart_payload(result),
    }


def render_report(plan: Plan, result: SimulationResult, plan_path: str) -> str:
    payload = _report_payload(result)
    payload["currency"] = plan.display.currency_symbol

    plan_hash = hashlib.sha256(Path(plan_path).read_bytes()).hexdigest()[:12]
    title = f"Wealth Plan - {html.escape(plan.profile.name)}"
    timestamp = datetime.now(UTC).isoformat(timespec="seconds")
    subtitle = f"Generated: {timestamp} | Plan hash: {plan_hash}"

    return render_html_document(
        title=title,
        subtitle=subtitle,
        dashboard_cards=_dashboard_cards(plan, result),
        readiness_panel=_readiness_panel(plan, result),
        retirement_table=_retirement_table(plan, result),
        insurance_panel=_insurance_panel(plan, result),
        goals_table=_goals_table(plan, result),
        calculators_panel=_calculators_panel(plan, result.calculators),
        net_worth_panel=_net_worth_panel(plan, result),
        risk_profile_panel=_risk_profile_panel(plan, result),
        validation_table=_validation_panel(plan),
        payload_json=json.dumps(payload),
    )


def write_report(path: str | Path, html_content: str) -> None:
    Path(path).write_text(html_content, encoding="utf-8")
