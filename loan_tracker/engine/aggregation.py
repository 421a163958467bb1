"""Aggregation and forecast engine.

Everything here consumes already calculated loans (see
:mod:`loan_tracker.engine.calculator`) and expenses, and is recomputed in
full on every call. Realized figures come from PAID loans only, forecasts
from ACTIVE loans only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Iterable

from loan_tracker.dates import (
    add_months,
    is_same_day,
    is_same_month,
    is_same_week,
    is_same_year,
    month_label,
    start_of_month,
    to_calendar_date,
)
from loan_tracker.models import CalculatedLoan, Client, Expense, LoanStatus
from loan_tracker.money import ZERO, to_decimal

HUNDRED = Decimal("100")


@dataclass
class Forecast:
    """Sums over active loans due in the current day, week, month and year."""

    today: Decimal = ZERO
    week: Decimal = ZERO
    month: Decimal = ZERO
    year: Decimal = ZERO


@dataclass
class MonthlyBucket:
    """One bar of the monthly profit chart."""

    year: int
    month: int
    label: str
    total: Decimal
    height: Decimal  # percentage of the tallest bar (0-100)


@dataclass
class ClientProfit:
    """Realized profit of one client."""

    client_id: str
    client_name: str
    total: Decimal


@dataclass
class DashboardSummary:
    """Figures shown on the main dashboard."""

    total_lent_active: Decimal
    total_receivable: Decimal
    total_overdue: Decimal
    overdue_count: int
    gross_realized_profit: Decimal
    gross_projected_profit: Decimal
    total_expenses: Decimal
    net_realized_profit: Decimal
    net_projected_profit: Decimal
    penalties_collected: Decimal
    penalties_pending: Decimal
    receivable_forecast: Forecast
    upcoming: list[CalculatedLoan] = field(default_factory=list)
    overdue: list[CalculatedLoan] = field(default_factory=list)


@dataclass
class ProfitReport:
    """Figures shown on the profits page."""

    gross_profit: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    month_profit: Decimal
    trailing_profit: Decimal
    interest_forecast: Forecast
    monthly: list[MonthlyBucket] = field(default_factory=list)
    by_client: list[ClientProfit] = field(default_factory=list)


def _today(today: date | None) -> date:
    return to_calendar_date(today) if today is not None else date.today()


def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum((to_decimal(v) for v in values), ZERO)


def paid_loans(loans: Iterable[CalculatedLoan]) -> list[CalculatedLoan]:
    """Loans with status PAID."""
    return [loan for loan in loans if loan.status == LoanStatus.PAID]


def active_loans(loans: Iterable[CalculatedLoan]) -> list[CalculatedLoan]:
    """Loans with status ACTIVE (overdue or not)."""
    return [loan for loan in loans if loan.status == LoanStatus.ACTIVE]


def overdue_loans(loans: Iterable[CalculatedLoan]) -> list[CalculatedLoan]:
    """Active overdue loans, most days late first."""
    late = [loan for loan in active_loans(loans) if loan.is_overdue]
    return sorted(late, key=lambda loan: loan.days_overdue, reverse=True)


def upcoming_due(loans: Iterable[CalculatedLoan], limit: int | None = 5) -> list[CalculatedLoan]:
    """Active loans not yet overdue, earliest due date first."""
    pending = [loan for loan in active_loans(loans) if not loan.is_overdue]
    pending.sort(key=lambda loan: to_calendar_date(loan.due_date))
    return pending[:limit] if limit is not None else pending


def total_expenses(expenses: Iterable[Expense]) -> Decimal:
    return _sum(expense.amount for expense in expenses)


def gross_realized_profit(loans: Iterable[CalculatedLoan]) -> Decimal:
    """Profit (interest + penalty) of every paid loan."""
    return _sum(loan.profit for loan in paid_loans(loans))


def net_realized_profit(loans: Iterable[CalculatedLoan], expenses: Iterable[Expense]) -> Decimal:
    return gross_realized_profit(loans) - total_expenses(expenses)


def profit_paid_between(loans: Iterable[CalculatedLoan], start: date, end: date) -> Decimal:
    """Profit of loans paid on a calendar day within ``[start, end]``."""
    return _sum(
        loan.profit
        for loan in paid_loans(loans)
        if loan.paid_at and start <= to_calendar_date(loan.paid_at) <= end
    )


def month_to_date_profit(loans: Iterable[CalculatedLoan], today: date | None = None) -> Decimal:
    today = _today(today)
    return profit_paid_between(loans, start_of_month(today), today)


def trailing_profit(
    loans: Iterable[CalculatedLoan],
    today: date | None = None,
    days: int = 30,
) -> Decimal:
    today = _today(today)
    return profit_paid_between(loans, today - timedelta(days=days), today)


def _forecast(
    loans: Iterable[CalculatedLoan],
    value: Callable[[CalculatedLoan], Decimal],
    today: date,
) -> Forecast:
    forecast = Forecast()
    for loan in active_loans(loans):
        due = to_calendar_date(loan.due_date)
        amount = to_decimal(value(loan))
        if is_same_day(due, today):
            forecast.today += amount
        if is_same_week(due, today):
            forecast.week += amount
        if is_same_month(due, today):
            forecast.month += amount
        if is_same_year(due, today):
            forecast.year += amount
    return forecast


def interest_forecast(loans: Iterable[CalculatedLoan], today: date | None = None) -> Forecast:
    """Interest (without penalties) expected from active loans by due period."""
    return _forecast(loans, lambda loan: loan.initial_interest, _today(today))


def receivable_forecast(loans: Iterable[CalculatedLoan], today: date | None = None) -> Forecast:
    """Full amount (principal, interest and penalty) expected by due period."""
    return _forecast(loans, lambda loan: loan.final_total, _today(today))


def monthly_profit_series(
    loans: Iterable[CalculatedLoan],
    today: date | None = None,
    months: int = 6,
) -> list[MonthlyBucket]:
    """Realized profit per calendar month for the trailing ``months`` months.

    Always returns ``months`` buckets in chronological order, the last one
    being the current month. ``height`` scales each total against the largest
    one (with a floor of 1 so an all-zero chart stays flat).
    """
    current = start_of_month(_today(today))
    keys = [add_months(current, -offset) for offset in range(months - 1, -1, -1)]
    totals: dict[tuple[int, int], Decimal] = {(k.year, k.month): ZERO for k in keys}

    for loan in paid_loans(loans):
        if not loan.paid_at:
            continue
        paid = to_calendar_date(loan.paid_at)
        key = (paid.year, paid.month)
        if key in totals:
            totals[key] += to_decimal(loan.profit)

    scale = max([Decimal("1"), *totals.values()])
    return [
        MonthlyBucket(
            year=k.year,
            month=k.month,
            label=month_label(k.year, k.month),
            total=totals[(k.year, k.month)],
            height=totals[(k.year, k.month)] / scale * HUNDRED,
        )
        for k in keys
    ]


def profit_by_client(
    loans: Iterable[CalculatedLoan],
    clients: Iterable[Client] | None = None,
) -> list[ClientProfit]:
    """Realized profit per client, highest first, positive totals only.

    With a ``clients`` roster only registered clients are ranked, so paid
    loans of deleted clients drop out. Without one every ``client_id`` gets
    a row.
    """
    registered = {client.client_id for client in clients} if clients is not None else None
    grouped: dict[str, ClientProfit] = {}
    for loan in paid_loans(loans):
        if registered is not None and loan.client_id not in registered:
            continue
        entry = grouped.get(loan.client_id)
        if entry is None:
            entry = ClientProfit(loan.client_id, loan.client_name, ZERO)
            grouped[loan.client_id] = entry
        entry.total += to_decimal(loan.profit)

    ranked = [entry for entry in grouped.values() if entry.total > 0]
    ranked.sort(key=lambda entry: entry.total, reverse=True)
    return ranked


def build_dashboard(
    loans: list[CalculatedLoan],
    expenses: list[Expense],
    today: date | None = None,
    upcoming_limit: int = 5,
) -> DashboardSummary:
    """Assemble the dashboard figures."""
    today = _today(today)
    active = active_loans(loans)
    paid = paid_loans(loans)
    late = overdue_loans(loans)

    gross_realized = _sum(loan.profit for loan in paid)
    gross_projected = _sum(loan.profit for loan in active)
    expenses_total = total_expenses(expenses)

    return DashboardSummary(
        total_lent_active=_sum(loan.amount for loan in active),
        total_receivable=_sum(loan.final_total for loan in active),
        total_overdue=_sum(loan.final_total for loan in late),
        overdue_count=len(late),
        gross_realized_profit=gross_realized,
        gross_projected_profit=gross_projected,
        total_expenses=expenses_total,
        net_realized_profit=gross_realized - expenses_total,
        net_projected_profit=gross_projected - expenses_total,
        penalties_collected=_sum(loan.penalty_amount for loan in paid),
        penalties_pending=_sum(loan.penalty_amount for loan in late),
        receivable_forecast=receivable_forecast(loans, today),
        upcoming=upcoming_due(loans, upcoming_limit),
        overdue=late,
    )


def build_profit_report(
    loans: list[CalculatedLoan],
    expenses: list[Expense],
    today: date | None = None,
    months: int = 6,
    trailing_days: int = 30,
    clients: Iterable[Client] | None = None,
) -> ProfitReport:
    """Assemble the profits page figures.

    ``clients`` restricts the per-client ranking to the current roster.
    """
    today = _today(today)
    gross = gross_realized_profit(loans)
    expenses_total = total_expenses(expenses)

    return ProfitReport(
        gross_profit=gross,
        total_expenses=expenses_total,
        net_profit=gross - expenses_total,
        month_profit=month_to_date_profit(loans, today),
        trailing_profit=trailing_profit(loans, today, trailing_days),
        interest_forecast=interest_forecast(loans, today),
        monthly=monthly_profit_series(loans, today, months),
        by_client=profit_by_client(loans, clients),
    )
