"""Search and filter helpers used by the list views."""

from __future__ import annotations

from typing import Iterable

from loan_tracker.dates import to_calendar_date
from loan_tracker.models import CalculatedLoan, Client, Expense, LoanFilter, LoanStatus


def filter_loans(
    loans: Iterable[CalculatedLoan],
    search: str = "",
    status_filter: LoanFilter | str = LoanFilter.ALL,
) -> list[CalculatedLoan]:
    """Filter calculated loans by client name and status.

    ``OVERDUE`` keeps overdue loans that are not paid; ``ACTIVE`` and
    ``PAID`` match the stored status.
    """
    term = search.lower()
    wanted = LoanFilter(status_filter)
    result = []
    for loan in loans:
        if term not in (loan.client_name or "").lower():
            continue
        if wanted == LoanFilter.OVERDUE:
            if not loan.is_overdue or loan.status == LoanStatus.PAID:
                continue
        elif wanted != LoanFilter.ALL and loan.status != wanted.value:
            continue
        result.append(loan)
    return result


def search_clients(clients: Iterable[Client], term: str = "") -> list[Client]:
    """Clients whose name (case-insensitive) or phone contains ``term``."""
    lowered = term.lower()
    return [c for c in clients if lowered in c.name.lower() or term in (c.phone or "")]


def search_expenses(expenses: Iterable[Expense], term: str = "") -> list[Expense]:
    """Expenses matching description or category, most recent first."""
    lowered = term.lower()
    matches = [
        e
        for e in expenses
        if lowered in e.description.lower() or (e.category and lowered in e.category.lower())
    ]
    matches.sort(key=lambda e: to_calendar_date(e.date), reverse=True)
    return matches


def client_loans(
    loans: Iterable[CalculatedLoan],
    client_id: str,
) -> list[CalculatedLoan]:
    """Calculated loans belonging to one client."""
    return [loan for loan in loans if loan.client_id == client_id]
