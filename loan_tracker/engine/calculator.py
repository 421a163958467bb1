"""Loan calculation engine.

Turns a stored :class:`Loan` plus the evaluation date into a
:class:`CalculatedLoan` holding interest, overdue status, penalty, final
total and profit. Every consumer derives loan figures through
:func:`calculate_loan_details`; overdue logic lives nowhere else.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from datetime import date
from decimal import Decimal
from typing import Iterable

from loan_tracker.config import UNKNOWN_CLIENT_LABEL
from loan_tracker.dates import days_between, to_calendar_date
from loan_tracker.models import CalculatedLoan, Client, InterestType, Loan, LoanStatus, PenaltyType
from loan_tracker.money import ZERO, to_decimal

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def calculate_interest(loan: Loan) -> Decimal:
    """Interest owed on top of the principal.

    ``FIXED_VALUE`` takes the rate as an absolute amount; anything else is a
    percentage of the principal.
    """
    rate = to_decimal(loan.interest_rate)
    if loan.interest_type == InterestType.FIXED_VALUE:
        return rate
    return to_decimal(loan.amount) * (rate / HUNDRED)


def reference_date(loan: Loan, today: date) -> tuple[date, bool]:
    """Date the loan's lateness is judged at, and whether it is overdue.

    A paid loan is judged at its payment date, so its lateness is fixed
    forever. An unpaid loan is judged live against ``today``.

    Returns
    -------
    tuple[date, bool]
        ``(reference_date, is_overdue)``.
    """
    due = to_calendar_date(loan.due_date)
    if loan.status == LoanStatus.PAID and loan.paid_at:
        paid = to_calendar_date(loan.paid_at)
        return paid, paid > due
    return today, loan.status != LoanStatus.PAID and today > due


def calculate_penalty(
    penalty_type: PenaltyType | str | None,
    penalty_rate: Decimal,
    base_total: Decimal,
    days_overdue: int,
) -> Decimal:
    """Penalty for a loan that is ``days_overdue`` days late.

    Daily percentage is linear against the fixed base total; it never
    compounds on an already penalized balance. Unknown types fall back to the
    one-time percentage.
    """
    if days_overdue <= 0:
        return ZERO

    rate = to_decimal(penalty_rate)
    if penalty_type == PenaltyType.DAILY_PERCENTAGE:
        return base_total * (rate / HUNDRED) * days_overdue
    if penalty_type == PenaltyType.DAILY_VALUE:
        return rate * days_overdue
    if penalty_type == PenaltyType.FIXED_VALUE:
        return rate
    return base_total * (rate / HUNDRED)


def resolve_client_name(
    client_id: str,
    clients: Iterable[Client],
    fallback: str = UNKNOWN_CLIENT_LABEL,
) -> str:
    """Name of the client with ``client_id``, or ``fallback`` when missing."""
    for client in clients:
        if client.client_id == client_id:
            return client.name or fallback
    logger.debug("Client %s not found, using fallback name", client_id)
    return fallback


def calculate_loan_details(
    loan: Loan,
    clients: Iterable[Client],
    today: date | None = None,
    unknown_client_label: str = UNKNOWN_CLIENT_LABEL,
) -> CalculatedLoan:
    """Derive the full financial snapshot of a loan.

    Parameters
    ----------
    loan : Loan
        Stored loan record. Not modified.
    clients : Iterable[Client]
        Client roster used to resolve the display name.
    today : date | None
        Evaluation date (defaults to the system calendar date).
    unknown_client_label : str
        Display name used when ``loan.client_id`` is not in the roster.

    Returns
    -------
    CalculatedLoan
        The loan's fields plus interest, overdue status, penalty, totals,
        profit and client name.
    """
    today = to_calendar_date(today) if today is not None else date.today()

    amount = to_decimal(loan.amount)
    initial_interest = calculate_interest(loan)
    base_total = amount + initial_interest

    ref_date, is_overdue = reference_date(loan, today)
    days_overdue = max(0, days_between(loan.due_date, ref_date)) if is_overdue else 0

    penalty_amount = ZERO
    if is_overdue and days_overdue > 0:
        penalty_amount = calculate_penalty(
            loan.penalty_type, loan.penalty_rate, base_total, days_overdue
        )

    final_total = base_total + penalty_amount

    stored = {f.name: getattr(loan, f.name) for f in fields(Loan)}
    return CalculatedLoan(
        **stored,
        initial_interest=initial_interest,
        base_total=base_total,
        days_overdue=days_overdue,
        penalty_amount=penalty_amount,
        final_total=final_total,
        profit=final_total - amount,
        is_overdue=is_overdue,
        client_name=resolve_client_name(loan.client_id, clients, unknown_client_label),
    )


def calculate_all(
    loans: Iterable[Loan],
    clients: Iterable[Client],
    today: date | None = None,
    unknown_client_label: str = UNKNOWN_CLIENT_LABEL,
) -> list[CalculatedLoan]:
    """Run :func:`calculate_loan_details` over a collection of loans."""
    today = to_calendar_date(today) if today is not None else date.today()
    roster = list(clients)
    return [
        calculate_loan_details(loan, roster, today, unknown_client_label) for loan in loans
    ]
