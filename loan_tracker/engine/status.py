"""Loan status transitions.

Only ``ACTIVE`` and ``PAID`` are ever stored. Transitions return a new
record; the caller decides where to store it.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from loan_tracker.dates import parse_timestamp
from loan_tracker.exceptions import InvalidEntityStateError
from loan_tracker.models import Loan, LoanStatus


def mark_paid(loan: Loan, paid_at: datetime | str | None = None) -> Loan:
    """Settle a loan at ``paid_at`` (now when omitted)."""
    when = parse_timestamp(paid_at) if paid_at else datetime.now()
    return replace(loan, status=LoanStatus.PAID, paid_at=when)


def mark_active(loan: Loan) -> Loan:
    """Revert a payment, clearing ``paid_at``. No history is kept."""
    return replace(loan, status=LoanStatus.ACTIVE, paid_at=None)


def set_status(
    loan: Loan,
    status: LoanStatus | str,
    paid_at: datetime | str | None = None,
) -> Loan:
    """Apply a status toggle.

    Raises
    ------
    InvalidEntityStateError
        If ``status`` is ``OVERDUE`` or unknown; overdue is always derived.
    """
    try:
        target = LoanStatus(status)
    except ValueError as exc:
        raise InvalidEntityStateError(f"Unknown loan status {status!r}") from exc

    if target == LoanStatus.PAID:
        return mark_paid(loan, paid_at)
    if target == LoanStatus.ACTIVE:
        return mark_active(loan)
    raise InvalidEntityStateError("OVERDUE is derived and cannot be stored")


def validate_status(loan: Loan) -> None:
    """Check the stored status invariants of a loan.

    Raises
    ------
    InvalidEntityStateError
        If the status is ``OVERDUE`` or ``paid_at`` disagrees with the status.
    """
    if loan.status == LoanStatus.OVERDUE:
        raise InvalidEntityStateError(f"Loan {loan.loan_id} cannot be stored as OVERDUE")
    if loan.status == LoanStatus.PAID and loan.paid_at is None:
        raise InvalidEntityStateError(f"Loan {loan.loan_id} is PAID but has no paid_at")
    if loan.status != LoanStatus.PAID and loan.paid_at is not None:
        raise InvalidEntityStateError(f"Loan {loan.loan_id} has paid_at but is not PAID")
