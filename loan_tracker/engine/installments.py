"""Installment plans: expanding one request into sibling loans."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable

from loan_tracker.dates import add_months, parse_timestamp, to_calendar_date
from loan_tracker.exceptions import InvalidEntityStateError
from loan_tracker.models import InterestType, Loan, LoanStatus, PenaltyType
from loan_tracker.money import to_decimal

HUNDRED = Decimal("100")


def new_id() -> str:
    """Short random record id."""
    return uuid.uuid4().hex[:12]


@dataclass
class InstallmentRequest:
    """A loan as entered on the new-loan form, before expansion."""

    client_id: str
    amount: Decimal  # total principal, split evenly across installments
    interest_rate: Decimal
    first_due_date: date
    penalty_rate: Decimal
    interest_type: InterestType = InterestType.PERCENTAGE
    penalty_type: PenaltyType = PenaltyType.DAILY_PERCENTAGE
    installments: int = 1
    paid_at: datetime | None = None  # backdated entry of an already paid loan


@dataclass
class InstallmentSimulation:
    """Preview of a plan shown while the form is being filled."""

    installment_total: Decimal  # principal part + interest part of one installment
    total: Decimal
    total_interest: Decimal


def build_installment_plan(
    request: InstallmentRequest,
    now: datetime | None = None,
    id_factory: Callable[[], str] = new_id,
) -> list[Loan]:
    """Expand a request into ``request.installments`` sibling loans.

    Installment ``i`` (0-based) is due ``i`` months after the first due date
    and carries ``amount / installments`` of principal. Interest and penalty
    terms are copied to every sibling. A shared ``group_id`` is assigned only
    when there is more than one installment.
    Ids come from ``id_factory``, so a seeded generator can reproduce a plan.

    Raises
    ------
    InvalidEntityStateError
        If fewer than one installment is requested.
    """
    count = int(request.installments)
    if count < 1:
        raise InvalidEntityStateError(f"Installment count must be at least 1, got {count}")

    now = now or datetime.now()
    principal = to_decimal(request.amount) / count
    group_id = id_factory() if count > 1 else None
    first_due = to_calendar_date(request.first_due_date)
    paid_at = parse_timestamp(request.paid_at) if request.paid_at else None

    return [
        Loan(
            loan_id=id_factory(),
            client_id=request.client_id,
            amount=principal,
            interest_rate=to_decimal(request.interest_rate),
            interest_type=InterestType(request.interest_type),
            due_date=add_months(first_due, i),
            penalty_rate=to_decimal(request.penalty_rate),
            penalty_type=PenaltyType(request.penalty_type),
            status=LoanStatus.PAID if paid_at else LoanStatus.ACTIVE,
            paid_at=paid_at,
            created_at=now,
            installment_number=i + 1,
            installment_total=count,
            group_id=group_id,
        )
        for i in range(count)
    ]


def simulate_installments(
    amount: Any,
    interest_rate: Any,
    interest_type: InterestType = InterestType.PERCENTAGE,
    installments: int = 1,
) -> InstallmentSimulation:
    """Preview per-installment and total amounts of a plan.

    Percentage interest is charged on each installment's principal; a fixed
    value interest is charged once per installment.
    """
    count = int(installments) if installments and int(installments) > 0 else 1
    principal_part = to_decimal(amount) / count
    rate = to_decimal(interest_rate)

    if interest_type == InterestType.FIXED_VALUE:
        interest_part = rate
    else:
        interest_part = principal_part * (rate / HUNDRED)

    installment_total = principal_part + interest_part
    return InstallmentSimulation(
        installment_total=installment_total,
        total=installment_total * count,
        total_interest=interest_part * count,
    )


def format_installment(loan: Loan) -> str:
    """``"2/5"`` for the second of five installments, ``"1/1"`` otherwise."""
    if loan.installment_total and loan.installment_total > 1:
        return f"{loan.installment_number}/{loan.installment_total}"
    return "1/1"
