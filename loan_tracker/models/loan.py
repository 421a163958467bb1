"""Loan models."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from loan_tracker.models.enums import InterestType, LoanStatus, PenaltyType


@dataclass
class Loan:
    """A single repayment obligation.

    ``paid_at`` is set if and only if ``status`` is ``PAID``. Installment
    fields are filled when the loan was created from a multi-installment
    request; siblings share ``group_id``.
    """

    loan_id: str
    client_id: str
    amount: Decimal  # principal
    interest_rate: Decimal  # percent or currency, depending on interest_type
    due_date: date
    penalty_rate: Decimal  # percent or currency, depending on penalty_type
    created_at: datetime
    interest_type: InterestType = InterestType.PERCENTAGE
    penalty_type: PenaltyType = PenaltyType.FIXED
    status: LoanStatus = LoanStatus.ACTIVE
    paid_at: datetime | None = None
    installment_number: int | None = None
    installment_total: int | None = None
    group_id: str | None = None


@dataclass
class CalculatedLoan(Loan):
    """Loan with its derived financial snapshot. Never persisted."""

    initial_interest: Decimal = Decimal("0")
    base_total: Decimal = Decimal("0")
    days_overdue: int = 0
    penalty_amount: Decimal = Decimal("0")
    final_total: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")
    is_overdue: bool = False
    client_name: str = ""
