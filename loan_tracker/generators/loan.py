"""Loan request generator with payment behavior."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

from loan_tracker.engine.installments import InstallmentRequest
from loan_tracker.engine.status import mark_paid
from loan_tracker.generators.base import BaseGenerator
from loan_tracker.models import InterestType, Loan, PenaltyType


class LoanGenerator(BaseGenerator):
    """Generate installment requests and settle some of the resulting loans."""

    INSTALLMENT_CHOICES = [1, 1, 1, 2, 3, 4]
    PENALTY_TERMS = {
        PenaltyType.DAILY_PERCENTAGE: ("0.5", "1", "2"),
        PenaltyType.DAILY_VALUE: ("5", "10", "20"),
        PenaltyType.FIXED: ("5", "10"),
        PenaltyType.FIXED_VALUE: ("20", "50"),
    }

    def generate_request(self, client_id: str, today: date | None = None) -> InstallmentRequest:
        """Generate a new-loan request for ``client_id``.

        Principal is 100 to 5000 BRL, first due date between four months
        ago and two months ahead.
        """
        today = today or date.today()
        penalty_type = self.random.choice(list(self.PENALTY_TERMS))

        if self.random.random() < 0.8:
            interest_type = InterestType.PERCENTAGE
            interest_rate = Decimal(self.random.choice([10, 15, 20, 30]))
        else:
            interest_type = InterestType.FIXED_VALUE
            interest_rate = Decimal(self.random.randint(5, 40) * 10)

        return InstallmentRequest(
            client_id=client_id,
            amount=Decimal(self.random.randint(1, 50) * 100),
            interest_rate=interest_rate,
            interest_type=interest_type,
            first_due_date=today + timedelta(days=self.random.randint(-120, 60)),
            penalty_rate=Decimal(self.random.choice(self.PENALTY_TERMS[penalty_type])),
            penalty_type=penalty_type,
            installments=self.random.choice(self.INSTALLMENT_CHOICES),
        )

    def apply_payment_behavior(
        self,
        loan: Loan,
        today: date | None = None,
        on_time_rate: float = 0.70,
        late_rate: float = 0.15,
    ) -> Loan:
        """Settle a past-due loan on time, late, or leave it unpaid.

        Loans not yet due are returned unchanged. Late payments land 1 to 15
        days after the due date, never after ``today``.
        """
        today = today or date.today()
        if loan.due_date > today:
            return loan

        roll = self.random.random()
        if roll < on_time_rate:
            paid_on = loan.due_date - timedelta(days=self.random.randint(0, 3))
        elif roll < on_time_rate + late_rate:
            paid_on = min(today, loan.due_date + timedelta(days=self.random.randint(1, 15)))
        else:
            return loan

        paid_at = datetime.combine(paid_on, datetime.min.time()) + timedelta(
            hours=self.random.randint(8, 18)
        )
        return mark_paid(loan, paid_at)
