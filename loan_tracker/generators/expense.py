"""Expense generator."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

from loan_tracker.generators.base import BaseGenerator
from loan_tracker.models import Expense


class ExpenseGenerator(BaseGenerator):
    """Generate operating expenses."""

    # category -> (description, min, max) in BRL
    CATEGORIES = {
        "Transporte": ("Combustível", 50, 400),
        "Telefone": ("Recarga de celular", 20, 100),
        "Escritório": ("Material de escritório", 30, 250),
        "Cobrança": ("Taxa de cobrança", 10, 150),
    }

    def generate(self, today: date | None = None, days_back: int = 180) -> Expense:
        """Generate one expense dated within the last ``days_back`` days."""
        today = today or date.today()
        category = self.random.choice(list(self.CATEGORIES))
        description, low, high = self.CATEGORIES[category]
        day = today - timedelta(days=self.random.randint(0, days_back))

        return Expense(
            expense_id=self.new_id(),
            description=description,
            amount=Decimal(self.random.randint(low * 100, high * 100)) / 100,
            date=day,
            created_at=datetime.combine(day, datetime.min.time()),
            category=category,
            notes=self.fake.sentence() if self.random.random() < 0.3 else "",
        )
