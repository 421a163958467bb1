"""Operating expense model."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass
class Expense:
    """Operating cost deducted from realized profit."""

    expense_id: str
    description: str
    amount: Decimal
    date: date
    created_at: datetime
    category: str = ""
    notes: str = ""
