"""Pytest configuration and fixtures."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable

import pytest

from loan_tracker.models import Client, Expense, InterestType, Loan, LoanStatus, PenaltyType


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def today() -> date:
    """Fixed evaluation date (a Wednesday)."""
    return date(2024, 6, 12)


@pytest.fixture
def sample_client() -> Client:
    """Sample client."""
    return Client(
        client_id="cli-001",
        name="Maria Souza",
        phone="(11) 98888-7777",
        created_at=datetime(2024, 1, 2, 10, 0),
        collateral="Moto Honda CG 160",
    )


@pytest.fixture
def make_loan() -> Callable[..., Loan]:
    """Factory for loans with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides: Any) -> Loan:
        counter["n"] += 1
        values: dict[str, Any] = {
            "loan_id": f"loan-{counter['n']:03d}",
            "client_id": "cli-001",
            "amount": Decimal("1000"),
            "interest_rate": Decimal("10"),
            "interest_type": InterestType.PERCENTAGE,
            "due_date": date(2024, 1, 10),
            "penalty_rate": Decimal("0"),
            "penalty_type": PenaltyType.FIXED,
            "status": LoanStatus.ACTIVE,
            "created_at": datetime(2024, 1, 1, 9, 0),
        }
        values.update(overrides)
        return Loan(**values)

    return _make


@pytest.fixture
def make_expense() -> Callable[..., Expense]:
    """Factory for expenses."""
    counter = {"n": 0}

    def _make(amount: str = "50", **overrides: Any) -> Expense:
        counter["n"] += 1
        values: dict[str, Any] = {
            "expense_id": f"exp-{counter['n']:03d}",
            "description": "Combustível",
            "amount": Decimal(amount),
            "date": date(2024, 6, 1),
            "created_at": datetime(2024, 6, 1, 12, 0),
            "category": "Transporte",
        }
        values.update(overrides)
        return Expense(**values)

    return _make
