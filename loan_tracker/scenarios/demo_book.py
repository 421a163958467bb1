"""Demo loan book scenario: clients, installment plans and expenses."""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any

from loan_tracker.engine.aggregation import build_dashboard
from loan_tracker.generators import ClientGenerator, ExpenseGenerator, LoanGenerator
from loan_tracker.models import LoanStatus
from loan_tracker.store.memory import LoanBookStore

logger = logging.getLogger(__name__)


class DemoBookScenario:
    """Fill a store with a realistic small lending operation.

    This scenario creates:
    - Clients with contact data and collateral
    - One or more loan requests per client, some split into installments
    - Payment behavior on past-due installments (on time, late, unpaid)
    - Operating expenses over the last six months
    """

    def __init__(
        self,
        num_clients: int = 20,
        loans_per_client: int = 2,
        num_expenses: int = 15,
        on_time_rate: float = 0.70,
        late_rate: float = 0.15,
        seed: int | None = None,
        store: LoanBookStore | None = None,
    ) -> None:
        """Initialize demo book scenario.

        Parameters
        ----------
        num_clients : int
            Number of clients to generate.
        loans_per_client : int
            Maximum loan requests per client (at least one each).
        num_expenses : int
            Number of expenses to generate.
        on_time_rate : float
            Share of past-due installments paid by the due date.
        late_rate : float
            Share of past-due installments paid after the due date.
        seed : int | None
            Random seed for reproducibility.
        store : LoanBookStore | None
            Store to fill (a fresh in-memory store by default).
        """
        self.num_clients = num_clients
        self.loans_per_client = loans_per_client
        self.num_expenses = num_expenses
        self.on_time_rate = on_time_rate
        self.late_rate = late_rate
        self.seed = seed

        self.store = store if store is not None else LoanBookStore()
        # one seed stream per generator
        self._client_gen = ClientGenerator(seed=seed)
        self._loan_gen = LoanGenerator(seed=_offset(seed, 1))
        self._expense_gen = ExpenseGenerator(seed=_offset(seed, 2))

    def generate(self, today: date | None = None) -> LoanBookStore:
        """Generate all records.

        Returns
        -------
        LoanBookStore
            Store containing the generated book.
        """
        today = today or date.today()
        now = datetime.combine(today, time(9, 0))
        logger.info("Starting demo book scenario: %d clients", self.num_clients)

        for client in self._client_gen.generate_batch(self.num_clients, now):
            self.store.add_client(client)
            requests = self._loan_gen.random.randint(1, max(1, self.loans_per_client))
            for _ in range(requests):
                request = self._loan_gen.generate_request(client.client_id, today)
                for loan in self.store.add_installment_plan(
                    request, now, self._loan_gen.new_id
                ):
                    settled = self._loan_gen.apply_payment_behavior(
                        loan, today, self.on_time_rate, self.late_rate
                    )
                    if settled.status == LoanStatus.PAID:
                        self.store.update_loan(settled)

        for _ in range(self.num_expenses):
            self.store.add_expense(self._expense_gen.generate(today))

        logger.info("Generated demo book: %s", self.store.summary())
        return self.store

    def get_book_summary(self, today: date | None = None) -> dict[str, Any]:
        """Headline figures of the generated book.

        Returns
        -------
        dict[str, Any]
            Record counts plus dashboard totals as floats.
        """
        dashboard = build_dashboard(
            self.store.calculated_loans(today), self.store.list_expenses(), today
        )
        return {
            **self.store.summary(),
            "paid_loans": sum(
                1 for loan in self.store.loans.values() if loan.status == LoanStatus.PAID
            ),
            "overdue_loans": dashboard.overdue_count,
            "total_receivable": float(dashboard.total_receivable),
            "net_realized_profit": float(dashboard.net_realized_profit),
        }


def _offset(seed: int | None, step: int) -> int | None:
    return None if seed is None else seed + step
