"""In-memory record store for the loan book."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable

from loan_tracker.config import UNKNOWN_CLIENT_LABEL
from loan_tracker.engine.calculator import calculate_all
from loan_tracker.engine.filters import client_loans
from loan_tracker.engine.installments import InstallmentRequest, build_installment_plan, new_id
from loan_tracker.engine.status import set_status, validate_status
from loan_tracker.exceptions import EntityNotFoundError
from loan_tracker.models import CalculatedLoan, Client, Expense, Loan, LoanStatus

logger = logging.getLogger(__name__)


@dataclass
class LoanBookStore:
    """In-memory store for clients, loans and expenses.

    Updates are full-record replacements keyed by id; the last write wins.
    Loans may reference clients that do not exist (or no longer exist):
    nothing here enforces or cascades that relationship.
    """

    clients: dict[str, Client] = field(default_factory=dict)
    loans: dict[str, Loan] = field(default_factory=dict)
    expenses: dict[str, Expense] = field(default_factory=dict)
    unknown_client_label: str = UNKNOWN_CLIENT_LABEL

    # Clients

    def add_client(self, client: Client) -> None:
        """Add a client to the store."""
        self.clients[client.client_id] = client
        logger.debug("Added client %s", client.client_id)
        self._changed("clients")

    def update_client(self, client: Client) -> None:
        """Replace a stored client."""
        self._require(self.clients, client.client_id, "Client")
        self.clients[client.client_id] = client
        self._changed("clients")

    def delete_client(self, client_id: str) -> None:
        """Remove a client. Its loans are kept untouched."""
        self._require(self.clients, client_id, "Client")
        del self.clients[client_id]
        logger.info("Deleted client %s", client_id, extra={"client_id": client_id})
        self._changed("clients")

    def get_client(self, client_id: str) -> Client:
        return self._require(self.clients, client_id, "Client")

    def list_clients(self) -> list[Client]:
        return list(self.clients.values())

    # Loans

    def add_loan(self, loan: Loan) -> None:
        """Add a loan to the store.

        Raises
        ------
        InvalidEntityStateError
            If ``paid_at`` and ``status`` disagree.
        """
        validate_status(loan)
        self.loans[loan.loan_id] = loan
        logger.debug("Added loan %s for client %s", loan.loan_id, loan.client_id)
        self._changed("loans")

    def add_installment_plan(
        self,
        request: InstallmentRequest,
        now: datetime | None = None,
        id_factory: Callable[[], str] = new_id,
    ) -> list[Loan]:
        """Expand a request into sibling loans and store all of them."""
        plan = build_installment_plan(request, now, id_factory)
        for loan in plan:
            validate_status(loan)
            self.loans[loan.loan_id] = loan
        logger.info(
            "Added %d installment(s) for client %s",
            len(plan),
            request.client_id,
            extra={"client_id": request.client_id, "group_id": plan[0].group_id},
        )
        self._changed("loans")
        return plan

    def update_loan(self, loan: Loan) -> None:
        """Replace a stored loan. Sibling installments are not touched."""
        self._require(self.loans, loan.loan_id, "Loan")
        validate_status(loan)
        self.loans[loan.loan_id] = loan
        self._changed("loans")

    def update_loan_status(
        self,
        loan_id: str,
        status: LoanStatus | str,
        paid_at: datetime | str | None = None,
    ) -> Loan:
        """Mark a loan paid or active again and store the result."""
        loan = set_status(self._require(self.loans, loan_id, "Loan"), status, paid_at)
        self.loans[loan_id] = loan
        logger.info(
            "Loan %s is now %s",
            loan_id,
            loan.status.value,
            extra={"loan_id": loan_id, "status": loan.status.value},
        )
        self._changed("loans")
        return loan

    def delete_loan(self, loan_id: str) -> None:
        self._require(self.loans, loan_id, "Loan")
        del self.loans[loan_id]
        self._changed("loans")

    def get_loan(self, loan_id: str) -> Loan:
        return self._require(self.loans, loan_id, "Loan")

    def list_loans(self) -> list[Loan]:
        return list(self.loans.values())

    def get_group_loans(self, group_id: str) -> list[Loan]:
        """Sibling installments sharing ``group_id``, in installment order."""
        siblings = [loan for loan in self.loans.values() if loan.group_id == group_id]
        return sorted(siblings, key=lambda loan: loan.installment_number or 0)

    # Expenses

    def add_expense(self, expense: Expense) -> None:
        self.expenses[expense.expense_id] = expense
        self._changed("expenses")

    def update_expense(self, expense: Expense) -> None:
        self._require(self.expenses, expense.expense_id, "Expense")
        self.expenses[expense.expense_id] = expense
        self._changed("expenses")

    def delete_expense(self, expense_id: str) -> None:
        self._require(self.expenses, expense_id, "Expense")
        del self.expenses[expense_id]
        self._changed("expenses")

    def get_expense(self, expense_id: str) -> Expense:
        return self._require(self.expenses, expense_id, "Expense")

    def list_expenses(self) -> list[Expense]:
        return list(self.expenses.values())

    # Derived views

    def calculated_loans(self, today: date | None = None) -> list[CalculatedLoan]:
        """Every stored loan run through the calculation engine."""
        return calculate_all(
            self.loans.values(), self.clients.values(), today, self.unknown_client_label
        )

    def client_history(self, client_id: str, today: date | None = None) -> list[CalculatedLoan]:
        """Calculated loans of one client."""
        return client_loans(self.calculated_loans(today), client_id)

    def summary(self) -> dict[str, int]:
        """Return summary counts of all records."""
        return {
            "clients": len(self.clients),
            "loans": len(self.loans),
            "expenses": len(self.expenses),
        }

    def _require(self, records: dict, record_id: str, kind: str):
        try:
            return records[record_id]
        except KeyError:
            raise EntityNotFoundError(f"{kind} {record_id} not found") from None

    def _changed(self, collection: str) -> None:
        """Hook called after every mutation of ``collection``."""
