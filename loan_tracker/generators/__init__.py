"""Sample data generators."""

from loan_tracker.generators.client import ClientGenerator
from loan_tracker.generators.expense import ExpenseGenerator
from loan_tracker.generators.loan import LoanGenerator

__all__ = ["ClientGenerator", "ExpenseGenerator", "LoanGenerator"]
