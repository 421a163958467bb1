"""Record models for the loan book."""

from loan_tracker.models.client import Client
from loan_tracker.models.enums import InterestType, LoanFilter, LoanStatus, PenaltyType
from loan_tracker.models.expense import Expense
from loan_tracker.models.loan import CalculatedLoan, Loan

__all__ = [
    "CalculatedLoan",
    "Client",
    "Expense",
    "InterestType",
    "Loan",
    "LoanFilter",
    "LoanStatus",
    "PenaltyType",
]
