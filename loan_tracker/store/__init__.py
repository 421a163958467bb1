"""Record stores for clients, loans and expenses."""

from loan_tracker.store.json_file import JsonFileStore
from loan_tracker.store.memory import LoanBookStore

__all__ = ["JsonFileStore", "LoanBookStore"]
