"""Enumeration types for loan-tracker records."""

from enum import Enum


class LoanStatus(str, Enum):
    """Stored loan status. ``OVERDUE`` is only ever derived, never stored."""

    ACTIVE = "ACTIVE"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


class InterestType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED_VALUE = "FIXED_VALUE"


class PenaltyType(str, Enum):
    FIXED = "FIXED"  # one-time percentage of the base total
    FIXED_VALUE = "FIXED_VALUE"  # one-time flat value
    DAILY_PERCENTAGE = "DAILY_PERCENTAGE"
    DAILY_VALUE = "DAILY_VALUE"


class LoanFilter(str, Enum):
    """List filter used by the loans view."""

    ALL = "ALL"
    ACTIVE = "ACTIVE"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
