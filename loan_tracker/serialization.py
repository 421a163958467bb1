"""Serialization of records to and from JSON-compatible dicts."""

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from loan_tracker.dates import parse_timestamp, to_calendar_date
from loan_tracker.models import Client, Expense, InterestType, Loan, LoanStatus, PenaltyType
from loan_tracker.money import to_decimal


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert dataclass to dict with proper serialization."""
    result = {}
    for key, value in asdict(obj).items():
        result[key] = serialize_value(value)
    return result


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def _optional_timestamp(value: Any) -> datetime | None:
    return parse_timestamp(value) if value else None


def _optional_int(value: Any) -> int | None:
    return int(value) if value not in (None, "") else None


def client_from_dict(data: dict[str, Any]) -> Client:
    """Build a Client from its serialized form."""
    return Client(
        client_id=data["client_id"],
        name=data.get("name", ""),
        phone=data.get("phone", ""),
        created_at=parse_timestamp(data["created_at"]),
        address=data.get("address") or "",
        profession=data.get("profession") or "",
        cpf=data.get("cpf") or "",
        photo=data.get("photo") or "",
        collateral=data.get("collateral") or "",
    )


def loan_from_dict(data: dict[str, Any]) -> Loan:
    """Build a Loan from its serialized form.

    Records written before interest/penalty types existed default to
    percentage interest and a one-time percentage penalty.
    """
    return Loan(
        loan_id=data["loan_id"],
        client_id=data.get("client_id", ""),
        amount=to_decimal(data.get("amount")),
        interest_rate=to_decimal(data.get("interest_rate")),
        interest_type=InterestType(data.get("interest_type") or InterestType.PERCENTAGE),
        due_date=to_calendar_date(data["due_date"]),
        penalty_rate=to_decimal(data.get("penalty_rate")),
        penalty_type=PenaltyType(data.get("penalty_type") or PenaltyType.FIXED),
        status=LoanStatus(data.get("status") or LoanStatus.ACTIVE),
        created_at=parse_timestamp(data["created_at"]),
        paid_at=_optional_timestamp(data.get("paid_at")),
        installment_number=_optional_int(data.get("installment_number")),
        installment_total=_optional_int(data.get("installment_total")),
        group_id=data.get("group_id"),
    )


def expense_from_dict(data: dict[str, Any]) -> Expense:
    """Build an Expense from its serialized form."""
    return Expense(
        expense_id=data["expense_id"],
        description=data.get("description", ""),
        amount=to_decimal(data.get("amount")),
        date=to_calendar_date(data["date"]),
        created_at=parse_timestamp(data["created_at"]),
        category=data.get("category") or "",
        notes=data.get("notes") or "",
    )
