"""Client model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Client:
    """Borrower registered in the loan book."""

    client_id: str
    name: str
    phone: str
    created_at: datetime
    address: str = ""
    profession: str = ""
    cpf: str = ""  # national id
    photo: str = ""  # opaque image reference (data URL or path)
    collateral: str = ""  # description of the pledged guarantee
