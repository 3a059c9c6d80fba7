from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from models.recurring_item import Kind
from utils.date_helpers import to_day
from utils.money import parse_money


@dataclass(frozen=True)
class Transaction:
    id: int
    account_id: Optional[int]
    kind: Kind
    amount: Decimal         # magnitude; kind carries the sign
    date: date
    category_id: Optional[int] = None
    category_name: str = ""
    description: str = ""

    @property
    def signed_amount(self) -> Decimal:
        return self.amount * self.kind.sign

    @classmethod
    def from_row(cls, row: dict) -> "Transaction":
        """Raises ValueError for an unknown type, amount or date."""
        amount = parse_money(row.get("amount"))
        return cls(
            id=row.get("id"),
            account_id=row.get("account_id"),
            kind=Kind(str(row.get("type", row.get("kind", ""))).strip().lower()),
            amount=abs(amount),
            date=to_day(row.get("date")),
            category_id=row.get("category_id"),
            category_name=row.get("category_name") or "",
            description=row.get("description") or "",
        )
