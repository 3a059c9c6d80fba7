from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from services.errors import InvalidRecurringItem
from utils.date_helpers import to_day
from utils.money import parse_money


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Kind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def sign(self) -> int:
        return 1 if self is Kind.INCOME else -1


@dataclass(frozen=True)
class RecurringItem:
    id: object
    amount: Decimal
    kind: Kind
    frequency: Frequency
    start_date: date
    end_date: Optional[date] = None
    is_active: bool = True
    name: str = ""
    account_id: Optional[int] = None
    category_id: Optional[int] = None
    category_name: str = ""
    description: str = ""

    @property
    def signed_amount(self) -> Decimal:
        return self.amount * self.kind.sign

    @classmethod
    def from_row(cls, row: dict) -> "RecurringItem":
        """Build an item from a storage row, rejecting anything unusable.

        Rows use the storage column names: ``type`` holds the kind and
        ``is_active`` may be stored as 0/1.
        """
        item_id = row.get("id")
        try:
            kind = Kind(str(row.get("type", row.get("kind", ""))).strip().lower())
        except ValueError:
            raise InvalidRecurringItem(
                f"Unknown type {row.get('type')!r}", item_id
            ) from None
        try:
            frequency = Frequency(str(row.get("frequency", "")).strip().lower())
        except ValueError:
            raise InvalidRecurringItem(
                f"Unknown frequency {row.get('frequency')!r}", item_id
            ) from None
        try:
            amount = parse_money(row.get("amount"))
        except ValueError as exc:
            raise InvalidRecurringItem(f"Invalid amount: {exc}", item_id) from None
        try:
            start = to_day(row.get("start_date"))
            end = to_day(row["end_date"]) if row.get("end_date") else None
        except ValueError as exc:
            raise InvalidRecurringItem(str(exc), item_id) from None

        item = cls(
            id=item_id,
            amount=amount,
            kind=kind,
            frequency=frequency,
            start_date=start,
            end_date=end,
            is_active=_as_bool(row.get("is_active", True)),
            name=row.get("name") or "",
            account_id=row.get("account_id"),
            category_id=row.get("category_id"),
            category_name=row.get("category_name") or "",
            description=row.get("description") or "",
        )
        item.validate()
        return item

    def validate(self):
        if not isinstance(self.kind, Kind):
            raise InvalidRecurringItem(f"Unknown kind {self.kind!r}", self.id)
        if not isinstance(self.frequency, Frequency):
            raise InvalidRecurringItem(f"Unknown frequency {self.frequency!r}", self.id)
        if not isinstance(self.amount, Decimal) or not self.amount.is_finite():
            raise InvalidRecurringItem(f"Invalid amount {self.amount!r}", self.id)
        if self.amount < 0:
            raise InvalidRecurringItem("Amount cannot be negative.", self.id)
        if not _is_day(self.start_date):
            raise InvalidRecurringItem(f"Invalid start date {self.start_date!r}", self.id)
        if self.end_date is not None:
            if not _is_day(self.end_date):
                raise InvalidRecurringItem(f"Invalid end date {self.end_date!r}", self.id)
            if self.end_date < self.start_date:
                raise InvalidRecurringItem("End date is before start date.", self.id)


def _is_day(value) -> bool:
    return isinstance(value, date) and not isinstance(value, datetime)


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)
