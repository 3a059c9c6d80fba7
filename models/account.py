from dataclasses import dataclass
from decimal import Decimal

from utils.money import parse_money

ACCOUNT_TYPES = ("checking", "savings", "loan", "credit_card")
DEBT_ACCOUNT_TYPES = ("loan", "credit_card")


@dataclass
class Account:
    id: int
    name: str
    balance: Decimal = Decimal("0.00")
    account_type: str = "checking"

    @property
    def is_debt_account(self) -> bool:
        return self.account_type in DEBT_ACCOUNT_TYPES

    @classmethod
    def from_row(cls, row: dict) -> "Account":
        account_type = row.get("account_type") or "checking"
        if account_type not in ACCOUNT_TYPES:
            raise ValueError(
                f"Invalid account type '{account_type}'. "
                f"Must be one of: {', '.join(ACCOUNT_TYPES)}."
            )
        name = (row.get("name") or "").strip()
        if not name:
            raise ValueError("Account name cannot be empty.")
        return cls(
            id=row.get("id"),
            name=name,
            balance=parse_money(row.get("balance", 0)),
            account_type=account_type,
        )
