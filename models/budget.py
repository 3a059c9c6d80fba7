from dataclasses import dataclass
from decimal import Decimal

from utils.money import parse_money


@dataclass
class Budget:
    category_id: int
    category_name: str
    month: str          # 'YYYY-MM'
    limit_amount: Decimal
    spent_amount: Decimal = Decimal("0.00")
    id: int | None = None

    @property
    def percentage(self) -> float:
        if self.limit_amount <= 0:
            return 0.0
        return float(self.spent_amount / self.limit_amount)

    @property
    def remaining(self) -> Decimal:
        return max(Decimal("0.00"), self.limit_amount - self.spent_amount)

    @property
    def is_over(self) -> bool:
        return self.limit_amount > 0 and self.spent_amount > self.limit_amount

    @classmethod
    def from_row(cls, row: dict) -> "Budget":
        limit_amount = parse_money(row.get("limit_amount"))
        if limit_amount < 0:
            raise ValueError("Budget limit must be non-negative.")
        return cls(
            id=row.get("id"),
            category_id=row.get("category_id"),
            category_name=row.get("category_name") or "",
            month=row.get("month") or "",
            limit_amount=limit_amount,
        )
