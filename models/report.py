from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List

from models.budget import Budget

ZERO = Decimal("0.00")


@dataclass
class RecurringTotals:
    """Recurring income/expense magnitudes for one window."""
    income: Decimal = ZERO
    expense: Decimal = ZERO
    skipped: List[object] = field(default_factory=list)  # item ids the engine rejected

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


@dataclass
class PeriodSummary:
    start_date: date
    end_date: date
    one_time_income: Decimal
    one_time_expense: Decimal
    recurring_income: Decimal
    recurring_expense: Decimal
    skipped: List[object] = field(default_factory=list)

    @property
    def total_income(self) -> Decimal:
        return self.one_time_income + self.recurring_income

    @property
    def total_expense(self) -> Decimal:
        return self.one_time_expense + self.recurring_expense

    @property
    def net(self) -> Decimal:
        return self.total_income - self.total_expense


@dataclass
class BudgetAlert:
    category_id: int
    category_name: str
    severity: str   # 'error' (over budget) | 'warning' (near limit)
    percentage: float
    detail: str


@dataclass
class BudgetStatus:
    month: str
    budgets: List[Budget] = field(default_factory=list)
    skipped: List[object] = field(default_factory=list)


@dataclass
class CategoryBreakdown:
    """Expense totals per category name, largest first."""
    categories: List[dict] = field(default_factory=list)  # [{category, total}]
    skipped: List[object] = field(default_factory=list)
