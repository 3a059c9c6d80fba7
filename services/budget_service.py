import logging
from collections import defaultdict
from dataclasses import replace
from decimal import Decimal

from models.budget import Budget
from models.period_window import PeriodWindow
from models.recurring_item import Kind, RecurringItem
from models.report import BudgetAlert, BudgetStatus, ZERO
from models.transaction import Transaction
from services.errors import RecurrenceError
from services.recurrence_engine import RecurrenceEngine
from utils.constants import BUDGET_ALERT_THRESHOLD
from utils.currency import format_currency
from utils.date_helpers import format_month, month_range, today

logger = logging.getLogger(__name__)


class BudgetService:
    def __init__(self, engine: RecurrenceEngine):
        self._engine = engine

    def get_budget_status(
        self,
        budgets: list[Budget],
        transactions: list[Transaction],
        items: list[RecurringItem],
        month: str | None = None,
    ) -> BudgetStatus:
        """Return the month's budgets with spent amounts filled in.

        Spending is one-time expenses in the month plus each active
        recurring expense's contribution to the month, matched by category.
        Recurring items the engine rejects are listed in ``skipped``.
        """
        if month is None:
            month = format_month(today())
        window = PeriodWindow(*month_range(month))
        spending, skipped = self._spending_by_category(transactions, items, window)
        return BudgetStatus(
            month=month,
            budgets=[
                replace(b, spent_amount=spending.get(b.category_id, ZERO))
                for b in budgets
                if b.month == month
            ],
            skipped=skipped,
        )

    def get_alerts(
        self,
        budgets: list[Budget],
        transactions: list[Transaction],
        items: list[RecurringItem],
        month: str | None = None,
        threshold: float = BUDGET_ALERT_THRESHOLD,
    ) -> list[BudgetAlert]:
        """Budgets over their limit ('error') or past threshold ('warning')."""
        alerts = []
        for budget in self.get_budget_status(budgets, transactions, items, month).budgets:
            if budget.limit_amount <= 0:
                continue
            pct = budget.percentage
            if pct >= 1.0:
                severity = "error"
            elif pct >= threshold:
                severity = "warning"
            else:
                continue
            alerts.append(BudgetAlert(
                category_id=budget.category_id,
                category_name=budget.category_name,
                severity=severity,
                percentage=pct,
                detail=(
                    f"Spent {format_currency(budget.spent_amount)} of "
                    f"{format_currency(budget.limit_amount)} limit "
                    f"({pct*100:.0f}%)"
                ),
            ))
        order = {"error": 0, "warning": 1}
        return sorted(alerts, key=lambda a: order[a.severity])

    def _spending_by_category(
        self,
        transactions: list[Transaction],
        items: list[RecurringItem],
        window: PeriodWindow,
    ) -> tuple[dict[int, Decimal], list]:
        spending: dict[int, Decimal] = defaultdict(lambda: ZERO)
        skipped = []
        for tx in transactions:
            if tx.kind is Kind.EXPENSE and tx.category_id is not None and window.contains(tx.date):
                spending[tx.category_id] += tx.amount
        for item in items:
            if item.kind is not Kind.EXPENSE or item.category_id is None:
                continue
            try:
                spending[item.category_id] += self._engine.amount_in_window(item, window)
            except RecurrenceError as e:
                logger.warning("Skipping recurring item %s in budget: %s", item.id, e)
                skipped.append(item.id)
        return spending, skipped
