import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal

from models.period_window import PeriodWindow
from models.recurring_item import Kind, RecurringItem
from models.report import CategoryBreakdown, PeriodSummary, RecurringTotals, ZERO
from models.transaction import Transaction
from services.errors import RecurrenceError
from services.recurrence_engine import RecurrenceEngine
from utils.constants import DEFAULT_PERIOD, MONTHLY_COMPARISON_MONTHS, UNCATEGORIZED
from utils.date_helpers import add_months, first_of_month, format_month, last_of_month, to_day, today

logger = logging.getLogger(__name__)


def scope_to_account(rows, account_id):
    """Rows belonging to account_id; None means all accounts."""
    if account_id is None:
        return list(rows)
    return [r for r in rows if r.account_id == account_id]


def one_time_totals(
    transactions: list[Transaction], window: PeriodWindow
) -> tuple[Decimal, Decimal]:
    """(income, expense) magnitudes of ledger transactions inside the window."""
    income = ZERO
    expense = ZERO
    for tx in transactions:
        if not window.contains(tx.date):
            continue
        if tx.kind is Kind.INCOME:
            income += tx.amount
        else:
            expense += tx.amount
    return income, expense


class ReportService:
    def __init__(self, engine: RecurrenceEngine):
        self._engine = engine

    def recurring_totals(
        self,
        items: list[RecurringItem],
        window: PeriodWindow,
        account_id: int | None = None,
    ) -> RecurringTotals:
        """Sum recurring contributions in the window, skipping rejected items."""
        totals = RecurringTotals()
        for item in scope_to_account(items, account_id):
            try:
                amount = self._engine.amount_in_window(item, window)
            except RecurrenceError as e:
                logger.warning("Skipping recurring item %s: %s", item.id, e)
                totals.skipped.append(item.id)
                continue
            if item.kind is Kind.INCOME:
                totals.income += amount
            else:
                totals.expense += amount
        return totals

    def period_summary(
        self,
        transactions: list[Transaction],
        items: list[RecurringItem],
        period=DEFAULT_PERIOD,
        reference_date: date | None = None,
        account_id: int | None = None,
        window: PeriodWindow | None = None,
    ) -> PeriodSummary:
        """One-time plus recurring income and expenses for a period.

        Pass ``window`` for a custom range; otherwise the period token is
        resolved around reference_date. The ``all`` period starts at the
        earliest transaction in scope.
        """
        transactions = scope_to_account(transactions, account_id)
        if window is None:
            earliest = min((tx.date for tx in transactions), default=None)
            window = self._engine.resolve_window(period, reference_date, earliest=earliest)

        income, expense = one_time_totals(transactions, window)
        recurring = self.recurring_totals(items, window, account_id)
        return PeriodSummary(
            start_date=window.start,
            end_date=window.end,
            one_time_income=income,
            one_time_expense=expense,
            recurring_income=recurring.income,
            recurring_expense=recurring.expense,
            skipped=recurring.skipped,
        )

    def monthly_comparison(
        self,
        transactions: list[Transaction],
        items: list[RecurringItem],
        reference_date: date | None = None,
        months: int = MONTHLY_COMPARISON_MONTHS,
        account_id: int | None = None,
    ) -> list[dict]:
        """Return [{month, income, expense, recurring_income, recurring_expense, net, skipped}]
        for the `months` months ending with the reference month, oldest first.
        """
        if months < 1:
            raise ValueError("Months must be at least 1.")
        ref = to_day(reference_date) if reference_date is not None else today()
        transactions = scope_to_account(transactions, account_id)
        month_start = first_of_month(ref)

        result = []
        for i in range(months - 1, -1, -1):
            start = add_months(month_start, -i)
            window = PeriodWindow(start, last_of_month(start))
            income, expense = one_time_totals(transactions, window)
            recurring = self.recurring_totals(items, window, account_id)
            result.append({
                "month": format_month(start),
                "income": income,
                "expense": expense,
                "recurring_income": recurring.income,
                "recurring_expense": recurring.expense,
                "net": income + recurring.income - expense - recurring.expense,
                "skipped": recurring.skipped,
            })
        return result

    def expense_change(
        self,
        transactions: list[Transaction],
        items: list[RecurringItem],
        reference_date: date | None = None,
        account_id: int | None = None,
    ) -> dict:
        """Compare this month's total expenses against last month's.

        percent_change is positive when spending went down.
        """
        last, current = self.monthly_comparison(
            transactions, items, reference_date, months=2, account_id=account_id
        )
        skipped = last["skipped"] + [i for i in current["skipped"] if i not in last["skipped"]]
        current_expenses = current["expense"] + current["recurring_expense"]
        last_expenses = last["expense"] + last["recurring_expense"]
        if last_expenses:
            percent_change = float((last_expenses - current_expenses) / last_expenses * 100)
        else:
            percent_change = 0.0
        return {
            "current_month_expenses": current_expenses,
            "last_month_expenses": last_expenses,
            "percent_change": percent_change,
            "trend": "lower" if percent_change >= 0 else "higher",
            "skipped": skipped,
        }

    def expense_by_category(
        self,
        transactions: list[Transaction],
        items: list[RecurringItem],
        window: PeriodWindow,
        account_id: int | None = None,
    ) -> CategoryBreakdown:
        """Category totals sorted by total, largest first."""
        totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
        skipped = []

        for tx in scope_to_account(transactions, account_id):
            if tx.kind is Kind.EXPENSE and window.contains(tx.date):
                totals[tx.category_name or UNCATEGORIZED] += tx.amount

        for item in scope_to_account(items, account_id):
            if item.kind is not Kind.EXPENSE:
                continue
            try:
                amount = self._engine.amount_in_window(item, window)
            except RecurrenceError as e:
                logger.warning("Skipping recurring item %s: %s", item.id, e)
                skipped.append(item.id)
                continue
            totals[item.category_name or UNCATEGORIZED] += amount

        rows = [
            {"category": name, "total": total}
            for name, total in totals.items()
            if total > 0
        ]
        return CategoryBreakdown(
            categories=sorted(rows, key=lambda r: (-r["total"], r["category"])),
            skipped=skipped,
        )
