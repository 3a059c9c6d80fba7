"""Day-by-day cash flow: each recurring occurrence lands on its exact date
alongside the one-time ledger entries.
"""
import logging
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal

from models.cash_flow import CashFlowDay, CashFlowTimeline, UpcomingPayment, UpcomingPayments
from models.period_window import PeriodWindow
from models.recurring_item import Kind, RecurringItem
from models.report import ZERO
from models.transaction import Transaction
from services.errors import RecurrenceError
from services.recurrence_engine import RecurrenceEngine
from services.report_service import scope_to_account
from utils.constants import UPCOMING_PAYMENT_DAYS
from utils.date_helpers import to_day, today

logger = logging.getLogger(__name__)


class CashFlowService:
    def __init__(self, engine: RecurrenceEngine):
        self._engine = engine

    def get_timeline(
        self,
        transactions: list[Transaction],
        items: list[RecurringItem],
        window: PeriodWindow,
        opening_balance: Decimal = ZERO,
        account_id: int | None = None,
    ) -> CashFlowTimeline:
        """Daily running balance across the window, one entry per day."""
        if window.start == date.min:
            raise ValueError("Cash-flow timeline needs a bounded window start.")

        one_time: dict[date, Decimal] = defaultdict(lambda: ZERO)
        for tx in scope_to_account(transactions, account_id):
            if window.contains(tx.date):
                one_time[tx.date] += tx.signed_amount

        timeline = CashFlowTimeline(
            start_date=window.start,
            end_date=window.end,
            opening_balance=opening_balance,
        )

        recurring: dict[date, Decimal] = defaultdict(lambda: ZERO)
        for item in scope_to_account(items, account_id):
            try:
                dates = self._engine.occurrence_dates(item, window)
            except RecurrenceError as e:
                logger.warning("Skipping recurring item %s in cash flow: %s", item.id, e)
                timeline.skipped.append(item.id)
                continue
            for d in dates:
                recurring[d] += item.signed_amount

        running = opening_balance
        for day in window.days():
            running += one_time[day] + recurring[day]
            timeline.days.append(CashFlowDay(
                date=day,
                one_time_net=one_time[day],
                recurring_net=recurring[day],
                balance=running,
            ))
        return timeline

    def get_upcoming_payments(
        self,
        items: list[RecurringItem],
        reference_date: date | None = None,
        days: int = UPCOMING_PAYMENT_DAYS,
        account_id: int | None = None,
    ) -> UpcomingPayments:
        """Active recurring expenses due within `days` days, today included."""
        if days < 1:
            raise ValueError("Days must be at least 1.")
        ref = to_day(reference_date) if reference_date is not None else today()
        horizon = ref + timedelta(days=days - 1)

        upcoming = UpcomingPayments()
        for item in scope_to_account(items, account_id):
            if item.kind is not Kind.EXPENSE:
                continue
            try:
                next_due = self._engine.next_occurrence_on_or_after(item, ref)
            except RecurrenceError as e:
                logger.warning("Skipping recurring item %s in upcoming payments: %s", item.id, e)
                upcoming.skipped.append(item.id)
                continue
            if next_due is None or next_due > horizon:
                continue
            upcoming.payments.append(UpcomingPayment(
                item_id=item.id,
                name=item.name,
                due_date=next_due,
                amount=item.amount,
                days_away=(next_due - ref).days,
            ))
        upcoming.payments.sort(key=lambda p: (p.due_date, p.name))
        return upcoming
