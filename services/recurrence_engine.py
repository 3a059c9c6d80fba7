"""
Recurrence engine: occurrence math for recurring income and expenses.

Pure calculations over RecurringItem snapshots: activity state, next
occurrence, occurrence counts and amounts inside a PeriodWindow, and the
resolution of period tokens into windows. No storage access; no side effects.
"""
import logging
from datetime import date, timedelta
from decimal import Decimal

from models.period_window import PeriodToken, PeriodWindow
from models.recurring_item import Frequency, RecurringItem
from services.errors import InvalidRecurringItem, OccurrenceSearchExhausted
from utils.constants import OCCURRENCE_SEARCH_LIMIT
from utils.date_helpers import (
    add_months, first_of_month, first_of_quarter, first_of_year,
    last_of_month, last_of_quarter, last_of_year, month_index, to_day, today,
)

logger = logging.getLogger(__name__)


class RecurrenceEngine:
    def __init__(self, search_limit: int = OCCURRENCE_SEARCH_LIMIT):
        if search_limit < 1:
            raise ValueError("Search limit must be at least 1.")
        self._search_limit = search_limit

    # ── Activity ─────────────────────────────────────────────────────────────

    def is_active_on(self, item: RecurringItem, on_date) -> bool:
        """True when the item is enabled and on_date lies within its lifetime."""
        d = to_day(on_date)
        if not item.is_active:
            return False
        if item.start_date > d:
            return False
        return item.end_date is None or item.end_date >= d

    # ── Occurrences ──────────────────────────────────────────────────────────

    def occurrence_at(self, item: RecurringItem, index: int) -> date:
        """Return the index-th occurrence (0 = start date), ignoring end date.

        Computed from the start date every time, so a month clamped to its
        last day never shifts the anchor day of later months.
        """
        start = item.start_date
        if item.frequency is Frequency.DAILY:
            return start + timedelta(days=index)
        if item.frequency is Frequency.WEEKLY:
            return start + timedelta(weeks=index)
        if item.frequency is Frequency.MONTHLY:
            return add_months(start, index)
        if item.frequency is Frequency.YEARLY:
            return add_months(start, 12 * index)
        raise InvalidRecurringItem(f"Unknown frequency {item.frequency!r}", item.id)

    def next_occurrence_on_or_after(self, item: RecurringItem, from_date) -> date | None:
        """Earliest occurrence >= from_date, or None if the item cannot occur.

        Inactive items and items ended before from_date return None.
        """
        item.validate()
        from_date = to_day(from_date)
        if not item.is_active:
            return None
        if item.end_date is not None and item.end_date < from_date:
            return None
        if item.start_date >= from_date:
            return item.start_date

        index = self._first_index_on_or_after(item, from_date)
        if index is None:
            return None
        occurrence = self.occurrence_at(item, index)
        if item.end_date is not None and occurrence > item.end_date:
            return None
        return occurrence

    def occurrence_dates(self, item: RecurringItem, window: PeriodWindow) -> list[date]:
        """Exact occurrence dates of the item inside the window, in order."""
        item.validate()
        if not item.is_active:
            return []
        last = min(item.end_date or window.end, window.end)
        if window.start <= item.start_date:
            index = 0
        else:
            index = self._first_index_on_or_after(item, window.start)
            if index is None:
                return []

        result = []
        current = self._occurrence_or_none(item, index)
        while current is not None and current <= last:
            result.append(current)
            index += 1
            current = self._occurrence_or_none(item, index)
        return result

    def _occurrence_or_none(self, item: RecurringItem, index: int) -> date | None:
        """occurrence_at, or None once the date would pass date.max."""
        try:
            return self.occurrence_at(item, index)
        except InvalidRecurringItem:
            raise
        except (OverflowError, ValueError):
            return None

    def _first_index_on_or_after(self, item: RecurringItem, from_date: date) -> int | None:
        """Index of the first occurrence >= from_date (from_date > start_date).

        Jumps close to from_date arithmetically, then steps forward because
        month lengths are irregular. Returns None when no such occurrence
        fits in the calendar. Raises OccurrenceSearchExhausted when the
        stepping exceeds the search limit.
        """
        start = item.start_date
        if item.frequency is Frequency.DAILY:
            index = (from_date - start).days
        elif item.frequency is Frequency.WEEKLY:
            index = -(-(from_date - start).days // 7)
        elif item.frequency is Frequency.MONTHLY:
            index = max(0, month_index(from_date) - month_index(start) - 1)
        elif item.frequency is Frequency.YEARLY:
            index = max(0, from_date.year - start.year - 1)
        else:
            raise InvalidRecurringItem(f"Unknown frequency {item.frequency!r}", item.id)

        steps = 0
        while True:
            current = self._occurrence_or_none(item, index)
            if current is None:
                return None
            if current >= from_date:
                return index
            steps += 1
            if steps > self._search_limit:
                logger.debug(
                    "Occurrence search for item %s stopped after %d steps",
                    item.id, self._search_limit,
                )
                raise OccurrenceSearchExhausted(item.id, from_date, self._search_limit)
            index += 1

    # ── Window counting ──────────────────────────────────────────────────────

    def occurrences_in_window(self, item: RecurringItem, window: PeriodWindow) -> int:
        """Number of occurrences of the item inside the window.

        Inactive items count 0. Monthly items count calendar months touched
        by the clipped window rather than exact anchor days.
        """
        item.validate()
        if not item.is_active:
            return 0

        effective_start = max(item.start_date, window.start)
        effective_end = min(item.end_date or window.end, window.end)
        if effective_start > effective_end:
            return 0

        days = (effective_end - effective_start).days
        if item.frequency is Frequency.DAILY:
            return days + 1
        if item.frequency is Frequency.WEEKLY:
            return days // 7 + 1
        if item.frequency is Frequency.MONTHLY:
            return month_index(effective_end) - month_index(effective_start) + 1
        if item.frequency is Frequency.YEARLY:
            return self._anniversaries_between(item.start_date, effective_start, effective_end)
        raise InvalidRecurringItem(f"Unknown frequency {item.frequency!r}", item.id)

    def amount_in_window(self, item: RecurringItem, window: PeriodWindow) -> Decimal:
        """Unsigned total of the item's occurrences inside the window."""
        return item.amount * self.occurrences_in_window(item, window)

    def signed_amount_in_window(self, item: RecurringItem, window: PeriodWindow) -> Decimal:
        """Income positive, expense negative."""
        return self.amount_in_window(item, window) * item.kind.sign

    @staticmethod
    def _anniversaries_between(anchor: date, start: date, end: date) -> int:
        # start >= anchor, so every year in range has a candidate anniversary
        first = add_months(anchor, 12 * (start.year - anchor.year))
        last = add_months(anchor, 12 * (end.year - anchor.year))
        count = end.year - start.year + 1
        if first < start:
            count -= 1
        if last > end:
            count -= 1
        return max(count, 0)

    # ── Windows ──────────────────────────────────────────────────────────────

    def resolve_window(self, period, reference_date=None, earliest=None) -> PeriodWindow:
        """Turn a period token into an inclusive window around reference_date.

        ``all`` runs from ``earliest`` (typically the first transaction date)
        or date.min up to the reference date.
        """
        token = coerce_period(period)
        ref = to_day(reference_date) if reference_date is not None else today()

        if token is PeriodToken.MONTH:
            return PeriodWindow(first_of_month(ref), last_of_month(ref))
        if token is PeriodToken.QUARTER:
            return PeriodWindow(first_of_quarter(ref), last_of_quarter(ref))
        if token is PeriodToken.YEAR:
            return PeriodWindow(first_of_year(ref), last_of_year(ref))
        start = to_day(earliest) if earliest is not None else date.min
        return PeriodWindow(min(start, ref), ref)


def coerce_period(period) -> PeriodToken:
    if isinstance(period, PeriodToken):
        return period
    try:
        return PeriodToken(str(period).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown period {period!r}.") from None
