from __future__ import annotations

import dataclasses
from datetime import date
from decimal import Decimal

import pytest

from models.budget import Budget
from models.period_window import PeriodWindow
from models.recurring_item import Frequency, Kind, RecurringItem
from models.transaction import Transaction
from services.errors import InvalidRecurringItem


def _row(**overrides):
    row = {
        "id": 11, "name": "Netflix", "type": "expense", "amount": "15.99",
        "frequency": "monthly", "start_date": "2024-03-31", "end_date": "2024-12-31",
        "is_active": True, "category_name": "Entertainment",
    }
    row.update(overrides)
    return row


def test_recurring_item_from_row():
    item = RecurringItem.from_row(_row())

    assert item.amount == Decimal("15.99")
    assert item.kind is Kind.EXPENSE
    assert item.frequency is Frequency.MONTHLY
    assert (item.start_date, item.end_date) == (date(2024, 3, 31), date(2024, 12, 31))
    assert item.signed_amount == Decimal("-15.99")
    assert item.category_name == "Entertainment"


@pytest.mark.parametrize("overrides, message", [
    ({"type": "transfer"}, "Unknown type"),
    ({"frequency": "hourly"}, "Unknown frequency"),
    ({"amount": "ten"}, "Invalid amount"),
    ({"amount": None}, "Invalid amount"),
    ({"start_date": "2024-02-30"}, "Invalid date"),
    ({"start_date": None}, "Invalid date"),
    ({"start_date": "2024-01-31garbage"}, "Invalid date"),
    ({"end_date": "2024-01-01"}, "before start"),
])
def test_recurring_item_from_row_rejects(overrides, message):
    with pytest.raises(InvalidRecurringItem, match=message) as exc_info:
        RecurringItem.from_row(_row(**overrides))
    assert exc_info.value.item_id == 11


def test_recurring_item_is_immutable():
    item = RecurringItem.from_row(_row())
    with pytest.raises(dataclasses.FrozenInstanceError):
        item.amount = Decimal("0")


def test_same_day_end_date_is_valid():
    item = RecurringItem.from_row(_row(end_date="2024-03-31"))
    assert item.end_date == item.start_date


def test_transaction_from_row_keeps_magnitude():
    tx = Transaction.from_row({"id": 1, "type": "expense", "amount": "(20.00)", "date": "2024-06-01"})

    assert tx.amount == Decimal("20.00")
    assert tx.signed_amount == Decimal("-20.00")


def test_budget_properties():
    budget = Budget(category_id=1, category_name="Food", month="2024-06",
                    limit_amount=Decimal("200"), spent_amount=Decimal("50"))

    assert budget.percentage == 0.25
    assert budget.remaining == Decimal("150")
    assert not budget.is_over
    assert Budget(category_id=1, category_name="x", month="2024-06",
                  limit_amount=Decimal("0")).percentage == 0.0


def test_budget_rejects_negative_limit():
    with pytest.raises(ValueError):
        Budget.from_row({"category_id": 1, "month": "2024-06", "limit_amount": -1})


def test_period_window_days():
    window = PeriodWindow(date(2024, 2, 28), date(2024, 3, 1))
    assert list(window.days()) == [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]
    assert not window.contains(date(2024, 3, 2))


def test_period_window_days_reaches_date_max():
    window = PeriodWindow(date(9999, 12, 30), date.max)
    assert list(window.days()) == [date(9999, 12, 30), date(9999, 12, 31)]
    assert list(PeriodWindow(date(2024, 3, 2), date(2024, 3, 1)).days()) == []
