from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from models.recurring_item import Frequency, Kind, RecurringItem
from models.transaction import Transaction
from services.recurrence_engine import RecurrenceEngine
from utils import app_config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    # keep tests away from the real ~/.recurring_ledger
    config_dir = tmp_path / "config"
    monkeypatch.setattr(app_config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(app_config, "CONFIG_FILE", config_dir / "config.json")
    return config_dir / "config.json"


@pytest.fixture()
def engine() -> RecurrenceEngine:
    return RecurrenceEngine()


@pytest.fixture()
def make_item():
    def _make(**overrides) -> RecurringItem:
        fields = dict(
            id=1,
            amount=Decimal("100.00"),
            kind=Kind.EXPENSE,
            frequency=Frequency.MONTHLY,
            start_date=date(2024, 1, 1),
            end_date=None,
            is_active=True,
            name="Rent",
        )
        fields.update(overrides)
        return RecurringItem(**fields)

    return _make


@pytest.fixture()
def make_tx():
    counter = iter(range(1, 10_000))

    def _make(kind: Kind, amount: str, on: date, **overrides) -> Transaction:
        fields = dict(
            id=next(counter),
            account_id=1,
            kind=kind,
            amount=Decimal(amount),
            date=on,
        )
        fields.update(overrides)
        return Transaction(**fields)

    return _make
