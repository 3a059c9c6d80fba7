from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

import pytest

from models.recurring_item import Frequency, Kind
from services.data_service import DataService


@pytest.fixture()
def export():
    return {
        "export_version": 1,
        "accounts": [
            {"id": 1, "name": "Checking", "balance": "1,250.00", "account_type": "checking"},
            {"id": 2, "name": "", "balance": 0},
        ],
        "budgets": [
            {"id": 1, "category_id": 5, "category_name": "Food", "month": "2024-06", "limit_amount": 300},
        ],
        "recurring_rules": [
            {
                "id": 1, "name": "Rent", "type": "expense", "amount": "$1,200.00",
                "frequency": "monthly", "start_date": "2024-01-01", "end_date": None,
                "is_active": 1, "account_id": 1, "category_id": 7,
            },
            {
                "id": 2, "name": "Paused", "type": "Income", "amount": 40,
                "frequency": "Weekly", "start_date": "2024-02-01T00:00:00.000Z",
                "is_active": "0",
            },
            {"id": 3, "type": "expense", "amount": 10, "frequency": "fortnightly", "start_date": "2024-01-01"},
            {"id": 4, "type": "expense", "amount": 10, "frequency": "daily",
             "start_date": "2024-05-01", "end_date": "2024-04-01"},
            {"id": 5, "type": "expense", "amount": "-5", "frequency": "daily", "start_date": "2024-05-01"},
        ],
        "transactions": [
            {"id": 2, "account_id": 1, "type": "expense", "amount": 12.5, "date": "2024-06-02"},
            {"id": 1, "account_id": 1, "type": "income", "amount": "3000", "date": "2024-06-01"},
            {"id": 3, "account_id": 1, "type": "expense", "amount": 1, "date": "06/03/2024"},
        ],
    }


def test_load_builds_models(export):
    snapshot, _ = DataService().load(export)

    assert [a.name for a in snapshot.accounts] == ["Checking"]
    assert snapshot.accounts[0].balance == Decimal("1250.00")
    assert snapshot.budgets[0].limit_amount == Decimal("300.00")

    rent, paused = snapshot.recurring
    assert rent.amount == Decimal("1200.00")
    assert rent.kind is Kind.EXPENSE
    assert rent.frequency is Frequency.MONTHLY
    assert rent.is_active
    assert paused.kind is Kind.INCOME
    assert paused.frequency is Frequency.WEEKLY
    assert paused.start_date == date(2024, 2, 1)
    assert not paused.is_active

    assert [t.id for t in snapshot.transactions] == [1, 2]
    assert snapshot.earliest_transaction_date == date(2024, 6, 1)


def test_load_collects_rejected_rows(export):
    _, rejected = DataService().load(export)

    assert [(r.entity, r.row.get("id")) for r in rejected] == [
        ("accounts", 2),
        ("recurring_rules", 3),
        ("recurring_rules", 4),
        ("recurring_rules", 5),
        ("transactions", 3),
    ]
    assert "before start" in rejected[2].error


def test_load_file(tmp_path, export):
    path = tmp_path / "export.json"
    path.write_text(json.dumps(export), encoding="utf-8")

    snapshot, rejected = DataService().load_file(str(path))

    assert len(snapshot.recurring) == 2
    assert len(rejected) == 5


def test_load_file_requires_object(tmp_path):
    path = tmp_path / "export.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError):
        DataService().load_file(str(path))


def test_empty_export():
    snapshot, rejected = DataService().load({})

    assert snapshot.recurring == []
    assert snapshot.earliest_transaction_date is None
    assert rejected == []


def test_non_object_rows_are_rejected():
    snapshot, rejected = DataService().load({
        "recurring_rules": ["oops", None],
        "transactions": {"id": 1},
    })

    assert snapshot.recurring == []
    assert snapshot.transactions == []
    assert [(r.entity, r.row) for r in rejected] == [
        ("recurring_rules", "oops"),
        ("recurring_rules", None),
        ("transactions", {"id": 1}),
    ]


def test_mixed_transaction_ids_keep_input_order_per_day():
    snapshot, rejected = DataService().load({
        "transactions": [
            {"id": "a", "type": "expense", "amount": 5, "date": "2024-06-02"},
            {"id": 2, "type": "expense", "amount": 7, "date": "2024-06-02"},
            {"id": None, "type": "income", "amount": 9, "date": "2024-06-01"},
        ],
    })

    assert rejected == []
    assert [t.id for t in snapshot.transactions] == [None, "a", 2]


def test_offset_timestamps_load_as_utc_days():
    snapshot, _ = DataService().load({
        "transactions": [
            {"id": 1, "type": "expense", "amount": 5, "date": "2024-01-31T23:00:00-05:00"},
        ],
    })

    assert snapshot.transactions[0].date == date(2024, 2, 1)
