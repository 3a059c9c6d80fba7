"""Load exported user data (accounts, budgets, recurring rules,
transactions) into model snapshots for the engine and report services.
"""
import json
import logging
from dataclasses import dataclass, field
from datetime import date

from models.account import Account
from models.budget import Budget
from models.recurring_item import RecurringItem
from models.transaction import Transaction

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    accounts: list[Account] = field(default_factory=list)
    budgets: list[Budget] = field(default_factory=list)
    recurring: list[RecurringItem] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def earliest_transaction_date(self) -> date | None:
        return min((tx.date for tx in self.transactions), default=None)


@dataclass
class RejectedRow:
    entity: str     # 'accounts' | 'budgets' | 'recurring_rules' | 'transactions'
    row: object
    error: str


class DataService:
    _BUILDERS = {
        "accounts": Account.from_row,
        "budgets": Budget.from_row,
        "recurring_rules": RecurringItem.from_row,
        "transactions": Transaction.from_row,
    }

    def load(self, data: dict) -> tuple[Snapshot, list[RejectedRow]]:
        """Convert an export dict into a Snapshot.

        Rows that fail validation are returned as RejectedRow entries
        instead of aborting the load.
        """
        built: dict[str, list] = {}
        rejected: list[RejectedRow] = []

        for key, builder in self._BUILDERS.items():
            built[key] = []
            rows = data.get(key) or []
            if not isinstance(rows, list):
                rejected.append(RejectedRow(entity=key, row=rows, error="Expected a list of rows."))
                logger.warning("Skipped %s: expected a list, got %s", key, type(rows).__name__)
                continue
            for idx, row in enumerate(rows, start=1):
                if not isinstance(row, dict):
                    rejected.append(RejectedRow(entity=key, row=row, error="Row must be an object."))
                    logger.warning("Skipped %s row %d: not an object", key, idx)
                    continue
                try:
                    built[key].append(builder(row))
                except (ValueError, TypeError, KeyError) as e:
                    rejected.append(RejectedRow(entity=key, row=row, error=str(e)))
                    logger.warning("Skipped %s row %d: %s", key, idx, e)

        snapshot = Snapshot(
            accounts=built["accounts"],
            budgets=built["budgets"],
            recurring=built["recurring_rules"],
            transactions=sorted(built["transactions"], key=lambda t: t.date),
        )
        logger.info(
            "Loaded %d accounts, %d budgets, %d recurring rules, %d transactions (%d rejected)",
            len(snapshot.accounts), len(snapshot.budgets), len(snapshot.recurring),
            len(snapshot.transactions), len(rejected),
        )
        return snapshot, rejected

    def load_file(self, path: str) -> tuple[Snapshot, list[RejectedRow]]:
        """Read a JSON export from disk and load it."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("Export file must contain a JSON object.")
        return self.load(data)
