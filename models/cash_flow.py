from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List


@dataclass
class CashFlowDay:
    date: date
    one_time_net: Decimal
    recurring_net: Decimal
    balance: Decimal


@dataclass
class CashFlowTimeline:
    start_date: date
    end_date: date
    opening_balance: Decimal
    days: List[CashFlowDay] = field(default_factory=list)
    skipped: List[object] = field(default_factory=list)

    @property
    def closing_balance(self) -> Decimal:
        return self.days[-1].balance if self.days else self.opening_balance

    @property
    def lowest_balance(self) -> Decimal:
        return min((d.balance for d in self.days), default=self.opening_balance)


@dataclass
class UpcomingPayment:
    item_id: object
    name: str
    due_date: date
    amount: Decimal
    days_away: int


@dataclass
class UpcomingPayments:
    payments: List[UpcomingPayment] = field(default_factory=list)
    skipped: List[object] = field(default_factory=list)
