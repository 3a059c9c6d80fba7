from datetime import date
from decimal import Decimal

from models.account import Account
from models.recurring_item import RecurringItem
from models.report import ZERO
from models.transaction import Transaction
from services.report_service import ReportService
from utils.date_helpers import format_month, friendly_month, to_day, today


class NetWorthService:
    def __init__(self, report_service: ReportService):
        self._report_svc = report_service

    def get_breakdown(self, accounts: list[Account]) -> dict:
        """Return net worth breakdown across all accounts.

        Debt accounts hold the amount owed; it counts as a liability.
        """
        assets = []
        liabilities = []
        total_assets = ZERO
        total_liabilities = ZERO

        for account in accounts:
            if account.is_debt_account:
                amount_owed = abs(account.balance)
                liabilities.append({"name": account.name, "amount_owed": amount_owed})
                total_liabilities += amount_owed
            else:
                assets.append({"name": account.name, "balance": account.balance})
                total_assets += account.balance

        return {
            "assets": assets,
            "liabilities": liabilities,
            "total_assets": total_assets,
            "total_liabilities": total_liabilities,
            "net_worth": total_assets - total_liabilities,
        }

    def get_total_balance(self, accounts: list[Account], account_id: int | None = None) -> Decimal:
        if account_id is not None:
            accounts = [a for a in accounts if a.id == account_id]
        return self.get_breakdown(accounts)["net_worth"]

    def get_projected_month_balance(
        self,
        accounts: list[Account],
        transactions: list[Transaction],
        items: list[RecurringItem],
        reference_date: date | None = None,
        account_id: int | None = None,
    ) -> dict:
        """This month's balance: account balance + month income - month expenses,
        recurring items included.
        """
        ref = to_day(reference_date) if reference_date is not None else today()
        summary = self._report_svc.period_summary(
            transactions,
            items,
            "month",
            ref,
            account_id=account_id,
        )
        balance = self.get_total_balance(accounts, account_id)
        return {
            "month": friendly_month(format_month(ref)),
            "balance": balance,
            "income": summary.total_income,
            "expense": summary.total_expense,
            "projected_balance": balance + summary.net,
            "skipped": summary.skipped,
        }
