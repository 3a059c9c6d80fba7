import logging
import os
import sys

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from services.budget_service import BudgetService
from services.cash_flow_service import CashFlowService
from services.data_service import DataService
from services.net_worth_service import NetWorthService
from services.recurrence_engine import RecurrenceEngine
from services.report_service import ReportService
from utils.app_config import get_setting
from utils.constants import APP_NAME
from utils.currency import format_currency, format_signed
from utils.date_helpers import format_month, today

logger = logging.getLogger(APP_NAME)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        print(f"usage: {os.path.basename(sys.argv[0])} EXPORT.json", file=sys.stderr)
        return 2

    # ── Logging ──────────────────────────────────────────────────────────────
    logging.basicConfig(
        level=str(get_setting("log_level")).upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    # ── Services ─────────────────────────────────────────────────────────────
    engine = RecurrenceEngine(search_limit=int(get_setting("occurrence_search_limit")))
    report_svc = ReportService(engine)
    budget_svc = BudgetService(engine)
    net_worth_svc = NetWorthService(report_svc)
    cash_flow_svc = CashFlowService(engine)
    data_svc = DataService()

    # ── Load snapshot ────────────────────────────────────────────────────────
    try:
        snapshot, rejected = data_svc.load_file(argv[0])
    except (OSError, ValueError) as e:
        logger.error("Could not load %s: %s", argv[0], e)
        return 1
    for row in rejected:
        logger.warning("Rejected %s row: %s", row.entity, row.error)

    ref = today()
    period = get_setting("default_period")

    # ── Period summary ───────────────────────────────────────────────────────
    summary = report_svc.period_summary(snapshot.transactions, snapshot.recurring, period, ref)
    logger.info(
        "%s %s → %s: income %s (recurring %s), expenses %s (recurring %s), net %s",
        period, summary.start_date, summary.end_date,
        format_currency(summary.total_income), format_currency(summary.recurring_income),
        format_currency(summary.total_expense), format_currency(summary.recurring_expense),
        format_signed(summary.net),
    )

    projected = net_worth_svc.get_projected_month_balance(
        snapshot.accounts, snapshot.transactions, snapshot.recurring, ref
    )
    logger.info(
        "%s: balance %s, projected %s",
        projected["month"],
        format_currency(projected["balance"]),
        format_currency(projected["projected_balance"]),
    )

    # ── Reminders ────────────────────────────────────────────────────────────
    upcoming = cash_flow_svc.get_upcoming_payments(
        snapshot.recurring, ref, days=int(get_setting("upcoming_payment_days"))
    )
    for payment in upcoming.payments:
        logger.info(
            "Upcoming: %s due %s (%s)",
            payment.name, payment.due_date, format_currency(payment.amount),
        )

    for alert in budget_svc.get_alerts(
        snapshot.budgets, snapshot.transactions, snapshot.recurring,
        format_month(ref), threshold=float(get_setting("budget_alert_threshold")),
    ):
        log = logger.error if alert.severity == "error" else logger.warning
        log("Budget %s: %s", alert.category_name, alert.detail)

    return 0


if __name__ == "__main__":
    sys.exit(main())
