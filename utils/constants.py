APP_NAME = "Recurring Ledger"
MONTH_FORMAT = "%Y-%m"

OCCURRENCE_SEARCH_LIMIT = 5000
UPCOMING_PAYMENT_DAYS = 5
BUDGET_ALERT_THRESHOLD = 0.80  # default 80%
MONTHLY_COMPARISON_MONTHS = 6
DEFAULT_PERIOD = "month"
DEFAULT_LOG_LEVEL = "INFO"

UNCATEGORIZED = "Uncategorized"

DEFAULT_SETTINGS = {
    "occurrence_search_limit": OCCURRENCE_SEARCH_LIMIT,
    "upcoming_payment_days": UPCOMING_PAYMENT_DAYS,
    "budget_alert_threshold": BUDGET_ALERT_THRESHOLD,
    "default_period": DEFAULT_PERIOD,
    "log_level": DEFAULT_LOG_LEVEL,
}
