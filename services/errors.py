class RecurrenceError(Exception):
    """Base class for errors raised by the recurrence engine."""


class InvalidRecurringItem(RecurrenceError, ValueError):
    """A recurring item (or its source row) cannot be projected.

    Raised for malformed dates, negative amounts, unknown frequency or kind
    values and an end date before the start date.
    """

    def __init__(self, message: str, item_id=None):
        super().__init__(message)
        self.item_id = item_id


class OccurrenceSearchExhausted(RecurrenceError, RuntimeError):
    """The forward search for an occurrence exceeded its step limit."""

    def __init__(self, item_id, from_date, limit: int):
        super().__init__(
            f"No occurrence found for item {item_id} on or after "
            f"{from_date.isoformat()} within {limit} steps"
        )
        self.item_id = item_id
        self.from_date = from_date
        self.limit = limit
