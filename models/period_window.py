from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterator


class PeriodToken(str, Enum):
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    ALL = "all"


@dataclass(frozen=True)
class PeriodWindow:
    """Inclusive [start, end] range of calendar days."""
    start: date
    end: date

    @classmethod
    def between(cls, start: date, end: date) -> "PeriodWindow":
        if start > end:
            raise ValueError(
                f"Window start {start.isoformat()} is after end {end.isoformat()}."
            )
        return cls(start=start, end=end)

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end

    def days(self) -> Iterator[date]:
        if self.start > self.end:
            return
        current = self.start
        while current < self.end:
            yield current
            current += timedelta(days=1)
        yield current
