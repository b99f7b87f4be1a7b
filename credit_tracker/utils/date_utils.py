"""Calendar month utilities"""

import re
from dataclasses import dataclass
from datetime import date
from typing import List

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})(?:-\d{2})?$")

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


@dataclass(frozen=True, order=True)
class Month:
    """Calendar year+month with no day component"""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month out of range: {self.month}")

    @classmethod
    def parse(cls, value: str) -> "Month":
        """
        Parse "YYYY-MM" (or a full "YYYY-MM-DD" date, day discarded).

        Raises:
            ValueError: When the value is not a valid month key
        """
        match = _MONTH_PATTERN.match(value.strip()) if isinstance(value, str) else None
        if not match:
            raise ValueError(f"Invalid month key: {value!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def of(cls, day: date) -> "Month":
        return cls(day.year, day.month)

    @property
    def index(self) -> int:
        """Sortable absolute month number"""
        return self.year * 12 + (self.month - 1)

    def add(self, months: int) -> "Month":
        year, month_zero = divmod(self.index + months, 12)
        return Month(year, month_zero + 1)

    @property
    def label(self) -> str:
        """Human label, e.g. "January 2024" """
        return f"{MONTH_NAMES[self.month - 1]} {self.year}"

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


def months_between(start: Month, end: Month) -> int:
    """Signed number of months from start to end"""
    return end.index - start.index


def month_range(start: Month, end: Month) -> List[Month]:
    """Generate list of months from start to end (inclusive)"""
    return [start.add(i) for i in range(months_between(start, end) + 1)]
