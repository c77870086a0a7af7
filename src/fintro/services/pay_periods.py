"""Semi-monthly pay period rules.

Two fixed spending windows split every month:

* ``Period.FIRST`` ("Pay 1") covers expense days 14-28.
* ``Period.SECOND`` ("Pay 2") covers days 29-31 and 1-13, wrapping month end.

``classify`` and ``default_period`` only look at the day-of-month integer.
``period_date_range`` is month-aware and resolves the concrete instants of a
window relative to a reference moment. Near the 13th/14th and 28th/29th the
two views can disagree about which window is "current"; callers get both.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Optional

FIRST_START_DAY = 14
FIRST_END_DAY = 28
SECOND_START_DAY = 29
SECOND_END_DAY = 13


class Period(str, Enum):
    FIRST = "first"
    SECOND = "second"

    @property
    def display_name(self) -> str:
        if self is Period.FIRST:
            return "Pay 1 (expenses 14-28)"
        return "Pay 2 (expenses 29-13)"

    @property
    def short_name(self) -> str:
        return "Pay 1" if self is Period.FIRST else "Pay 2"

    def contains(self, day: int) -> bool:
        """Return True when ``day`` of the month falls in this window."""
        return classify(day) is self


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive instant range ``[start, end]``."""

    start: datetime
    end: datetime

    def __contains__(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


def classify(day: int) -> Period:
    """Map a day-of-month to its pay period.

    Only the integer is examined, so day 28 is ``FIRST`` even in February and
    day 31 is ``SECOND`` whether or not the month has one.
    """

    if FIRST_START_DAY <= day <= FIRST_END_DAY:
        return Period.FIRST
    return Period.SECOND


def default_period(today: date) -> Period:
    """Pick the period shown when the dashboard opens (day-only check)."""

    return classify(today.day)


def _month_start(year: int, month: int, offset: int = 0) -> date:
    index = year * 12 + (month - 1) + offset
    return date(index // 12, index % 12 + 1, 1)


def _day_in_month(month_start: date, day: int) -> date:
    # Days past the month's end roll into the next month (Feb 29 -> Mar 1).
    return month_start + timedelta(days=day - 1)


def period_date_range(reference: datetime | date, period: Period) -> Optional[DateRange]:
    """Resolve the concrete window of ``period`` relative to ``reference``.

    * FIRST: from the 14th the window is the 14th-28th of the reference month;
      before the 14th it is the previous month's 14th-28th.
    * SECOND: from the 29th the window runs to the 13th of next month; before
      the 29th it is the 29th of the previous month to the 13th of this one.

    Start is 00:00:00 and end 23:59:59 of their days. Returns None when the
    date arithmetic leaves the supported calendar range.
    """

    day = reference.day
    try:
        this_month = _month_start(reference.year, reference.month)
        if period is Period.FIRST:
            anchor = this_month if day >= FIRST_START_DAY else _month_start(reference.year, reference.month, -1)
            start_day = _day_in_month(anchor, FIRST_START_DAY)
            end_day = _day_in_month(anchor, FIRST_END_DAY)
        else:
            if day >= SECOND_START_DAY:
                start_month = this_month
                end_month = _month_start(reference.year, reference.month, 1)
            else:
                start_month = _month_start(reference.year, reference.month, -1)
                end_month = this_month
            start_day = _day_in_month(start_month, SECOND_START_DAY)
            end_day = _day_in_month(end_month, SECOND_END_DAY)
    except (OverflowError, ValueError):
        return None

    return DateRange(
        start=datetime.combine(start_day, time.min),
        end=datetime.combine(end_day, time(23, 59, 59)),
    )
