"""Calendar helpers shared by every tracker.

Plan days are Monday-first: index 0 is Monday, 6 is Sunday. All "is this
today?" comparisons go through :func:`day_index` so the day boundary is the
same everywhere.
"""
from datetime import date, timedelta
from typing import Callable, Iterator, Optional

from fitlog.utilities.constants import DATE_FORMAT

Clock = Callable[[], date]


def day_index(d: date) -> int:
    '''Monday-first index of a calendar date (0..6).'''
    return remap_weekday(d.isoweekday() % 7)


def remap_weekday(native_weekday: int) -> int:
    '''Convert a Sunday-first weekday number (0 = Sunday) to a Monday-first index.'''
    return (native_weekday + 6) % 7


def today_index(clock: Optional[Clock] = None) -> int:
    return day_index((clock or date.today)())


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def last_days(end: date, count: int) -> Iterator[date]:
    '''Yield ``count`` dates ending with ``end`` (inclusive), newest first.'''
    for offset in range(count):
        yield end - timedelta(days=offset)
