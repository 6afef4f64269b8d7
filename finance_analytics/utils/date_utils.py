"""Date manipulation utilities"""

import calendar
from datetime import date
from typing import List

MONTH_LABELS_PT_BR = (
    "Jan", "Fev", "Mar", "Abr", "Mai", "Jun",
    "Jul", "Ago", "Set", "Out", "Nov", "Dez",
)


def month_start(day: date) -> date:
    """First day of the month containing `day`"""
    return day.replace(day=1)


def month_end(day: date) -> date:
    """Last day of the month containing `day`"""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=last)


def add_months(day: date, months: int) -> date:
    """Shift a month start by `months` calendar months (negative goes back)"""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_key(day: date) -> str:
    """YYYY-MM key for the month containing `day`"""
    return f"{day.year:04d}-{day.month:02d}"


def month_label(day: date) -> str:
    """Short pt-BR label ("Jan", "Fev", ...) for the month containing `day`"""
    return MONTH_LABELS_PT_BR[day.month - 1]


def trailing_month_starts(now: date, count: int) -> List[date]:
    """Month starts for the `count` calendar months ending with the month of `now`, oldest first"""
    current = month_start(now)
    return [add_months(current, offset) for offset in range(-(count - 1), 1)]


def sunday_first_weekday(day: date) -> int:
    """Weekday index with 0 = Sunday, 6 = Saturday"""
    return (day.weekday() + 1) % 7
