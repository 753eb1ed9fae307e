"""Date and time helpers based on local time with a daily reset hour."""

from __future__ import annotations

import math
import time
from datetime import datetime, timedelta

DAILY_RESET_HOUR = 5
SQL_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
_SHORT_DATE_FORMAT = "%y%m%d"
_SECONDS_PER_DAY = 86400

TIME_1970 = datetime(1970, 1, 1)
TIME_2028 = datetime(2028, 1, 1)


def _unix(t: datetime) -> int:
    """Whole seconds since the epoch; naive values are local time."""
    return math.floor(t.timestamp())


def _div_trunc(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _local_epoch() -> int:
    return _unix(TIME_1970)


def same_day(a: datetime, b: datetime) -> bool:
    """Whether ``a`` and ``b`` fall on the same calendar day."""
    return a.year == b.year and a.timetuple().tm_yday == b.timetuple().tm_yday


def is_today(ts: float) -> bool:
    """Whether the unix timestamp ``ts`` is on today's calendar day."""
    return same_day(datetime.fromtimestamp(int(ts)), datetime.now())


def check_time_format(src: str, layout: str) -> bool:
    """Whether ``src`` parses with the strptime format ``layout``."""
    try:
        datetime.strptime(src, layout)
    except ValueError:
        return False
    return True


def get_time_with_offset(t: datetime) -> datetime:
    """``t`` moved back by the daily reset hour."""
    return t - timedelta(hours=DAILY_RESET_HOUR)


def get_date_with_offset(t: datetime) -> str:
    """YYMMDD of the game day that ``t`` belongs to."""
    return get_time_with_offset(t).strftime(_SHORT_DATE_FORMAT)


def get_date_no_offset(t: datetime) -> str:
    """YYMMDD of the calendar day of ``t``."""
    return t.strftime(_SHORT_DATE_FORMAT)


def get_now_date_with_offset() -> str:
    """YYMMDD of the current game day."""
    return get_date_with_offset(datetime.now())


def time_to_2028() -> timedelta:
    """Time left until the start of 2028, local time."""
    return TIME_2028 - datetime.now()


def get_passed_days(tm1: datetime, tm2: datetime) -> int:
    """Whole UTC days of ``tm1`` minus those of ``tm2``."""
    return _div_trunc(_unix(tm1), _SECONDS_PER_DAY) - _div_trunc(_unix(tm2), _SECONDS_PER_DAY)


def format_sql_datetime(t: datetime) -> str:
    """``t`` as ``YYYY-MM-DD HH:MM:SS``."""
    return t.strftime(SQL_DATETIME_FORMAT)


def is_same_day(a: datetime, b: datetime) -> bool:
    """Whether ``a`` and ``b`` are in the same game day."""
    return is_tm_same_day(_unix(a), _unix(b), DAILY_RESET_HOUR)


def is_tm_same_day(tm1: int, tm2: int, start_hour: int) -> bool:
    """Whether two timestamps are in the same day starting at ``start_hour``."""
    return get_passed_days_via_ts(tm1, tm2, start_hour) == 0


def get_passed_days_via_ts(tm1: int, tm2: int, start_hour: int) -> int:
    """Days from ``tm2`` to ``tm1`` with days starting at local ``start_hour``."""
    base = _local_epoch() + start_hour * 3600
    return _div_trunc(tm1 - base, _SECONDS_PER_DAY) - _div_trunc(tm2 - base, _SECONDS_PER_DAY)


def get_today_begin() -> int:
    """Unix timestamp of today's local midnight."""
    now = datetime.now()
    return _unix(datetime(now.year, now.month, now.day))


def now_millis() -> int:
    """Current time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000