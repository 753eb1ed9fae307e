import time
from datetime import datetime, timedelta, timezone

from hmhelper.common.timeutil import (
    DAILY_RESET_HOUR,
    TIME_1970,
    TIME_2028,
    check_time_format,
    format_sql_datetime,
    get_date_no_offset,
    get_date_with_offset,
    get_now_date_with_offset,
    get_passed_days,
    get_passed_days_via_ts,
    get_time_with_offset,
    get_today_begin,
    is_same_day,
    is_tm_same_day,
    is_today,
    now_millis,
    same_day,
    time_to_2028,
)


def test_same_day():
    assert same_day(datetime(2024, 6, 15, 1), datetime(2024, 6, 15, 23))
    assert not same_day(datetime(2024, 6, 15, 23), datetime(2024, 6, 16, 1))
    assert not same_day(datetime(2023, 6, 15), datetime(2024, 6, 15))


def test_is_today():
    assert is_today(time.time())
    assert not is_today(time.time() - 3 * 86400)


def test_check_time_format():
    assert check_time_format("2024-06-15", "%Y-%m-%d")
    assert not check_time_format("15/06/2024", "%Y-%m-%d")


def test_time_with_offset():
    t = datetime(2024, 6, 15, 12)
    assert get_time_with_offset(t) == t - timedelta(hours=DAILY_RESET_HOUR)


def test_date_without_offset():
    assert get_date_no_offset(datetime(2024, 6, 15, 12)) == "240615"


def test_date_with_offset_before_reset_is_previous_day():
    early = datetime(2024, 6, 15, 3)
    assert get_date_with_offset(early) == get_date_no_offset(datetime(2024, 6, 14, 22))
    late = datetime(2024, 6, 15, 12)
    assert get_date_with_offset(late) == get_date_no_offset(late)


def test_now_date_with_offset_matches_now():
    assert get_now_date_with_offset() == get_date_with_offset(datetime.now())


def test_format_sql_datetime():
    assert format_sql_datetime(datetime(2024, 6, 15, 8, 5, 9)) == "2024-06-15 08:05:09"


def test_time_to_2028():
    left = time_to_2028()
    expected = TIME_2028 - datetime.now()
    assert abs((left - expected).total_seconds()) < 5


def test_get_passed_days():
    tm1 = datetime(2024, 6, 15, 12, tzinfo=timezone.utc)
    assert get_passed_days(tm1, tm1 - timedelta(days=3)) == 3
    assert get_passed_days(tm1, tm1) == 0


def _day_start(days, start_hour):
    return int(TIME_1970.timestamp()) + start_hour * 3600 + days * 86400


def test_tm_same_day_boundaries():
    start = _day_start(19000, 5)
    assert is_tm_same_day(start, start + 86399, 5)
    assert not is_tm_same_day(start - 1, start, 5)


def test_passed_days_via_ts():
    start = _day_start(19000, 5)
    assert get_passed_days_via_ts(start + 4 * 86400, start, 5) == 4
    assert get_passed_days_via_ts(start, start + 4 * 86400, 5) == -4


def test_is_same_day():
    assert is_same_day(datetime(2024, 6, 15, 10), datetime(2024, 6, 15, 20))
    assert not is_same_day(datetime(2024, 6, 15, 10), datetime(2024, 6, 17, 10))


def test_today_begin_is_midnight():
    begin = datetime.fromtimestamp(get_today_begin())
    now = datetime.now()
    assert (begin.hour, begin.minute, begin.second) == (0, 0, 0)
    assert begin.date() == now.date()


def test_now_millis():
    assert abs(now_millis() - time.time() * 1000) < 5000