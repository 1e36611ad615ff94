from datetime import datetime, timedelta

from lounge.date import format_date

NOW = datetime(2024, 3, 15, 12, 0, 0)


def test_same_day_is_today():
    assert format_date(datetime(2024, 3, 15, 9, 30, 5), NOW) == "Today, 09:30:05"


def test_other_day_has_full_date():
    assert format_date(datetime(2024, 1, 2, 3, 4, 5), NOW) == "02. Jan 2024, 03:04:05"


def test_day_after_now_is_yesterday():
    assert format_date(datetime(2024, 3, 16, 8, 0, 0), NOW) == "Yesterday, 08:00:00"


def test_only_day_of_month_is_compared():
    assert format_date(datetime(2024, 2, 15, 1, 2, 3), NOW).startswith("Today")


def test_time_suffix_is_kept_for_any_prefix():
    date = NOW - timedelta(days=40, hours=1)
    result = format_date(date, NOW)
    assert result.endswith(date.strftime(", %H:%M:%S"))
    assert str(date.year) in result