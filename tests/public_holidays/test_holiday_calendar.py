from __future__ import annotations

from datetime import date


def test_known_korean_holidays(holiday_calendar):
    assert holiday_calendar.is_holiday(date(2024, 12, 25))
    assert holiday_calendar.is_holiday(date(2024, 10, 9))
    assert not holiday_calendar.is_holiday(date(2024, 12, 24))


def test_holiday_info(holiday_calendar):
    info = holiday_calendar.holiday_info(date(2024, 10, 3))
    assert info is not None
    assert info.date == date(2024, 10, 3)
    assert info.name
    assert holiday_calendar.holiday_info(date(2024, 10, 4)) is None


def test_date_string_lookup(holiday_calendar):
    assert holiday_calendar.is_holiday_by_date_string("2024-12-25")
    assert not holiday_calendar.is_holiday_by_date_string("2024-12-26")


def test_year_listing_sorted(holiday_calendar):
    items = holiday_calendar.get_holidays(2024)
    assert items == sorted(items, key=lambda h: h.date)
    assert all(h.date.year == 2024 for h in items)
    assert date(2024, 12, 25) in {h.date for h in items}


def test_range_spanning_years(holiday_calendar):
    found = {h.date for h in holiday_calendar.holidays_in_range(date(2024, 12, 20), date(2025, 1, 5))}
    assert date(2024, 12, 25) in found
    assert date(2025, 1, 1) in found


def test_weekday_count_and_business_days(holiday_calendar):
    # Dec 23-29, 2024: Christmas is the only weekday holiday
    assert holiday_calendar.weekday_holiday_count(date(2024, 12, 23), date(2024, 12, 29)) == 1
    assert holiday_calendar.business_days(date(2024, 12, 23), date(2024, 12, 29)) == [
        date(2024, 12, 23),
        date(2024, 12, 24),
        date(2024, 12, 26),
        date(2024, 12, 27),
    ]


def test_holiday_routes(client, login):
    login()
    body = client.get("/api/holidays/2024").get_json()
    assert "2024-12-25" in {h["date"] for h in body["holidays"]}

    check = client.get("/api/holidays/check?date=2024-12-25").get_json()
    assert check["is_holiday"] is True
    assert client.get("/api/holidays/check?date=bad").status_code == 400
