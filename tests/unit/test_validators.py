from datetime import date, timedelta

import pytest

from autocare import validators


@pytest.mark.parametrize("raw,expected", [("9:00", "09:00"), ("10:30", "10:30"), ("16:59", "16:59")])
def test_normalize_time_pads_and_accepts_booking_hours(raw, expected):
    assert validators.normalize_time(raw) == expected


@pytest.mark.parametrize("raw", ["08:59", "17:00", "23:15"])
def test_normalize_time_rejects_outside_booking_hours(raw):
    with pytest.raises(ValueError, match="between 09:00 and 16:59"):
        validators.normalize_time(raw)


@pytest.mark.parametrize("raw", ["10", "10:5", "24:00", "ten", ""])
def test_normalize_time_rejects_bad_format(raw):
    with pytest.raises(ValueError, match="Invalid time format"):
        validators.normalize_time(raw)


def test_parse_date_accepts_plain_and_iso_datetime():
    assert validators.parse_date("2030-05-01") == date(2030, 5, 1)
    assert validators.parse_date("2030-05-01T00:00:00.000Z") == date(2030, 5, 1)


def test_parse_date_rejects_garbage():
    with pytest.raises(ValueError, match="Invalid appointment date format"):
        validators.parse_appointment_date("next tuesday")


def test_ensure_not_past():
    today = date(2030, 1, 10)
    assert validators.ensure_not_past(today, today=today) == today
    with pytest.raises(ValueError, match="today or in the future"):
        validators.ensure_not_past(today - timedelta(days=1), today=today)


def test_normalize_plate():
    assert validators.normalize_plate("  abc-1234 ") == "ABC-1234"
    with pytest.raises(ValueError):
        validators.normalize_plate("   ")


def test_validate_year_bounds():
    assert validators.validate_year("2015") == 2015
    assert validators.validate_year(date.today().year + 1) == date.today().year + 1
    with pytest.raises(ValueError):
        validators.validate_year(1899)
    with pytest.raises(ValueError):
        validators.validate_year(date.today().year + 2)


def test_validate_mileage():
    assert validators.validate_mileage("0") == 0
    with pytest.raises(ValueError, match="negative"):
        validators.validate_mileage(-1)
    with pytest.raises(ValueError, match="number"):
        validators.validate_mileage("lots")


def test_parse_string_list_forms():
    assert validators.parse_string_list(["a", " b ", ""]) == ["a", "b"]
    assert validators.parse_string_list('["x", "y"]') == ["x", "y"]
    assert validators.parse_string_list("x, y ,") == ["x", "y"]
    assert validators.parse_string_list(None) == []


def test_normalize_weekdays():
    assert validators.normalize_weekdays("Monday, tue, Sunday") == ["Mon", "Tue", "Sun"]
