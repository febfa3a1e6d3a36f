"""
Tests for booking validation and normalization.

Run with: pytest tests/test_models.py -v
"""
from datetime import date

import pytest
from pydantic import ValidationError

from inkbook.models import (
    BookingCreate,
    BookingUpdate,
    changed_fields,
    is_past,
    normalize_name,
    normalize_phone,
    normalize_time,
)


class TestNormalizers:

    def test_name_collapses_and_titles(self):
        assert normalize_name("  ana   lopez ") == "Ana Lopez"
        assert normalize_name("ANA LOPEZ") == "Ana Lopez"

    def test_name_keeps_mixed_case(self):
        assert normalize_name("Ronan McKenzie") == "Ronan McKenzie"

    def test_name_too_short(self):
        with pytest.raises(ValueError):
            normalize_name(" a ")

    def test_phone_strips_separators(self):
        assert normalize_phone("+34 (612) 345-678") == "+34612345678"
        assert normalize_phone("612.345.678") == "612345678"

    def test_phone_rejects_letters(self):
        with pytest.raises(ValueError):
            normalize_phone("call me 555")

    def test_phone_length(self):
        with pytest.raises(ValueError):
            normalize_phone("12345")
        with pytest.raises(ValueError):
            normalize_phone("1" * 16)

    def test_time_is_padded(self):
        assert normalize_time("9:05") == "09:05"

    @pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "1230"])
    def test_time_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            normalize_time(value)

    def test_is_past(self):
        today = date(2030, 5, 10)
        assert is_past("2030-05-09", today=today)
        assert not is_past("2030-05-10", today=today)


class TestBookingCreate:

    def test_normalizes_payload(self, payload):
        booking = BookingCreate(**payload)
        assert booking.name == "Ana Lopez"
        assert booking.phone == "+34612345678"
        assert booking.email == "ana@example.com"
        assert booking.time == "09:30"
        assert booking.style == "fine line"
        assert booking.size is None

    def test_required_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            BookingCreate(name="Ana Lopez")
        missing = {error["loc"][0] for error in exc_info.value.errors()}
        assert {"phone", "date", "time"} <= missing

    def test_invalid_calendar_date(self, payload):
        payload["date"] = "2030-02-30"
        with pytest.raises(ValidationError):
            BookingCreate(**payload)

    def test_invalid_email(self, payload):
        payload["email"] = "not-an-email"
        with pytest.raises(ValidationError):
            BookingCreate(**payload)

    def test_blank_optionals_become_none(self, payload):
        payload.update({"email": "  ", "style": " ", "description": ""})
        booking = BookingCreate(**payload)
        assert booking.email is None
        assert booking.style is None
        assert booking.description is None

    def test_description_keeps_line_breaks(self, payload):
        payload["description"] = "line one\nline two  "
        assert BookingCreate(**payload).description == "line one\nline two"

    def test_text_limits(self, payload):
        payload["placement"] = "x" * 61
        with pytest.raises(ValidationError):
            BookingCreate(**payload)

    def test_image_limit_from_env(self, payload, monkeypatch):
        monkeypatch.setenv("MAX_IMAGE_CHARS", "10")
        payload["reference_image"] = "data:image/png;base64,AAAA"
        with pytest.raises(ValidationError):
            BookingCreate(**payload)


class TestBookingUpdate:

    def test_only_sent_fields_change(self):
        update = BookingUpdate(time="14:00")
        assert changed_fields(update) == {"time": "14:00"}

    def test_null_clears_optional_but_not_required(self):
        update = BookingUpdate(**{"style": None, "name": None})
        assert changed_fields(update) == {"style": None}

    def test_status_is_checked(self):
        assert BookingUpdate(status=" Confirmed ").status == "confirmed"
        with pytest.raises(ValidationError):
            BookingUpdate(status="done")


class TestPhoneEdges:

    @pytest.mark.parametrize("value", ["++34612345678", "+34 ²12345678", "٣٣٣٣٣٣٣٣"])
    def test_rejects_double_plus_and_non_ascii_digits(self, value):
        with pytest.raises(ValueError):
            normalize_phone(value)
