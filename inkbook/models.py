"""
Pydantic models for the InkBook API

Incoming payloads are normalized as they are validated, so anything that
reaches the store is already in its canonical form.
"""
import re
from datetime import date as date_type, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from inkbook.config import get_int


BOOKING_STATUSES = ("pending", "confirmed", "cancelled")
REQUIRED_FIELDS = ("name", "phone", "date", "time", "status")

PHONE_SEPARATORS = re.compile(r"[\s\-\.\(\)/]")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")
WHITESPACE = re.compile(r"\s+")
ASCII_DIGITS = re.compile(r"^[0-9]+$")


def collapse_whitespace(value: str) -> str:
    return WHITESPACE.sub(" ", value).strip()


def normalize_name(value: str) -> str:
    name = collapse_whitespace(value)
    # Leave mixed case alone ("McKenzie", "da Silva")
    if name.islower() or name.isupper():
        name = name.title()
    if not 2 <= len(name) <= 80:
        raise ValueError("name must be between 2 and 80 characters")
    return name


def normalize_phone(value: str) -> str:
    raw = value.strip()
    plus = raw.startswith("+")
    digits = PHONE_SEPARATORS.sub("", raw[1:] if plus else raw)
    if not ASCII_DIGITS.match(digits):
        raise ValueError("phone may only contain digits, spaces, dashes, dots and parentheses")
    if not 7 <= len(digits) <= 15:
        raise ValueError("phone must have between 7 and 15 digits")
    return f"+{digits}" if plus else digits


def normalize_email(value: str) -> str:
    email = value.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("email is not a valid address")
    return email


def normalize_date(value: str) -> str:
    try:
        return date_type.fromisoformat(value.strip()).isoformat()
    except ValueError:
        raise ValueError("date must be a calendar date in YYYY-MM-DD format")


def normalize_time(value: str) -> str:
    match = TIME_PATTERN.match(value.strip())
    if not match:
        raise ValueError("time must be in HH:MM format")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError("time must be a valid 24-hour clock time")
    return f"{hours:02d}:{minutes:02d}"


def optional_text(value: Optional[str], limit: int, label: str, collapse: bool = True) -> Optional[str]:
    if value is None:
        return None
    text = collapse_whitespace(value) if collapse else value.strip()
    if not text:
        return None
    if len(text) > limit:
        raise ValueError(f"{label} must be at most {limit} characters")
    return text


class BookingFields(BaseModel):
    """Validators shared by create and update payloads"""

    @field_validator("name", check_fields=False)
    @classmethod
    def check_name(cls, value):
        return None if value is None else normalize_name(value)

    @field_validator("phone", check_fields=False)
    @classmethod
    def check_phone(cls, value):
        return None if value is None else normalize_phone(value)

    @field_validator("email", check_fields=False)
    @classmethod
    def check_email(cls, value):
        if value is None or not value.strip():
            return None
        return normalize_email(value)

    @field_validator("date", check_fields=False)
    @classmethod
    def check_date(cls, value):
        return None if value is None else normalize_date(value)

    @field_validator("time", check_fields=False)
    @classmethod
    def check_time(cls, value):
        return None if value is None else normalize_time(value)

    @field_validator("style", "placement", check_fields=False)
    @classmethod
    def check_short_text(cls, value, info):
        return optional_text(value, 60, info.field_name)

    @field_validator("size", check_fields=False)
    @classmethod
    def check_size(cls, value):
        return optional_text(value, 40, "size")

    @field_validator("description", check_fields=False)
    @classmethod
    def check_description(cls, value):
        return optional_text(value, 1000, "description", collapse=False)

    @field_validator("reference_image", check_fields=False)
    @classmethod
    def check_reference_image(cls, value):
        limit = get_int("MAX_IMAGE_CHARS", 700_000)
        return optional_text(value, limit, "reference_image", collapse=False)


class BookingCreate(BookingFields):
    """Booking request as submitted by the front end"""
    name: str
    phone: str
    email: Optional[str] = None
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    style: Optional[str] = None  # blackwork, fine line, traditional...
    placement: Optional[str] = None  # forearm, back, ankle...
    size: Optional[str] = None
    description: Optional[str] = None
    reference_image: Optional[str] = None  # data URL or link


class BookingUpdate(BookingFields):
    """Partial update; only the fields present are changed"""
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    style: Optional[str] = None
    placement: Optional[str] = None
    size: Optional[str] = None
    description: Optional[str] = None
    reference_image: Optional[str] = None
    status: Optional[str] = None

    @field_validator("status")
    @classmethod
    def check_status(cls, value):
        if value is None:
            return None
        status = value.strip().lower()
        if status not in BOOKING_STATUSES:
            raise ValueError(f"status must be one of: {', '.join(BOOKING_STATUSES)}")
        return status


class Booking(BaseModel):
    """
    Stored booking record.
    Records saved by older front ends may lack fields
    or carry extra ones; they are returned as stored.
    """
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    style: Optional[str] = None
    placement: Optional[str] = None
    size: Optional[str] = None
    description: Optional[str] = None
    reference_image: Optional[str] = None
    status: str = "pending"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class BookingResponse(BaseModel):
    status: str = "ok"
    booking: Booking


class DeleteResponse(BaseModel):
    status: str = "ok"
    deleted: str


class HealthResponse(BaseModel):
    status: str = "ok"
    bookings: int = 0


def is_past(booking_date: str, today: Optional[date_type] = None) -> bool:
    today = today or datetime.now().date()
    return date_type.fromisoformat(booking_date) < today


def changed_fields(update: BookingUpdate) -> dict:
    """
    Fields explicitly sent in an update.

    An explicit null clears an optional field but is ignored for the
    fields every booking must have.
    """
    changes = update.model_dump(exclude_unset=True)
    return {
        key: value
        for key, value in changes.items()
        if value is not None or key not in REQUIRED_FIELDS
    }
