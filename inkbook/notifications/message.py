from typing import Dict, List, Tuple


FIELD_LABELS: List[Tuple[str, str]] = [
    ("name", "Name"),
    ("phone", "Phone"),
    ("email", "Email"),
    ("date", "Date"),
    ("time", "Time"),
    ("style", "Style"),
    ("placement", "Placement"),
    ("size", "Size"),
    ("description", "Description"),
]


def booking_fields(booking: Dict) -> Dict[str, str]:
    """Human-labelled fields of a booking, skipping empty ones"""
    fields = {}
    for key, label in FIELD_LABELS:
        value = booking.get(key)
        if value:
            fields[label] = str(value)
    if booking.get("reference_image"):
        fields["Reference image"] = "attached" if str(booking["reference_image"]).startswith("data:") else booking["reference_image"]
    return fields


def format_subject(booking: Dict) -> str:
    return f"New booking - {booking.get('name', 'unknown')} ({booking.get('date', '?')} {booking.get('time', '')})".strip()


def format_booking_message(booking: Dict) -> str:
    lines = ["New tattoo booking received:", ""]
    lines.extend(f"{label}: {value}" for label, value in booking_fields(booking).items())
    if booking.get("id"):
        lines.extend(["", f"Booking id: {booking['id']}"])
    return "\n".join(lines)
