"""
Booking errors raised below the HTTP layer
"""


class BookingError(Exception):
    """Base class for booking failures the API reports to clients"""
    status_code = 400


class BookingNotFound(BookingError):
    status_code = 404

    def __init__(self, booking_id: str):
        super().__init__("Booking not found")
        self.booking_id = booking_id


class PastDateError(BookingError):
    def __init__(self, booking_date: str):
        super().__init__(f"Booking date {booking_date} is in the past")
        self.booking_date = booking_date
