# villagestay/core/exceptions.py
"""
Domain errors raised by the services layer.

Every error carries the HTTP status it maps to and a short machine-readable
``reason``; the handler registered in ``villagestay.main`` turns them into
``{"detail": ..., "reason": ...}`` responses.
"""


class BookingError(Exception):
    status_code = 400
    reason = "BOOKING_ERROR"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message()
        super().__init__(self.message)

    def default_message(self) -> str:
        return "Booking request could not be processed"


class InvalidDateRange(BookingError):
    reason = "INVALID_DATES"

    def default_message(self) -> str:
        return "Check-out date must be after check-in date"


class GuestLimitExceeded(BookingError):
    reason = "GUEST_LIMIT_EXCEEDED"

    def __init__(self, max_guests: int):
        self.max_guests = max_guests
        super().__init__(f"Maximum guests is {max_guests}")


class HomestayNotFound(BookingError):
    status_code = 404
    reason = "NOT_FOUND"

    def default_message(self) -> str:
        return "Homestay not found"


class HomestayUnavailable(BookingError):
    """Raised when the homestay is busy for the requested dates."""

    status_code = 409
    reason = "NOT_AVAILABLE"

    def default_message(self) -> str:
        return "Homestay is not available for these dates"


class InvalidStatusTransition(BookingError):
    status_code = 409
    reason = "INVALID_STATUS_TRANSITION"

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot change booking status from {current} to {target}")


class ReviewNotAllowed(BookingError):
    reason = "REVIEW_NOT_ALLOWED"

    def default_message(self) -> str:
        return "Booking is not valid or not completed yet"


class DuplicateSlug(BookingError):
    reason = "DUPLICATE_SLUG"

    def default_message(self) -> str:
        return "Slug is already in use"


class InvalidName(BookingError):
    reason = "INVALID_NAME"

    def default_message(self) -> str:
        return "Name must contain latin letters or digits to build a URL slug"
