"""
Application exception hierarchy.

Every error carries the HTTP status the API answers with and a
user-facing Japanese message. Raised by models, translated to JSON by the
handlers registered in app.register_error_handlers.
"""


class BookingError(Exception):
    """Base class for errors that map to an API error response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """Missing or malformed input."""

    status_code = 400


class BusinessRuleViolation(BookingError):
    """
    A reservation candidate was refused by an admission rule.

    Attributes:
        rule: Rule code (area, cutoff, unavailable_date, slot_full, day_full)
    """

    status_code = 400

    def __init__(self, message: str, rule: str):
        super().__init__(message)
        self.rule = rule


class NotFoundError(BookingError):
    """Unknown reservation id or blackout date."""

    status_code = 404


class AuthError(BookingError):
    """Bad admin credentials."""

    status_code = 401


class InfrastructureError(BookingError):
    """Datastore failure."""

    status_code = 500
