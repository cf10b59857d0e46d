"""Typed failures raised by the inventory, availability and purchase services.

Each error carries a user-safe ``message`` and the HTTP ``status_code`` the
API layer answers with.
"""


class BoxOfficeError(Exception):
    """Base class for all expected, user-facing failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EventValidationError(BoxOfficeError):
    """Event creation input is missing or malformed."""

    status_code = 400


class InvalidPurchaseRequestError(BoxOfficeError):
    status_code = 400

    def __init__(self) -> None:
        super().__init__("sectionName, rowName and valid quantity are required")


class CapacityExceededError(BoxOfficeError):
    """Requested quantity is larger than the seats left in the row."""

    status_code = 400

    def __init__(self, available: int) -> None:
        super().__init__(f"Only {available} seats are available")
        self.available = available


class NotFoundError(BoxOfficeError):
    status_code = 404


class EventNotFoundError(NotFoundError):
    def __init__(self, event_id: str) -> None:
        super().__init__("Event not found")
        self.event_id = event_id


class SectionNotFoundError(NotFoundError):
    def __init__(self, section_name: str) -> None:
        super().__init__("Section not found")
        self.section_name = section_name


class RowNotFoundError(NotFoundError):
    def __init__(self, row_name: str) -> None:
        super().__init__("Row not found")
        self.row_name = row_name


class IdempotencyConflictError(BoxOfficeError):
    status_code = 409

    def __init__(self) -> None:
        super().__init__("Idempotency key already used with different request data")
