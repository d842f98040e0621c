"""Error kinds shared by the card and book stores."""


class StoreError(Exception):
    """Base class for store errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(StoreError):
    """A required field is missing or malformed."""

    status_code = 400


class NotFound(StoreError):
    """Lookup miss."""

    status_code = 404


class Conflict(StoreError):
    """Duplicate id."""

    status_code = 409
