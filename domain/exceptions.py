"""Domain Exceptions

Every business failure is raised as a subclass of HotelError so the API layer
can translate it into the uniform error body.
"""


class HotelError(Exception):
    """Base class for all domain errors."""

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ResourceNotFoundError(HotelError):
    """A referenced id does not exist."""

    status_code = 404
    error = "Not Found"


class BadRequestError(HotelError):
    """A business invariant was violated by the caller's input."""

    status_code = 400
    error = "Bad Request"


class ConflictError(HotelError):
    """Duplicate or conflicting state. Not raised by any current operation."""

    status_code = 409
    error = "Conflict"
