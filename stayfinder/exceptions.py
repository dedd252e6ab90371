class StayfinderError(Exception):
    """Base class for errors raised by the listing and reservation services."""


class Unauthorized(StayfinderError):
    def __init__(self, message: str = "Unauthorized!"):
        super().__init__(message)


class InvalidInput(StayfinderError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Invalid data: '{field}' is missing or empty")


class RetrievalFailure(StayfinderError):
    """Wraps any store error on a read path. Services turn it into an empty page."""
