"""Error types raised by services and mapped to HTTP responses.

Every error carries the HTTP status it maps to and renders as
`{"error": message}`. No distinct codes exist beyond the status.
"""


class ExerciseTrackerError(Exception):
    """Base exception for all exercise tracker failures."""

    def __init__(self, message: str, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.http_status = http_status

    def to_response(self) -> dict:
        return {"error": self.message}


class NotFoundError(ExerciseTrackerError):
    """The referenced user does not exist."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, 404)


class StorageError(ExerciseTrackerError):
    """Any failure of the underlying store, including unstorable values."""

    def __init__(self, message: str):
        super().__init__(message, 500)
