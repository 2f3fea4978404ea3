"""
Domain Exceptions

Errors raised by the services and mapped to HTTP status codes by the controllers.
"""


class KazLingoError(Exception):
    """Base class for all application errors."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidLevelError(KazLingoError):
    """Level parameter is missing, not an integer, or not unlocked."""
    status_code = 400


class InvalidGuessError(KazLingoError):
    """Guess has the wrong length or contains non-letters."""
    status_code = 400


class RoundOverError(KazLingoError):
    """Guess submitted after the round reached a terminal state."""
    status_code = 400


class UploadError(KazLingoError):
    """Rejected avatar upload."""
    status_code = 400


class ProfileConflictError(KazLingoError):
    """Requested username or email already belongs to another user."""
    status_code = 400


class PuzzleNotFoundError(KazLingoError):
    """No puzzle stored for the requested game and level."""
    status_code = 404


class UserNotFoundError(KazLingoError):
    status_code = 404

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class RoundNotFoundError(KazLingoError):
    status_code = 404

    def __init__(self, message: str = "Round not found"):
        super().__init__(message)
