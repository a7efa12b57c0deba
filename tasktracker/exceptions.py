"""Error kinds raised by the stores and services.

Each kind carries the HTTP status code the API layer answers with, so the
translation to a response lives in exactly one exception handler.
"""


class TaskTrackerError(Exception):
    """Base class for all task tracker errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(TaskTrackerError):
    """Raised when input is malformed or a required value is missing."""

    status_code = 400
    default_message = "Validation failed"


class DuplicateUserError(TaskTrackerError):
    status_code = 400
    default_message = "User already exists"


class InvalidCredentialsError(TaskTrackerError):
    """Raised for both an unknown email and a wrong password."""

    status_code = 401
    default_message = "Invalid credentials"


class InvalidTokenError(TaskTrackerError):
    """Raised when a token is malformed, expired or signed with another key."""

    status_code = 401
    default_message = "Invalid or expired token"


class AccessDeniedError(TaskTrackerError):
    status_code = 403
    default_message = "Access denied"


class TaskNotFoundError(TaskTrackerError):
    status_code = 404
    default_message = "Task not found"


class UserNotFoundError(TaskTrackerError):
    status_code = 404
    default_message = "User not found"


class AssignedUserNotFoundError(TaskTrackerError):
    status_code = 400
    default_message = "Assigned user not found"


class InvalidIdError(TaskTrackerError):
    """Raised when an identifier is not even well-formed."""

    status_code = 400

    def __init__(self, kind: str = "task"):
        self.kind = kind
        super().__init__(f"Invalid {kind} ID")


class UserInUseError(TaskTrackerError):
    """Raised when deleting a user that tasks are still assigned to."""

    status_code = 409
    default_message = "User is still assigned to tasks"
