"""
Error taxonomy for grading and statistics

Each error carries the HTTP status and error code the API layer maps it to.
"""


class AssessmentError(Exception):
    """Base class for all errors surfaced to callers"""

    status_code = 500
    error_code = "internal_server_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AssessmentError):
    """Malformed or missing submission fields, non-numeric identifiers"""

    status_code = 400
    error_code = "validation_error"


class AuthError(AssessmentError):
    """No resolvable identity was supplied"""

    status_code = 401
    error_code = "unauthenticated"


class NotFoundError(AssessmentError):
    """A referenced test or user does not exist"""

    status_code = 404
    error_code = "not_found"


class StorageError(AssessmentError):
    """Underlying persistence failure"""

    status_code = 500
    error_code = "storage_error"
