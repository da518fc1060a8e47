"""
Error taxonomy for contest operations.

Services raise these; routes turn them into the standard error envelope
using ``status_code``.
"""


class ContestError(Exception):
    """Base class for errors that map onto an HTTP response"""
    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(ContestError):
    """Missing or malformed request fields"""
    status_code = 400
    default_message = "Invalid input"


class UnauthorizedError(ContestError):
    """Missing or invalid credentials or token"""
    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(ContestError):
    """Authenticated but not permitted"""
    status_code = 403
    default_message = "Access denied"


class NotFoundError(ContestError):
    """Referenced entity does not exist"""
    status_code = 404
    default_message = "Not found"


class ConflictError(ContestError):
    """Duplicate or already-applied state change"""
    status_code = 409
    default_message = "Conflict"


class InvalidStateError(ContestError):
    """Operation not valid for the current winner/claim state"""
    status_code = 400
    default_message = "Operation not allowed in the current state"


class InternalError(ContestError):
    status_code = 500
    default_message = "Something went wrong!"
