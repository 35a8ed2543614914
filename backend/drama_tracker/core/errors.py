"""
Domain error types

Services raise these; the API layer renders them as
``{"error": kind, "detail": message}`` with the matching status code.
"""


class DramaTrackerError(Exception):
    """Base class for expected, user-facing failures"""
    kind = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class InvalidInputError(DramaTrackerError):
    """Malformed payload or out-of-range value"""
    kind = "invalid_input"
    status_code = 400


class UnauthenticatedError(DramaTrackerError):
    """No valid session for an operation that needs one"""
    kind = "unauthenticated"
    status_code = 401


class ForbiddenError(DramaTrackerError):
    """Authenticated, but neither the owner nor an admin"""
    kind = "forbidden"
    status_code = 403


class NotFoundError(DramaTrackerError):
    """Referenced drama or person does not exist"""
    kind = "not_found"
    status_code = 404


class ConflictError(DramaTrackerError):
    """Uniqueness violation, e.g. a duplicate person name"""
    kind = "conflict"
    status_code = 409
