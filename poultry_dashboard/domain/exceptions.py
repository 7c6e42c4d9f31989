"""
Domain exceptions.

Each error carries the HTTP status the error handling middleware responds with.
"""
from fastapi import status


class FarmError(Exception):
    """Base exception for farm domain errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownFlockError(FarmError):
    """A submission referenced a flock that is not registered."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, flock_id: str):
        super().__init__(f"Flock '{flock_id}' not found")
        self.flock_id = flock_id


class MissingRoleError(FarmError):
    """A mutating request did not state the caller's role."""

    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDeniedError(FarmError):
    """The caller's role may not perform the requested action."""

    status_code = status.HTTP_403_FORBIDDEN
