"""Error taxonomy for the simulator API."""

from __future__ import annotations


class RoiSimulatorError(Exception):
    """Base error rendered as ``{"success": false, "code", "message"}``."""

    status_code = 500
    code = "SERVER_ERROR"

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
        self.message = message


class ValidationError(RoiSimulatorError):
    """A required field is missing from the request."""

    status_code = 400
    code = "VALIDATION_ERROR"


class NotFoundError(RoiSimulatorError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class MalformedIdentifierError(NotFoundError):
    """The identifier cannot address any stored scenario."""

    status_code = 400
    code = "INVALID_ID"

    def __init__(self, message: str = "Invalid id"):
        super().__init__(message)


class UnexpectedError(RoiSimulatorError):
    """Persistence or rendering failed; details stay in the logs."""


__all__ = [
    "MalformedIdentifierError",
    "NotFoundError",
    "RoiSimulatorError",
    "UnexpectedError",
    "ValidationError",
]
