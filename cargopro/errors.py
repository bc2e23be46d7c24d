"""Typed errors raised by the API client and the object controller."""
from typing import Optional


class ApiError(Exception):
    """Base error for anything that went wrong talking to the objects API."""

    def __init__(self, message: str, status_code: int = 0):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{type(self).__name__}: {self.message} (Status: {self.status_code})"

    @property
    def user_message(self) -> str:
        """Short message suitable for a status line or notification."""
        if self.status_code == 0:
            return "Network error: Please check your internet connection"
        if self.status_code == 400:
            return "Something went wrong. Please try again"
        if self.status_code == 404:
            return "The requested item was not found"
        if self.status_code == 500:
            return "Server error. Please try again later"
        if self.status_code == 503:
            return "Service unavailable: Please try again later"
        return f"API Error ({self.status_code}): {self.message}"


class NetworkUnavailable(ApiError):
    """Transport-level failure: no connection, DNS, timeout."""

    def __init__(self, message: str = "No internet connection"):
        super().__init__(message, 0)


class MalformedResponse(ApiError):
    """The server answered but the body could not be decoded."""

    def __init__(self, message: str = "Invalid response format"):
        super().__init__(message, 0)


class NotFound(ApiError):
    def __init__(self, object_id: Optional[str] = None):
        self.object_id = object_id
        super().__init__("Object not found", 404)


class RequestFailed(ApiError):
    """Any other non-success status. Carries the raw response body."""

    def __init__(self, status_code: int, body: str = "", operation: str = "REQUEST"):
        self.body = body
        super().__init__(f"{operation} failed ({status_code}): {body}", status_code)


class PolicyViolation(ApiError):
    """Client-side rule: reserved objects are read-only. Never hits the network."""

    def __init__(self, message: str = "Reserved objects are read-only"):
        super().__init__(message, -1)

    @property
    def user_message(self) -> str:
        return self.message


class StateInconsistency(ApiError):
    """Local lists disagree with the requested operation (e.g. deleting an untracked id)."""

    def __init__(self, message: str = "Object not found in local list"):
        super().__init__(message, -1)

    @property
    def user_message(self) -> str:
        return self.message


class AuthError(Exception):
    """Failure reported by the identity provider."""

    def __init__(self, code: str, message: str = ""):
        self.code = code
        self.message = message or code
        super().__init__(f"{code}: {self.message}")
