"""
Domain errors raised by services; routes translate them into HTTP responses.
"""
from typing import Any


class CourseStoreError(Exception):
    """Base class; detail holds context for logging, never for the client."""

    def __init__(self, message: str, detail: dict[str, Any] | None = None):
        super().__init__(message)
        self.detail = detail or {}


# ----- auth -----


class AuthError(CourseStoreError):
    pass


class EmailAlreadyRegistered(AuthError):
    pass


class InvalidCredentials(AuthError):
    pass


class UserNotFound(AuthError):
    """Token is valid but the user behind it is gone."""


# ----- payments -----


class InvalidSignature(CourseStoreError):
    """Payment proof failed the HMAC check."""


class OrderNotFound(CourseStoreError):
    """Order unknown or owned by another user."""


class EmptySelectionError(CourseStoreError):
    """None of the requested course ids is in the catalog."""


class UnknownCourseError(CourseStoreError):
    """Requested ids missing from the catalog under the 'reject' policy."""

    def __init__(self, missing_ids: list[int]):
        super().__init__(f"Unknown course ids: {missing_ids}", {"course_ids": missing_ids})
        self.missing_ids = missing_ids


class ProviderError(CourseStoreError):
    """Payment provider unreachable, timed out, or rejected the request."""


# ----- content access -----


class CourseNotFound(CourseStoreError):
    pass


class AccessForbidden(CourseStoreError):
    pass
