"""Application exceptions raised by the HTTP layer around the engine.

The engine itself is total and never raises; these cover store-backed
requests that cannot be answered (missing user, incomplete onboarding).
"""

from typing import Any


class AppException(Exception):
    """Base exception carrying an HTTP status and optional details."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    def __init__(self, resource: str, identifier: Any):
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class NotOnboardedError(AppException):
    """Raised when a profile misses age, weight or height."""

    def __init__(self, user_id: str, missing: list[str]):
        super().__init__(
            f"User '{user_id}' has not completed onboarding",
            status_code=409,
            details={"user_id": user_id, "missing": missing},
        )
