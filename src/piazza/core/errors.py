"""Domain exceptions raised by the Piazza services.

Every error a request can end with is a subclass of :class:`PiazzaError`.
Services raise them; the API layer translates them into HTTP responses in a
single exception handler (see :func:`piazza.main.handle_piazza_error`).
"""

from __future__ import annotations


class PiazzaError(RuntimeError):
    """Base exception for domain-rule failures.

    Subclasses set ``status_code`` so the API layer can render them without a
    lookup table of its own.
    """

    status_code: int = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(PiazzaError):
    """Raised for malformed input that slipped past schema validation.

    ``field`` names the offending input so clients can point at it.
    """

    status_code = 422

    def __init__(self, detail: str, *, field: str | None = None) -> None:
        super().__init__(detail)
        self.field = field


class NotFoundError(PiazzaError):
    """Raised when a referenced post, user or topic result is absent."""

    status_code = 404


class AuthorizationError(PiazzaError):
    """Raised when the principal may not act on the target post."""

    status_code = 403


class ExpiredStateError(PiazzaError):
    """Raised when interacting with or mutating an expired post."""

    status_code = 400


class AuthError(PiazzaError):
    """Raised for a missing or invalid credential."""

    status_code = 401


class ConflictError(PiazzaError):
    """Raised when a write collides with an existing row."""

    status_code = 409


__all__ = [
    "PiazzaError",
    "ValidationError",
    "NotFoundError",
    "AuthorizationError",
    "ExpiredStateError",
    "AuthError",
    "ConflictError",
]
