"""Custom exception classes for the application.

Every error raised by a command, a resolver or the event consumer is an
``AppException``. The subclasses name the failure kinds callers are expected to
tell apart:

- ``NotFoundException``: a local aggregate does not exist.
- ``InvalidStateException``: the aggregate exists but is in the wrong lifecycle state.
- ``ValidationException``: a saga/command precondition is violated; nothing was written.
- ``ConflictException``: a scheduling or slot conflict with existing state.
- ``ResolutionException``: a remote id could not be resolved through its owning service.
- ``StorageException``: database I/O failed; the enclosing transaction was rolled back.
- ``DecodeException``: a broker message or event payload could not be decoded.
"""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    Follows the RFC 7807 Problem Details shape so a REST layer can render it
    without translation.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        instance: URI reference that identifies the specific occurrence of the problem.
        extra: Additional context-specific information about the error.

    Example:
            raise AppException(
            status_code=404,
            detail="Fixture not found",
            type="fixture-not-found",
            extra={"fixture_id": "0192..."},
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Get default title for HTTP status code."""
        titles = {
            400: "Bad Request",
            404: "Not Found",
            409: "Conflict",
            422: "Unprocessable Entity",
            500: "Internal Server Error",
            502: "Bad Gateway",
            503: "Service Unavailable",
        }
        return titles.get(status_code, "Error")

    def to_problem(self) -> dict[str, Any]:
        """Render as an RFC 7807 problem document."""
        problem: dict[str, Any] = {
            "type": self.type,
            "title": self.title,
            "status": self.status_code,
            "detail": self.detail,
        }
        if self.instance:
            problem["instance"] = self.instance
        if self.extra:
            problem.update(self.extra)
        return problem


class NotFoundException(AppException):
    """Exception raised when a local aggregate is not found.

    Example:
            raise NotFoundException(
            detail="Assignment not found",
            extra={"fixture_id": str(fixture_id), "referee_id": str(referee_id)},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "not-found",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=404,
            detail=detail,
            type=type,
            title="Not Found",
            instance=instance,
            extra=extra,
        )


class InvalidStateException(AppException):
    """Exception raised when an aggregate is in the wrong lifecycle state.

    Example:
            raise InvalidStateException(
            detail="Assignment is committed; use remove_committed",
            extra={"status": "committed"},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "invalid-state",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=409,
            detail=detail,
            type=type,
            title="Invalid State",
            instance=instance,
            extra=extra,
        )


class ValidationException(AppException):
    """Exception raised when a command precondition is violated.

    No mutation has been performed when this is raised.
    """

    def __init__(
        self,
        detail: str,
        type: str = "validation-error",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=422,
            detail=detail,
            type=type,
            title="Validation Error",
            instance=instance,
            extra=extra,
        )


class ConflictException(AppException):
    """Exception raised when a write conflicts with existing state.

    Example:
            raise ConflictException(
            detail="There is already a fixture at the same venue on the same day",
            type="fixture-venue-conflict",
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "conflict",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=409,
            detail=detail,
            type=type,
            title="Conflict",
            instance=instance,
            extra=extra,
        )


class ResolutionException(AppException):
    """Exception raised when a remote aggregate cannot be resolved.

    Raised by resolvers on 404s, transport errors and malformed bodies from
    the owning service. Callers decide whether to retry or abort.
    """

    def __init__(
        self,
        detail: str,
        type: str = "resolution-error",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=502,
            detail=detail,
            type=type,
            title="Resolution Error",
            instance=instance,
            extra=extra,
        )


class StorageException(AppException):
    """Exception raised when database I/O fails.

    The enclosing unit of work has already been rolled back when this
    propagates.
    """

    def __init__(
        self,
        detail: str,
        type: str = "storage-error",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=503,
            detail=detail,
            type=type,
            title="Storage Error",
            instance=instance,
            extra=extra,
        )


class DecodeException(AppException):
    """Exception raised when a message envelope or event payload is malformed."""

    def __init__(
        self,
        detail: str,
        type: str = "decode-error",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title="Decode Error",
            instance=instance,
            extra=extra,
        )
