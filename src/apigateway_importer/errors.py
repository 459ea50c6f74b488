"""Exception hierarchy for apigateway-importer.

Every error raised by the importer inherits from ImporterError, so callers
can catch the whole family with one except clause.
"""

from typing import Any

RATE_LIMIT_STATUS = 429
RATE_LIMIT_CODES = {"TooManyRequestsException", "ThrottlingException"}


class ImporterError(Exception):
    """Base exception for all importer errors.

    Attributes:
        message: Human-readable error description.
        details: Additional error context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


class DocumentError(ImporterError):
    """Raised when the input document cannot be read or is malformed."""


class NameCollisionError(ImporterError):
    """Raised by create when an API with the same title already exists."""

    code = "AlreadyExistsException"

    def __init__(self, name: str) -> None:
        super().__init__("API with this name already exists.", {"name": name})
        self.name = name


class RemoteOperationError(ImporterError):
    """A control-plane call failed.

    Attributes:
        operation: Name of the remote operation, e.g. ``createResource``.
        code: Remote error code, e.g. ``NotFoundException``.
        status: HTTP status of the failed call, when known.
    """

    def __init__(
        self,
        operation: str,
        code: str,
        message: str,
        status: int | None = None,
    ) -> None:
        super().__init__(message, {"operation": operation, "code": code, "status": status})
        self.operation = operation
        self.code = code
        self.status = status

    @property
    def rate_limited(self) -> bool:
        """True when the control plane rejected the call as over quota."""
        return self.status == RATE_LIMIT_STATUS or self.code in RATE_LIMIT_CODES


class RootResourceMissingError(ImporterError):
    """Raised when a remote API has no resource for path ``/``."""

    def __init__(self, api_id: str) -> None:
        super().__init__("Remote API has no root resource.", {"api_id": api_id})
        self.api_id = api_id
