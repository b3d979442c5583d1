# ============================================================================
# HEALTH CHECK ERRORS
# ============================================================================
# EPOCH: 1 - HEALTH CHECK RECONCILIATION
# STATUS: Domain - Error kinds and classification helpers
# PURPOSE: Distinguish "absent" from real failures for reconciler callers
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Errors

Three error kinds reach callers of HealthChecker:

- NotFoundError: the remote resource does not exist. Recoverable (create it).
- ConversionError: the value cannot be expressed on the wire. A programming or
  configuration defect; never retried.
- ProviderError: any other remote failure. Wraps the provider exception as
  __cause__ and records the attempted operation.

Providers signal failures with the azure.core.exceptions hierarchy;
is_not_found() / is_conflict() classify them.
"""

from typing import Optional

from azure.core.exceptions import (
    HttpResponseError,
    ResourceExistsError,
    ResourceModifiedError,
    ResourceNotFoundError,
)


class HealthCheckError(Exception):
    """Base exception for health check reconciliation."""

    def __init__(
        self,
        message: str,
        name: Optional[str] = None,
        port: Optional[int] = None,
        operation: Optional[str] = None,
    ):
        self.name = name
        self.port = port
        self.operation = operation
        super().__init__(message)


class NotFoundError(HealthCheckError):
    """Raised when the remote health check does not exist."""

    def __init__(self, name: str, port: Optional[int] = None, operation: Optional[str] = None):
        message = f"Health check {name} not found"
        if port is not None:
            message += f" (port {port})"
        super().__init__(message, name=name, port=port, operation=operation)


class ConversionError(HealthCheckError):
    """Raised when a health check cannot be converted to or from wire form."""
    pass


class ProviderError(HealthCheckError):
    """Raised when a remote call fails for any reason other than absence."""

    def __init__(
        self,
        name: str,
        operation: str,
        cause: Optional[BaseException] = None,
        port: Optional[int] = None,
    ):
        self.cause = cause
        message = f"{operation} failed for health check {name}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message, name=name, port=port, operation=operation)


# ============================================================================
# CLASSIFICATION
# ============================================================================

def _status_code(exc: BaseException) -> Optional[int]:
    return getattr(exc, "status_code", None)


def is_not_found(exc: BaseException) -> bool:
    """True if a provider exception means the resource is absent."""
    if isinstance(exc, (ResourceNotFoundError, NotFoundError)):
        return True
    return _status_code(exc) == 404


def is_conflict(exc: BaseException) -> bool:
    """True if a provider exception is a create race or stale fingerprint."""
    if isinstance(exc, (ResourceExistsError, ResourceModifiedError)):
        return True
    return _status_code(exc) in (409, 412)


def describe(exc: BaseException) -> str:
    """Short label for logging a provider exception."""
    if isinstance(exc, HttpResponseError) and exc.status_code is not None:
        return f"{type(exc).__name__}({exc.status_code})"
    return type(exc).__name__


__all__ = [
    "HealthCheckError",
    "NotFoundError",
    "ConversionError",
    "ProviderError",
    "is_not_found",
    "is_conflict",
    "describe",
]
