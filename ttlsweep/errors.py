"""Error types raised by the sweeper.

Fatal errors abort a run before any deletion is attempted past the point of
failure. Deletion errors are produced at the provider boundary for a single
resource or resource group and never escape the sweep that triggered them.
"""

from __future__ import annotations

from typing import Any, Optional


class SweepError(Exception):
    """Base class for all sweeper errors."""


class FatalError(SweepError):
    """Error that aborts the whole run."""


class AuthenticationError(FatalError):
    """Service principal credentials were rejected."""


class SubscriptionNotFoundError(FatalError):
    """Subscription ID does not exist or is not visible to the principal."""

    def __init__(self, subscription_id: str, message: Optional[str] = None) -> None:
        self.subscription_id = subscription_id
        super().__init__(message or f"Subscription {subscription_id} not found")


class IdentityMismatchError(FatalError):
    """Subscription display name does not match the expected name."""

    def __init__(self, expected: str, actual: Optional[str]) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Subscription does not match! Expected subscription: {expected}, actual subscription: {actual}")


class ConfigurationError(FatalError):
    """Invalid run configuration (e.g. negative TTL)."""


class DeletionError(SweepError):
    """Single item deletion failure."""

    kind = "unknown"

    def describe(self) -> str:
        return str(self)


class ProviderError(DeletionError):
    """Deletion rejected by the provider with an HTTP status and error code.

    Attributes:
        status_code: HTTP status code returned by Azure Resource Manager
        error_code: ARM error code (e.g. "Conflict", "ScopeLocked")
        message: Human-readable error message
    """

    kind = "provider"

    def __init__(self, status_code: Optional[int], error_code: Optional[str], message: str) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        super().__init__(f"HTTP {status_code} {error_code}: {message}")

    def describe(self) -> str:
        return f"HTTP status code: {self.status_code}, error code: {self.error_code}, error message: {self.message}"


class OpaqueError(DeletionError):
    """Deletion failed without a provider error payload."""

    kind = "opaque"

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(description)


class SweepAbortedError(SweepError):
    """Sweep stopped after the subscription was verified.

    Some deletions may already have happened, so the partial operation is
    attached for reporting.

    Attributes:
        operation: SweepOperation with the counters reached before the abort
    """

    def __init__(self, operation: Any, cause: Exception) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"Sweep aborted: {cause}")
