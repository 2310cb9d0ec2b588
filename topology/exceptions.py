"""
Exception hierarchy for topology composition.

Every error raised while composing a plan is terminal for that attempt:
no partial plan is ever returned, and nothing at this layer retries.

Dependencies: None (pure domain layer)
System role: Centralized error types for the resolver, composers and assembler
"""

from typing import Any


class TopologyError(Exception):
    """Base exception for all topology composition errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidParameter(TopologyError):
    """Raised when topology parameters are malformed or contradictory."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid parameter error.

        Args:
            message: Error message
            field: Parameter name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class UnrecognizedEngine(InvalidParameter):
    """Raised when the data engine is neither postgres nor mysql."""

    def __init__(self, engine: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["engine"] = engine
        self.engine = engine
        super().__init__(
            f"Unrecognized data engine: {engine!r}",
            field="data_engine",
            details=details,
        )


class DependencyCycle(TopologyError):
    """Raised when plan entities are composed out of dependency order."""

    def __init__(
        self,
        message: str,
        resource_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize dependency cycle error.

        Args:
            message: Error message
            resource_id: Plan entity whose references are inconsistent
            details: Additional context
        """
        details = details or {}
        if resource_id:
            details["resource_id"] = resource_id
        self.resource_id = resource_id
        super().__init__(message, details)


class BoundaryViolation(TopologyError):
    """Raised when a security boundary graph breaks its access policy."""

    def __init__(
        self,
        message: str,
        node: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if node:
            details["node"] = node
        super().__init__(message, details)
