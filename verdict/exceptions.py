"""
Custom exceptions for Verdict.

This module defines the exception hierarchy for the package. The decision
facade triages these errors differently depending on the operation, so the
distinction between "no policy exists" and "the policy said no" lives here.
"""

from __future__ import annotations

from typing import Any


class VerdictError(Exception):
    """
    Base exception for all Verdict errors.

    Attributes:
        message: Human-readable error description.
        details: Additional context about the error.

    Example:
        >>> try:
        ...     service.authorize(user, record, "destroy?")
        ... except VerdictError as e:
        ...     logger.error(f"Verdict error: {e}")
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class PolicyNotDefinedError(VerdictError):
    """
    Raised when no policy (or policy scope) exists for a subject type.

    Also raised by alias resolution when the configured alias table maps
    an action to nothing and strict mode is enabled.

    Attributes:
        subject_type: Name of the subject type that had no policy, if known.

    Example:
        >>> raise PolicyNotDefinedError(
        ...     "unable to find policy for 'Invoice'",
        ...     subject_type="Invoice",
        ... )
    """

    def __init__(self, message: str, subject_type: str | None = None) -> None:
        self.subject_type = subject_type
        details = {"subject_type": subject_type} if subject_type else None
        super().__init__(message, details)


class NotAuthorizedError(VerdictError):
    """
    Raised by a policy when a check method returns a falsy value.

    Attributes:
        query: The query that was denied (e.g., "update?").
        record: The record the query was evaluated against.
        policy: The policy instance that denied the query.
    """

    def __init__(self, query: str, record: Any = None, policy: Any = None) -> None:
        self.query = query
        self.record = record
        self.policy = policy

        policy_name = type(policy).__name__ if policy is not None else None
        message = f"not allowed to {query} this {_describe(record)}"
        details = {"query": query, "policy": policy_name}
        super().__init__(message, details)


class QueryNotDefinedError(VerdictError, AttributeError):
    """
    Raised when a policy has no check method for a query.

    Subclasses AttributeError so callers probing policies with getattr-style
    handling keep working.
    """

    def __init__(self, query: str, policy_name: str) -> None:
        self.query = query
        self.policy_name = policy_name
        message = f"{policy_name} does not define a check for '{query}'"
        super().__init__(message, {"query": query, "policy": policy_name})


class ConfigurationError(VerdictError):
    """
    Raised when there is an error in the authorization configuration.

    Attributes:
        config_key: The configuration key that has an issue.
        expected: What was expected for this configuration.
        received: What was actually provided.

    Example:
        >>> raise ConfigurationError(
        ...     config_key="authorization_methods.edit",
        ...     expected="a query name or None",
        ...     received=42
        ... )
    """

    def __init__(
        self,
        config_key: str,
        expected: str | None = None,
        received: Any = None,
    ) -> None:
        self.config_key = config_key
        self.expected = expected
        self.received = received

        message = f"Configuration error for '{config_key}'"
        if expected:
            message += f": expected {expected}"
        if received is not None:
            message += f", got {received!r}"

        details = {
            "config_key": config_key,
            "expected": expected,
            "received": str(received) if received is not None else None,
        }
        super().__init__(message, details)


def _describe(record: Any) -> str:
    if record is None:
        return "record"
    if isinstance(record, type):
        return record.__name__
    return type(record).__name__
