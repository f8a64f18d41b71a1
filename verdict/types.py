"""
Core type definitions for Verdict.

This module defines the policy resolution result returned by the registry
and the helpers that translate between query names ("update?") and the
policy methods that implement them (``can_update``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

QUERY_SUFFIX = "?"
CHECK_PREFIX = "can_"

# Abstract actions pre-computed for presentation layers
DEFAULT_ACTIONS: tuple[str, ...] = ("new", "edit", "update", "show", "destroy")


def query_name(action: Any) -> str:
    """
    Normalize an action into a query name ending in "?".

    The suffix is appended exactly once.

    Example:
        >>> query_name("update")
        'update?'
        >>> query_name("update?")
        'update?'
    """
    name = str(action)
    if name.endswith(QUERY_SUFFIX):
        return name
    return f"{name}{QUERY_SUFFIX}"


def check_method_name(query: str) -> str:
    """Map a query name to the policy method implementing it ("show?" -> "can_show")."""
    action = query[: -len(QUERY_SUFFIX)] if query.endswith(QUERY_SUFFIX) else query
    return f"{CHECK_PREFIX}{action}"


def query_for_method(method_name: str) -> str | None:
    """Inverse of check_method_name; None for methods that are not checks."""
    if not method_name.startswith(CHECK_PREFIX) or method_name == CHECK_PREFIX:
        return None
    return f"{method_name[len(CHECK_PREFIX):]}{QUERY_SUFFIX}"


@dataclass(frozen=True)
class PolicyFound(Generic[T]):
    """
    A policy (or scope) was resolved for the subject.

    ``policy`` may be None when a registered factory declined to produce a
    policy for this particular record; callers skip the check in that case.
    """
    policy: T | None


@dataclass(frozen=True)
class PolicyNotDefined:
    """
    No policy is registered for the subject type.

    Attributes:
        subject_type: Name of the type that was looked up.
        reason: Human-readable explanation.
    """
    subject_type: str
    reason: str = "unable to find policy"

    @property
    def message(self) -> str:
        return f"{self.reason} for '{self.subject_type}'"


PolicyResolution = Union[PolicyFound[Any], PolicyNotDefined]
