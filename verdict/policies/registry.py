"""
Policy registry for Verdict.

This module provides the PolicyRegistry class, an explicit mapping from
subject types to policy classes. The registry is the policy resolver used by
the decision facade: it turns a (user, subject) pair into a policy instance
or reports that no policy is defined.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from verdict.exceptions import PolicyNotDefinedError
from verdict.policies.base import Scope
from verdict.types import PolicyFound, PolicyNotDefined, PolicyResolution

logger = logging.getLogger(__name__)

# A policy class, or any callable taking (user, record) and returning a
# policy instance or None.
PolicyFactory = Callable[[Any, Any], Any]


def subject_type(subject: Any) -> type:
    """
    Determine the type a subject is authorized as.

    Classes stand for themselves, collections exposing a ``model`` class
    (query sets) stand for that class, anything else for its own type.
    """
    if isinstance(subject, type):
        return subject
    model = getattr(subject, "model", None)
    if isinstance(model, type):
        return model
    return type(subject)


def scope_class_for(policy_class: Any) -> type[Scope] | None:
    """Return the Scope class attached to a policy class, if any."""
    if isinstance(policy_class, type) and issubclass(policy_class, Scope):
        return policy_class
    scope_class = getattr(policy_class, "Scope", None)
    if isinstance(scope_class, type) and issubclass(scope_class, Scope):
        return scope_class
    return None


class PolicyRegistry:
    """
    Registry of policy classes keyed by subject type.

    Features:
        - Decorator-based registration (@registry.policy(Invoice))
        - Lookup walks the subject type's MRO, so a policy registered for a
          base class covers its subclasses
        - Subjects (or their classes) may name their own policy through a
          ``policy_class`` attribute, which takes precedence
        - Thread-safe operations

    Example:
        >>> registry = PolicyRegistry()
        >>>
        >>> @registry.policy(Invoice)
        ... class InvoicePolicy(Policy):
        ...     def can_show(self) -> bool:
        ...         return True
        >>>
        >>> resolution = registry.resolve(user, invoice)
        >>> resolution.policy.can("show?")
        True
    """

    def __init__(self) -> None:
        self._policies: dict[type, PolicyFactory] = {}
        self._lock = threading.RLock()

    def policy(self, model: type) -> Callable[[PolicyFactory], PolicyFactory]:
        """
        Decorator for registering a policy class.

        Args:
            model: The subject type this policy handles.
        """
        def decorator(policy_class: PolicyFactory) -> PolicyFactory:
            self.register(model, policy_class)
            return policy_class
        return decorator

    def register(self, model: type, policy_class: PolicyFactory) -> None:
        """
        Register a policy class (or factory) for a subject type.

        Registering a second policy for the same type replaces the first.

        Example:
            >>> registry.register(Invoice, InvoicePolicy)
        """
        with self._lock:
            if model in self._policies:
                existing = _name(self._policies[model])
                logger.warning(
                    f"Overwriting policy for '{model.__name__}': "
                    f"{existing} -> {_name(policy_class)}"
                )

            self._policies[model] = policy_class

            logger.debug(
                f"Registered policy '{_name(policy_class)}' for '{model.__name__}'"
            )

    def unregister(self, model: type) -> bool:
        """
        Unregister the policy for a subject type.

        Returns:
            True if a policy was unregistered, False if none was registered.
        """
        with self._lock:
            if model in self._policies:
                del self._policies[model]
                logger.debug(f"Unregistered policy for '{model.__name__}'")
                return True
            return False

    def has_policy(self, subject: Any) -> bool:
        """Check whether a policy would be found for a subject."""
        return self.find_policy(subject) is not None

    def find_policy(self, subject: Any) -> PolicyFactory | None:
        """
        Find the policy class for a subject, or None.

        An explicit ``policy_class`` on the subject wins over the registry.
        """
        model = subject_type(subject)
        override = getattr(subject, "policy_class", None) or getattr(
            model, "policy_class", None
        )
        if override is not None:
            return override

        with self._lock:
            for klass in model.__mro__:
                if klass in self._policies:
                    return self._policies[klass]
        return None

    def get_policy(self, subject: Any) -> PolicyFactory:
        """
        Get the policy class for a subject.

        Raises:
            PolicyNotDefinedError: If no policy is registered for the subject type.
        """
        policy_class = self.find_policy(subject)
        if policy_class is None:
            model = subject_type(subject).__name__
            raise PolicyNotDefinedError(
                f"unable to find policy for '{model}'", subject_type=model
            )
        return policy_class

    def resolve(
        self,
        user: Any,
        record: Any,
        policy_class: PolicyFactory | None = None,
    ) -> PolicyResolution:
        """
        Resolve a policy instance for (user, record).

        With an explicit policy_class the class is instantiated directly and
        any construction error propagates to the caller as-is.

        Returns:
            PolicyFound with the instance, or PolicyNotDefined.
        """
        if policy_class is not None:
            return PolicyFound(policy_class(user, record))

        factory = self.find_policy(record)
        if factory is None:
            model = subject_type(record).__name__
            logger.debug(f"No policy registered for '{model}'")
            return PolicyNotDefined(model)

        return PolicyFound(factory(user, record))

    def resolve_scope(self, user: Any, scope: Any) -> PolicyResolution:
        """
        Resolve a scope instance for a collection.

        Returns:
            PolicyFound with a Scope instance bound to (user, scope), or
            PolicyNotDefined if there is no policy or it has no Scope.
        """
        model = subject_type(scope).__name__
        factory = self.find_policy(scope)
        if factory is None:
            logger.debug(f"No policy registered for '{model}'")
            return PolicyNotDefined(model)

        scope_class = scope_class_for(factory)
        if scope_class is None:
            return PolicyNotDefined(model, reason="unable to find scope")

        return PolicyFound(scope_class(user, scope))

    def list_policies(self) -> dict[str, str]:
        """
        List all registered policies.

        Example:
            >>> registry.list_policies()
            {'Invoice': 'InvoicePolicy', 'Customer': 'CustomerPolicy'}
        """
        with self._lock:
            return {
                model.__name__: _name(policy)
                for model, policy in self._policies.items()
            }

    def clear(self) -> None:
        """Clear all registered policies."""
        with self._lock:
            self._policies.clear()
            logger.debug("Cleared all registered policies")


def _name(factory: Any) -> str:
    return getattr(factory, "__name__", type(factory).__name__)


# Global registry instance for convenience
_global_registry: PolicyRegistry | None = None
_global_registry_lock = threading.Lock()


def get_global_registry() -> PolicyRegistry:
    """
    Get the global policy registry instance.

    Creates one if it doesn't exist.
    """
    global _global_registry
    if _global_registry is not None:
        return _global_registry
    with _global_registry_lock:
        # Double-check after acquiring lock
        if _global_registry is None:
            _global_registry = PolicyRegistry()
        return _global_registry


def reset_global_registry() -> None:
    """
    Reset the global registry.

    Primarily useful for testing.
    """
    global _global_registry
    with _global_registry_lock:
        if _global_registry is not None:
            _global_registry.clear()
        _global_registry = None
