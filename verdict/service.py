"""
Authorization decision facade.

AuthorizationService decides whether a user may perform an action on a
record by resolving the record's policy and running the matching check. It
also applies policy scopes to collections and reports which checks a policy
defines, so presentation layers can decide which controls to render.

What happens when things go wrong depends on the operation:

- ``authorize`` / ``authorize_action``: a missing policy is ``False`` (or
  PolicyNotDefinedError in strict mode); any other error propagates unless
  the caller passes ``raise_exception=False``.
- ``apply_policy``: only a missing policy or scope is handled; every other
  error propagates.
- ``apply_custom_policy``: every error is handled the same way a missing
  policy is.
- ``defined_methods``: like ``authorize``, with an empty set as the default.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from verdict.config import AuthorizationConfig
from verdict.exceptions import PolicyNotDefinedError
from verdict.policies.registry import (
    PolicyFactory,
    PolicyRegistry,
    get_global_registry,
    scope_class_for,
)
from verdict.types import DEFAULT_ACTIONS, PolicyNotDefined, query_name

if TYPE_CHECKING:
    from verdict.session import AuthorizationSession

logger = logging.getLogger(__name__)


class AuthorizationService:
    """
    Decision facade over a policy registry.

    Example:
        >>> service = AuthorizationService(
        ...     AuthorizationConfig(raise_error_on_missing_policy=True),
        ...     registry,
        ... )
        >>> service.authorize(user, invoice, "show?")
        True
        >>> service.authorize_action(user, invoice, "edit")
        True
        >>> visible = service.apply_policy(user, Invoice.objects.all())
    """

    def __init__(
        self,
        config: AuthorizationConfig | None = None,
        registry: PolicyRegistry | None = None,
    ) -> None:
        self._config = config or AuthorizationConfig()
        self._registry = registry if registry is not None else get_global_registry()

    @property
    def config(self) -> AuthorizationConfig:
        return self._config

    @property
    def registry(self) -> PolicyRegistry:
        return self._registry

    def skip_authorization(self) -> bool:
        """Whether the feature gate currently disables authorization."""
        return self._config.authorization_disabled()

    def session(
        self,
        user: Any = None,
        record: Any = None,
        policy_class: PolicyFactory | None = None,
    ) -> AuthorizationSession:
        """Create a decision session bound to this service."""
        from verdict.session import AuthorizationSession

        return AuthorizationSession(self, user, record, policy_class=policy_class)

    # ==================== Single-record checks ====================

    def authorize(
        self,
        user: Any,
        record: Any,
        action: str,
        policy_class: PolicyFactory | None = None,
        raise_exception: bool = True,
    ) -> bool:
        """
        Check whether user may run the query ``action`` on record.

        The decision is carried by the policy raising or not: a check that
        passes returns True, a check that fails raises NotAuthorizedError,
        which is handled like any other error from the policy.

        Args:
            user: The principal. None is always permitted.
            record: The record being checked.
            action: Query name, already in "update?" form.
            policy_class: Explicit policy class, bypassing lookup.
            raise_exception: When False, errors other than a missing
                policy yield False instead of propagating.

        Raises:
            PolicyNotDefinedError: No policy for the record in strict mode.
        """
        if self.skip_authorization():
            return True
        if user is None:
            return True

        strict = self._config.raise_error_on_missing_policy
        try:
            resolution = self._registry.resolve(user, record, policy_class=policy_class)
            if isinstance(resolution, PolicyNotDefined):
                return self._policy_not_defined(resolution, False)

            if resolution.policy is not None:
                resolution.policy.authorize(action)

            return True
        except PolicyNotDefinedError:
            if not strict:
                return False
            raise
        except Exception as e:
            if raise_exception is False:
                logger.debug(f"Authorization of '{action}' failed: {e}")
                return False
            raise

    def authorize_action(
        self,
        user: Any,
        record: Any,
        action: Any,
        policy_class: PolicyFactory | None = None,
        raise_exception: bool = True,
    ) -> bool:
        """
        Check an action given by alias ("edit") or query name ("update?").

        The alias is translated through the configured alias table; unknown
        actions are used literally. The "?" suffix is appended when missing.

        Raises:
            PolicyNotDefinedError: The alias maps to no query, in strict mode.
        """
        aliases = self._config.alias_table()
        key = str(action)
        if key in aliases:
            action = aliases[key]

        if action is None:
            if self._config.raise_error_on_missing_policy:
                raise PolicyNotDefinedError("Policy method is missing")
            return True

        return self.authorize(
            user,
            record,
            query_name(action),
            policy_class=policy_class,
            raise_exception=raise_exception,
        )

    # ==================== Scopes ====================

    def apply_policy(self, user: Any, scope: Any) -> Any:
        """
        Filter a collection through the scope of its model's policy.

        Only a missing policy or scope is handled here. Errors raised while
        resolving the scope propagate regardless of strict mode.

        Returns:
            The resolved scope, or the input unchanged when authorization
            is skipped or no scope exists in lenient mode.
        """
        if self.skip_authorization() or user is None:
            return scope

        resolution = self._registry.resolve_scope(user, scope)
        if isinstance(resolution, PolicyNotDefined):
            return self._policy_not_defined(resolution, scope)

        try:
            return resolution.policy.resolve()
        except PolicyNotDefinedError:
            if not self._config.raise_error_on_missing_policy:
                return scope
            raise

    def apply_custom_policy(
        self,
        user: Any,
        policy_class: Any,
        scope: Any = None,
    ) -> Any:
        """
        Resolve a scope from an explicit policy (or scope) class.

        Any error is treated like a missing policy: in lenient mode the
        input is returned unchanged, in strict mode the error propagates.

        Returns:
            The resolved scope, else ``scope`` when given, else
            ``policy_class`` itself.
        """
        fallback = policy_class if scope is None else scope
        if self.skip_authorization() or user is None:
            return fallback

        try:
            scope_class = scope_class_for(policy_class)
            if scope_class is None:
                name = getattr(policy_class, "__name__", repr(policy_class))
                raise PolicyNotDefinedError(
                    f"unable to find scope in '{name}'", subject_type=name
                )
            return scope_class(user, scope).resolve()
        except Exception as e:
            if not self._config.raise_error_on_missing_policy:
                logger.warning(f"Custom policy scope failed, returning input: {e}")
                return fallback
            raise

    # ==================== Introspection ====================

    def authorized_methods(self, user: Any, record: Any) -> dict[str, bool]:
        """
        Pre-compute decisions for the standard actions.

        Returns:
            Mapping of new/edit/update/show/destroy to a bool.
        """
        aliases = self._config.alias_table()
        return {
            action: self.authorize(user, record, aliases.get(action, query_name(action)))
            for action in DEFAULT_ACTIONS
        }

    def defined_methods(
        self,
        user: Any,
        record: Any,
        policy_class: PolicyFactory | None = None,
        raise_exception: bool = True,
    ) -> set[str]:
        """
        Query names defined by the record's policy.

        When policy_class is given, a failure to construct it is not
        treated as a missing policy; it follows ``raise_exception``.
        """
        try:
            resolution = self._registry.resolve(user, record, policy_class=policy_class)
            if isinstance(resolution, PolicyNotDefined):
                return self._policy_not_defined(resolution, set())
            if resolution.policy is None:
                return set()
            return set(resolution.policy.query_methods())
        except PolicyNotDefinedError:
            if not self._config.raise_error_on_missing_policy:
                return set()
            raise
        except Exception as e:
            if raise_exception is False:
                logger.debug(f"Listing policy methods failed: {e}")
                return set()
            raise

    def has_method(
        self,
        user: Any,
        record: Any,
        method: Any,
        policy_class: PolicyFactory | None = None,
        raise_exception: bool = True,
    ) -> bool:
        """Whether the record's policy defines the query ("show" or "show?")."""
        methods = self.defined_methods(
            user, record, policy_class=policy_class, raise_exception=raise_exception
        )
        return query_name(method) in methods

    def _policy_not_defined(self, resolution: PolicyNotDefined, default: Any) -> Any:
        if self._config.raise_error_on_missing_policy:
            raise PolicyNotDefinedError(
                resolution.message, subject_type=resolution.subject_type
            )
        logger.debug(f"{resolution.message}; using default")
        return default
