"""
Verdict: an authorization decision facade for Pundit-style policies.

Verdict decides whether a user may perform an action on a record by
resolving the record's policy and running the matching check, applies
policy scopes to collections, and reports which checks a policy defines.

Basic Usage:
    >>> from verdict import AuthorizationConfig, AuthorizationService, Policy
    >>> from verdict import PolicyRegistry
    >>>
    >>> registry = PolicyRegistry()
    >>>
    >>> @registry.policy(Invoice)
    ... class InvoicePolicy(Policy):
    ...     def can_show(self):
    ...         return True
    ...
    ...     def can_update(self):
    ...         return self.record.owner_id == self.user.id
    >>>
    >>> service = AuthorizationService(AuthorizationConfig(), registry)
    >>> service.authorize_action(user, invoice, "edit")
    True
"""

__version__ = "0.1.0"

from verdict.config import AuthorizationConfig
from verdict.exceptions import (
    ConfigurationError,
    NotAuthorizedError,
    PolicyNotDefinedError,
    QueryNotDefinedError,
    VerdictError,
)
from verdict.licensing import FeatureGate, License, StaticFeatureGate
from verdict.policies.base import Policy, Scope
from verdict.policies.registry import (
    PolicyRegistry,
    get_global_registry,
    reset_global_registry,
)
from verdict.service import AuthorizationService
from verdict.session import AuthorizationSession
from verdict.types import (
    DEFAULT_ACTIONS,
    PolicyFound,
    PolicyNotDefined,
    query_name,
)

__all__ = [
    # Version
    "__version__",
    # Facade
    "AuthorizationService",
    "AuthorizationSession",
    "AuthorizationConfig",
    # Policies
    "Policy",
    "Scope",
    "PolicyRegistry",
    "get_global_registry",
    "reset_global_registry",
    # Feature gates
    "FeatureGate",
    "StaticFeatureGate",
    "License",
    # Types
    "PolicyFound",
    "PolicyNotDefined",
    "DEFAULT_ACTIONS",
    "query_name",
    # Exceptions
    "VerdictError",
    "PolicyNotDefinedError",
    "NotAuthorizedError",
    "QueryNotDefinedError",
    "ConfigurationError",
]
