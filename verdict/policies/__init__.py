"""
Policy system for Verdict.

Policies are classes that decide what a user can do with a record. Each
subject type gets one policy, registered in a PolicyRegistry.

Quick Start:
    >>> from verdict.policies import Policy, PolicyRegistry, Scope
    >>>
    >>> registry = PolicyRegistry()
    >>>
    >>> @registry.policy(Invoice)
    ... class InvoicePolicy(Policy):
    ...     def can_show(self) -> bool:
    ...         return True
    ...
    ...     def can_update(self) -> bool:
    ...         return self.record.owner_id == self.user.id
    ...
    ...     class Scope(Scope):
    ...         def resolve(self):
    ...             return [i for i in self.scope if i.owner_id == self.user.id]
"""

from verdict.policies.base import Policy, Scope
from verdict.policies.registry import (
    PolicyRegistry,
    get_global_registry,
    reset_global_registry,
    scope_class_for,
    subject_type,
)

__all__ = [
    # Base classes
    "Policy",
    "Scope",
    # Registry
    "PolicyRegistry",
    "get_global_registry",
    "reset_global_registry",
    "scope_class_for",
    "subject_type",
]
