"""
Policy base classes for Verdict.

Policies follow the Pundit pattern: one policy class per subject type, with
one check method per query. Query names end in "?" ("update?"), and the
method implementing a query is named ``can_<action>`` ("can_update").

The Scope pattern complements policies for collections: a scope filters a
collection down to what the user may see.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from verdict.exceptions import NotAuthorizedError, QueryNotDefinedError
from verdict.types import check_method_name, query_for_method, query_name

# Type variable for the record being authorized
T = TypeVar("T")


class Policy(Generic[T]):
    """
    Base class for all Verdict policies.

    Attributes:
        user: The principal the decision is made for.
        record: The record being checked. Can be a class for
            type-level checks (e.g., "can user create invoices?").

    Example:
        >>> class InvoicePolicy(Policy):
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

    def __init__(self, user: Any, record: T | None = None) -> None:
        self.user = user
        self.record = record

    def authorize(self, query: str) -> T | None:
        """
        Run a check and raise unless it passes.

        Args:
            query: The query to run ("update?" or "update").

        Returns:
            The record, so calls can be chained.

        Raises:
            QueryNotDefinedError: If the policy has no method for the query.
            NotAuthorizedError: If the check returned a falsy value.
        """
        query = query_name(query)
        if not self.can(query):
            raise NotAuthorizedError(query, record=self.record, policy=self)
        return self.record

    def can(self, query: str) -> bool:
        """
        Run a check and return its result as a bool.

        Raises:
            QueryNotDefinedError: If the policy has no method for the query.
        """
        query = query_name(query)
        method = getattr(self, check_method_name(query), None)
        if method is None or not callable(method):
            raise QueryNotDefinedError(query, type(self).__name__)
        return bool(method())

    @classmethod
    def query_methods(cls) -> set[str]:
        """
        Get all queries defined by this policy.

        Example:
            >>> class NotePolicy(Policy):
            ...     def can_show(self): return True
            ...     def can_destroy(self): return False
            >>> sorted(NotePolicy.query_methods())
            ['destroy?', 'show?']
        """
        queries = set()
        for name in dir(cls):
            query = query_for_method(name)
            if query is not None and callable(getattr(cls, name)):
                queries.add(query)
        return queries

    def __repr__(self) -> str:
        return f"{type(self).__name__}(user={self.user!r}, record={self.record!r})"


class Scope(Generic[T]):
    """
    Base class for filtering collections based on user permissions.

    Example:
        >>> class InvoiceScope(Scope):
        ...     def resolve(self):
        ...         if self.user.is_admin:
        ...             return self.scope
        ...         return [i for i in self.scope if i.owner_id == self.user.id]
    """

    def __init__(self, user: Any, scope: Any) -> None:
        self.user = user
        self.scope = scope

    def resolve(self) -> Any:
        """
        Filter the scope to authorized items.

        Subclasses override this. The default returns an empty list.
        """
        return []
