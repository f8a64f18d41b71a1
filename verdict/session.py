"""
Decision sessions.

An AuthorizationSession binds a user (and optionally a record and an
explicit policy class) to a service, so repeated checks, e.g. while iterating
a collection, don't need to repeat the user every time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from verdict.types import query_name

if TYPE_CHECKING:
    from verdict.policies.registry import PolicyFactory
    from verdict.service import AuthorizationService


class AuthorizationSession:
    """
    Fluent wrapper around AuthorizationService for one user.

    The policy class override is fixed at construction; the user and record
    can be swapped with ``set_user`` and ``set_record``, which return the
    session for chaining. A session is meant to be used by one thread.

    Example:
        >>> session = service.session(current_user)
        >>> editable = [
        ...     invoice for invoice in invoices
        ...     if session.set_record(invoice).authorize_action("edit")
        ... ]
    """

    def __init__(
        self,
        service: AuthorizationService,
        user: Any = None,
        record: Any = None,
        policy_class: PolicyFactory | None = None,
    ) -> None:
        self._service = service
        self._user = user
        self._record = record
        self._policy_class = policy_class

    @property
    def user(self) -> Any:
        return self._user

    @property
    def record(self) -> Any:
        return self._record

    @property
    def policy_class(self) -> PolicyFactory | None:
        return self._policy_class

    def set_user(self, user: Any) -> AuthorizationSession:
        self._user = user
        return self

    def set_record(self, record: Any) -> AuthorizationSession:
        self._record = record
        return self

    def authorize(self, action: str, raise_exception: bool = True) -> bool:
        return self._service.authorize(
            self._user,
            self._record,
            action,
            policy_class=self._policy_class,
            raise_exception=raise_exception,
        )

    def authorize_action(self, action: Any, raise_exception: bool = True) -> bool:
        return self._service.authorize_action(
            self._user,
            self._record,
            action,
            policy_class=self._policy_class,
            raise_exception=raise_exception,
        )

    def apply_policy(self, scope: Any) -> Any:
        """Scope a collection, through the session's policy class if it has one."""
        if self._policy_class is not None:
            return self._service.apply_custom_policy(
                self._user, self._policy_class, scope
            )
        return self._service.apply_policy(self._user, scope)

    def authorized_methods(self) -> dict[str, bool]:
        return self._service.authorized_methods(self._user, self._record)

    def defined_methods(self, record: Any, raise_exception: bool = True) -> set[str]:
        return self._service.defined_methods(
            self._user,
            record,
            policy_class=self._policy_class,
            raise_exception=raise_exception,
        )

    def has_method(self, method: Any, raise_exception: bool = True) -> bool:
        """Whether the current record's policy defines the query."""
        methods = self.defined_methods(self._record, raise_exception=raise_exception)
        return query_name(method) in methods

    def __repr__(self) -> str:
        return (
            f"AuthorizationSession(user={self._user!r}, record={self._record!r}, "
            f"policy_class={self._policy_class!r})"
        )
