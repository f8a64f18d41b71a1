"""
Configuration for the authorization facade.

The configuration is passed explicitly to AuthorizationService rather than
read from a global, which keeps strict mode, the alias table and the feature
gate injectable in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from verdict.exceptions import ConfigurationError
from verdict.licensing import FeatureGate, StaticFeatureGate


def _default_authorization_methods() -> dict[str, str | None]:
    return {
        "index": "index?",
        "show": "show?",
        "edit": "edit?",
        "new": "new?",
        "update": "update?",
        "create": "create?",
        "destroy": "destroy?",
        "search": "search?",
    }


@dataclass
class AuthorizationConfig:
    """
    Configuration for authorization decisions.

    Attributes:
        authorization_methods: Alias table mapping short actions ("edit")
            to policy queries ("update?"). A None value declares the action
            as having no query at all.
        raise_error_on_missing_policy: Strict mode. When True, a subject
            without a policy is a hard error instead of a safe default.
        feature_gate: Decides whether authorization is enforced at all.
    """

    authorization_methods: dict[Any, str | None] = field(
        default_factory=_default_authorization_methods
    )
    raise_error_on_missing_policy: bool = False
    feature_gate: FeatureGate = field(default_factory=StaticFeatureGate)

    def alias_table(self) -> dict[str, str | None]:
        """Return the alias table with keys normalized to strings."""
        return {str(key): value for key, value in self.authorization_methods.items()}

    def authorization_disabled(self) -> bool:
        return self.feature_gate.authorization_disabled()

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "authorization_methods": self.alias_table(),
            "raise_error_on_missing_policy": self.raise_error_on_missing_policy,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        feature_gate: FeatureGate | None = None,
    ) -> AuthorizationConfig:
        """
        Create config from dictionary.

        Raises:
            ConfigurationError: If an alias maps to something other than
                a string or None.
        """
        methods = data.get("authorization_methods")
        if methods is None:
            methods = _default_authorization_methods()
        elif not isinstance(methods, dict):
            raise ConfigurationError(
                config_key="authorization_methods",
                expected="a mapping of action to query name",
                received=methods,
            )

        for key, value in methods.items():
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(
                    config_key=f"authorization_methods.{key}",
                    expected="a query name or None",
                    received=value,
                )

        return cls(
            authorization_methods=dict(methods),
            raise_error_on_missing_policy=bool(
                data.get("raise_error_on_missing_policy", False)
            ),
            feature_gate=feature_gate or StaticFeatureGate(),
        )
