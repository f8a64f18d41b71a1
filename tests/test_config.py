"""
Tests for configuration and feature gates.

Tests cover:
- AuthorizationConfig defaults, alias table, dict round trip
- Config validation errors
- StaticFeatureGate and License
"""

from __future__ import annotations

import pytest

from verdict import AuthorizationConfig, FeatureGate, License, StaticFeatureGate
from verdict.exceptions import ConfigurationError, VerdictError
from verdict.types import query_name


class TestAuthorizationConfig:
    """Tests for AuthorizationConfig dataclass."""

    def test_default_config(self):
        """Test default configuration values."""
        config = AuthorizationConfig()

        assert config.raise_error_on_missing_policy is False
        assert config.authorization_disabled() is False
        assert config.authorization_methods["edit"] == "edit?"
        assert set(config.authorization_methods) == {
            "index", "show", "edit", "new", "update", "create", "destroy", "search",
        }

    def test_defaults_are_not_shared(self):
        """Test each config gets its own alias table."""
        first = AuthorizationConfig()
        first.authorization_methods["edit"] = "update?"

        assert AuthorizationConfig().authorization_methods["edit"] == "edit?"

    def test_alias_table_stringifies_keys(self):
        config = AuthorizationConfig(authorization_methods={1: "show?", "edit": None})
        assert config.alias_table() == {"1": "show?", "edit": None}

    def test_to_dict(self):
        config = AuthorizationConfig(raise_error_on_missing_policy=True)
        data = config.to_dict()

        assert data["raise_error_on_missing_policy"] is True
        assert data["authorization_methods"]["show"] == "show?"

    def test_from_dict(self):
        config = AuthorizationConfig.from_dict(
            {
                "authorization_methods": {"edit": "update?", "archive": None},
                "raise_error_on_missing_policy": True,
            }
        )

        assert config.authorization_methods == {"edit": "update?", "archive": None}
        assert config.raise_error_on_missing_policy is True
        assert isinstance(config.feature_gate, StaticFeatureGate)

    def test_from_dict_defaults(self):
        config = AuthorizationConfig.from_dict({})

        assert config.authorization_methods == AuthorizationConfig().authorization_methods
        assert config.raise_error_on_missing_policy is False

    def test_from_dict_with_feature_gate(self):
        config = AuthorizationConfig.from_dict({}, feature_gate=License())
        assert config.authorization_disabled() is True

    def test_from_dict_rejects_bad_alias(self):
        with pytest.raises(ConfigurationError) as exc_info:
            AuthorizationConfig.from_dict({"authorization_methods": {"edit": 42}})

        assert exc_info.value.config_key == "authorization_methods.edit"
        assert "42" in str(exc_info.value)
        assert isinstance(exc_info.value, VerdictError)

    def test_from_dict_rejects_non_mapping(self):
        with pytest.raises(ConfigurationError):
            AuthorizationConfig.from_dict({"authorization_methods": ["edit"]})


class TestFeatureGates:
    """Tests for StaticFeatureGate and License."""

    def test_static_gate(self):
        assert StaticFeatureGate().authorization_disabled() is False
        assert StaticFeatureGate(enabled=False).authorization_disabled() is True

    def test_gates_satisfy_protocol(self):
        assert isinstance(StaticFeatureGate(), FeatureGate)
        assert isinstance(License(), FeatureGate)

    def test_license_features(self):
        license = License(["authorization", "search"])

        assert license.has("search")
        assert license.lacks("dashboards")
        assert license.authorization_disabled() is False

    def test_license_without_authorization(self):
        license = License(["search"])

        assert license.lacks_with_trial("authorization") is True
        assert license.authorization_disabled() is True

    def test_trial_covers_everything(self):
        license = License(trial=True)

        assert license.lacks("authorization") is True
        assert license.lacks_with_trial("authorization") is False
        assert license.authorization_disabled() is False

    def test_gate_is_read_on_every_call(self):
        """Test reconfiguring the gate at runtime takes effect."""
        gate = StaticFeatureGate()
        config = AuthorizationConfig(feature_gate=gate)

        gate.enabled = False

        assert config.authorization_disabled() is True


class TestQueryName:
    """Tests for query name normalization."""

    @pytest.mark.parametrize(
        "action, expected",
        [
            ("update", "update?"),
            ("update?", "update?"),
            ("index", "index?"),
        ],
    )
    def test_suffix_appended_once(self, action, expected):
        assert query_name(action) == expected
