"""
Pytest fixtures for Verdict tests.

Provides common fixtures used across all test modules.
"""

from __future__ import annotations

import pytest

from tests.models import Invoice, InvoicePolicy, Note, User
from verdict import (
    AuthorizationConfig,
    AuthorizationService,
    PolicyRegistry,
    StaticFeatureGate,
)


# ============================================================================
# User Fixtures
# ============================================================================


@pytest.fixture
def owner() -> User:
    """A regular user owning invoice 10."""
    return User(id=1)


@pytest.fixture
def stranger() -> User:
    """A regular user owning nothing."""
    return User(id=2)


@pytest.fixture
def admin() -> User:
    """An admin user."""
    return User(id=99, roles=("admin",))


# ============================================================================
# Record Fixtures
# ============================================================================


@pytest.fixture
def invoice() -> Invoice:
    return Invoice(id=10, owner_id=1)


@pytest.fixture
def invoices() -> list[Invoice]:
    return [
        Invoice(id=10, owner_id=1),
        Invoice(id=11, owner_id=2),
        Invoice(id=12, owner_id=1),
    ]


@pytest.fixture
def note() -> Note:
    """A record with no registered policy."""
    return Note(body="hello")


# ============================================================================
# Registry & Service Fixtures
# ============================================================================


@pytest.fixture
def registry() -> PolicyRegistry:
    """Registry with InvoicePolicy registered for Invoice."""
    registry = PolicyRegistry()
    registry.register(Invoice, InvoicePolicy)
    return registry


@pytest.fixture
def config() -> AuthorizationConfig:
    """Lenient configuration with the default alias table."""
    return AuthorizationConfig()


@pytest.fixture
def strict_config() -> AuthorizationConfig:
    """Configuration that raises on missing policies."""
    return AuthorizationConfig(raise_error_on_missing_policy=True)


@pytest.fixture
def service(config: AuthorizationConfig, registry: PolicyRegistry) -> AuthorizationService:
    return AuthorizationService(config, registry)


@pytest.fixture
def strict_service(
    strict_config: AuthorizationConfig, registry: PolicyRegistry
) -> AuthorizationService:
    return AuthorizationService(strict_config, registry)


@pytest.fixture
def disabled_service(registry: PolicyRegistry) -> AuthorizationService:
    """Strict service whose feature gate turns authorization off."""
    config = AuthorizationConfig(
        raise_error_on_missing_policy=True,
        feature_gate=StaticFeatureGate(enabled=False),
    )
    return AuthorizationService(config, registry)
