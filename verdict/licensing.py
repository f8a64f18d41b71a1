"""
Feature gating for Verdict.

A feature gate can globally switch authorization enforcement off, e.g. when
the running license does not include the authorization feature. The facade
only ever asks one question: ``authorization_disabled()``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

AUTHORIZATION_FEATURE = "authorization"


@runtime_checkable
class FeatureGate(Protocol):
    """Anything that can tell the facade whether to skip authorization."""

    def authorization_disabled(self) -> bool:
        ...


class StaticFeatureGate:
    """
    Feature gate with a fixed answer.

    Example:
        >>> gate = StaticFeatureGate(enabled=False)
        >>> gate.authorization_disabled()
        True
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def authorization_disabled(self) -> bool:
        return not self.enabled

    def __repr__(self) -> str:
        return f"StaticFeatureGate(enabled={self.enabled})"


class License:
    """
    A license granting a set of features.

    While a trial is active every feature counts as available, so
    ``lacks_with_trial`` only reports a feature as missing for paid
    licenses that do not include it.

    Attributes:
        features: Feature names included in the license.
        trial: Whether the license is in its trial period.

    Example:
        >>> license = License(["authorization", "search"])
        >>> license.lacks("dashboards")
        True
        >>> License([], trial=True).lacks_with_trial("authorization")
        False
    """

    def __init__(self, features: Iterable[str] = (), trial: bool = False) -> None:
        self.features = frozenset(features)
        self.trial = trial

    def has(self, feature: str) -> bool:
        return feature in self.features

    def lacks(self, feature: str) -> bool:
        return not self.has(feature)

    def lacks_with_trial(self, feature: str) -> bool:
        """True when the feature is missing and no trial covers it."""
        if self.trial:
            return False
        return self.lacks(feature)

    def authorization_disabled(self) -> bool:
        disabled = self.lacks_with_trial(AUTHORIZATION_FEATURE)
        if disabled:
            logger.debug("License lacks authorization feature; skipping checks")
        return disabled
