"""
Non-fatal feature diagnostics.

Overlapping declarations and lookups of undeclared features do not abort
resolution. They are collected here so callers (and tests) can inspect them,
and each one is also logged as a warning.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeVar

from featuregate.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class FeatureWarning:
    """A non-fatal finding about feature configuration."""

    message: str
    features: tuple[str, ...]


@dataclass(frozen=True)
class FeatureOverlapWarning(FeatureWarning):
    """Features listed under both default and optional (default wins)."""

    @classmethod
    def for_features(cls, features: tuple[str, ...]) -> "FeatureOverlapWarning":
        message = (
            f"Features {list(features)!r} appear in both default and optional. "
            "They will be enabled"
        )
        return cls(message=message, features=features)


@dataclass(frozen=True)
class DependencyFeaturesMismatchWarning(FeatureWarning):
    """A dependency reached again with a request that resolves differently."""

    @classmethod
    def for_dependency(
        cls,
        dependency: str,
        consumer: str,
        requested: tuple[str, ...],
        resolved: tuple[str, ...],
    ) -> "DependencyFeaturesMismatchWarning":
        message = (
            f"Dependency {dependency!r} required by {consumer!r} would enable "
            f"{list(requested)!r}, but it is already resolved with "
            f"{list(resolved)!r}. Keeping the first resolution"
        )
        return cls(message=message, features=requested)


@dataclass(frozen=True)
class UndeclaredFeatureWarning(FeatureWarning):
    """Lookup of a feature that is not declared (resolves to disabled)."""

    @classmethod
    def for_feature(cls, feature: str) -> "UndeclaredFeatureWarning":
        message = (
            f"feature {feature!r} is not declared in the project's "
            "features configuration"
        )
        return cls(message=message, features=(feature,))


W = TypeVar("W", bound=FeatureWarning)


class Diagnostics:
    """Collector for non-fatal feature warnings."""

    def __init__(self) -> None:
        self.warnings: list[FeatureWarning] = []

    def warn(self, warning: FeatureWarning) -> None:
        """Record a warning and log it."""
        self.warnings.append(warning)
        log.warning(
            warning.message,
            kind=type(warning).__name__,
            features=list(warning.features),
        )

    def of_type(self, kind: type[W]) -> list[W]:
        """Return recorded warnings of the given type."""
        return [w for w in self.warnings if isinstance(w, kind)]

    def messages(self) -> list[str]:
        """Return the text of every recorded warning, in order."""
        return [w.message for w in self.warnings]

    def __iter__(self) -> Iterator[FeatureWarning]:
        return iter(self.warnings)

    def __len__(self) -> int:
        return len(self.warnings)
