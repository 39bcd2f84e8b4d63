"""
Dependency gating on consumer features.

An edge with ``only_features`` is kept only when at least one of those
features is enabled in the consumer. Edges without the option are always
kept. Dropped edges leave the graph entirely.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from featuregate.declaration import FeatureState, is_feature_name
from featuregate.errors import InvalidOnlyFeaturesError
from featuregate.utils.logging import get_logger

if TYPE_CHECKING:
    from featuregate.config.settings import DependencySpec

log = get_logger(__name__)


def validate_only_features(
    dependency_name: str, options: Mapping[str, Any]
) -> tuple[str, ...] | None:
    """
    Validate the ``only_features`` option of a raw dependency edge.

    Args:
        dependency_name: Name of the dependency (used in errors).
        options: Raw options of the edge.

    Returns:
        The gating features, or None when the option is absent.

    Raises:
        InvalidOnlyFeaturesError: The option is present but is not a
            non-empty list of identifiers.
    """
    if "only_features" not in options:
        return None
    return check_only_features(dependency_name, options["only_features"])


def check_only_features(dependency_name: str, value: Any) -> tuple[str, ...]:
    """Return a present ``only_features`` value as a tuple, or raise."""
    if (
        not isinstance(value, (list, tuple))
        or not value
        or not all(is_feature_name(name) for name in value)
    ):
        raise InvalidOnlyFeaturesError(dependency_name, value)
    return tuple(value)


def should_include(
    consumer_enabled: Iterable[str], only_features: Iterable[str] | None
) -> bool:
    """Return True if an edge passes the gate (any required feature enabled)."""
    if only_features is None:
        return True
    return not set(only_features).isdisjoint(consumer_enabled)


def filter_dependencies(
    consumer: FeatureState | None, deps: Sequence[DependencySpec]
) -> list[DependencySpec]:
    """
    Keep the edges whose gate passes for this consumer, in order.

    A consumer that declares no features passes every edge through.
    """
    if consumer is None or len(consumer) == 0:
        return list(deps)

    enabled = set(consumer.enabled_names())
    included: list[DependencySpec] = []
    for dep in deps:
        if should_include(enabled, dep.only_features):
            included.append(dep)
        else:
            log.debug(
                "Dependency excluded by only_features",
                dependency=dep.name,
                only_features=list(dep.only_features or ()),
                enabled=sorted(enabled),
            )
    return included
