"""
Resolution of the features requested of a dependency.

A consumer asks a dependency for some features and chooses whether the
dependency's defaults come along. The result is the dependency's own
enabled/disabled split, which replaces its declared defaults for its build.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from featuregate.declaration import FeatureDeclaration, unique
from featuregate.errors import UnknownFeaturesError
from featuregate.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedFeatureSet:
    """
    Effective features of one dependency.

    ``enabled`` and ``disabled`` partition the dependency's declared set.
    """

    dependency: str
    enabled: tuple[str, ...]
    disabled: tuple[str, ...]

    @property
    def declared(self) -> tuple[str, ...]:
        return (*self.enabled, *self.disabled)

    def as_config(self) -> dict[str, list[str]]:
        """Return the split as a raw ``features`` mapping for the dependency."""
        return {"default": list(self.enabled), "optional": list(self.disabled)}


def _validate_requested(
    dependency: str, requested: list[str], declared: list[str]
) -> None:
    if not requested:
        return
    undeclared = [name for name in requested if name not in declared]
    if undeclared:
        raise UnknownFeaturesError(dependency, undeclared, declared)


def resolve(
    dependency_name: str,
    requested: Iterable[str],
    include_defaults: bool,
    declaration: FeatureDeclaration | None,
) -> ResolvedFeatureSet:
    """
    Resolve the features a consumer requests of a dependency.

    Args:
        dependency_name: Name of the dependency (used in errors).
        requested: Features the consumer explicitly asks for.
        include_defaults: Whether the dependency's default features stay on.
        declaration: The dependency's own declaration, or None when the
            dependency declares no features.

    Returns:
        The dependency's enabled/disabled split, in declaration order.

    Raises:
        UnknownFeaturesError: A requested feature is not declared.
    """
    declaration = declaration if declaration is not None else FeatureDeclaration()
    declared = declaration.declared
    requested = unique(requested)

    _validate_requested(dependency_name, requested, declared)

    if include_defaults:
        enabled = unique((*declaration.default, *requested))
    else:
        enabled = requested

    enabled_set = set(enabled)
    disabled = [name for name in declared if name not in enabled_set]

    log.debug(
        "Resolved dependency features",
        dependency=dependency_name,
        enabled=enabled,
        disabled=disabled,
        include_defaults=include_defaults,
    )
    return ResolvedFeatureSet(
        dependency=dependency_name,
        enabled=tuple(enabled),
        disabled=tuple(disabled),
    )
