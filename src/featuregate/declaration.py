"""
Feature declaration parsing.

Turns a project's raw ``features`` value into a canonical name -> bool map.

Example project file fragment::

    features:
      default: [json, logging]
      optional: [debug_tools, metrics]

``default`` features are enabled, ``optional`` features are declared but
disabled. A name listed in both is enabled and reported as an overlap.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from featuregate.diagnostics import (
    Diagnostics,
    FeatureOverlapWarning,
    UndeclaredFeatureWarning,
)
from featuregate.errors import (
    ConfigShapeError,
    InvalidFeatureNameError,
    UnknownKeysError,
)
from featuregate.utils.logging import get_logger

log = get_logger(__name__)

# Checked in this order when validating a declaration
DECLARATION_KEYS: tuple[str, ...] = ("default", "optional")


def is_feature_name(value: Any) -> bool:
    """Return True if value is a bare identifier usable as a feature name."""
    return isinstance(value, str) and value.isidentifier()


def unique(names: Any) -> list[str]:
    """Deduplicate names, keeping the first occurrence of each."""
    return list(dict.fromkeys(names))


class FeatureDeclaration(BaseModel):
    """What a project or dependency declares it can offer."""

    model_config = ConfigDict(frozen=True)

    default: tuple[str, ...] = Field(
        default=(), description="Features enabled unless overridden"
    )
    optional: tuple[str, ...] = Field(
        default=(), description="Features disabled unless requested"
    )

    @property
    def declared(self) -> list[str]:
        """All declared names, defaults first, without duplicates."""
        return unique((*self.default, *self.optional))

    @property
    def overlap(self) -> tuple[str, ...]:
        """Names listed under both default and optional."""
        optional = set(self.optional)
        return tuple(unique(name for name in self.default if name in optional))


def _validate_names(key: str, value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        raise InvalidFeatureNameError(key, value)
    for entry in value:
        if not is_feature_name(entry):
            raise InvalidFeatureNameError(key, entry)
    return tuple(value)


def parse_declaration(raw: Any) -> FeatureDeclaration:
    """
    Validate a raw ``features`` value and build its declaration.

    Args:
        raw: The raw value, usually straight from the project file.

    Returns:
        The validated declaration (empty when raw is absent or empty).

    Raises:
        ConfigShapeError: raw is present but not a mapping.
        UnknownKeysError: raw has keys other than default/optional.
        InvalidFeatureNameError: a feature list is malformed.
    """
    if raw is None or (isinstance(raw, (Mapping, list, tuple)) and len(raw) == 0):
        return FeatureDeclaration()

    if not isinstance(raw, Mapping):
        raise ConfigShapeError(raw)

    unknown = [key for key in raw if key not in DECLARATION_KEYS]
    if unknown:
        raise UnknownKeysError(unknown)

    lists = {key: _validate_names(key, raw.get(key, [])) for key in DECLARATION_KEYS}
    return FeatureDeclaration(**lists)


@dataclass(frozen=True)
class FeatureState:
    """
    Resolved enabled/disabled state of every declared feature.

    The table is fixed once built. Build stages read it as constants.
    """

    declaration: FeatureDeclaration
    features: dict[str, bool]
    diagnostics: Diagnostics = field(
        default_factory=Diagnostics, compare=False, repr=False
    )

    @classmethod
    def from_declaration(
        cls,
        declaration: FeatureDeclaration,
        diagnostics: Diagnostics | None = None,
    ) -> "FeatureState":
        """Resolve a declaration, reporting default/optional overlap."""
        diagnostics = diagnostics if diagnostics is not None else Diagnostics()

        overlap = declaration.overlap
        if overlap:
            diagnostics.warn(FeatureOverlapWarning.for_features(overlap))

        # default is applied last so it wins on collision
        features = dict.fromkeys(declaration.optional, False)
        features.update(dict.fromkeys(declaration.default, True))
        return cls(declaration=declaration, features=features, diagnostics=diagnostics)

    def all(self) -> dict[str, bool]:
        """Return a copy of the full name -> enabled map."""
        return dict(self.features)

    def enabled_names(self) -> list[str]:
        """Names of enabled features."""
        return [name for name, enabled in self.features.items() if enabled]

    def declared_names(self) -> list[str]:
        """Names of all declared features."""
        return list(self.features)

    def is_enabled(self, name: str) -> bool:
        """
        Look up a single feature.

        Undeclared names resolve to False and are reported, which catches
        typos without turning a disabled branch into an error.
        """
        if not is_feature_name(name):
            msg = f"is_enabled expects a literal feature identifier, got: {name!r}"
            raise TypeError(msg)
        if name not in self.features:
            self.diagnostics.warn(UndeclaredFeatureWarning.for_feature(name))
            return False
        return self.features[name]

    def __contains__(self, name: object) -> bool:
        return name in self.features

    def __iter__(self) -> Iterator[str]:
        return iter(self.features)

    def __len__(self) -> int:
        return len(self.features)


def parse(raw: Any, diagnostics: Diagnostics | None = None) -> FeatureState:
    """
    Parse a raw ``features`` value into a FeatureState.

    Args:
        raw: Raw ``features`` value (mapping, or None when not configured).
        diagnostics: Collector for non-fatal warnings. A fresh one is
            created when omitted.

    Returns:
        Map of every declared feature to its enabled state.
    """
    declaration = parse_declaration(raw)
    state = FeatureState.from_declaration(declaration, diagnostics)
    log.debug(
        "Parsed feature declaration",
        enabled=state.enabled_names(),
        declared=state.declared_names(),
    )
    return state
