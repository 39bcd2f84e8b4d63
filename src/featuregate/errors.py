"""
Fatal feature configuration errors.

Every error here is a user configuration mistake. They are raised at the
point of detection and abort resolution of the current project.
"""

from collections.abc import Iterable, Sequence
from typing import Any


class FeatureConfigError(ValueError):
    """Base class for all fatal feature configuration errors."""


class ConfigShapeError(FeatureConfigError):
    """The top-level ``features`` value is not a mapping."""

    def __init__(self, value: Any) -> None:
        self.value = value
        msg = (
            "Expected features in project configuration to be a mapping "
            f"with 'default' and/or 'optional' keys, got: {value!r}"
        )
        super().__init__(msg)


class UnknownKeysError(FeatureConfigError):
    """The ``features`` mapping contains keys other than default/optional."""

    def __init__(self, keys: Iterable[Any]) -> None:
        self.keys = list(keys)
        msg = (
            f"Unknown keys {self.keys!r} in features configuration. "
            "Only 'default' and 'optional' are allowed"
        )
        super().__init__(msg)


class InvalidFeatureNameError(FeatureConfigError):
    """A declared feature list is not a list of identifiers."""

    def __init__(self, key: str, value: Any) -> None:
        self.key = key
        self.value = value
        msg = (
            f"Expected {key!r} in features to be a list of identifiers, "
            f"got invalid entry: {value!r}"
        )
        super().__init__(msg)


class UnknownFeaturesError(FeatureConfigError):
    """A dependency edge requests features the dependency does not declare."""

    def __init__(
        self, dependency: str, unknown: Sequence[str], declared: Sequence[str]
    ) -> None:
        self.dependency = dependency
        self.unknown = list(unknown)
        self.declared = list(declared)
        msg = (
            f"Unknown features {self.unknown!r} requested for dependency "
            f"{dependency!r}. Declared features are: {self.declared!r}"
        )
        super().__init__(msg)


class InvalidOnlyFeaturesError(FeatureConfigError):
    """``only_features`` is present but not a non-empty list of identifiers."""

    def __init__(self, dependency: str, value: Any) -> None:
        self.dependency = dependency
        self.value = value
        msg = (
            f"Expected only_features in dependency {dependency!r} to be a "
            f"non-empty list of feature identifiers, got: {value!r}"
        )
        super().__init__(msg)
