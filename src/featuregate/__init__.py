"""
featuregate: build-time feature flags.

Parses a project's feature declarations, resolves the features requested of
each dependency and gates dependencies on the consumer's enabled features.
"""

from importlib.metadata import version

from featuregate.declaration import FeatureDeclaration, FeatureState, parse
from featuregate.diagnostics import Diagnostics
from featuregate.gating import (
    filter_dependencies,
    should_include,
    validate_only_features,
)
from featuregate.resolver import ResolvedFeatureSet, resolve

__version__ = version("featuregate")

__all__ = [
    "Diagnostics",
    "FeatureDeclaration",
    "FeatureState",
    "ResolvedFeatureSet",
    "__version__",
    "filter_dependencies",
    "parse",
    "resolve",
    "should_include",
    "validate_only_features",
]
