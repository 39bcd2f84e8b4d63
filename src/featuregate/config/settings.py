"""
Typed project configuration models using Pydantic.

A project file names the project, declares its features and lists its
dependency edges. Feature values are kept raw here and validated by
the declaration parser so that shape errors surface as feature errors.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from featuregate.declaration import unique
from featuregate.gating import check_only_features

DEFAULT_PROJECT_FILE = "project.yaml"


class DependencySpec(BaseModel):
    """One dependency edge as declared by its consumer."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Dependency name")
    path: Path | None = Field(
        default=None,
        description="Directory of a local dependency, relative to the consumer",
    )
    requirement: str | None = Field(
        default=None, description="Version requirement (informational only)"
    )
    features: tuple[str, ...] = Field(
        default=(), description="Features requested of the dependency"
    )
    default_features: bool = Field(
        default=True, description="Whether the dependency's defaults stay enabled"
    )
    # None means the edge has no only_features option at all
    only_features: tuple[str, ...] | None = Field(
        default=None,
        description="Consumer features gating this edge (any one enables it)",
    )

    @field_validator("features")
    @classmethod
    def collapse_duplicates(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Requested features are a set; drop repeats."""
        return tuple(unique(v))

    @field_validator("only_features", mode="before")
    @classmethod
    def validate_gate(cls, v: Any, info: ValidationInfo) -> Any:
        """A present gate must be a non-empty list of feature identifiers."""
        if v is None:
            return None
        return check_only_features(info.data.get("name", "<unnamed>"), v)

    @property
    def is_gated(self) -> bool:
        """Whether inclusion depends on consumer features."""
        return self.only_features is not None


class ProjectConfig(BaseModel):
    """A loaded project file."""

    model_config = ConfigDict(frozen=True)

    app: str = Field(description="Project name")
    version: str | None = Field(default=None, description="Project version")
    features: Any = Field(
        default=None, description="Raw feature declaration (default/optional)"
    )
    deps: tuple[DependencySpec, ...] = Field(
        default=(), description="Direct dependency edges"
    )
    root: Path = Field(
        default=Path("."), description="Directory the project file was loaded from"
    )

    def dependency_dir(self, dep: DependencySpec) -> Path | None:
        """Resolve a dependency's local directory against this project."""
        if dep.path is None:
            return None
        return self.root / dep.path
