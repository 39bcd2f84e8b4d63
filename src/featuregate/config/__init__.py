"""
Project configuration with typed Pydantic models.

Provides the project file models and YAML loading with environment
variable interpolation.
"""

from featuregate.config.loader import build_project, load_project
from featuregate.config.settings import (
    DEFAULT_PROJECT_FILE,
    DependencySpec,
    ProjectConfig,
)

__all__ = [
    "DEFAULT_PROJECT_FILE",
    "DependencySpec",
    "ProjectConfig",
    "build_project",
    "load_project",
]
