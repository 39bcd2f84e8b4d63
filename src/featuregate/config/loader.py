"""
Project file loading.

Supports environment variable interpolation in string values, so a project
file can pick per-environment values the same way it picks paths:

    app: my_app
    version: "${APP_VERSION:0.1.0}"
    features:
      default: [json, logging]
      optional: [debug_tools, metrics]
    deps:
      - name: json_dep
        path: deps/json_dep
        only_features: [json]
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from featuregate.config.settings import (
    DEFAULT_PROJECT_FILE,
    DependencySpec,
    ProjectConfig,
)
from featuregate.gating import validate_only_features

DEPENDENCY_KEYS = frozenset(
    {"name", "path", "requirement", "features", "default_features", "only_features"}
)


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Project file {path} must contain a mapping, got {type(data).__name__}"
        raise ValueError(msg)
    return _process_config_values(data)


def _build_dependency(index: int, data: Any) -> DependencySpec:
    """Build one dependency edge, validating only_features first."""
    if isinstance(data, str):
        data = {"name": data}
    if not isinstance(data, Mapping):
        msg = f"Dependency #{index} must be a mapping or a name, got: {data!r}"
        raise ValueError(msg)

    name = data.get("name")
    if not name:
        msg = f"Dependency #{index} must specify 'name'"
        raise ValueError(msg)

    unknown = sorted(str(key) for key in data if key not in DEPENDENCY_KEYS)
    if unknown:
        msg = f"Unknown options {unknown} in dependency {name!r}"
        raise ValueError(msg)

    only_features = validate_only_features(str(name), data)

    return DependencySpec(
        name=str(name),
        path=Path(data["path"]) if data.get("path") else None,
        requirement=data.get("requirement"),
        features=data.get("features") or (),
        default_features=data.get("default_features", True),
        only_features=only_features,
    )


def build_project(data: Mapping[str, Any], root: Path = Path(".")) -> ProjectConfig:
    """
    Build a project configuration from an already-loaded mapping.

    Args:
        data: Raw project data.
        root: Directory local dependency paths are relative to.

    Returns:
        Validated ProjectConfig instance.
    """
    app = data.get("app")
    if not app:
        msg = "Project file must specify 'app' name"
        raise ValueError(msg)

    deps_data = data.get("deps") or []
    if not isinstance(deps_data, list):
        msg = f"'deps' in project {app!r} must be a list, got: {deps_data!r}"
        raise ValueError(msg)

    deps = tuple(_build_dependency(i, dep) for i, dep in enumerate(deps_data))

    version = data.get("version")
    return ProjectConfig(
        app=str(app),
        version=str(version) if version is not None else None,
        features=data.get("features"),
        deps=deps,
        root=root,
    )


def load_project(path: Path) -> ProjectConfig:
    """
    Load a project file.

    Args:
        path: Path to the project file, or to a directory containing
            ``project.yaml``.

    Returns:
        Fully validated ProjectConfig instance.
    """
    if path.is_dir():
        path = path / DEFAULT_PROJECT_FILE
    return build_project(load_yaml(path), root=path.parent)
