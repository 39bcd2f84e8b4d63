"""
Dependency graph construction with feature gating.

Starting at a root project, each consumer's direct edges are gated on its
enabled features. Every surviving edge has its requested features resolved
against the dependency's own declaration, and that resolved split is the
state the dependency uses to gate its own edges. Gated-out edges are never
loaded, so nothing below them enters the graph.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from featuregate.config.loader import load_project
from featuregate.config.settings import (
    DEFAULT_PROJECT_FILE,
    DependencySpec,
    ProjectConfig,
)
from featuregate.declaration import FeatureDeclaration, FeatureState, parse
from featuregate.diagnostics import DependencyFeaturesMismatchWarning, Diagnostics
from featuregate.gating import filter_dependencies
from featuregate.resolver import ResolvedFeatureSet, resolve
from featuregate.utils.logging import get_logger, log_context

log = get_logger(__name__)


@dataclass
class DependencyNode:
    """A dependency that made it into the graph."""

    spec: DependencySpec
    consumer: str
    features: ResolvedFeatureSet
    declaration: FeatureDeclaration = field(default_factory=FeatureDeclaration)
    project: ProjectConfig | None = None
    children: list["DependencyNode"] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.spec.name


@dataclass
class DependencyGraph:
    """
    Gated and feature-resolved dependency graph of a project.

    Attributes:
        project: The root project.
        state: Feature state of the root project.
        roots: Nodes for the root project's included direct dependencies.
        excluded: (consumer, dependency) pairs dropped by gating.
        diagnostics: Warnings collected while building the graph.
    """

    project: ProjectConfig
    state: FeatureState
    roots: list[DependencyNode] = field(default_factory=list)
    excluded: list[tuple[str, str]] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def nodes(self) -> Iterator[DependencyNode]:
        """Iterate over all nodes depth-first, each node once."""
        seen: set[int] = set()
        stack = list(reversed(self.roots))
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            yield node
            stack.extend(reversed(node.children))

    def find(self, name: str) -> DependencyNode | None:
        """Return the node for a dependency name, if it was included."""
        return next((node for node in self.nodes() if node.name == name), None)

    def names(self) -> list[str]:
        """Names of all included dependencies."""
        return [node.name for node in self.nodes()]


def direct_children(
    project: ProjectConfig, state: FeatureState
) -> list[DependencySpec]:
    """Return the project's direct edges that pass feature gating."""
    return filter_dependencies(state, project.deps)


def _load_dependency_project(directory: Path | None) -> ProjectConfig | None:
    if directory is None:
        return None
    project_file = directory / DEFAULT_PROJECT_FILE
    if not project_file.is_file():
        return None
    return load_project(project_file)


class GraphBuilder:
    """Walks path dependencies from a root project."""

    def __init__(self, diagnostics: Diagnostics | None = None) -> None:
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self._resolved: dict[str, DependencyNode] = {}

    def build(self, project: ProjectConfig) -> DependencyGraph:
        """Build the graph for an already-loaded root project."""
        with log_context(project=project.app):
            state = parse(project.features, self.diagnostics)
            graph = DependencyGraph(
                project=project, state=state, diagnostics=self.diagnostics
            )
            graph.roots = self._expand(project, state, graph)
        log.info(
            "Dependency graph built",
            project=project.app,
            included=len(graph.names()),
            excluded=len(graph.excluded),
        )
        return graph

    def _expand(
        self, project: ProjectConfig, state: FeatureState, graph: DependencyGraph
    ) -> list[DependencyNode]:
        included = direct_children(project, state)
        included_ids = {id(dep) for dep in included}
        graph.excluded.extend(
            (project.app, dep.name)
            for dep in project.deps
            if id(dep) not in included_ids
        )
        return [self._node(project, dep, graph) for dep in included]

    def _node(
        self, consumer: ProjectConfig, dep: DependencySpec, graph: DependencyGraph
    ) -> DependencyNode:
        with log_context(project=consumer.app, dependency=dep.name):
            existing = self._resolved.get(dep.name)
            if existing is not None:
                self._check_reused(consumer, dep, existing)
                return existing

            dep_project = _load_dependency_project(consumer.dependency_dir(dep))
            declared = parse(
                dep_project.features if dep_project else None, self.diagnostics
            )
            features = resolve(
                dep.name, dep.features, dep.default_features, declared.declaration
            )
            node = DependencyNode(
                spec=dep,
                consumer=consumer.app,
                features=features,
                declaration=declared.declaration,
                project=dep_project,
            )
            self._resolved[dep.name] = node

            if dep_project is not None:
                effective = parse(features.as_config(), self.diagnostics)
                node.children = self._expand(dep_project, effective, graph)
        return node

    def _check_reused(
        self, consumer: ProjectConfig, dep: DependencySpec, existing: DependencyNode
    ) -> None:
        """Validate a later edge to an already resolved dependency."""
        # The first edge's resolution stays; this one must still be valid
        features = resolve(
            dep.name, dep.features, dep.default_features, existing.declaration
        )
        if set(features.enabled) != set(existing.features.enabled):
            self.diagnostics.warn(
                DependencyFeaturesMismatchWarning.for_dependency(
                    dep.name,
                    consumer.app,
                    features.enabled,
                    existing.features.enabled,
                )
            )


def build_graph(
    project_file: Path, diagnostics: Diagnostics | None = None
) -> DependencyGraph:
    """
    Load a project file and build its gated dependency graph.

    Args:
        project_file: Path to the root project file (or its directory).
        diagnostics: Collector for non-fatal warnings.

    Returns:
        The dependency graph.
    """
    project = load_project(project_file)
    return GraphBuilder(diagnostics).build(project)
