"""
Console reporting for feature state and dependency graphs.

Formats results using Rich for clear, colored output.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from featuregate.declaration import FeatureState
from featuregate.diagnostics import Diagnostics
from featuregate.graph import DependencyGraph


class FeatureReporter:
    """Formats and displays feature information to the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize feature reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_features(self, app: str, state: FeatureState) -> None:
        """
        Print every declared feature sorted by name with its status.

        Args:
            app: Project name.
            state: The project's resolved features.
        """
        if len(state) == 0:
            self.console.print(f"No features configured for {app}", markup=False)
            return

        self.console.print(f"Features for {app}\n", markup=False)
        for name, enabled in sorted(state.all().items()):
            status = "enabled" if enabled else "disabled"
            self.console.print(f"  * {name} ({status})", markup=False, highlight=False)

    def print_graph(self, graph: DependencyGraph) -> None:
        """
        Print the gated dependency graph as a table.

        Args:
            graph: Graph built for the project.
        """
        if not graph.roots and not graph.excluded:
            self.console.print(
                f"No dependencies configured for {graph.project.app}", markup=False
            )
            return

        table = Table(title=f"Dependencies of {graph.project.app}", show_header=True)
        table.add_column("Dependency", style="cyan", no_wrap=True)
        table.add_column("Required by", style="blue")
        table.add_column("Enabled features", style="green")
        table.add_column("Disabled features", style="dim")

        for node in graph.nodes():
            table.add_row(
                escape(node.name),
                escape(node.consumer),
                escape(", ".join(node.features.enabled)) or "-",
                escape(", ".join(node.features.disabled)) or "-",
            )

        self.console.print(table)

        if graph.excluded:
            self.console.print()
            self.console.print("[bold]Excluded by only_features:[/bold]")
            for consumer, dependency in graph.excluded:
                self.console.print(
                    f"  {escape(dependency)} [dim](required by {escape(consumer)})[/dim]"
                )

    def print_warnings(self, diagnostics: Diagnostics) -> None:
        """
        Print non-fatal warnings, if any.

        Args:
            diagnostics: Collected warnings.
        """
        for warning in diagnostics:
            self.console.print(
                f"[yellow]warning:[/yellow] {escape(warning.message)}", soft_wrap=True
            )
