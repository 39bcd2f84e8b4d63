"""Command-line interface for featuregate."""

import json
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich.console import Console
from rich.markup import escape

app = typer.Typer(
    name="featuregate",
    help="Declare, resolve and gate build-time feature flags.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

ConfigOption = Annotated[
    Path,
    typer.Option(
        "--config",
        "-c",
        help="Path to the project file (or a directory containing project.yaml).",
        exists=True,
    ),
]


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ...)."),
    ] = "ERROR",
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit logs as JSON."),
    ] = False,
) -> None:
    """Configure logging for all commands."""
    from featuregate.utils.logging import configure_logging

    configure_logging(level=log_level, json_output=json_logs)


@app.command()
def features(config: ConfigOption = Path("project.yaml")) -> None:
    """List the project's declared features and their status."""
    from featuregate.config import load_project
    from featuregate.declaration import parse
    from featuregate.diagnostics import Diagnostics
    from featuregate.report import FeatureReporter

    diagnostics = Diagnostics()
    try:
        project = load_project(config)
        state = parse(project.features, diagnostics)
    except (ValueError, yaml.YAMLError) as e:
        err_console.print(
            f"[red]Error: {escape(str(e))}[/red]", highlight=False, soft_wrap=True
        )
        raise typer.Exit(code=1) from e

    reporter = FeatureReporter(console)
    reporter.print_features(project.app, state)
    FeatureReporter(err_console).print_warnings(diagnostics)


@app.command()
def deps(
    config: ConfigOption = Path("project.yaml"),
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the resolved graph as JSON."),
    ] = False,
) -> None:
    """Show the gated dependency graph with each dependency's features."""
    from featuregate.diagnostics import Diagnostics
    from featuregate.graph import build_graph
    from featuregate.report import FeatureReporter

    diagnostics = Diagnostics()
    try:
        graph = build_graph(config, diagnostics)
    except (ValueError, yaml.YAMLError) as e:
        err_console.print(
            f"[red]Error: {escape(str(e))}[/red]", highlight=False, soft_wrap=True
        )
        raise typer.Exit(code=1) from e

    if as_json:
        payload = {
            "app": graph.project.app,
            "features": graph.state.all(),
            "dependencies": {
                node.name: node.features.as_config() for node in graph.nodes()
            },
            "excluded": [
                {"dependency": dep, "required_by": consumer}
                for consumer, dep in graph.excluded
            ],
        }
        typer.echo(json.dumps(payload, indent=2))
    else:
        FeatureReporter(console).print_graph(graph)
    FeatureReporter(err_console).print_warnings(diagnostics)


@app.command()
def version() -> None:
    """Show version information."""
    from featuregate import __version__

    console.print(f"featuregate version {__version__}")


if __name__ == "__main__":
    app()
