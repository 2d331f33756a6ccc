"""Command-line interface for C4Viz."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core import (
    C4Viz,
    C4VizError,
    Direction,
    DisplayMode,
    OutputFormat,
    Splines,
    Theme,
    load_model,
)

# Setup rich console
console = Console()


# Configure logging
def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging with rich handler."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    # basicConfig is a no-op once handlers exist
    logging.getLogger().setLevel(level)


def fail(error: Exception) -> None:
    """Report an error and exit with status 1."""
    console.print(f"Error: {error}", style="red")
    if logging.getLogger().level == logging.DEBUG:
        console.print_exception()
    sys.exit(1)


def display_mode(systems: tuple[str, ...], show_all: bool) -> DisplayMode:
    """Selective when systems are named, unless --all forces every cluster."""
    if show_all or not systems:
        return DisplayMode.ALL
    return DisplayMode.SELECTIVE


system_option = click.option(
    "--system",
    "-s",
    "systems",
    multiple=True,
    help="Internal system id to expand into a container cluster. Can be specified multiple times. "
    "Other internal systems are collapsed to a single node when they are connected.",
)
all_option = click.option(
    "--all",
    "show_all",
    is_flag=True,
    help="Expand every internal system (ignores --system).",
)
theme_option = click.option(
    "--theme",
    "-t",
    type=click.Choice([t.value for t in Theme]),
    default=Theme.LIGHT.value,
    help="Visual theme (default: light)",
)
direction_option = click.option(
    "--direction",
    type=click.Choice([d.value for d in Direction]),
    default=Direction.LEFT_TO_RIGHT.value,
    help="Graph layout direction (default: left-to-right)",
)
splines_option = click.option(
    "--splines",
    type=click.Choice([s.value for s in Splines]),
    default=Splines.SPLINE.value,
    help="Edge appearance (default: spline)",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--debug", is_flag=True, help="Enable debug logging and show tracebacks on errors")
@click.version_option(package_name="python-c4viz")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """C4Viz - C4 container diagrams from architecture models.

    \b
    Examples:
      python-c4viz list-systems model.json
      python-c4viz export model.json
      python-c4viz export model.json -s shop -s billing --theme dark
      python-c4viz dot model.json -s shop -o shop.dot
      python-c4viz validate model.json
    """
    setup_logging(verbose, debug)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("model_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@system_option
@all_option
@click.option(
    "--output",
    "-o",
    default="c4-containers.png",
    help="Output file path (default: c4-containers.png, extension follows --format)",
)
@theme_option
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.PNG.value,
    help="Output format (default: png)",
)
@direction_option
@splines_option
@click.option("--save-dot", is_flag=True, help="Save DOT source file alongside output")
@click.pass_context
def export(
    ctx: click.Context,
    model_file: Path,
    systems: tuple[str, ...],
    show_all: bool,
    output: str,
    theme: str,
    output_format: str,
    direction: str,
    splines: str,
    save_dot: bool,
) -> None:
    """Export a C4 container diagram.

    Examples:
      python-c4viz export model.json                        # Every internal system
      python-c4viz export model.json -s shop                # Only 'shop' as a cluster
      python-c4viz export model.json -f svg -o shop.svg
    """
    verbose_mode = ctx.obj.get("verbose", False)

    # Follow the format when the default file name is used
    output_file = output
    if output == "c4-containers.png" and output_format != OutputFormat.PNG.value:
        output_file = f"c4-containers.{output_format}"

    try:
        c4viz = C4Viz(verbose=verbose_mode)
        output_path = c4viz.export_diagram(
            model_file,
            output_file=output_file,
            internal_systems=systems,
            mode=display_mode(systems, show_all),
            theme=Theme(theme),
            output_format=OutputFormat(output_format),
            direction=Direction(direction),
            splines=Splines(splines),
            save_dot=save_dot,
        )
        console.print(f"{output_path}", style="green")
    except C4VizError as e:
        fail(e)


@cli.command("dot")
@click.argument("model_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@system_option
@all_option
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write DOT to a file instead of stdout")
@theme_option
@direction_option
@splines_option
def dot_source(
    model_file: Path,
    systems: tuple[str, ...],
    show_all: bool,
    output: Path | None,
    theme: str,
    direction: str,
    splines: str,
) -> None:
    """Print the DOT source of a container diagram (no Graphviz needed)."""
    try:
        dot_content = C4Viz().generate_dot(
            model_file,
            internal_systems=systems,
            mode=display_mode(systems, show_all),
            theme=Theme(theme),
            direction=Direction(direction),
            splines=Splines(splines),
        )
    except C4VizError as e:
        fail(e)
        return

    if output is None:
        click.echo(dot_content, nl=False)
    else:
        output.write_text(dot_content, encoding="utf-8")
        console.print(f"{output}", style="green")


@cli.command("list-systems")
@click.argument("model_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def list_systems(model_file: Path) -> None:
    """List internal systems and their containers."""
    try:
        model = load_model(model_file)
    except C4VizError as e:
        fail(e)
        return

    if not model.internal_systems:
        console.print("No internal systems found in model.", style="yellow")
        return

    table = Table(title="Internal Systems")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name", style="magenta")
    table.add_column("Containers", style="green")

    for system in model.internal_systems:
        table.add_row(
            system.id,
            system.name,
            ", ".join(container.id for container in system.containers) or "None",
        )

    console.print(table)


@cli.command("validate")
@click.argument(
    "model_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.pass_context
def validate_prerequisites(ctx: click.Context, model_file: Path | None) -> None:
    """Validate prerequisites for diagram generation.

    With MODEL_FILE, also check that the model loads and that Graphviz
    accepts its DOT source.
    """
    c4viz = C4Viz(verbose=ctx.obj.get("verbose", False))
    prereqs = c4viz.validate_prerequisites(model_file)

    table = Table(title="Prerequisites Validation")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="magenta")
    table.add_column("Description", style="green")

    descriptions = {
        "graphviz": "Graphviz installation for rendering",
        "model": "Model document loads and builds",
        "dot_syntax": "Graphviz accepts the generated DOT source",
    }

    for component, status in prereqs.items():
        table.add_row(
            component.replace("_", " ").title(),
            "OK" if status else "FAILED",
            descriptions.get(component, ""),
        )

    console.print(table)

    if prereqs["graphviz"]:
        engines = c4viz.get_available_engines()
        console.print(f"Layout engines: {', '.join(engines)}", style="cyan")

    if all(prereqs.values()):
        console.print("\nAll prerequisites validated successfully!", style="green bold")
        return

    console.print("\nPrerequisites failed. Please address the issues above.", style="red")
    if not prereqs["graphviz"]:
        console.print("Install Graphviz: https://graphviz.org/download/", style="yellow")
    sys.exit(1)


@cli.command("themes")
def show_themes() -> None:
    """Show available themes and output formats."""
    table = Table(title="Options")
    table.add_column("Option", style="cyan")
    table.add_column("Values", style="magenta")

    table.add_row("theme", ", ".join(t.value for t in Theme))
    table.add_row("format", ", ".join(f.value for f in OutputFormat))
    table.add_row("direction", ", ".join(d.value for d in Direction))
    table.add_row("splines", ", ".join(s.value for s in Splines))

    console.print(table)


def main() -> None:
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
