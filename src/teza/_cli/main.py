import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import ConfigError, TezaConfig, get_config
from .example import (
    LEAF_NAMES,
    AssignmentError,
    ExampleGraph,
    apply_updates,
    build_example_graph,
    get_expression_tree,
    parse_assignment,
)
from .render import render_tree

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

X1Option = Annotated[float | None, typer.Option("--x1", help="Starting value of leaf x1")]
X2Option = Annotated[float | None, typer.Option("--x2", help="Starting value of leaf x2")]
X3Option = Annotated[float | None, typer.Option("--x3", help="Starting value of leaf x3")]
SetOption = Annotated[
    list[str] | None,
    typer.Option("--set", help="Leaf update as NAME=VALUE, applied in order (repeatable)"),
]
PrecisionOption = Annotated[
    int | None,
    typer.Option("--precision", min=0, help="Decimal digits to round printed values to"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Teza CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> TezaConfig:
    try:
        config = get_config()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    if config.project_root is not None:
        logger.debug("Using configuration from %s", config.project_root / "pyproject.toml")
    return config


def _prepare(
    config: TezaConfig,
    overrides: tuple[float | None, float | None, float | None],
    updates: list[str] | None,
) -> tuple[ExampleGraph, list[tuple[str, float]]]:
    """Build the example graph and parse the requested leaf updates."""
    inputs = dict(config.inputs)
    for name, override in zip(LEAF_NAMES, overrides, strict=True):
        if override is not None:
            inputs[name] = override

    try:
        parsed = [parse_assignment(text) for text in updates or []]
    except AssignmentError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    logger.debug("Inputs: %s", inputs)
    return build_example_graph(inputs), parsed


def _format_updates(updates: list[tuple[str, float]]) -> str:
    return ", ".join(f"{name}={value:g}" for name, value in updates)


@app.command()
def example(
    *,
    x1: X1Option = None,
    x2: X2Option = None,
    x3: X3Option = None,
    updates: SetOption = None,
    precision: PrecisionOption = None,
) -> None:
    """Evaluate x1 + x2 * sin(x2 + x3 ** 3), then again after applying updates."""
    config = _load_config()
    digits = config.precision if precision is None else precision
    example_graph, parsed = _prepare(config, (x1, x2, x3), updates)

    value = example_graph.output.compute()
    out_console.print(f"Graph output = {round(value, digits)}")

    if not parsed:
        return

    outcome = apply_updates(example_graph, parsed)
    err_console.print(f"[cyan]Applied:[/cyan] {_format_updates(parsed)}")
    out_console.print(f"Graph output = {round(outcome.value, digits)}")
    err_console.print(
        f"[dim]Recomputed {outcome.recomputed} node(s), reused {outcome.reused} cached value(s)[/dim]",
    )


@app.command("inspect")
def inspect_(
    *,
    x1: X1Option = None,
    x2: X2Option = None,
    x3: X3Option = None,
    updates: SetOption = None,
    precision: PrecisionOption = None,
) -> None:
    """Show the example graph with every node's cached value.

    The graph is evaluated first; updates given with --set are applied
    afterwards without re-evaluating, so the tree shows which caches they
    cleared.
    """
    config = _load_config()
    digits = config.precision if precision is None else precision
    example_graph, parsed = _prepare(config, (x1, x2, x3), updates)

    example_graph.output.compute()
    for name, value in parsed:
        example_graph.leaves[name].set(value)
    if parsed:
        err_console.print(f"[cyan]Applied without re-evaluating:[/cyan] {_format_updates(parsed)}")

    render_tree(get_expression_tree(example_graph), out_console, digits)


def main() -> None:
    app()
