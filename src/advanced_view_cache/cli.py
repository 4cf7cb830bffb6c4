"""CLI interface for advanced-view-cache.

Requires the 'cli' extra: pip install advanced-view-cache[cli]
"""

from __future__ import annotations

import json
import sys
import time
from pathlib import Path
from typing import Optional

try:
    import typer
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table
except ImportError:
    print(
        "CLI dependencies not installed. Install with: pip install advanced-view-cache[cli]",
        file=sys.stderr,
    )
    sys.exit(1)

from advanced_view_cache import __version__
from advanced_view_cache.aggregator import compute_descriptor
from advanced_view_cache.lifetime import lifespan_options
from advanced_view_cache.models.metadata import ContributedMetadata
from advanced_view_cache.models.policy import PolicyConfig
from advanced_view_cache.normalize import normalize, summary_title

app = typer.Typer(
    name="advanced-view-cache",
    help="Cache tag, context and max-age policy for query/render views.",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", "-v", help="Show version"),
) -> None:
    if version:
        console.print(f"advanced-view-cache {__version__}")
        raise typer.Exit()


@app.command()
def info() -> None:
    """Show information about the advanced-view-cache installation."""
    table = Table(title="advanced-view-cache info")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Version", __version__)
    table.add_row("Python", sys.version.split()[0])

    for dep_name in ["pydantic", "typer", "rich"]:
        try:
            mod = __import__(dep_name)
            ver = getattr(mod, "__version__", "installed")
            table.add_row(dep_name, str(ver))
        except ImportError:
            table.add_row(dep_name, "[red]not installed[/red]")

    console.print(table)


@app.command()
def lifespans() -> None:
    """List the selectable cache lifetime options."""
    table = Table(title="Lifetime options")
    table.add_column("Value", style="cyan")
    table.add_column("Label", style="green")
    for value, label in lifespan_options().items():
        table.add_row(str(value), label)
    console.print(table)


@app.command(name="normalize")
def normalize_command(
    tags_file: Path = typer.Argument(..., help="File with cache tags, one per line"),  # noqa: B008
    contexts_file: Optional[Path] = typer.Option(  # noqa: B008
        None, "--contexts", "-c", help="File with cache contexts, one per line"
    ),
    results: str = typer.Option("-1", "--results", help="Results lifespan or 'custom'"),
    results_custom: Optional[str] = typer.Option(
        None, "--results-custom", help="Custom results lifespan in seconds"
    ),
    output: str = typer.Option("-1", "--output", help="Output lifespan or 'custom'"),
    output_custom: Optional[str] = typer.Option(
        None, "--output-custom", help="Custom output lifespan in seconds"
    ),
) -> None:
    """Normalize cache settings and print the stored options as JSON."""
    for path in (tags_file, contexts_file):
        if path is not None and not path.is_file():
            console.print(f"[red]Error: {path} does not exist[/red]")
            raise typer.Exit(code=1)

    config, errors = normalize(
        tags_file.read_text(),
        contexts_file.read_text() if contexts_file is not None else None,
        {
            "results_lifespan": results,
            "results_lifespan_custom": results_custom,
            "output_lifespan": output,
            "output_lifespan_custom": output_custom,
        },
    )
    if errors:
        table = Table(title="Validation errors")
        table.add_column("Field", style="cyan")
        table.add_column("Message", style="red")
        for error in errors:
            table.add_row(error.field, escape(error.message))
        console.print(table)
        raise typer.Exit(code=1)

    console.print(f"[dim]{summary_title(config)}[/dim]")
    console.print_json(json.dumps(config.to_options()))


@app.command()
def describe(
    config_file: Path = typer.Argument(..., help="JSON file with stored cache options"),  # noqa: B008
    now: Optional[int] = typer.Option(
        None, "--now", help="Timestamp to evaluate at (default: current time)"
    ),
    tag: list[str] = typer.Option([], "--tag", "-t", help="Contributed cache tag"),  # noqa: B006, B008
    base_tag: list[str] = typer.Option([], "--base-tag", help="The view's own cache tag"),  # noqa: B006, B008
    base_context: list[str] = typer.Option(  # noqa: B006, B008
        [], "--base-context", help="The view's own cache context"
    ),
) -> None:
    """Compute the cache descriptor for stored options and print it."""
    if not config_file.is_file():
        console.print(f"[red]Error: {config_file} does not exist[/red]")
        raise typer.Exit(code=1)

    try:
        config = PolicyConfig.from_options(json.loads(config_file.read_text()))
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Error: invalid cache options: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    evaluated_at = now if now is not None else int(time.time())
    descriptor = compute_descriptor(
        config,
        evaluated_at,
        [ContributedMetadata(tags=tag)],
        base_tags=base_tag,
        base_contexts=base_context,
    )
    payload = descriptor.to_render_array()
    payload["results_expire_at"] = descriptor.results_expire_at
    payload["output_expire_at"] = descriptor.output_expire_at
    console.print_json(json.dumps(payload))


if __name__ == "__main__":
    app()
