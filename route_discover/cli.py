"""CLI entry point: orchestrates the route discovery pipeline."""

from __future__ import annotations

import logging
import sys

import click

from . import __version__
from .config import DEFAULT_OUTPUT


@click.command()
@click.argument("root", default="src/lambda")
@click.option("--output", "-o", default=DEFAULT_OUTPUT, envvar="ROUTES_OUTPUT",
              help=f"Output file path (default: {DEFAULT_OUTPUT})")
@click.option("--format", "fmt", type=click.Choice(["json", "yaml"]),
              default="json", help="Output format (default: json)")
@click.option("--strict", is_flag=True,
              help="Fail on duplicate method+path instead of overriding")
@click.option("--sort", "sort_by_path", is_flag=True,
              help="Order functions by file path")
@click.option("--fallback-on-error", is_flag=True,
              help="Write an empty fallback config if discovery fails")
@click.option("--show-all", is_flag=True,
              help="Show all routes and the resource tree (default: open routes only)")
@click.option("--quiet", "-q", is_flag=True, help="Skip the report")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__)
def main(root: str, output: str, fmt: str, strict: bool, sort_by_path: bool,
         fallback_on_error: bool, show_all: bool, quiet: bool,
         verbose: bool) -> None:
    """Generate a routes configuration from @route annotations.

    ROOT is the directory of handler sources (default: src/lambda).
    """
    # Set up logging
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
    )

    # Import here to keep CLI snappy for --help
    from .config import fallback_config, write_config
    from .generator import generate_routes_config
    from .models import ScanContext
    from .reporter import print_report
    from .resource_tree import RouteConflictError

    from rich.console import Console
    console = Console()

    context = ScanContext(root=root, strict=strict, sort_by_path=sort_by_path)

    console.print(f"[dim]Scanning {root} for route annotations...[/dim]")
    try:
        config, tree = generate_routes_config(context)
    except RouteConflictError as e:
        if not fallback_on_error:
            console.print(f"[red]Error:[/red] {e}")
            sys.exit(1)
        console.print(f"[yellow]Warning:[/yellow] {e}. Writing fallback config.")
        config, tree = fallback_config(), None

    if tree is not None:
        console.print(f"[green]✓[/green] Discovered {len(config.functions)} "
                      f"functions, {len(config.routes)} routes")

    try:
        write_config(config, output, fmt=fmt)
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot write {output}: {e}")
        sys.exit(1)
    console.print(f"[green]✓[/green] Routes configuration written to: {output}")

    if tree is not None and not quiet:
        console.print()
        print_report(config, tree, show_all=show_all, console=console)


if __name__ == "__main__":
    main()
