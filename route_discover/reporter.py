"""Rich console output: route table, resource tree and auth summary."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from .models import ResourceNode, RoutesConfig


def print_report(config: RoutesConfig, tree: ResourceNode,
                 show_all: bool = False,
                 console: Optional[Console] = None) -> None:
    """Print a summary report of discovered routes."""
    console = console or Console()

    routes = config.routes
    if not routes:
        console.print("[yellow]No routes discovered.[/yellow]")
        return

    # Filter for display
    if show_all:
        display_routes = routes
    else:
        display_routes = [r for r in routes if r["auth"] != "required"]

    table = Table(title="Discovered Routes" if show_all else "Open Routes")
    table.add_column("Method", style="bold cyan", width=8)
    table.add_column("Path", style="white", max_width=40)
    table.add_column("Function", max_width=30)
    table.add_column("Auth", width=10)
    table.add_column("Timeout", justify="right")
    table.add_column("Memory", justify="right")

    for route in sorted(display_routes, key=lambda r: (r["path"], r["method"])):
        method_style = _method_style(route["method"])
        table.add_row(
            f"[{method_style}]{route['method']}[/{method_style}]",
            route["path"],
            route["functionName"],
            _format_auth(route["auth"]),
            _format_optional(route.get("timeout"), "s"),
            _format_optional(route.get("memorySize"), " MB"),
        )

    console.print(table)
    console.print()

    if show_all:
        console.print(_render_tree(tree))
        console.print()

    _print_summary(console, config, tree)


def _print_summary(console: Console, config: RoutesConfig,
                   tree: ResourceNode) -> None:
    routes = config.routes
    total = len(routes)
    required = sum(1 for r in routes if r["auth"] == "required")
    optional = sum(1 for r in routes if r["auth"] == "optional")
    open_count = total - required - optional
    bound = sum(len(node.methods) for _, node in tree.walk())
    overridden = total - bound

    console.print("[bold]Summary:[/bold]")
    console.print(f"  Functions:         {len(config.functions)}")
    console.print(f"  Routes:            {total}")
    console.print(f"  Resources:         {tree.resource_count}")
    console.print(f"  Auth required:     {required:>4}  ({required * 100 // total}%)")
    if optional:
        console.print(f"  Auth optional:     {optional:>4}  ({optional * 100 // total}%)")
    console.print(f"  No auth:           {open_count:>4}  ({open_count * 100 // total}%)")
    if overridden > 0:
        console.print(
            f"  [yellow]Overridden (duplicate method+path): {overridden}[/yellow]"
        )
    console.print()


def _render_tree(root: ResourceNode) -> Tree:
    tree = Tree("[bold]/[/bold]" + _format_methods(root))
    _add_children(tree, root)
    return tree


def _add_children(branch: Tree, node: ResourceNode) -> None:
    for child in node.children.values():
        sub = branch.add(child.segment + _format_methods(child))
        _add_children(sub, child)


def _format_methods(node: ResourceNode) -> str:
    if not node.methods:
        return ""
    labels = []
    for method, owner in node.owners.items():
        style = _method_style(method)
        labels.append(f"[{style}]{method}[/{style}] → {owner}")
    return "  " + ", ".join(labels)


def _method_style(method: str) -> str:
    """Return a Rich style for an HTTP method."""
    styles = {
        "GET": "green",
        "POST": "yellow",
        "PUT": "blue",
        "PATCH": "blue",
        "DELETE": "red",
    }
    return styles.get(method, "white")


def _format_auth(auth: str) -> str:
    if auth == "required":
        return "[green]required[/green]"
    if auth == "optional":
        return "[yellow]optional[/yellow]"
    return "[bold red]none[/bold red]"


def _format_optional(value, unit: str) -> str:
    return f"{value}{unit}" if value is not None else "-"
