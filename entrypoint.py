"""GitHub Action entrypoint: runs route discovery and writes outputs."""

from __future__ import annotations

import os
import sys


def _env(name: str, default: str = "") -> str:
    """Read an environment variable (INPUT_* convention)."""
    return os.environ.get(name, default).strip() or default


def _env_bool(name: str) -> bool:
    return _env(name).lower() in ("true", "1", "yes")


def _write_output(name: str, value: str) -> None:
    """Append a key=value pair to $GITHUB_OUTPUT."""
    output_file = os.environ.get("GITHUB_OUTPUT")
    if output_file:
        with open(output_file, "a") as f:
            f.write(f"{name}={value}\n")


def _write_summary(markdown: str) -> None:
    """Append Markdown to $GITHUB_STEP_SUMMARY."""
    summary_file = os.environ.get("GITHUB_STEP_SUMMARY")
    if summary_file:
        with open(summary_file, "a") as f:
            f.write(markdown)


def main() -> int:
    # Read inputs
    source = _env("INPUT_SOURCE", "src/lambda")
    output = _env("INPUT_OUTPUT", "infrastructure/generated/routes.json")
    fmt = _env("INPUT_FORMAT", "json")
    strict = _env_bool("INPUT_STRICT")
    sort_by_path = _env_bool("INPUT_SORT")
    fallback_on_error = _env_bool("INPUT_FALLBACK_ON_ERROR")
    fail_on_empty = _env_bool("INPUT_FAIL_ON_EMPTY")

    # Import pipeline modules
    from route_discover.config import fallback_config, write_config
    from route_discover.generator import generate_routes_config
    from route_discover.models import ScanContext
    from route_discover.resource_tree import RouteConflictError

    context = ScanContext(root=source, strict=strict, sort_by_path=sort_by_path)

    # 1. Discover routes
    try:
        config, tree = generate_routes_config(context)
    except RouteConflictError as e:
        if not fallback_on_error:
            print(f"::error::{e}")
            return 1
        print(f"::warning::{e}. Writing fallback config.")
        config, tree = fallback_config(), None

    # 2. Write artifact
    try:
        write_config(config, output, fmt=fmt)
    except (OSError, ValueError) as e:
        print(f"::error::Failed to write {output}: {e}")
        return 1
    print(f"Routes configuration written to: {output}")

    routes = config.routes
    total = len(routes)
    protected = sum(1 for r in routes if r["auth"] == "required")
    open_count = total - protected

    # 3. Write outputs
    _write_output("config-path", output)
    _write_output("function-count", str(len(config.functions)))
    _write_output("route-count", str(total))
    _write_output("protected-count", str(protected))
    _write_output("open-count", str(open_count))

    if tree is None:
        _write_summary("## Route Discover\n\nFallback configuration written.\n")
        return 0

    if not routes:
        print(f"::warning::No route annotations found under {source}.")
        _write_summary("## Route Discover\n\nNo routes found.\n")
        return 1 if fail_on_empty else 0

    # 4. Write step summary
    summary_lines = [
        "## Route Discover Results\n\n",
        "| Metric | Count |\n",
        "|---|---|\n",
        f"| Functions | {len(config.functions)} |\n",
        f"| Routes | {total} |\n",
        f"| Resources | {tree.resource_count} |\n",
        f"| Auth required | {protected} |\n",
        f"| Open access | {open_count} |\n",
        "\n",
        "| Method | Path | Function | Auth |\n",
        "|---|---|---|---|\n",
    ]
    for route in sorted(routes, key=lambda r: (r["path"], r["method"])):
        summary_lines.append(
            f"| `{route['method']}` | `{route['path']}` | "
            f"{route['functionName']} | {route['auth']} |\n"
        )
    summary_lines.append(f"\nConfig written to `{output}` ({fmt})\n")

    _write_summary("".join(summary_lines))
    return 0


if __name__ == "__main__":
    sys.exit(main())
