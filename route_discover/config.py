"""Config assembler: build, serialize and persist the routes artifact."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from typing import Optional, List

import yaml

from .models import FunctionMetadata, RoutesConfig

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = os.path.join("infrastructure", "generated", "routes.json")
FALLBACK_NOTE = ("This is a fallback configuration. "
                 "Dynamic route generation is disabled.")


def timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. 2024-05-01T12:00:00.000Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(
        timespec="milliseconds").replace("+00:00", "Z")


def assemble_config(functions: List[FunctionMetadata],
                    generated_at: Optional[str] = None) -> RoutesConfig:
    return RoutesConfig(
        generated_at=generated_at or timestamp(),
        functions=list(functions),
    )


def fallback_config(note: str = FALLBACK_NOTE,
                    generated_at: Optional[str] = None) -> RoutesConfig:
    """Empty artifact written when discovery is skipped or fails."""
    return RoutesConfig(generated_at=generated_at or timestamp(), note=note)


def emit_json(config: RoutesConfig) -> str:
    return json.dumps(config.to_dict(), indent=2)


def emit_yaml(config: RoutesConfig) -> str:
    return yaml.dump(config.to_dict(), default_flow_style=False,
                     sort_keys=False, allow_unicode=True)


def write_config(config: RoutesConfig, output_path: str = DEFAULT_OUTPUT,
                 fmt: str = "json") -> str:
    """Write the artifact atomically and return its path.

    Missing parent directories are created. Errors creating the directory
    or writing the file propagate as OSError and leave no partial file.
    """
    if fmt == "yaml":
        content = emit_yaml(config)
    elif fmt == "json":
        content = emit_json(config)
    else:
        raise ValueError(f"Unsupported format: {fmt}")

    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    fd, temp_path = tempfile.mkstemp(prefix=".routes-", suffix=".tmp",
                                     dir=directory or ".")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        # mkstemp creates 0600 files
        os.chmod(temp_path, 0o644)
        os.replace(temp_path, output_path)
    except BaseException:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise

    logger.info("Generated routes configuration: %s", output_path)
    return output_path
