"""Pipeline orchestration: scan -> parse -> extract -> tree -> config."""

from __future__ import annotations

import logging
from typing import Optional, List, Tuple

from .annotation_parser import AnnotationParser
from .config import assemble_config, write_config
from .metadata import extract_function
from .models import FunctionMetadata, ResourceNode, RoutesConfig, ScanContext
from .resource_tree import build_resource_tree
from .scanner import scan_directory

logger = logging.getLogger(__name__)


def discover_functions(context: ScanContext) -> List[FunctionMetadata]:
    """Scan ``context.root`` and return every function declaring routes."""
    parser = AnnotationParser()
    functions: List[FunctionMetadata] = []

    for filepath in scan_directory(context):
        try:
            with open(filepath, "r", encoding="utf-8", errors="replace") as f:
                text = f.read()
        except OSError as e:
            logger.warning("Cannot read %s: %s", filepath, e)
            continue

        func = extract_function(filepath, text, parser)
        if func is None:
            continue
        logger.debug("%s: %d route(s) in %s", func.function_name,
                     len(func.routes), filepath)
        functions.append(func)

    if context.sort_by_path:
        functions.sort(key=lambda func: func.file_path)
    return functions


def generate_routes_config(context: ScanContext,
                           generated_at: Optional[str] = None
                           ) -> Tuple[RoutesConfig, ResourceNode]:
    """Run the full pipeline and return the artifact with its resource tree."""
    functions = discover_functions(context)
    tree = build_resource_tree(functions, strict=context.strict)
    config = assemble_config(functions, generated_at=generated_at)
    logger.info("Discovered %d function(s), %d route(s)",
                len(config.functions), len(config.routes))
    return config, tree


def generate_routes_file(context: ScanContext, output_path: str,
                         fmt: str = "json",
                         generated_at: Optional[str] = None
                         ) -> Tuple[RoutesConfig, ResourceNode]:
    """Run the pipeline and write the artifact to ``output_path``."""
    config, tree = generate_routes_config(context, generated_at=generated_at)
    write_config(config, output_path, fmt=fmt)
    return config, tree
