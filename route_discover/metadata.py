"""Metadata extraction: function identity, handler export and imports."""

from __future__ import annotations

import os
import re
from typing import Optional, List

from .annotation_parser import AnnotationParser
from .models import FunctionMetadata

EXTENSION_RE = re.compile(r"\.(ts|js)$")
HANDLER_RE = re.compile(r"export\s+const\s+(\w+)\s*=")
IMPORT_RE = re.compile(r"""import.*from\s+['"]([^'"]+)['"]""")

DEFAULT_HANDLER = "handler"
UNKNOWN = "unknown"


def function_name(file_path: str) -> str:
    """Derive ``<parentDir>-<baseName>`` from a source path.

    >>> function_name("src/lambda/quotes/create.ts")
    'quotes-create'
    >>> function_name("create.ts")
    'unknown-create'
    """
    base = EXTENSION_RE.sub("", os.path.basename(file_path)) or UNKNOWN
    parent = os.path.basename(os.path.dirname(file_path)) or UNKNOWN
    return f"{parent}-{base}"


def handler_name(text: str) -> str:
    """Name of the first ``export const <name> =``, or ``handler``."""
    match = HANDLER_RE.search(text)
    return match.group(1) if match else DEFAULT_HANDLER


def extract_dependencies(text: str) -> List[str]:
    """Non-relative modules imported by the file, first-seen order, unique."""
    deps: List[str] = []
    for match in IMPORT_RE.finditer(text):
        module = match.group(1)
        if module.startswith(".") or module in deps:
            continue
        deps.append(module)
    return deps


def extract_function(file_path: str, text: str,
                     parser: Optional[AnnotationParser] = None
                     ) -> Optional[FunctionMetadata]:
    """Build FunctionMetadata for a file, or None if it declares no routes."""
    parser = parser or AnnotationParser()
    routes = parser.parse(text)
    if not routes:
        return None

    return FunctionMetadata(
        function_name=function_name(file_path),
        file_path=file_path,
        handler_name=handler_name(text),
        routes=routes,
        dependencies=extract_dependencies(text),
    )
