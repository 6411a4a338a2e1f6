"""Directory scanner: find candidate handler source files."""

from __future__ import annotations

import logging
import os
from typing import List

from .models import ScanContext

logger = logging.getLogger(__name__)


def scan_directory(context: ScanContext) -> List[str]:
    """Return every source file under ``context.root``, recursively.

    A missing root yields an empty list. Entries are visited in sorted
    order inside each directory so the result is stable for a given tree.
    """
    if not os.path.isdir(context.root):
        logger.debug("Scan root not found: %s", context.root)
        return []

    found: List[str] = []
    _scan(context.root, context, found)
    return found


def _scan(directory: str, context: ScanContext, found: List[str]) -> None:
    try:
        entries = sorted(os.listdir(directory))
    except OSError as e:
        logger.warning("Cannot list %s: %s", directory, e)
        return

    for name in entries:
        full_path = os.path.normpath(os.path.join(directory, name))
        if os.path.isdir(full_path):
            _scan(full_path, context, found)
        elif name.endswith(context.extensions):
            found.append(full_path)
