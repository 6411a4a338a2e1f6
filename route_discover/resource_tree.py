"""Resource tree builder: merge routes into one path-segment tree."""

from __future__ import annotations

import logging
from typing import List

from .models import FunctionMetadata, ResourceNode, RouteAnnotation, split_path

logger = logging.getLogger(__name__)


class RouteConflictError(ValueError):
    """Two functions registered the same method on the same path."""

    def __init__(self, method: str, path: str, first: str, second: str):
        self.method = method
        self.path = path
        self.functions = (first, second)
        super().__init__(
            f"Duplicate route {method} {path}: declared by both "
            f"{first} and {second}"
        )


def build_resource_tree(functions: List[FunctionMetadata],
                        strict: bool = False) -> ResourceNode:
    """Merge every route of every function into a single tree.

    Routes sharing a path prefix share the prefix nodes. A repeated
    method+path overwrites the earlier registration unless ``strict`` is
    set, in which case RouteConflictError is raised.
    """
    root = ResourceNode()
    for func in functions:
        for route in func.routes:
            register_route(root, route, func.function_name, strict=strict)
    return root


def register_route(root: ResourceNode, route: RouteAnnotation,
                   owner: str, strict: bool = False) -> ResourceNode:
    """Bind ``route`` to the node for its path and return that node."""
    node = root
    for segment in split_path(route.path):
        node = node.child(segment)

    previous = node.owners.get(route.method)
    if previous is not None:
        if strict:
            raise RouteConflictError(route.method, route.path, previous, owner)
        logger.warning("Route %s %s from %s overrides %s",
                       route.method, route.path, owner, previous)

    node.methods[route.method] = route
    node.owners[route.method] = owner
    return node
