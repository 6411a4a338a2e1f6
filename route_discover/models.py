"""Data models for Route Discover."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Tuple

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")
AUTH_MODES = ("required", "optional", "none")
SOURCE_EXTENSIONS = (".ts", ".js")


@dataclass
class RouteAnnotation:
    method: str  # GET, POST, PUT, DELETE, PATCH
    path: str  # /api/v1/quotes/{id}
    auth: str = "none"  # "required" | "optional" | "none"
    rate_limit: Optional[str] = None  # opaque, e.g. "100/hour"
    timeout: Optional[int] = None  # seconds
    memory_size: Optional[int] = None  # MB
    description: Optional[str] = None
    cors: bool = True

    def to_dict(self) -> dict:
        data = {
            "method": self.method,
            "path": self.path,
            "auth": self.auth,
            "rateLimit": self.rate_limit,
            "cors": self.cors,
            "timeout": self.timeout,
            "memorySize": self.memory_size,
            "description": self.description,
        }
        return _drop_absent(data)


@dataclass
class FunctionMetadata:
    """One handler source file with at least one discovered route."""

    function_name: str  # quotes-create
    file_path: str
    handler_name: str = "handler"
    routes: List[RouteAnnotation] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "functionName": self.function_name,
            "filePath": self.file_path,
            "handlerName": self.handler_name,
            "routes": [route.to_dict() for route in self.routes],
            "dependencies": list(self.dependencies),
        }


@dataclass
class ResourceNode:
    """One URL path segment in the merged resource tree."""

    segment: str = ""  # empty for the root
    children: Dict[str, ResourceNode] = field(default_factory=dict)
    methods: Dict[str, RouteAnnotation] = field(default_factory=dict)
    owners: Dict[str, str] = field(default_factory=dict)  # method -> function_name

    @property
    def is_root(self) -> bool:
        return self.segment == ""

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    @property
    def resource_count(self) -> int:
        """Number of nodes below this one (the node itself excluded)."""
        return sum(1 + child.resource_count for child in self.children.values())

    def child(self, segment: str) -> ResourceNode:
        """Return the child for ``segment``, creating it if needed."""
        node = self.children.get(segment)
        if node is None:
            node = ResourceNode(segment=segment)
            self.children[segment] = node
        return node

    def find(self, path: str) -> Optional[ResourceNode]:
        node = self
        for segment in split_path(path):
            node = node.children.get(segment)
            if node is None:
                return None
        return node

    def walk(self, prefix: str = ""):
        """Yield (path, node) depth-first, children in insertion order."""
        path = f"{prefix}/{self.segment}" if self.segment else (prefix or "/")
        yield path, self
        base = "" if path == "/" else path
        for node in self.children.values():
            yield from node.walk(base)


@dataclass
class RoutesConfig:
    generated_at: str
    functions: List[FunctionMetadata] = field(default_factory=list)
    note: Optional[str] = None

    @property
    def routes(self) -> List[dict]:
        """Flattened (function, route) view, derived from ``functions``."""
        flat = []
        for func in self.functions:
            for route in func.routes:
                flat.append(_drop_absent({
                    "functionName": func.function_name,
                    "method": route.method,
                    "path": route.path,
                    "auth": route.auth,
                    "rateLimit": route.rate_limit,
                    "timeout": route.timeout,
                    "memorySize": route.memory_size,
                    "description": route.description,
                }))
        return flat

    def to_dict(self) -> dict:
        data = {
            "generatedAt": self.generated_at,
            "functions": [func.to_dict() for func in self.functions],
            "routes": self.routes,
        }
        if self.note:
            data["note"] = self.note
        return data


@dataclass
class ScanContext:
    """Settings shared by every pipeline stage for one scan."""

    root: str = "src/lambda"
    extensions: Tuple[str, ...] = SOURCE_EXTENSIONS
    strict: bool = False  # reject duplicate method+path instead of overwriting
    sort_by_path: bool = False


def split_path(path: str) -> List[str]:
    """Split a URL template on '/' and drop empty segments."""
    return [part for part in path.split("/") if part]


def _drop_absent(data: dict) -> dict:
    return {key: value for key, value in data.items() if value is not None}
