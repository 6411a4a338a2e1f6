"""Annotation parser: line-oriented state machine for @route doc blocks."""

from __future__ import annotations

import enum
import logging
import re
from typing import Optional, List, Dict

from .models import RouteAnnotation, HTTP_METHODS, AUTH_MODES

logger = logging.getLogger(__name__)

ROUTE_RE = re.compile(r"\* @route\s+(\w+)\s+(.+)")
AUTH_RE = re.compile(r"\* @auth\s+(\w+)")
RATE_LIMIT_RE = re.compile(r"\* @rateLimit\s+(.+)")
TIMEOUT_RE = re.compile(r"\* @timeout\s+(\d+)")
MEMORY_RE = re.compile(r"\* @memory\s+(\d+)")
DESCRIPTION_RE = re.compile(r"\* @description\s+(.+)")


class ParserState(enum.Enum):
    AWAITING_DIRECTIVE = "awaiting-directive"
    BLOCK_OPEN = "block-open"


def looks_like_handler_declaration(line: str) -> bool:
    """True for a line like ``export const createQuote = async (event) => {``.

    This closes the current annotation block.
    """
    return "export" in line and "=" in line and "async" in line


class AnnotationParser:
    """Extract RouteAnnotation values from handler source text."""

    def __init__(self):
        self.routes: List[RouteAnnotation] = []
        self.state = ParserState.AWAITING_DIRECTIVE
        self._fields: Dict[str, object] = {}

    def parse(self, text: str) -> List[RouteAnnotation]:
        """Parse ``text`` and return complete routes in source order."""
        self.routes = []
        self._reset()

        for raw_line in text.splitlines():
            self._process_line(raw_line.strip())

        if self._fields:
            logger.debug("Dropping unterminated annotation block: %s",
                         self._fields)
        self._reset()
        return self.routes

    def _process_line(self, line: str) -> None:
        for marker, handler in self._directive_handlers():
            if line.startswith(marker):
                if handler(line):
                    self.state = ParserState.BLOCK_OPEN
                return

        if looks_like_handler_declaration(line):
            self._close_block()

    def _directive_handlers(self):
        """Directive markers, in matching order, mapped to their handlers."""
        return (
            ("* @route ", self._handle_route),
            ("* @auth ", self._handle_auth),
            ("* @rateLimit ", self._handle_rate_limit),
            ("* @timeout ", self._handle_timeout),
            ("* @memory ", self._handle_memory),
            ("* @description ", self._handle_description),
        )

    # ---- Directive handlers ----

    def _handle_route(self, line: str) -> bool:
        """Handle ``* @route POST /api/v1/quotes``."""
        match = ROUTE_RE.match(line)
        if not match:
            return False
        method = match.group(1).upper()
        if method not in HTTP_METHODS:
            logger.debug("Ignoring unsupported method %r", match.group(1))
            return False
        self._fields["method"] = method
        self._fields["path"] = match.group(2)
        return True

    def _handle_auth(self, line: str) -> bool:
        match = AUTH_RE.match(line)
        if not match or match.group(1) not in AUTH_MODES:
            return False
        self._fields["auth"] = match.group(1)
        return True

    def _handle_rate_limit(self, line: str) -> bool:
        match = RATE_LIMIT_RE.match(line)
        if not match:
            return False
        self._fields["rate_limit"] = match.group(1)
        return True

    def _handle_timeout(self, line: str) -> bool:
        value = _positive_int(TIMEOUT_RE.match(line))
        if value is None:
            return False
        self._fields["timeout"] = value
        return True

    def _handle_memory(self, line: str) -> bool:
        value = _positive_int(MEMORY_RE.match(line))
        if value is None:
            return False
        self._fields["memory_size"] = value
        return True

    def _handle_description(self, line: str) -> bool:
        match = DESCRIPTION_RE.match(line)
        if not match:
            return False
        self._fields["description"] = match.group(1)
        return True

    # ---- Block boundaries ----

    def _close_block(self) -> None:
        """Emit the accumulated route if complete, then start a new block."""
        route = self._build_route()
        if route is not None:
            self.routes.append(route)
        elif self._fields:
            logger.debug("Dropping incomplete annotation block: %s",
                         self._fields)
        self._reset()

    def _build_route(self) -> Optional[RouteAnnotation]:
        method = self._fields.get("method")
        path = self._fields.get("path")
        if not method or not path:
            return None
        return RouteAnnotation(
            method=method,
            path=path,
            auth=self._fields.get("auth", "none"),
            rate_limit=self._fields.get("rate_limit"),
            timeout=self._fields.get("timeout"),
            memory_size=self._fields.get("memory_size"),
            description=self._fields.get("description"),
        )

    def _reset(self) -> None:
        self._fields = {}
        self.state = ParserState.AWAITING_DIRECTIVE


def _positive_int(match: Optional[re.Match]) -> Optional[int]:
    if not match:
        return None
    try:
        value = int(match.group(1))
    except ValueError:
        return None
    return value if value > 0 else None
