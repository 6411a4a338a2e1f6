"""Tests for the annotation parser."""

import pytest

from route_discover.annotation_parser import (
    AnnotationParser,
    ParserState,
    looks_like_handler_declaration,
)


def _parse(text):
    return AnnotationParser().parse(text)


CREATE_QUOTE = """
/**
 * Create a new insurance quote
 * @route POST /api/v1/quotes
 * @auth required
 * @timeout 30
 * @memory 512
 */
export const createQuote = async (event) => {
  return {};
};
"""


class TestAnnotationParserBasic:
    @pytest.fixture(autouse=True)
    def setup(self):
        self.routes = _parse(CREATE_QUOTE)

    def test_single_route(self):
        assert len(self.routes) == 1

    def test_route_fields(self):
        route = self.routes[0]
        assert route.method == "POST"
        assert route.path == "/api/v1/quotes"
        assert route.auth == "required"
        assert route.timeout == 30
        assert route.memory_size == 512
        assert route.cors is True

    def test_absent_optional_fields(self):
        route = self.routes[0]
        assert route.rate_limit is None
        assert route.description is None


class TestAnnotationParserBlocks:
    def test_multiple_blocks_in_source_order(self):
        text = """
/**
 * @route GET /a
 */
export const a = async () => {};

/**
 * @route POST /b
 */
export const b = async () => {};

/**
 * @route DELETE /c/{id}
 */
export const c = async () => {};
"""
        routes = _parse(text)
        assert [(r.method, r.path) for r in routes] == [
            ("GET", "/a"), ("POST", "/b"), ("DELETE", "/c/{id}"),
        ]

    def test_block_without_route_is_dropped(self):
        text = """
/**
 * @auth required
 * @timeout 15
 * @description Not routed
 */
export const profile = async () => {};

/**
 * @route GET /ok
 */
export const ok = async () => {};
"""
        routes = _parse(text)
        assert len(routes) == 1
        assert routes[0].path == "/ok"
        # fields of the dropped block do not leak into the next one
        assert routes[0].auth == "none"
        assert routes[0].timeout is None

    def test_route_without_path_is_dropped(self):
        text = """
 * @route GET
export const a = async () => {};
"""
        assert _parse(text) == []

    def test_unterminated_block_is_dropped(self):
        text = """
/**
 * @route GET /a
 */
function notExported() {}
"""
        assert _parse(text) == []

    def test_method_is_upper_cased(self):
        text = " * @route patch /items/{id}\nexport const h = async () => {};\n"
        assert _parse(text)[0].method == "PATCH"

    def test_unknown_method_not_captured(self):
        text = " * @route FETCH /items\nexport const h = async () => {};\n"
        assert _parse(text) == []

    def test_auth_defaults_to_none(self):
        text = " * @route GET /x\nexport const h = async () => {};\n"
        assert _parse(text)[0].auth == "none"

    def test_unknown_auth_falls_back_to_none(self):
        text = (" * @route GET /x\n * @auth sometimes\n"
                "export const h = async () => {};\n")
        assert _parse(text)[0].auth == "none"

    def test_unparseable_numbers_are_absent(self):
        text = (" * @route GET /x\n * @timeout soon\n * @memory 0\n"
                "export const h = async () => {};\n")
        route = _parse(text)[0]
        assert route.timeout is None
        assert route.memory_size is None

    def test_free_text_fields(self):
        text = (" * @route GET /x\n"
                " * @rateLimit 100/hour\n"
                " * @description Fetch all the things\n"
                "export const h = async () => {};\n")
        route = _parse(text)[0]
        assert route.rate_limit == "100/hour"
        assert route.description == "Fetch all the things"

    def test_later_route_directive_wins_within_block(self):
        text = (" * @route GET /first\n * @route POST /second\n"
                "export const h = async () => {};\n")
        routes = _parse(text)
        assert len(routes) == 1
        assert (routes[0].method, routes[0].path) == ("POST", "/second")

    def test_directive_without_star_prefix_ignored(self):
        text = "// @route GET /x\nexport const h = async () => {};\n"
        assert _parse(text) == []

    def test_parser_is_reusable(self):
        parser = AnnotationParser()
        assert len(parser.parse(CREATE_QUOTE)) == 1
        assert len(parser.parse(CREATE_QUOTE)) == 1
        assert parser.state is ParserState.AWAITING_DIRECTIVE


class TestHandlerDeclaration:
    @pytest.mark.parametrize("line", [
        "export const createQuote = async (event) => {",
        "export const handler = async () => ({ ok: true });",
        "exports.handler = async () => ({});",
    ])
    def test_declarations(self, line):
        assert looks_like_handler_declaration(line)

    @pytest.mark.parametrize("line", [
        "export const VALUE = 3;",
        "export async function handler(event) {",
        "const x = async () => {};",
    ])
    def test_non_declarations(self, line):
        assert not looks_like_handler_declaration(line)
