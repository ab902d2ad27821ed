"""Tests for compile_path and select.

Verifies:
- results come back in document order
- syntax errors raise InvalidPathError at compile time
- evaluation errors (unknown function, unknown prefix) raise InvalidPathError
- non-element context nodes select nothing
- namespace prefixes are honored
"""

from __future__ import annotations

import pytest

from unhtml.config import DecoderConfig, ParseMode
from unhtml.document import Node, compile_path, parse_document, select
from unhtml.errors import InvalidPathError


class TestSelect:
    def test_document_order(self) -> None:
        root = parse_document("<ul><li>0</li><li>1</li><li>2</li></ul>")
        nodes = select(compile_path("/ul/li"), root)
        assert [n.text() for n in nodes] == ["0", "1", "2"]

    def test_relative_to_context(self) -> None:
        root = parse_document("<test><div>Hello</div><span>World</span></test>")
        assert [n.text() for n in select(compile_path("span"), root)] == ["World"]

    def test_no_match_is_empty(self) -> None:
        root = parse_document("<test>x</test>")
        assert select(compile_path("missing"), root) == []

    def test_non_element_context_selects_nothing(self) -> None:
        assert select(compile_path("div"), Node("plain text")) == []

    def test_namespaces(self) -> None:
        config = DecoderConfig(parse_mode=ParseMode.XML)
        root = parse_document('<r xmlns:x="urn:x"><x:v>5</x:v></r>', config)
        nodes = select(compile_path("/r/x:v", {"x": "urn:x"}), root)
        assert [n.text() for n in nodes] == ["5"]


class TestInvalidPaths:
    def test_syntax_error(self) -> None:
        with pytest.raises(InvalidPathError) as info:
            compile_path("///[")
        assert info.value.path == "///["

    def test_unknown_function(self) -> None:
        root = parse_document("<test>x</test>")
        with pytest.raises(InvalidPathError):
            # libxml2 may reject this at compile or at evaluation time.
            select(compile_path("no-such-function()"), root)

    def test_undefined_prefix(self) -> None:
        root = parse_document("<test>x</test>")
        with pytest.raises(InvalidPathError):
            select(compile_path("/p:test"), root)
