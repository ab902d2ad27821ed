"""Tests for the Decoder entry points.

Covers:
- unmarshal_relative over every scalar kind, structs and sequences
- sequence targets collect every match; other targets take the first
- NoNodesAvailable when the relative path matches nothing
- hooks at the relative entry point receive the first match and their
  exceptions propagate unchanged
- invalid targets are rejected before anything is decoded
- best-effort decoding: fields bound before a failure stay bound
- repeated decodes are independent and deterministic
- a commits-page style document decoded from the root
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import numpy as np
import numpy.typing as npt
import pytest

from unhtml import (
    Decoder,
    DecoderConfig,
    InvalidPathError,
    InvalidUnmarshalError,
    NoNodesAvailable,
    ParseMode,
    Ref,
    Runes,
    UnmarshalTypeError,
    UnsupportedTargetError,
    path,
)

# ---------------------------------------------------------------------------
# Targets
# ---------------------------------------------------------------------------


@dataclass
class Greeting:
    a: str = path("div", default="")
    b: str = path("span", default="")


@dataclass
class Partial:
    first: str = path("b", default="")
    number: int = path("i", default=0)
    last: str = path("u", default="")


@dataclass
class Flags:
    visible: bool = path("b", default=False)
    name: str = path("i", default="")


@dataclass
class Loose:
    payload: Any = path("b", default=None)
    scores: npt.NDArray[np.int64] = path(
        "ol/li", default_factory=lambda: np.zeros(2, dtype=np.int64)
    )
    pair: tuple[str, str] = path("ol/li", default=("", ""))


class Timestamp:
    def __init__(self) -> None:
        self.value: datetime | None = None

    def unmarshal_text(self, data: bytes) -> None:
        self.value = datetime.fromisoformat(data.decode().strip())


class Failing:
    def unmarshal_html(self, data: bytes) -> None:
        msg = f"rejected {data!r}"
        raise RuntimeError(msg)


@dataclass
class Commit:
    title: str = path("p/a/@title", default="")
    author: str = path("div//span[@rel='author']", default="")
    time: Timestamp = path("div//time/@datetime", default_factory=Timestamp)
    sha1: str = path("div//span[@class='sha']", default="")


@dataclass
class CommitsPage:
    commits: list[Commit | None] = path(
        "descendant::*[@class='commit-group']/li", default_factory=list
    )


COMMITS_PAGE = """
<html><body>
<ol class="commit-group">
  <li>
    <p><a title="Fix decoder">Fix…</a></p>
    <div><span rel="author">wessie</span>
      <time datetime="2014-06-01T10:00:00+00:00">Jun 1</time>
      <span class="sha">abc123</span></div>
  </li>
  <li>
    <p><a title="Initial commit">Init…</a></p>
    <div><span rel="author">octocat</span>
      <time datetime="2014-05-30T08:30:00+00:00">May 30</time>
      <span class="sha">def456</span></div>
  </li>
</ol>
</body></html>
"""


# ---------------------------------------------------------------------------
# unmarshal_relative
# ---------------------------------------------------------------------------


class TestUnmarshalRelative:
    @pytest.mark.parametrize(
        ("expr", "html", "tp", "expected"),
        [
            ("/test", "<test>-555</test>", int, -555),
            ("/test", "<test>444</test>", np.uint64, 444),
            ("/test", "<test>林原め</test>", Runes, [ord(c) for c in "林原め"]),
            ("/test", "<test>Hello World</test>", str, "Hello World"),
            (
                "/test",
                "<test><inner>Hello</inner> World</test>",
                str,
                "Hello World",
            ),
            ("/test", "<test>Hello World</test>", bytes, b"Hello World"),
            (
                "/test",
                "<test><div>Hello</div><span>World</span></test>",
                Greeting,
                Greeting(a="Hello", b="World"),
            ),
            (
                "/ul/li",
                "<ul><li>0</li><li>1</li><li>2</li></ul>",
                list[int],
                [0, 1, 2],
            ),
        ],
    )
    def test_relative_table(self, expr: str, html: str, tp: Any, expected: Any) -> None:
        ref: Ref[Any] = Ref(tp)
        Decoder.parse(html).unmarshal_relative(expr, ref)
        assert ref.value == expected

    def test_non_sequence_takes_first_match(self) -> None:
        ref: Ref[int] = Ref(int)
        Decoder.parse("<ul><li>7</li><li>8</li></ul>").unmarshal_relative("li", ref)
        assert ref.value == 7

    def test_optional_sequence_collects_all(self) -> None:
        ref: Ref[list[str] | None] = Ref(list[str] | None)
        Decoder.parse("<ul><li>a</li><li>b</li></ul>").unmarshal_relative("li", ref)
        assert ref.value == ["a", "b"]

    def test_optional_struct_is_allocated(self) -> None:
        ref: Ref[Greeting | None] = Ref(Greeting | None)
        Decoder.parse("<test><div>Hi</div></test>").unmarshal_relative("/test", ref)
        assert ref.value == Greeting(a="Hi", b="")

    def test_dataclass_instance_filled_in_place(self) -> None:
        g = Greeting()
        Decoder.parse("<test><span>World</span></test>").unmarshal_relative("/test", g)
        assert g.b == "World"

    def test_no_nodes(self) -> None:
        decoder = Decoder.parse("<test>x</test>")
        with pytest.raises(NoNodesAvailable, match="No nodes found for path"):
            decoder.unmarshal_relative("/missing", Ref(str))

    def test_no_nodes_for_sequence(self) -> None:
        with pytest.raises(NoNodesAvailable) as info:
            Decoder.parse("<ul></ul>").unmarshal_relative("li", Ref(list[int]))
        assert info.value.path == "li"

    def test_no_nodes_leaves_optional_struct_unset(self) -> None:
        ref: Ref[Greeting | None] = Ref(Greeting | None)
        with pytest.raises(NoNodesAvailable):
            Decoder.parse("<test>x</test>").unmarshal_relative("/nothing", ref)
        assert ref.value is None

    def test_no_nodes_leaves_optional_sequence_unset(self) -> None:
        ref: Ref[list[int] | None] = Ref(list[int] | None)
        with pytest.raises(NoNodesAvailable):
            Decoder.parse("<ul></ul>").unmarshal_relative("li", ref)
        assert ref.value is None

    def test_several_top_level_elements(self) -> None:
        decoder = Decoder.parse("<div>a</div><span>b</span>")
        ref: Ref[str] = Ref(str)
        decoder.unmarshal_relative("/body/span", ref)
        assert ref.value == "b"
        decoder.unmarshal_relative("div", ref)
        assert ref.value == "a"

    def test_invalid_path(self) -> None:
        with pytest.raises(InvalidPathError):
            Decoder.parse("<test>x</test>").unmarshal_relative("///[", Ref(str))

    def test_hook_receives_first_match(self) -> None:
        stamp = Timestamp()
        Decoder.parse(
            "<ul><li>2020-01-01T00:00:00</li><li>2021-01-01T00:00:00</li></ul>"
        ).unmarshal_relative("li", stamp)
        assert stamp.value == datetime(2020, 1, 1)

    def test_hook_error_propagates_unchanged(self) -> None:
        with pytest.raises(RuntimeError, match="rejected b'x'"):
            Decoder.parse("<test>x</test>").unmarshal_relative("/test", Failing())

    def test_element_errors_raised_after_collecting(self) -> None:
        ref: Ref[list[int]] = Ref(list[int])
        with pytest.raises(UnmarshalTypeError):
            Decoder.parse("<ul><li>1</li><li>x</li><li>3</li></ul>").unmarshal_relative(
                "li", ref
            )
        assert ref.value == [1, 0, 3]


# ---------------------------------------------------------------------------
# unmarshal
# ---------------------------------------------------------------------------


class TestUnmarshal:
    def test_decodes_from_document_element(self) -> None:
        g = Greeting()
        Decoder.parse("<test><div>Hello</div><span>World</span></test>").unmarshal(g)
        assert g == Greeting(a="Hello", b="World")

    def test_ref_scalar_gets_root_text(self) -> None:
        ref: Ref[int] = Ref(int)
        Decoder.parse("<test> 42 </test>").unmarshal(ref)
        assert ref.value == 42

    def test_commits_page(self) -> None:
        page = CommitsPage()
        Decoder.parse(COMMITS_PAGE).unmarshal(page)

        assert len(page.commits) == 2
        first, second = page.commits
        assert first is not None
        assert second is not None
        assert first.title == "Fix decoder"
        assert first.author == "wessie"
        assert first.sha1 == "abc123"
        assert first.time.value == datetime(2014, 6, 1, 10, 0, tzinfo=timezone.utc)
        assert second.title == "Initial commit"
        assert second.sha1 == "def456"

    def test_partial_decode_keeps_bound_fields(self) -> None:
        obj = Partial()
        with pytest.raises(UnmarshalTypeError) as info:
            Decoder.parse("<p><b>one</b><i>two</i><u>three</u></p>").unmarshal(obj)
        assert obj.first == "one"
        assert obj.number == 0
        assert obj.last == "three"
        assert info.value.value == "two"

    def test_oversized_number_is_a_field_error(self) -> None:
        obj = Partial()
        digits = "9" * 5000
        with pytest.raises(UnmarshalTypeError) as info:
            Decoder.parse(f"<p><b>one</b><i>{digits}</i><u>three</u></p>").unmarshal(obj)
        assert obj.first == "one"
        assert obj.number == 0
        assert obj.last == "three"
        assert info.value.target is int

    def test_unsupported_fields_are_skipped(self) -> None:
        obj = Flags()
        Decoder.parse("<p><b>true</b><i>n</i></p>").unmarshal(obj)
        assert obj == Flags(visible=False, name="n")

    def test_strict_mode_reports_unsupported(self) -> None:
        config = DecoderConfig(strict=True)
        decoder = Decoder.parse("<p><b>true</b><i>n</i></p>", config)
        obj = Flags()
        with pytest.raises(UnsupportedTargetError):
            decoder.unmarshal(obj)
        assert obj.name == "n"

    def test_any_fixed_and_array_fields(self) -> None:
        obj = Loose()
        markup = "<div><b>raw</b><ol><li>1</li><li>2</li><li>3</li></ol></div>"
        Decoder.parse(markup).unmarshal(obj)
        assert obj.payload == b"raw"
        assert obj.scores.tolist() == [1, 2]
        assert obj.pair == ("1", "2")


class TestInvalidTargets:
    @pytest.mark.parametrize("target", [None, 5, "text", [], Greeting])
    def test_unmarshal_rejects(self, target: Any) -> None:
        with pytest.raises(InvalidUnmarshalError):
            Decoder.parse("<test>x</test>").unmarshal(target)

    def test_unmarshal_relative_rejects(self) -> None:
        with pytest.raises(InvalidUnmarshalError):
            Decoder.parse("<test>x</test>").unmarshal_relative("/test", None)


# ---------------------------------------------------------------------------
# Decoder state
# ---------------------------------------------------------------------------


class TestDecoderState:
    def test_errors_do_not_leak_between_calls(self) -> None:
        decoder = Decoder.parse("<p><b>one</b><i>two</i><u>u</u></p>")
        with pytest.raises(UnmarshalTypeError):
            decoder.unmarshal(Partial())
        g = Greeting()
        decoder.unmarshal(g)
        assert g == Greeting()

    def test_repeated_decodes_are_identical(self) -> None:
        decoder = Decoder.parse(COMMITS_PAGE)
        a, b = CommitsPage(), CommitsPage()
        decoder.unmarshal(a)
        decoder.unmarshal(b)
        assert [c.title for c in a.commits if c] == [c.title for c in b.commits if c]

    def test_default_config(self) -> None:
        assert Decoder.parse("<test>x</test>").config == DecoderConfig()

    def test_root_is_document_element(self) -> None:
        assert Decoder.parse("<test>x</test>").root.text() == "x"

    def test_xml_mode_with_namespaces(self) -> None:
        config = DecoderConfig(parse_mode=ParseMode.XML, namespaces={"f": "urn:feed"})
        decoder = Decoder.parse(
            '<feed xmlns:f="urn:feed"><f:entry>1</f:entry><f:entry>2</f:entry></feed>',
            config,
        )
        ref: Ref[list[int]] = Ref(list[int])
        decoder.unmarshal_relative("f:entry", ref)
        assert ref.value == [1, 2]


@dataclass
class Tagged:
    value: str = field(default="", metadata={"scrape": "span"})


def test_custom_metadata_tag() -> None:
    obj = Tagged()
    Decoder.parse("<p><span>s</span></p>", DecoderConfig(tag="scrape")).unmarshal(obj)
    assert obj.value == "s"
