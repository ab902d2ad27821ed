"""Tests for the decode hook Protocols.

Verifies that:
- User-defined classes with a conformant hook method satisfy the Protocol.
- Classes without a hook method do not satisfy it.
- hook_method() prefers unmarshal_html over unmarshal_text.
- is_hook_type() only accepts classes.
"""

from __future__ import annotations

from unhtml.protocols import (
    HTMLUnmarshaler,
    TextUnmarshaler,
    hook_method,
    is_hook_type,
)


class _HTMLHook:
    def unmarshal_html(self, data: bytes) -> None:
        self.data = data


class _TextHook:
    def unmarshal_text(self, data: bytes) -> None:
        self.data = data


class _BothHooks:
    def __init__(self) -> None:
        self.via = ""

    def unmarshal_html(self, data: bytes) -> None:
        self.via = "html"

    def unmarshal_text(self, data: bytes) -> None:
        self.via = "text"


class _NoHook:
    def decode(self, data: bytes) -> None:
        pass


# ---------------------------------------------------------------------------
# Structural conformance
# ---------------------------------------------------------------------------


def test_html_hook_satisfies_protocol() -> None:
    assert isinstance(_HTMLHook(), HTMLUnmarshaler) is True
    assert isinstance(_HTMLHook(), TextUnmarshaler) is False


def test_text_hook_satisfies_protocol() -> None:
    assert isinstance(_TextHook(), TextUnmarshaler) is True
    assert isinstance(_TextHook(), HTMLUnmarshaler) is False


def test_protocol_does_not_require_inheritance() -> None:
    assert HTMLUnmarshaler not in type(_HTMLHook()).__mro__


def test_class_without_hook_fails_isinstance() -> None:
    assert isinstance(_NoHook(), HTMLUnmarshaler) is False
    assert isinstance(_NoHook(), TextUnmarshaler) is False


# ---------------------------------------------------------------------------
# Dispatch helpers
# ---------------------------------------------------------------------------


def test_html_hook_takes_precedence() -> None:
    obj = _BothHooks()
    method = hook_method(obj)
    assert method is not None
    method(b"x")
    assert obj.via == "html"


def test_hook_method_none_without_hook() -> None:
    assert hook_method(_NoHook()) is None


def test_is_hook_type_on_classes() -> None:
    assert is_hook_type(_HTMLHook) is True
    assert is_hook_type(_TextHook) is True
    assert is_hook_type(_NoHook) is False


def test_is_hook_type_rejects_instances() -> None:
    assert is_hook_type(_HTMLHook()) is False
