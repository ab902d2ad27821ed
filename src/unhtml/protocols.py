"""Custom decode hook Protocols.

A target type takes over its own decoding by implementing one of two
methods.  No inheritance is required; any class with a conformant method
passes ``isinstance`` checks.

Example::

    from datetime import datetime
    from unhtml.protocols import TextUnmarshaler

    class Timestamp:
        def __init__(self) -> None:
            self.value: datetime | None = None

        def unmarshal_text(self, data: bytes) -> None:
            self.value = datetime.fromisoformat(data.decode().strip())

    assert isinstance(Timestamp(), TextUnmarshaler)  # True, structural conformance

When a class implements both methods, ``unmarshal_html`` wins.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

__all__ = ["HTMLUnmarshaler", "TextUnmarshaler", "hook_method", "is_hook_type"]


@runtime_checkable
class HTMLUnmarshaler(Protocol):
    """Byte-oriented hook: receives the raw content of the matched node.

    The content may or may not be markup, depending on what the expression
    selected.  Raise to report a decode failure.
    """

    def unmarshal_html(self, data: bytes) -> None: ...


@runtime_checkable
class TextUnmarshaler(Protocol):
    """Text-oriented hook: receives the matched node's text as bytes.

    Raise to report a decode failure.
    """

    def unmarshal_text(self, data: bytes) -> None: ...


_HOOK_NAMES = ("unmarshal_html", "unmarshal_text")


def is_hook_type(tp: Any) -> bool:
    """Return True if instances of class ``tp`` carry a decode hook."""
    return isinstance(tp, type) and any(
        callable(getattr(tp, name, None)) for name in _HOOK_NAMES
    )


def hook_method(obj: Any) -> Callable[[bytes], None] | None:
    """Return the hook method ``obj`` would be decoded through, if any."""
    for name in _HOOK_NAMES:
        method = getattr(obj, name, None)
        if callable(method):
            return method
    return None
