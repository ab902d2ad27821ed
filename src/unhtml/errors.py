"""Exception types raised by unhtml.

Three kinds of failure are reported to callers:

- ``NoNodesAvailable``: a relative decode found nothing to start from.
- ``UnmarshalTypeError``: matched content does not fit the target type
  (parse failure, numeric overflow, multiple nodes into a non-sequence).
- ``InvalidUnmarshalError``: the decode target itself is unusable.

``InvalidPathError`` and ``DocumentError`` cover failures of the underlying
lxml query engine; ``UnsupportedTargetError`` is only produced when
``DecoderConfig.strict`` is enabled.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "DocumentError",
    "InvalidPathError",
    "InvalidUnmarshalError",
    "NoNodesAvailable",
    "UnhtmlError",
    "UnmarshalTypeError",
    "UnsupportedTargetError",
]


def type_name(tp: Any) -> str:
    """Return a readable name for a class or typing construct."""
    if isinstance(tp, type):
        return tp.__qualname__
    return repr(tp).replace("typing.", "")


class UnhtmlError(Exception):
    """Base class for every error raised by unhtml."""


class NoNodesAvailable(UnhtmlError):
    """A relative decode path matched no nodes at all."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No nodes found for path: {path}")


class UnmarshalTypeError(UnhtmlError, ValueError):
    """Matched content could not be stored in the target type.

    Attributes:
        value:  The textual value (or a short description such as
                ``"multinode result"``) that was being decoded.
        target: The declared type of the slot that rejected it.
        reason: Optional detail, e.g. ``"overflows uint8"``.
    """

    def __init__(self, value: str, target: Any, reason: str | None = None) -> None:
        self.value = value
        self.target = target
        self.reason = reason
        msg = (
            f"unhtml: cannot unmarshal {value!r} into Python value of type "
            f"{type_name(target)}"
        )
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class UnsupportedTargetError(UnmarshalTypeError):
    """The target type is outside the set of kinds unhtml can fill."""

    def __init__(self, value: str, target: Any) -> None:
        super().__init__(value, target, reason="unsupported target type")


class InvalidUnmarshalError(UnhtmlError, TypeError):
    """The object given as a decode target cannot be written into."""

    def __init__(self, target_type: Any = None) -> None:
        self.target_type = target_type
        if target_type is None:
            msg = "unhtml: unmarshal(None)"
        else:
            msg = f"unhtml: unmarshal(non-reference {type_name(target_type)})"
        super().__init__(msg)


class InvalidPathError(UnhtmlError):
    """An XPath expression failed to compile or evaluate."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"unhtml: invalid path {path!r}: {reason}")


class DocumentError(UnhtmlError):
    """The source markup could not be parsed into a document tree."""
