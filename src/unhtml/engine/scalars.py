"""Scalar materialization: node text into a typed scalar slot.

Numbers are parsed from the node's text with surrounding whitespace removed,
since values in formatted markup are usually indented.  Each numeric type's
width is honored through ``numpy.iinfo`` / ``numpy.finfo``; Python's own
``int`` is unbounded.

A value that fails to parse or does not fit is reported as
``UnmarshalTypeError`` and the slot keeps whatever it held before.
"""

from __future__ import annotations

import logging
import math
import re
import typing
from typing import Any, NewType

import numpy as np

from unhtml.document.nodes import Node
from unhtml.engine.kinds import TargetKind
from unhtml.engine.slots import Slot
from unhtml.errors import UnmarshalTypeError, UnsupportedTargetError, type_name

__all__ = ["materialize"]

logger = logging.getLogger(__name__)

# Base-10 only: no "_" separators, no base prefixes.
_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def _concrete(tp: Any) -> Any:
    """The runtime class values of declared type ``tp`` are built with."""
    while isinstance(tp, NewType):
        tp = tp.__supertype__
    return typing.get_origin(tp) or tp


def _build(tp: Any, text: str, value: Any) -> Any:
    try:
        return _concrete(tp)(value)
    except (TypeError, ValueError) as exc:
        raise UnmarshalTypeError(text, tp, str(exc)) from exc


def _parse_integer(text: str, tp: Any, *, signed: bool) -> Any:
    s = text.strip()
    pattern = _SIGNED if signed else _UNSIGNED
    if not pattern.fullmatch(s):
        raise UnmarshalTypeError(s, tp, "invalid syntax")

    try:
        n = int(s)
    except ValueError as exc:
        # Digit strings beyond the interpreter's int conversion limit.
        raise UnmarshalTypeError(s, tp, str(exc)) from exc
    cls = _concrete(tp)
    if issubclass(cls, np.integer):
        info = np.iinfo(cls)
        if not int(info.min) <= n <= int(info.max):
            raise UnmarshalTypeError(s, tp, f"value out of range for {type_name(cls)}")
    return _build(tp, s, n)


def _parse_float(text: str, tp: Any) -> Any:
    s = text.strip()
    if not _FLOAT.fullmatch(s):
        raise UnmarshalTypeError(s, tp, "invalid syntax")

    try:
        x = float(s)
    except ValueError as exc:
        raise UnmarshalTypeError(s, tp, str(exc)) from exc
    cls = _concrete(tp)
    limit = float(np.finfo(cls).max) if issubclass(cls, np.floating) else None
    overflow = math.isinf(x) and "inf" not in s.lower()
    if limit is not None and math.isfinite(x) and abs(x) > limit:
        overflow = True
    if overflow:
        raise UnmarshalTypeError(s, tp, f"value out of range for {type_name(cls)}")
    return _build(tp, s, x)


def materialize(node: Node, slot: Slot, kind: TargetKind, *, strict: bool = False) -> None:
    """Write the content of ``node`` into ``slot`` according to ``kind``.

    Args:
        node:   The matched node.
        slot:   A resolved slot (no optional layer, no hook).
        kind:   ``classify(slot.declared)``.
        strict: Report unsupported kinds instead of skipping them.

    Raises:
        UnmarshalTypeError: On parse failure, numeric overflow, or a Protocol
            target that is not a decode hook.
        UnsupportedTargetError: For unsupported kinds when ``strict`` is set.
    """
    tp = slot.declared

    if kind is TargetKind.SIGNED:
        slot.set(_parse_integer(node.text(), tp, signed=True))
    elif kind is TargetKind.UNSIGNED:
        slot.set(_parse_integer(node.text(), tp, signed=False))
    elif kind is TargetKind.FLOAT:
        slot.set(_parse_float(node.text(), tp))
    elif kind is TargetKind.STRING:
        text = node.text()
        slot.set(text if _concrete(tp) is str else _build(tp, text, text))
    elif kind is TargetKind.BYTES:
        slot.set(_concrete(tp)(node.raw()))
    elif kind is TargetKind.RUNES:
        slot.set([ord(c) for c in node.text()])
    elif kind is TargetKind.ANY:
        slot.set(node.raw())
    elif kind is TargetKind.INTERFACE:
        raise UnmarshalTypeError(node.text(), tp)
    elif strict:
        raise UnsupportedTargetError(node.text(), tp)
    else:
        logger.debug("Unsupported target type skipped: %s", type_name(tp))
