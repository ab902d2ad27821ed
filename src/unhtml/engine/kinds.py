"""TargetKind StrEnum and the type classification behind it.

Every declared type a slot can have maps to exactly one TargetKind.  The set
is closed: a type that fits none of the fillable kinds is ``UNSUPPORTED`` and
the engine skips it.

Classification order matters in three places:
- hooks are checked before dataclasses, so a dataclass that implements a
  decode hook is decoded through the hook;
- ``bool`` is checked before ``int`` because bool subclasses int in Python;
- ``Runes`` is checked before generic aliases because it is a NewType over
  ``list[int]``.
"""

from __future__ import annotations

import dataclasses
import functools
import types
import typing
from enum import StrEnum, auto
from typing import Any, NewType

import numpy as np

from unhtml.protocols import is_hook_type

__all__ = [
    "SEQUENCE_KINDS",
    "Runes",
    "TargetKind",
    "classify",
    "element_type",
    "field_types",
    "strip_optional",
    "zero_value",
]

Runes = NewType("Runes", list[int])
"""A code-point sequence target: receives ``[ord(c) for c in text]``."""

_NONE_TYPE = type(None)


class TargetKind(StrEnum):
    """The closed set of shapes a target slot can take.

    - STRUCT         : a dataclass, filled field by field
    - SIGNED         : int, numpy signed integers
    - UNSIGNED       : numpy unsigned integers
    - FLOAT          : float, numpy floating types
    - STRING         : str
    - BYTES          : bytes, bytearray (raw content, untrimmed)
    - RUNES          : Runes (code points, untrimmed)
    - ANY            : Any / object (raw content verbatim)
    - INTERFACE      : a Protocol that is not a decode hook
    - SEQUENCE       : list[T], tuple[T, ...]
    - FIXED_SEQUENCE : tuple[T1, ..., Tn], numpy.ndarray
    - OPTIONAL       : T | None, an indirection layer
    - HOOK           : a class implementing a decode hook
    - UNSUPPORTED    : anything else
    """

    STRUCT = auto()
    SIGNED = auto()
    UNSIGNED = auto()
    FLOAT = auto()
    STRING = auto()
    BYTES = auto()
    RUNES = auto()
    ANY = auto()
    INTERFACE = auto()
    SEQUENCE = auto()
    FIXED_SEQUENCE = auto()
    OPTIONAL = auto()
    HOOK = auto()
    UNSUPPORTED = auto()


SEQUENCE_KINDS = frozenset({TargetKind.SEQUENCE, TargetKind.FIXED_SEQUENCE})


def _is_union(tp: Any) -> bool:
    return typing.get_origin(tp) in (typing.Union, types.UnionType)


def strip_optional(tp: Any) -> Any:
    """Return ``T`` for ``T | None``; any other type is returned unchanged."""
    if _is_union(tp):
        args = [a for a in typing.get_args(tp) if a is not _NONE_TYPE]
        if len(args) == 1:
            return args[0]
    return tp


def _is_protocol(tp: Any) -> bool:
    return bool(getattr(tp, "_is_protocol", False))


def classify(tp: Any) -> TargetKind:
    """Return the TargetKind of declared type ``tp``."""
    if tp is Any or tp is object:
        return TargetKind.ANY
    if tp is Runes:
        return TargetKind.RUNES
    if isinstance(tp, NewType):
        return classify(tp.__supertype__)

    if _is_union(tp):
        if strip_optional(tp) is not tp:
            return TargetKind.OPTIONAL
        return TargetKind.UNSUPPORTED

    origin = typing.get_origin(tp) or tp
    if not isinstance(origin, type):
        return TargetKind.UNSUPPORTED

    if _is_protocol(origin):
        return TargetKind.INTERFACE
    if is_hook_type(origin):
        return TargetKind.HOOK
    if dataclasses.is_dataclass(origin):
        return TargetKind.STRUCT
    if issubclass(origin, (bool, np.bool_)):
        return TargetKind.UNSUPPORTED
    if issubclass(origin, (bytes, bytearray)):
        return TargetKind.BYTES
    if issubclass(origin, str):
        return TargetKind.STRING
    if issubclass(origin, np.unsignedinteger):
        return TargetKind.UNSIGNED
    if issubclass(origin, (int, np.signedinteger)):
        return TargetKind.SIGNED
    if issubclass(origin, (float, np.floating)):
        return TargetKind.FLOAT
    if issubclass(origin, np.ndarray):
        return TargetKind.FIXED_SEQUENCE
    if issubclass(origin, tuple):
        args = typing.get_args(tp)
        if args and args[-1] is not Ellipsis:
            return TargetKind.FIXED_SEQUENCE
        return TargetKind.SEQUENCE
    if issubclass(origin, list):
        return TargetKind.SEQUENCE
    return TargetKind.UNSUPPORTED


def element_type(tp: Any, index: int = 0) -> Any:
    """Return the declared type of element ``index`` of a sequence type.

    Unparameterized sequences hold ``Any``.  For fixed tuples the element
    type is positional.
    """
    args = typing.get_args(tp)
    origin = typing.get_origin(tp) or tp
    if isinstance(origin, type) and issubclass(origin, tuple):
        if not args:
            return Any
        if args[-1] is Ellipsis:
            return args[0]
        return args[index]
    return args[0] if args else Any


def _ndarray_dtype(tp: Any) -> np.dtype[Any]:
    # npt.NDArray[np.int64] is ndarray[shape, dtype[np.int64]].
    args = typing.get_args(tp)
    if len(args) == 2:
        scalar = typing.get_args(args[1])
        if scalar and isinstance(scalar[0], type):
            return np.dtype(scalar[0])
    return np.dtype(np.float64)


@functools.cache
def field_types(cls: type) -> dict[str, Any]:
    """Resolved field annotations of dataclass ``cls`` (string hints included)."""
    return typing.get_type_hints(cls)


def _zero_struct(cls: type) -> Any:
    hints = field_types(cls)
    kwargs = {
        f.name: zero_value(hints.get(f.name, Any))
        for f in dataclasses.fields(cls)
        if f.init
        and f.default is dataclasses.MISSING
        and f.default_factory is dataclasses.MISSING
    }
    return cls(**kwargs)


def zero_value(tp: Any) -> Any:
    """Return the value a freshly allocated slot of type ``tp`` holds."""
    if tp is not Runes and isinstance(tp, NewType):
        return zero_value(tp.__supertype__)
    kind = classify(tp)
    origin = typing.get_origin(tp) or tp

    if kind in (TargetKind.OPTIONAL, TargetKind.ANY, TargetKind.INTERFACE):
        return None
    if kind is TargetKind.RUNES:
        return []
    if kind is TargetKind.HOOK:
        return origin()
    if kind is TargetKind.STRUCT:
        return _zero_struct(origin)
    if kind is TargetKind.FIXED_SEQUENCE:
        if issubclass(origin, np.ndarray):
            return np.zeros(0, dtype=_ndarray_dtype(tp))
        return tuple(zero_value(arg) for arg in typing.get_args(tp))
    if kind is TargetKind.SEQUENCE:
        return origin()
    if kind is TargetKind.UNSUPPORTED:
        try:
            return origin()
        except TypeError:
            return None
    return origin()
