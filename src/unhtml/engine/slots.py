"""Slot and Ref: addressable, writable locations the engine decodes into.

Python values such as ints and strings cannot be changed in place, so the
engine never holds on to a target value directly.  It holds a ``Slot``: the
location's declared type plus a getter and a setter for whatever currently
lives there (a dataclass attribute, a list item, the value of a ``Ref``).

``Ref`` is the caller-facing box for targets that are not mutable objects of
their own::

    ref = Ref(list[int])
    decoder.unmarshal_relative("/ul/li", ref)
    ref.value  # [0, 1, 2]
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, MutableSequence
from typing import Any, Generic, TypeVar

from unhtml.engine.kinds import TargetKind, classify, zero_value
from unhtml.errors import InvalidUnmarshalError

__all__ = ["Ref", "Slot", "root_slot"]

T = TypeVar("T")

_UNSET: Any = object()


class Ref(Generic[T]):
    """A caller-owned box holding one decode target.

    Args:
        tp: Declared type of the boxed value, e.g. ``int``, ``list[str]``,
            ``Article | None``.
        value: Initial value.  Defaults to the zero value of ``tp`` (``0``,
            ``""``, ``[]``, ``None`` for optional types, ...).
    """

    __slots__ = ("type", "value")

    def __init__(self, tp: Any, value: Any = _UNSET) -> None:
        self.type = tp
        self.value: T = zero_value(tp) if value is _UNSET else value

    def __repr__(self) -> str:
        return f"Ref({self.type!r}, {self.value!r})"

    def slot(self) -> Slot:
        """Return a Slot reading and writing this box's value."""
        return Slot(
            self.type,
            lambda: self.value,
            lambda value: setattr(self, "value", value),
        )


@dataclasses.dataclass(slots=True)
class Slot:
    """A typed location: declared type, getter and setter.

    Attributes:
        declared: The declared type of the location.
        get:      Returns the value currently stored.
        set:      Replaces the stored value.
    """

    declared: Any
    get: Callable[[], Any]
    set: Callable[[Any], None]

    def retype(self, tp: Any) -> Slot:
        """Return a Slot over the same storage with declared type ``tp``."""
        return Slot(tp, self.get, self.set)

    @classmethod
    def attribute(cls, obj: Any, name: str, tp: Any) -> Slot:
        """Slot for attribute ``name`` of ``obj``."""
        return cls(
            tp,
            lambda: getattr(obj, name),
            lambda value: setattr(obj, name, value),
        )

    @classmethod
    def item(cls, seq: MutableSequence[Any], index: int, tp: Any) -> Slot:
        """Slot for ``seq[index]``; the index must already exist."""

        def _set(value: Any) -> None:
            seq[index] = value

        return cls(tp, lambda: seq[index], _set)


def root_slot(target: Any) -> Slot:
    """Normalize a top-level decode target into a Slot.

    Accepted targets are a ``Ref``, a dataclass instance, or an instance of a
    class implementing a decode hook; the latter two are decoded in place.

    Raises:
        InvalidUnmarshalError: For ``None`` and for anything that cannot be
            written into (ints, strings, classes, bare lists, ...).
    """
    if target is None:
        raise InvalidUnmarshalError(None)
    if isinstance(target, Ref):
        return target.slot()
    if not isinstance(target, type) and classify(type(target)) in (
        TargetKind.STRUCT,
        TargetKind.HOOK,
    ):
        return Ref(type(target), target).slot()
    raise InvalidUnmarshalError(type(target))
