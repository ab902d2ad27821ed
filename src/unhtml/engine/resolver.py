"""Indirection resolution: from a declared slot to something fillable.

``resolve`` walks a slot down through its indirection layers:

- ``T | None`` layers are stripped; a layer holding ``None`` is first
  allocated with the zero value of ``T``.
- ``Any`` (and non-hook Protocol) slots holding a ``Ref``, a dataclass
  instance or a hook instance are redirected through the held value, so
  decoding follows the value's dynamic type rather than the static one.
- A layer whose type implements a decode hook ends resolution: the hook
  instance is returned and the caller must hand the node to it.

The slot that comes out is never an optional layer.  Struct and sequence
slots that do not hold a usable value get their zero value written first, so
the caller can always fill the returned slot in place.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass
from typing import Any

from unhtml.engine.kinds import (
    SEQUENCE_KINDS,
    TargetKind,
    classify,
    strip_optional,
    zero_value,
)
from unhtml.engine.slots import Ref, Slot

__all__ = ["Resolution", "peek", "resolve"]

_POLYMORPHIC = (TargetKind.ANY, TargetKind.INTERFACE)


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of ``resolve``: exactly one of ``hook`` and ``slot`` is set."""

    hook: Any = None
    slot: Slot | None = None


def _redirect(value: Any) -> Slot | None:
    """Slot for the dynamic value held by a polymorphic slot, if decodable."""
    if isinstance(value, Ref):
        return value.slot()
    if value is None or isinstance(value, type):
        return None
    if classify(type(value)) in (TargetKind.STRUCT, TargetKind.HOOK):
        return Ref(type(value), value).slot()
    return None


def _holds(slot: Slot) -> bool:
    """True if the value in ``slot`` can be filled in place."""
    origin = typing.get_origin(slot.declared) or slot.declared
    return isinstance(slot.get(), origin)


def resolve(slot: Slot) -> Resolution:
    """Strip indirection layers from ``slot``, allocating as needed.

    Never raises for well-formed declared types.
    """
    while True:
        kind = classify(slot.declared)

        if kind in _POLYMORPHIC:
            held = _redirect(slot.get())
            if held is None:
                break
            slot = held
            continue

        if kind is TargetKind.OPTIONAL:
            inner = strip_optional(slot.declared)
            if slot.get() is None:
                slot.set(zero_value(inner))
            slot = slot.retype(inner)
            continue

        if kind is TargetKind.HOOK:
            hook = slot.get()
            if not isinstance(hook, typing.get_origin(slot.declared) or slot.declared):
                hook = zero_value(slot.declared)
                slot.set(hook)
            return Resolution(hook=hook)

        if (kind is TargetKind.STRUCT or kind in SEQUENCE_KINDS) and not _holds(slot):
            slot.set(zero_value(slot.declared))
        break

    return Resolution(slot=slot)


def peek(slot: Slot) -> Any:
    """Return the declared type ``resolve`` would reach, without writing."""
    tp = slot.declared
    value = slot.get()
    while True:
        kind = classify(tp)
        if kind in _POLYMORPHIC:
            held = _redirect(value)
            if held is None:
                return tp
            tp, value = held.declared, held.get()
            continue
        if kind is TargetKind.OPTIONAL:
            tp = strip_optional(tp)
            continue
        return tp

