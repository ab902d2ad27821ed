"""Multi-node collection: many matched nodes into one sequence slot.

The i-th matched node (document order) is decoded into element i of the
target, each through the single-value path, so a failing element is recorded
and the remaining elements are still decoded.

- Growable targets (``list[T]``, ``tuple[T, ...]``) keep their existing
  elements, which are decoded into in place, and grow by one zero-valued
  element just before each missing index is decoded.  Lists are extended in
  place; tuples are rebuilt and written back.
- Fixed targets (``tuple[T1, ..., Tn]``, a 1-D ``numpy.ndarray``) never grow:
  nodes beyond their length are dropped without error.

Any other target receiving several nodes is a type mismatch; it is recorded
and the slot is left as it was.
"""

from __future__ import annotations

import typing
from typing import TYPE_CHECKING, Any

import numpy as np

from unhtml.engine.kinds import (
    SEQUENCE_KINDS,
    TargetKind,
    classify,
    element_type,
    zero_value,
)
from unhtml.engine.resolver import peek, resolve
from unhtml.engine.slots import Slot
from unhtml.errors import UnmarshalTypeError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from unhtml.document.nodes import Node
    from unhtml.engine.session import DecodeSession

__all__ = ["bind_many"]


def _fill_growable(session: DecodeSession, nodes: Sequence[Node], slot: Slot) -> None:
    current = slot.get()
    items = current if isinstance(current, list) else list(current)
    elem = element_type(slot.declared)

    for index, node in enumerate(nodes):
        if index >= len(items):
            items.append(zero_value(elem))
        session.unmarshal(node, Slot.item(items, index, elem))

    if items is not current:
        slot.set(tuple(items))


def _fill_tuple(session: DecodeSession, nodes: Sequence[Node], slot: Slot) -> None:
    args = typing.get_args(slot.declared)
    buffer = list(slot.get())[: len(args)]
    buffer.extend(zero_value(arg) for arg in args[len(buffer) :])

    for index, node in enumerate(nodes[: len(args)]):
        session.unmarshal(node, Slot.item(buffer, index, element_type(slot.declared, index)))

    slot.set(tuple(buffer))


def _fill_array(session: DecodeSession, nodes: Sequence[Node], array: np.ndarray) -> None:
    elem: Any = Any if array.dtype == np.dtype(object) else array.dtype.type
    length = array.shape[0] if array.ndim else 0

    for index, node in enumerate(nodes[:length]):
        session.unmarshal(node, Slot.item(array, index, elem))  # type: ignore[arg-type]


def bind_many(session: DecodeSession, nodes: Sequence[Node], slot: Slot) -> None:
    """Decode ``nodes`` element-wise into the sequence behind ``slot``."""
    declared = peek(slot)
    kind = classify(declared)
    if kind not in SEQUENCE_KINDS:
        session.record(UnmarshalTypeError("multinode result", declared))
        return

    target = resolve(slot).slot
    if target is None:
        return
    current = target.get()

    if kind is TargetKind.SEQUENCE:
        _fill_growable(session, nodes, target)
    elif isinstance(current, np.ndarray):
        _fill_array(session, nodes, current)
    else:
        _fill_tuple(session, nodes, target)
