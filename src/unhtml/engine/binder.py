"""Struct field binding: one path expression per dataclass field.

Fields are visited in declaration order.  Each field's expression is read
from its metadata (``field(metadata={"unhtml": "div/a"})``, or the
``unhtml.path`` helper) and evaluated against the struct's node.  What
happens next depends only on how many nodes matched:

- none:  the field is left exactly as it was, and nothing is reported;
- one:   the node is decoded through the single-value path;
- more:  the nodes go to the multi-node collector, whatever the field's type.

Fields without an expression are never touched.  Fields of frozen dataclasses
cannot be written and are skipped the same way.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any

from unhtml.engine.collector import bind_many
from unhtml.engine.kinds import field_types
from unhtml.engine.slots import Slot
from unhtml.errors import InvalidPathError

if TYPE_CHECKING:
    from unhtml.document.nodes import Node
    from unhtml.engine.session import DecodeSession

__all__ = ["bind_struct", "is_frozen"]

logger = logging.getLogger(__name__)


def is_frozen(obj: Any) -> bool:
    """True if ``obj`` is an instance of a frozen dataclass."""
    params = getattr(type(obj), "__dataclass_params__", None)
    return bool(params is not None and params.frozen)


def bind_struct(session: DecodeSession, root: Node, obj: Any) -> None:
    """Populate the annotated fields of dataclass instance ``obj`` from ``root``."""
    tag = session.config.tag
    hints = field_types(type(obj))
    frozen = is_frozen(obj)

    for f in dataclasses.fields(obj):
        expr = f.metadata.get(tag)
        if not expr:
            logger.debug("Skipping field %s: no path expression", f.name)
            continue

        if frozen:
            logger.debug("Skipping field %s: not writable", f.name)
            continue

        try:
            nodes = session.select(expr, root)
        except InvalidPathError as exc:
            session.record(exc)
            continue

        logger.debug("Executed %s with %d resulting nodes", expr, len(nodes))

        slot = Slot.attribute(obj, f.name, hints.get(f.name, Any))
        if len(nodes) > 1:
            bind_many(session, nodes, slot)
        elif nodes:
            session.unmarshal(nodes[0], slot)
