"""DecodeSession: state and single-value dispatch for one decode call.

Decoding is best effort.  A failure on one field or list element is
recorded and decoding carries on with the rest of the target; when the call
finishes, the first recorded error is the one reported.  ``keep_first`` is
that merge rule.

A session is created per decode call and thrown away afterwards.  The only
thing it shares with other sessions is the Decoder's ``ExpressionCache``,
which does not affect results.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from unhtml.document.query import select
from unhtml.engine.binder import bind_struct
from unhtml.engine.collector import bind_many
from unhtml.engine.kinds import SEQUENCE_KINDS, TargetKind, classify
from unhtml.engine.resolver import resolve
from unhtml.engine.scalars import materialize
from unhtml.errors import UnhtmlError
from unhtml.protocols import hook_method

if TYPE_CHECKING:
    from collections.abc import Sequence

    from unhtml.cache import ExpressionCache
    from unhtml.config import DecoderConfig
    from unhtml.document.nodes import Node
    from unhtml.engine.slots import Slot

__all__ = ["DecodeSession", "keep_first"]

logger = logging.getLogger(__name__)


def keep_first(
    current: BaseException | None, new: BaseException | None
) -> BaseException | None:
    """Merge two errors, keeping ``current`` once it is set."""
    return current if current is not None else new


class DecodeSession:
    """Tracks the first recoverable error across one decode call.

    Args:
        config:      The Decoder's configuration.
        expressions: Cache used to compile field expressions.
    """

    def __init__(self, config: DecoderConfig, expressions: ExpressionCache) -> None:
        self.config = config
        self._expressions = expressions
        self.first_error: BaseException | None = None

    def record(self, err: BaseException | None) -> None:
        """Remember ``err`` unless an earlier error was already recorded."""
        if err is not None and self.first_error is None:
            logger.debug("Recording decode error: %s", err)
        self.first_error = keep_first(self.first_error, err)

    def raise_first(self) -> None:
        """Raise the first recorded error, if any."""
        if self.first_error is not None:
            raise self.first_error

    def select(self, expr: str, node: Node) -> list[Node]:
        """Compile ``expr`` (cached) and evaluate it against ``node``.

        Raises:
            InvalidPathError: If the expression cannot be compiled or evaluated.
        """
        return select(self._expressions.compile(expr), node)

    def call_hook(self, hook: Any, node: Node) -> None:
        """Hand ``node``'s raw content to a decode hook, recording failures."""
        method = hook_method(hook)
        try:
            method(node.raw())  # type: ignore[misc]
        except Exception as exc:  # noqa: BLE001 - hook failures are per-field errors
            self.record(exc)

    def collect(self, nodes: Sequence[Node], slot: Slot) -> None:
        """Multi-value path: decode ``nodes`` into the sequence behind ``slot``."""
        bind_many(self, nodes, slot)

    def unmarshal(self, node: Node, slot: Slot) -> None:
        """Single-value path: decode one node into ``slot``."""
        resolution = resolve(slot)
        target = resolution.slot
        if target is None:
            self.call_hook(resolution.hook, node)
            return

        kind = classify(target.declared)

        if kind is TargetKind.STRUCT:
            bind_struct(self, node, target.get())
        elif kind in SEQUENCE_KINDS:
            self.collect([node], target)
        else:
            try:
                materialize(node, target, kind, strict=self.config.strict)
            except UnhtmlError as exc:
                self.record(exc)
