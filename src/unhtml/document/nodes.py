"""Node: read-only handle onto one position of a parsed document.

A Node wraps whatever lxml returned for an XPath match: an element, an
attribute or text "smart string", or a plain scalar for expressions such as
``count(li)``.  The decode engine only ever asks a node for its text rendering
(``text()``) or its raw bytes (``raw()``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from lxml import etree

__all__ = ["Node"]

# XPath string-value of a node: all descendant text, comments excluded.
_STRING_VALUE = etree.XPath("string()")


def _render_scalar(value: Any) -> str:
    """Render a non-node XPath result the way XPath's string() would."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True, slots=True)
class Node:
    """A borrowed reference into a document tree.

    Attributes:
        handle: The lxml object this node stands for (an element, a smart
                string, or a scalar XPath result).
    """

    handle: Any

    @property
    def is_element(self) -> bool:
        """True when the node can be used as an evaluation context."""
        return isinstance(self.handle, etree._Element)

    def text(self) -> str:
        """Return the text rendering of this node's subtree."""
        if self.is_element:
            return str(_STRING_VALUE(self.handle))
        return _render_scalar(self.handle)

    def raw(self) -> bytes:
        """Return the raw content of this node's subtree as UTF-8 bytes."""
        return self.text().encode("utf-8")
