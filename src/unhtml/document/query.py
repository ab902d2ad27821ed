"""XPath compilation and evaluation against Nodes.

Thin wrappers over ``lxml.etree.XPath`` that translate lxml failures into
``InvalidPathError`` and lxml results into ordered lists of Nodes.
"""

from __future__ import annotations

from collections.abc import Mapping

from lxml import etree

from unhtml.document.nodes import Node
from unhtml.errors import InvalidPathError

__all__ = ["compile_path", "select"]


def compile_path(
    expr: str, namespaces: Mapping[str, str] | None = None
) -> etree.XPath:
    """Compile ``expr`` into a reusable XPath object.

    Raises:
        InvalidPathError: If the expression is not valid XPath.
    """
    try:
        return etree.XPath(expr, namespaces=dict(namespaces or {}) or None)
    except etree.XPathError as exc:
        raise InvalidPathError(expr, str(exc)) from exc


def select(xpath: etree.XPath, node: Node) -> list[Node]:
    """Evaluate a compiled expression against ``node``.

    Returns the matches in document order.  A node that is not an element
    (an attribute value, a text result) has no children to search and
    selects nothing.

    Raises:
        InvalidPathError: If evaluation fails, e.g. an unknown function or an
            undefined namespace prefix.
    """
    if not node.is_element:
        return []

    try:
        result = xpath(node.handle)
    except etree.XPathError as exc:
        raise InvalidPathError(xpath.path, str(exc)) from exc

    if isinstance(result, list):
        return [Node(item) for item in result]
    # Scalar results (numbers, booleans, strings) form a single match.
    return [Node(result)]
