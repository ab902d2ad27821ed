"""path(): dataclass field carrying a path expression.

``path("div/a")`` is shorthand for
``dataclasses.field(metadata={"unhtml": "div/a"})``; any other
``dataclasses.field`` argument passes straight through.
"""

from __future__ import annotations

import dataclasses
from typing import Any

__all__ = ["path"]


def path(expr: str, *, tag: str = "unhtml", **kwargs: Any) -> Any:
    """Return a dataclass field whose metadata holds ``expr`` under ``tag``.

    Args:
        expr:   XPath expression evaluated against the enclosing struct's node.
        tag:    Metadata key; must match ``DecoderConfig.tag``.
        kwargs: Passed to ``dataclasses.field`` (``default``,
                ``default_factory``, ``repr``, ...).  Existing ``metadata``
                entries are kept.

    Example::

        @dataclass
        class Commit:
            title: str = path("p/a/@title", default="")
            tags: list[str] = path("ul/li", default_factory=list)
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[tag] = expr
    return dataclasses.field(metadata=metadata, **kwargs)
