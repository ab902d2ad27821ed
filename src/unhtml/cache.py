"""ExpressionCache: LRU-backed memo of compiled XPath expressions.

Every annotated field's expression is compiled on access.  A Decoder keeps one
``ExpressionCache`` so decoding many list elements of the same struct type
compiles each expression once.  The cache is purely a performance detail:
decoding behaves identically with a cold cache, a warm one, or after
eviction.

Each ``ExpressionCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state, so two separate instances never interfere with each
other.

Example::

    from unhtml.cache import ExpressionCache

    cache = ExpressionCache(max_size=64)

    # First call compiles
    xpath = cache.compile("//li")

    # Second call is served from memory
    assert cache.compile("//li") is xpath
"""

from __future__ import annotations

from collections.abc import Mapping

from cachetools import LRUCache
from lxml import etree

from unhtml.document.query import compile_path

__all__ = ["ExpressionCache"]


class ExpressionCache:
    """LRU-backed cache of compiled expressions keyed by expression text.

    Failed compilations are not cached; the ``InvalidPathError`` is raised
    again on every attempt.

    Args:
        namespaces: Prefix to URI mapping used for every compilation.
        max_size: Maximum number of compiled expressions to hold.  Defaults
            to 128.  When exceeded, the least-recently-used entry is
            silently evicted.
    """

    def __init__(
        self,
        namespaces: Mapping[str, str] | None = None,
        max_size: int = 128,
    ) -> None:
        self._namespaces = dict(namespaces) if namespaces else None
        self._cache: LRUCache[str, etree.XPath] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def compile(self, expr: str) -> etree.XPath:
        """Return the compiled form of ``expr``, compiling it on a miss.

        Raises:
            InvalidPathError: If ``expr`` is not valid XPath.
        """
        xpath = self._cache.get(expr)
        if xpath is None:
            xpath = compile_path(expr, self._namespaces)
            self._cache[expr] = xpath
        return xpath
