"""Decoder: entry points wiring the document, the expression cache and the engine.

A Decoder holds one parsed document and decodes it into as many targets as
the caller likes.  Every decode call gets a fresh ``DecodeSession``, so calls
never see each other's errors; the only state kept between calls is the
compiled-expression cache, which does not affect results.

Entry points:
- ``unmarshal(target)`` decodes from the document element.
- ``unmarshal_relative(path, target)`` first selects a sub-root with ``path``.

Both decode as much of the target as they can and then raise the first
recorded error, so fields bound before a failure stay bound.
"""

from __future__ import annotations

from typing import Any

from unhtml.cache import ExpressionCache
from unhtml.config import DecoderConfig
from unhtml.document.nodes import Node
from unhtml.document.parser import Source, parse_document
from unhtml.document.query import select
from unhtml.engine.kinds import SEQUENCE_KINDS, classify
from unhtml.engine.resolver import peek, resolve
from unhtml.engine.session import DecodeSession
from unhtml.engine.slots import root_slot
from unhtml.errors import NoNodesAvailable
from unhtml.protocols import hook_method

__all__ = ["Decoder"]


class Decoder:
    """Decodes one parsed document into annotated targets.

    Example::

        from dataclasses import dataclass
        from unhtml import Decoder, path

        @dataclass
        class Greeting:
            a: str = path("div", default="")
            b: str = path("span", default="")

        d = Decoder.parse("<test><div>Hello</div><span>World</span></test>")
        g = Greeting()
        d.unmarshal_relative("/test", g)
        print(g)  # Greeting(a='Hello', b='World')
    """

    def __init__(self, root: Node, config: DecoderConfig | None = None) -> None:
        """Initialise the decoder.

        Args:
            root:   Node of the document element to decode from.
            config: Decoder options.  Defaults to ``DecoderConfig()``.
        """
        self._config: DecoderConfig = config if config is not None else DecoderConfig()
        self._root = root
        self._expressions = ExpressionCache(
            self._config.namespaces, max_size=self._config.max_cache_size
        )

    @classmethod
    def parse(cls, source: Source, config: DecoderConfig | None = None) -> Decoder:
        """Parse ``source`` and return a Decoder over it.

        The source is consumed whole and parsed before this returns.

        Raises:
            DocumentError: If the markup cannot be parsed.
        """
        return cls(parse_document(source, config), config)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def root(self) -> Node:
        """The document element every decode starts from."""
        return self._root

    @property
    def config(self) -> DecoderConfig:
        """The options this decoder parses and decodes with."""
        return self._config

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def _session(self) -> DecodeSession:
        return DecodeSession(self._config, self._expressions)

    def unmarshal(self, target: Any) -> None:
        """Fill ``target`` from the document element.

        Args:
            target: A dataclass instance (filled in place), an instance of a
                class implementing a decode hook, or a ``Ref``.

        Raises:
            InvalidUnmarshalError: If ``target`` is ``None`` or cannot be
                written into.  Nothing is decoded.
            UnhtmlError: The first error recorded while decoding; everything
                that could be decoded has been.
        """
        slot = root_slot(target)
        session = self._session()
        session.unmarshal(self._root, slot)
        session.raise_first()

    def unmarshal_relative(self, path: str, target: Any) -> None:
        """Fill ``target`` from the nodes ``path`` selects.

        If the target is a sequence all matches are collected into it,
        otherwise only the first match is decoded.  A decode hook always
        receives the first match.

        Raises:
            InvalidPathError: If ``path`` does not compile.
            InvalidUnmarshalError: If ``target`` cannot be written into.
            NoNodesAvailable: If ``path`` matches nothing.
            UnhtmlError: The first error recorded while decoding.
            Exception: Whatever a decode hook raises, unchanged.
        """
        xpath = self._expressions.compile(path)
        slot = root_slot(target)
        many = classify(peek(slot)) in SEQUENCE_KINDS

        nodes = select(xpath, self._root)
        if not many:
            nodes = nodes[:1]
        if not nodes:
            raise NoNodesAvailable(path)

        # Optional layers are only allocated once there is something to decode.
        resolution = resolve(slot)
        resolved = resolution.slot
        if resolved is None:
            hook_method(resolution.hook)(nodes[0].raw())  # type: ignore[misc]
            return

        session = self._session()
        if many:
            session.collect(nodes, resolved)
        else:
            session.unmarshal(nodes[0], resolved)
        session.raise_first()
