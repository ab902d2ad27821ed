"""Public API functions for unhtml.

This module provides the three user-facing functions: unmarshal,
unmarshal_relative, and decode.  Each call parses its source into a fresh
``Decoder`` to guarantee zero global state mutation between calls.  Reuse a
``Decoder`` directly to decode one document into several targets.
"""

from __future__ import annotations

from typing import Any

from unhtml.config import DecoderConfig
from unhtml.decoder import Decoder
from unhtml.document.parser import Source
from unhtml.engine.slots import Ref

__all__ = ["decode", "unmarshal", "unmarshal_relative"]


def unmarshal(source: Source, target: Any, config: DecoderConfig | None = None) -> None:
    """Parse ``source`` and fill ``target`` from its document element.

    Args:
        source: HTML/XML markup as ``str``, ``bytes`` or a readable file.
        target: A dataclass instance, a hook instance, or a ``Ref``.
        config: Decoder options.  Defaults to ``DecoderConfig()`` when None.

    Raises:
        DocumentError: If the markup cannot be parsed.
        InvalidUnmarshalError: If ``target`` cannot be written into.
        UnhtmlError: The first error recorded while decoding.
    """
    Decoder.parse(source, config).unmarshal(target)


def unmarshal_relative(
    source: Source,
    path: str,
    target: Any,
    config: DecoderConfig | None = None,
) -> None:
    """Parse ``source`` and fill ``target`` from the nodes ``path`` selects.

    See ``Decoder.unmarshal_relative`` for how matches are used.

    Raises:
        NoNodesAvailable: If ``path`` matches nothing.
    """
    Decoder.parse(source, config).unmarshal_relative(path, target)


def decode(
    source: Source,
    tp: Any,
    path: str | None = None,
    config: DecoderConfig | None = None,
) -> Any:
    """Decode ``source`` into a new value of type ``tp`` and return it.

    Args:
        source: HTML/XML markup.
        tp:     Target type, e.g. ``int``, ``list[str]``, a dataclass.
        path:   Optional sub-root expression; when given, behaves like
                ``unmarshal_relative``.
        config: Decoder options.  Defaults to ``DecoderConfig()`` when None.

    Returns:
        The decoded value.  Dataclass types are instantiated from the zero
        values of their required fields before decoding.
    """
    ref: Ref[Any] = Ref(tp)
    decoder = Decoder.parse(source, config)
    if path is None:
        decoder.unmarshal(ref)
    else:
        decoder.unmarshal_relative(path, ref)
    return ref.value
