"""DecoderConfig and ParseMode for decoder configuration.

DecoderConfig is a frozen (immutable) dataclass holding the parsing and
decoding options.  ParseMode selects which lxml parser builds the tree.
"""

from __future__ import annotations

import codecs
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum, auto

__all__ = ["DecoderConfig", "ParseMode"]


class ParseMode(StrEnum):
    """How source markup is turned into a document tree.

    - HTML: lxml's forgiving HTML parser.  Fragments keep their own top-level
            element as the document element.
    - XML:  lxml's XML parser in recover mode.
    """

    HTML = auto()
    XML = auto()


@dataclass(frozen=True, slots=True)
class DecoderConfig:
    """Immutable configuration for a Decoder.

    Attributes:
        parse_mode: Which parser to use for the source markup.
        encoding: Codec used to decode ``bytes`` input in HTML mode.  ``None``
            leaves encoding detection to libxml2.
        tag: Field metadata key that holds a field's path expression.
        namespaces: Prefix to URI mapping available to every expression.
        strict: When True, target kinds unhtml cannot fill are reported as
            ``UnsupportedTargetError`` instead of being skipped.  Default False.
        max_cache_size: Number of compiled expressions kept per Decoder.
    """

    parse_mode: ParseMode = ParseMode.HTML
    encoding: str | None = "utf-8"
    tag: str = "unhtml"
    namespaces: Mapping[str, str] = field(default_factory=dict)
    strict: bool = False
    max_cache_size: int = 128

    def __post_init__(self) -> None:
        if not self.tag:
            msg = "tag must be a non-empty string"
            raise ValueError(msg)
        if self.max_cache_size < 1:
            msg = f"max_cache_size must be >= 1, got {self.max_cache_size}"
            raise ValueError(msg)
        if self.encoding is not None:
            try:
                codecs.lookup(self.encoding)
            except LookupError as exc:
                msg = f"unknown encoding {self.encoding!r}"
                raise ValueError(msg) from exc
        if not isinstance(self.parse_mode, ParseMode):
            # Accept plain strings such as "xml"; frozen, so bypass __setattr__.
            object.__setattr__(self, "parse_mode", ParseMode(self.parse_mode))
