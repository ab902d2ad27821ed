"""unhtml - decode HTML documents into annotated Python types via XPath."""

from __future__ import annotations

from unhtml.api import decode, unmarshal, unmarshal_relative
from unhtml.config import DecoderConfig, ParseMode
from unhtml.decoder import Decoder
from unhtml.engine.kinds import Runes
from unhtml.engine.slots import Ref
from unhtml.errors import (
    DocumentError,
    InvalidPathError,
    InvalidUnmarshalError,
    NoNodesAvailable,
    UnhtmlError,
    UnmarshalTypeError,
    UnsupportedTargetError,
)
from unhtml.fields import path
from unhtml.protocols import HTMLUnmarshaler, TextUnmarshaler

__version__: str = "0.1.0"
__all__: list[str] = [
    "Decoder",
    "DecoderConfig",
    "DocumentError",
    "HTMLUnmarshaler",
    "InvalidPathError",
    "InvalidUnmarshalError",
    "NoNodesAvailable",
    "ParseMode",
    "Ref",
    "Runes",
    "TextUnmarshaler",
    "UnhtmlError",
    "UnmarshalTypeError",
    "UnsupportedTargetError",
    "decode",
    "path",
    "unmarshal",
    "unmarshal_relative",
]
