"""parse_document: turns HTML or XML source into a root Node.

The whole input is consumed and parsed before returning.  In HTML mode lxml
would normally wrap a fragment such as ``<test>1</test>`` in implied
``<html><body>`` elements; the fragment's own element is detached and used as
the document element instead, so ``/test`` selects it just as it would in the
source text.

A fragment with several top-level nodes, such as ``<div>a</div><span>b</span>``,
has no single element to promote.  Its implied ``<body>`` becomes the document
element, so ``span`` or ``/body/span`` select the second node, and full
documents keep ``<html>``.
"""

from __future__ import annotations

import copy
import re
from typing import IO, Any

import lxml.html
from lxml import etree

from unhtml.config import DecoderConfig, ParseMode
from unhtml.document.nodes import Node
from unhtml.errors import DocumentError

__all__ = ["Source", "parse_document"]

Source = str | bytes | IO[str] | IO[bytes]

# Same test lxml.html.fromstring uses to tell documents from fragments.
_FULL_DOCUMENT = re.compile(r"^\s*<(?:html|!doctype)", re.IGNORECASE)


def _read(source: Any) -> str | bytes:
    if isinstance(source, (str, bytes)):
        return source
    if hasattr(source, "read"):
        return source.read()
    msg = f"cannot read markup from {type(source).__name__}"
    raise TypeError(msg)


def _is_blank(text: str | None) -> bool:
    return not text or not text.strip()


def _looks_like_document(data: str | bytes) -> bool:
    head = data[:256]
    if isinstance(head, bytes):
        head = head.decode("latin-1")
    return _FULL_DOCUMENT.match(head) is not None


def _parse_html(data: str | bytes, config: DecoderConfig) -> etree._Element:
    if isinstance(data, bytes) and config.encoding is not None:
        data = data.decode(config.encoding, errors="replace")
    doc = lxml.html.document_fromstring(data)
    if _looks_like_document(data):
        return doc

    body = doc.find("body")
    if body is None:
        return doc
    if len(body) == 1 and _is_blank(body.text) and _is_blank(body[0].tail):
        return body[0]
    # Several top-level nodes: the implied <body> holds them.
    return body


def _parse_xml(data: str | bytes) -> etree._Element | None:
    parser = etree.XMLParser(recover=True, resolve_entities=False, no_network=True)
    if isinstance(data, str):
        # lxml refuses str input that carries an encoding declaration.
        data = data.encode("utf-8")
    return etree.fromstring(data, parser)


def parse_document(source: Source, config: DecoderConfig | None = None) -> Node:
    """Parse ``source`` and return a Node for its document element.

    Args:
        source: Markup as ``str``, ``bytes``, or a readable file-like object.
        config: Parser options.  Defaults to ``DecoderConfig()`` when None.

    Returns:
        A Node wrapping the document element.

    Raises:
        DocumentError: If the input is empty or cannot be parsed.
        TypeError: If ``source`` is neither markup nor readable.
    """
    config = config if config is not None else DecoderConfig()
    data = _read(source)

    try:
        if config.parse_mode is ParseMode.XML:
            root = _parse_xml(data)
        else:
            root = _parse_html(data, config)
    except (etree.ParserError, etree.XMLSyntaxError, ValueError) as exc:
        msg = f"unhtml: cannot parse document: {exc}"
        raise DocumentError(msg) from exc

    if root is None:
        msg = "unhtml: cannot parse document: no root element"
        raise DocumentError(msg)

    if root.getparent() is not None:
        # Detach the fragment into a document of its own.
        root = copy.deepcopy(root)

    return Node(root)
