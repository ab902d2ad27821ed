"""Document subpackage: the lxml-backed query engine unhtml decodes from.

Re-exports the public API for the document module:
- Node: read-only handle exposing a match's text and raw bytes
- parse_document: parses HTML/XML source into a root Node
- compile_path: compiles an XPath expression, raising InvalidPathError
- select: evaluates a compiled expression against a Node
"""

from unhtml.document.nodes import Node
from unhtml.document.parser import parse_document
from unhtml.document.query import compile_path, select

__all__ = ["Node", "compile_path", "parse_document", "select"]
