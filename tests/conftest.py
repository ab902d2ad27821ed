"""Shared fixtures: decode sessions and parsed documents for engine tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from unhtml.cache import ExpressionCache
from unhtml.config import DecoderConfig
from unhtml.document import Node, parse_document
from unhtml.engine.session import DecodeSession


@pytest.fixture
def session() -> DecodeSession:
    """A fresh DecodeSession with default configuration."""
    return DecodeSession(DecoderConfig(), ExpressionCache())


@pytest.fixture
def strict_session() -> DecodeSession:
    """A fresh DecodeSession that reports unsupported target kinds."""
    return DecodeSession(DecoderConfig(strict=True), ExpressionCache())


@pytest.fixture
def doc() -> Callable[[str], Node]:
    """Parse an HTML string into its root Node."""

    def _parse(markup: str) -> Node:
        return parse_document(markup)

    return _parse
