"""Shared test fixtures for the pairmark test suite.

WHY: Most test modules need small block-level documents (headings,
paragraphs with inline content) and the registered pair rules. Building
them in one place keeps the token shapes consistent across tests.

HOW: Private builders make token triples (open, inline, close). The
heading and paragraph fixtures hand those builders to tests (factory
fixtures); sample_document wraps them into a ready document.

RULES:
- Helpers return fresh Token objects on every call
- Inline tokens carry raw content and no children, as an upstream
  block tokenizer would hand them over
"""

from typing import List

import pytest

from pairmark.core.ir import Token
from pairmark.rules import RULES


def _heading(level: int, text: str) -> List[Token]:
    tag = "h{}".format(level)
    return [
        Token("heading_open", tag, 1, markup="#" * level, block=True),
        Token("inline", "", 0, content=text, block=True, level=1),
        Token("heading_close", tag, -1, markup="#" * level, block=True),
    ]


def _paragraph(text: str) -> List[Token]:
    return [
        Token("paragraph_open", "p", 1, block=True),
        Token("inline", "", 0, content=text, block=True, level=1),
        Token("paragraph_close", "p", -1, block=True),
    ]


@pytest.fixture
def heading():
    """Builder: heading(level, text) -> [heading_open, inline, heading_close]."""
    return _heading


@pytest.fixture
def paragraph():
    """Builder: paragraph(text) -> [paragraph_open, inline, paragraph_close]."""
    return _paragraph


@pytest.fixture
def caret_rule():
    return RULES["caret"]


@pytest.fixture
def all_rules():
    return list(RULES.values())


@pytest.fixture
def sample_document():
    """Title, intro paragraph, then two h2 sections with styled text."""
    return (
        _heading(1, "Guide")
        + _paragraph("Intro with ^^caret^^ text.")
        + _heading(2, "First")
        + _paragraph("Some ~~old~~ and ==new== words.")
        + _heading(2, "Second")
        + _paragraph("Plain ++inserted++ text.")
    )
