"""Indented outline formatter, one token per line.

WHY: Reviewing a token stream as JSON is slow. An outline that indents
by nesting depth shows at a glance whether spans and sections nest the
way the author expected.

HOW: Walk the tokens, decreasing the indent before each close tag and
increasing it after each open tag. Inline children are listed under
their inline token one level deeper. Text shows its content in repr
form so whitespace and lone markers stay visible.

RULES:
- Two spaces per depth level
- Open/close lines: "<type> <tag>", e.g. "section_open section"
- Text lines: "text 'content'"
- Output suffix: "-outline.txt", media type "text/plain"
"""

from __future__ import annotations

from typing import List

from pairmark.core.ir import Token
from pairmark.formatters.base import BaseFormatter, FormatterOutput

_INDENT = "  "


def _describe(token: Token) -> str:
    if token.type == "text":
        return "text {!r}".format(token.content)
    if token.tag:
        return "{} {}".format(token.type, token.tag)
    return token.type


def outline_lines(tokens: List[Token], depth: int = 0) -> List[str]:
    lines: List[str] = []
    for token in tokens:
        if token.is_close:
            depth -= 1
        lines.append("{}{}".format(_INDENT * max(depth, 0), _describe(token)))
        if token.children:
            lines.extend(outline_lines(token.children, depth + 1))
        if token.is_open:
            depth += 1
    return lines


class OutlineFormatter(BaseFormatter):
    """Formatter that writes an indented, human-readable token outline."""

    @property
    def name(self) -> str:
        return "Outline"

    def format(self, tokens: List[Token]) -> FormatterOutput:
        lines = outline_lines(tokens)
        content = "\n".join(lines)
        if content:
            content += "\n"
        return FormatterOutput(
            suffix="-outline.txt",
            content=content,
            media_type="text/plain",
        )
