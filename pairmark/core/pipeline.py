"""Whole-document pipeline: inline pairs for every inline token, then sections.

WHY: Callers (CLI, library users, tests) want one call that takes the
upstream token array and returns the finished one, with the passes run
in the only valid order and the structure checked at the end.

HOW: Each "inline" token is resolved independently, with parse_inline
on its raw content when the upstream left children empty, or with
process_children when it already holds child tokens. Then, when a
section level is set, insert_sections partitions the block stream.
check_nesting validates the finished document.

RULES:
- Input tokens are not mutated; a new list is returned
- section_level 0 disables section wrapping
- Any StructuralFault aborts the whole document (no partial result)
"""

from __future__ import annotations

import copy
import logging
from typing import Iterable, List, Optional, Sequence

from pairmark.config import get_default_rules, get_section_level
from pairmark.core.inline import parse_inline, process_children
from pairmark.core.ir import Token
from pairmark.core.sections import insert_sections
from pairmark.core.stream import TokenStream
from pairmark.rules import PairRule, resolve_rules

logger = logging.getLogger(__name__)


def process_inline_token(token: Token, rules: Sequence[PairRule]) -> None:
    """Fill ``token.children`` with resolved inline tokens, in place."""
    if token.children:
        token.children = process_children(token.children, rules)
    else:
        token.children = parse_inline(token.content, rules)


def process_document(
    tokens: Iterable[Token],
    rules: Optional[Sequence[PairRule]] = None,
    section_level: Optional[int] = None,
) -> List[Token]:
    """Run every pass over one document.

    Args:
        tokens: Upstream block-level token array.
        rules: Pair rules to apply; defaults to config.get_default_rules().
        section_level: Heading level that starts a section, 0 to skip;
            defaults to config.get_section_level().

    Returns:
        The finished token list.

    Raises:
        StructuralFault: If the input or any pass leaves broken nesting.
        ValueError: If section_level is outside 0-6.
    """
    if rules is None:
        rules = resolve_rules(get_default_rules())
    if section_level is None:
        section_level = get_section_level()
    if not 0 <= section_level <= 6:
        raise ValueError("Section level must be 0-6, got {}".format(section_level))

    stream = TokenStream(copy.deepcopy(list(tokens)))
    stream.check_nesting()

    inline_count = 0
    for token in stream:
        if token.type == "inline":
            process_inline_token(token, rules)
            inline_count += 1

    if section_level:
        insert_sections(stream, section_level)

    stream.check_nesting()
    logger.info(
        "Processed document: %d inline token(s), %d token(s) out",
        inline_count, len(stream),
    )
    return stream.tokens
