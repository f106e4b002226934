"""Inline pass: scan, balance and finalize pair markers in one inline slice.

WHY: The scanner, balancer and finalizer each assume the invariants of
the pass before. This module owns the per-slice state they share: the
source text, the scan position, the output token stream and the
registry of nesting groups. It also runs the passes in order.

HOW: InlineState.push() appends a token and keeps the group registry in
step: an open tag creates a child group keyed by its stream index and
makes it active; a close tag returns to the parent group. parse_inline()
tokenizes a raw source slice. process_children() does the same for an
upstream child list, scanning text children for marker runs and pushing
container tags through so they scope their own delimiters.

RULES:
- One InlineState per inline slice; never reused across documents
- A close tag with no open container raises NestingError
- Passes run in order: scan -> balance -> finalize (per rule) -> join
- Flanking for upstream text children looks only inside that child
"""

from __future__ import annotations

import copy
import logging
from typing import Dict, Iterable, List, Optional, Sequence

from pairmark.core.balancer import balance_pairs
from pairmark.core.errors import NestingError
from pairmark.core.finalizer import finalize_all, join_text
from pairmark.core.ir import NestingGroup, Token
from pairmark.core.scanner import scan_delimiters
from pairmark.core.stream import TokenStream
from pairmark.rules import PairRule

logger = logging.getLogger(__name__)


class InlineState:
    """Mutable state for one inline tokenization run."""

    def __init__(self, src: str = "", level: int = 0) -> None:
        self.src = src
        self.pos = 0
        self.pending = ""
        self.level = level
        self.tokens = TokenStream()
        self.root = NestingGroup()
        self.groups: Dict[Optional[int], NestingGroup] = {None: self.root}
        self.active = self.root

    @property
    def pos_max(self) -> int:
        return len(self.src)

    def reset_source(self, src: str) -> None:
        """Point the scanner at a new source slice, keeping tokens and groups."""
        self.src = src
        self.pos = 0

    def push_pending(self) -> Token:
        token = Token("text", content=self.pending, level=self.level)
        self.tokens.append(token)
        self.pending = ""
        return token

    def push_token(self, token: Token) -> Token:
        """Append an existing token, opening or leaving a nesting group.

        Raises:
            NestingError: If a close tag arrives while the root group is active.
        """
        if self.pending:
            self.push_pending()

        if token.is_close:
            if self.active.parent is None:
                raise NestingError(
                    "close token {!r} at index {} has no open container".format(
                        token.type, len(self.tokens)
                    )
                )
            self.level -= 1
            self.active = self.active.parent

        token.level = self.level
        index = self.tokens.append(token)

        if token.is_open:
            self.level += 1
            group = NestingGroup(owner=index, parent=self.active)
            self.groups[index] = group
            self.active = group

        return token

    def push(self, type_: str, tag: str, nesting: int) -> Token:
        """Create and append a new token."""
        return self.push_token(Token(type_, tag, nesting))

    def tokenize(self, rules: Sequence[PairRule]) -> None:
        """Consume ``src`` from ``pos``: marker runs via the scanner, the rest as text."""
        by_marker = {rule.marker: rule for rule in rules}
        src = self.src
        while self.pos < self.pos_max:
            rule = by_marker.get(src[self.pos])
            if rule is not None and scan_delimiters(self, rule):
                continue
            # Plain text up to the next candidate marker.
            end = self.pos + 1
            while end < self.pos_max and src[end] not in by_marker:
                end += 1
            self.pending += src[self.pos:end]
            self.pos = end

    def finish(self, rules: Sequence[PairRule]) -> List[Token]:
        """Run balance, finalize and join; return the finished token list.

        Raises:
            NestingError: If a container opened in this slice is never closed.
        """
        if self.pending:
            self.push_pending()
        if self.active is not self.root:
            raise NestingError(
                "open token at index {} is never closed".format(self.active.owner)
            )

        groups = list(self.groups.values())
        pairs = balance_pairs(groups, len(self.tokens))
        moved = 0
        for rule in rules:
            moved += finalize_all(self.tokens, groups, rule)

        result = join_text(self.tokens.tokens)
        TokenStream(result).check_nesting()
        logger.debug(
            "Inline slice: %d pair(s), %d lone marker(s) moved, %d token(s)",
            pairs, moved, len(result),
        )
        return result


def parse_inline(src: str, rules: Sequence[PairRule], level: int = 0) -> List[Token]:
    """Tokenize a raw inline source slice into text and pair tags.

    Args:
        src: Raw inline text, for example a paragraph's content.
        rules: Enabled pair rules.
        level: Starting nesting level for pushed tokens.

    Returns:
        Finished inline token list.
    """
    state = InlineState(src, level)
    state.tokenize(rules)
    return state.finish(rules)


def process_children(children: Iterable[Token], rules: Sequence[PairRule], level: int = 0) -> List[Token]:
    """Resolve pair markers inside an upstream inline child list.

    WHY: Upstream tokenizers may already have produced container tags
    (spans, links) around text. Markers inside a container must pair
    only among themselves.

    HOW: Text children are rescanned for marker runs. Tags and other
    tokens are pushed through unchanged (copied), so an open tag starts
    a new nesting group and its close returns to the parent group.

    Returns:
        Finished inline token list; the input tokens are not mutated.
    """
    state = InlineState("", level)
    for child in children:
        if child.type == "text":
            state.reset_source(child.content)
            state.tokenize(rules)
        else:
            state.push_token(copy.deepcopy(child))
    return state.finish(rules)
