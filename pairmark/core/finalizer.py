"""Rewrite matched delimiters into tag tokens and repair lone markers.

WHY: After balancing, a matched pair is still two "~~" text tokens.
The renderer needs an s_open / s_close pair instead. Odd-length runs
also leave one stray marker character that must end up outside the
styled span on both sides: "~~~x~~~" renders as "~<s>x</s>~".

HOW: finalize_pairs() walks one group, rewrites each opener/closer
token in place and records every one-character marker text token that
sits right before a closer. repair_lone_markers() then moves each of
those past the run of close tags that follows it, highest index first.
join_text() merges adjacent text tokens left over from unmatched chunks.

RULES:
- Only delimiters whose marker belongs to the rule are touched
- Tokens are rewritten by field assignment, never replaced or moved,
  except by the lone-marker swap
- Lone markers are processed in descending index order
- A lone marker with no close tag after it stays where it is
- Repair is idempotent
"""

from __future__ import annotations

from typing import Iterable, List

from pairmark.core.ir import NestingGroup, Token
from pairmark.core.stream import TokenStream
from pairmark.rules import PairRule


def finalize_pairs(tokens: TokenStream, group: NestingGroup, rule: PairRule) -> List[int]:
    """Rewrite the rule's matched pairs in one group.

    Returns:
        Stream indices of lone markers found before closers.
    """
    lone_markers: List[int] = []
    delimiters = group.delimiters

    for index, start in enumerate(delimiters):
        if start.marker != rule.marker:
            continue
        # Each pair is handled once, from its opener.
        if start.end <= index:
            continue

        end = delimiters[start.end]

        token = tokens[start.token]
        token.type = rule.open_type
        token.tag = rule.tag
        token.nesting = 1
        token.markup = rule.markup
        token.content = ""

        token = tokens[end.token]
        token.type = rule.close_type
        token.tag = rule.tag
        token.nesting = -1
        token.markup = rule.markup
        token.content = ""

        before = end.token - 1
        if before >= 0 and tokens[before].type == "text" and tokens[before].content == rule.marker:
            lone_markers.append(before)

    return lone_markers


def repair_lone_markers(tokens: TokenStream, positions: Iterable[int], rule: PairRule) -> int:
    """Move each lone marker after the consecutive close tags that follow it.

    Returns:
        Number of tokens actually swapped.
    """
    moved = 0
    for i in sorted(set(positions), reverse=True):
        if tokens[i].type != "text" or tokens[i].content != rule.marker:
            continue
        j = i + 1
        while j < len(tokens) and tokens[j].type == rule.close_type:
            j += 1
        j -= 1
        if i != j:
            tokens.swap(i, j)
            moved += 1
    return moved


def find_lone_markers(tokens: TokenStream, rule: PairRule) -> List[int]:
    """Indices of one-character marker text tokens directly before a close tag."""
    return [
        i for i in range(len(tokens) - 1)
        if tokens[i].type == "text"
        and tokens[i].content == rule.marker
        and tokens[i + 1].type == rule.close_type
    ]


def finalize_all(tokens: TokenStream, groups: Iterable[NestingGroup], rule: PairRule) -> int:
    """Finalize one rule across every group, then repair lone markers once.

    Returns:
        Number of lone markers moved.
    """
    lone_markers: List[int] = []
    for group in groups:
        lone_markers.extend(finalize_pairs(tokens, group, rule))
    return repair_lone_markers(tokens, lone_markers, rule)


def join_text(tokens: List[Token]) -> List[Token]:
    """Merge runs of adjacent text tokens into one token each.

    The first token of each run absorbs the content of the rest.
    """
    joined: List[Token] = []
    for token in tokens:
        if joined and token.type == "text" and joined[-1].type == "text":
            joined[-1].content += token.content
        else:
            joined.append(token)
    return joined
