"""Marker-run flanking classification and delimiter chunking.

WHY: Whether "~~" starts a styled span, ends one, or is just literal
text depends on the characters around the run ("a ~~b~~ c" vs
"a ~~ b"). The scanner decides open/close eligibility once per run and
turns the run into text tokens plus delimiter descriptors that the
balancer can pair up later.

HOW: classify_flanking() counts the run and applies the left/right
flanking rule to the characters just before and after it.
scan_delimiters() then emits an optional one-character text token (odd
runs) followed by one two-character text token and one Delimiter per
chunk, all sharing the run's flanking flags.

RULES:
- Start and end of the source slice count as whitespace
- A run shorter than 2 produces nothing and returns False
- Odd runs put their lone marker FIRST: "~~~~~" -> "~" + "~~" + "~~"
- Delimiter.length is 0 (length-insensitive): no rule-of-three checks
- Every chunk of a run gets the same can_open / can_close flags
"""

from __future__ import annotations

import string
import unicodedata
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pairmark.core.ir import Delimiter

if TYPE_CHECKING:
    from pairmark.core.inline import InlineState
    from pairmark.rules import PairRule

_ASCII_PUNCTUATION = frozenset(string.punctuation)

_CONTROL_WHITESPACE = frozenset("\t\n\x0b\x0c\r ")


@dataclass
class DelimiterRun:
    """Result of classifying one run of identical marker characters."""

    length: int
    can_open: bool
    can_close: bool


def is_whitespace(ch: str) -> bool:
    """Whitespace for flanking: ASCII controls, space and Unicode Zs."""
    return ch in _CONTROL_WHITESPACE or unicodedata.category(ch) == "Zs"


def is_punctuation(ch: str) -> bool:
    """ASCII punctuation or any Unicode punctuation (P*) character."""
    return ch in _ASCII_PUNCTUATION or unicodedata.category(ch).startswith("P")


def classify_flanking(src: str, start: int, can_split_word: bool = True) -> DelimiterRun:
    """Measure the marker run at ``start`` and decide if it can open/close.

    WHY: The canonical flanking rule keeps "2~~3" or "~~ text" from
    being read as styled spans while still allowing "~~text~~".

    HOW:
      left-flanking  = next is not whitespace, and next is not
                       punctuation unless last is whitespace/punctuation
      right-flanking = mirror image on the preceding character
      can_open  = left-flanking  (and, when words may not be split,
                  not right-flanking unless last is punctuation)
      can_close = right-flanking (mirror)

    Args:
        src: The raw source slice.
        start: Index of the first marker character.
        can_split_word: False for markers that must not open/close
            inside a word; every pair rule here passes True.

    Returns:
        DelimiterRun with the run length and flanking flags.
    """
    marker = src[start]
    pos = start
    while pos < len(src) and src[pos] == marker:
        pos += 1
    count = pos - start

    last_char = src[start - 1] if start > 0 else " "
    next_char = src[pos] if pos < len(src) else " "

    last_punct = is_punctuation(last_char)
    next_punct = is_punctuation(next_char)
    last_space = is_whitespace(last_char)
    next_space = is_whitespace(next_char)

    left_flanking = not next_space and (not next_punct or last_space or last_punct)
    right_flanking = not last_space and (not last_punct or next_space or next_punct)

    can_open = left_flanking and (can_split_word or not right_flanking or last_punct)
    can_close = right_flanking and (can_split_word or not left_flanking or next_punct)

    return DelimiterRun(length=count, can_open=can_open, can_close=can_close)


def scan_delimiters(state: InlineState, rule: PairRule) -> bool:
    """Turn the marker run at ``state.pos`` into text tokens and delimiters.

    RULES:
    - Only runs of ``rule.marker`` are considered
    - Delimiters go into the state's active nesting group
    - state.pos advances past the whole run on success

    Returns:
        True if the run was consumed, False if it is shorter than 2
        (the caller keeps the character as ordinary text).
    """
    start = state.pos
    if state.src[start] != rule.marker:
        return False

    run = classify_flanking(state.src, start, can_split_word=True)
    length = run.length
    if length < 2:
        return False

    if length % 2:
        token = state.push("text", "", 0)
        token.content = rule.marker
        length -= 1

    for _ in range(0, length, 2):
        token = state.push("text", "", 0)
        token.content = rule.markup
        state.active.delimiters.append(Delimiter(
            marker=rule.marker,
            length=0,
            token=len(state.tokens) - 1,
            end=-1,
            open=run.can_open,
            close=run.can_close,
        ))

    state.pos += run.length
    return True
