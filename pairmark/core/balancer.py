"""Matched-pair delimiter balancing within one nesting group.

WHY: A line like "~~a ~~b~~ c~~" holds four candidate delimiters that
could pair several ways. The balancer picks the nearest compatible
opener for every closer, left to right, so spans nest properly and no
delimiter is used twice. Doing this naively is quadratic on long
paragraphs full of unmatched markers, so the search carries two
shortcuts.

HOW: For each closer, walk backward from just before its own delimiter
run. Skip chains stored in Delimiter.jump let the walk hop over regions
already consumed by earlier matches. A per-marker lower bound
(openers_bottom) remembers where a previous failed search stopped, so
the next closer of the same kind never rescans that prefix.

RULES:
- Chunks of one marker run never pair with each other
- opener.end = index(closer) and closer.end = index(opener)
- A matched closer can no longer open; a matched opener can no longer close
- Rule-of-three exclusion only bites when both lengths are positive
  (all pair rules here use length 0)
- Matching never leaves the group
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from pairmark.core.errors import DelimiterMatchError
from pairmark.core.ir import Delimiter, NestingGroup

logger = logging.getLogger(__name__)


def _is_odd_match(opener: Delimiter, closer: Delimiter) -> bool:
    """Rule of three: a both-ways delimiter can't pair if lengths sum to 3k
    unless both lengths are themselves multiples of 3."""
    if opener.close or closer.open:
        if (opener.length + closer.length) % 3 == 0:
            if opener.length % 3 != 0 or closer.length % 3 != 0:
                return True
    return False


def _pair(delimiters: List[Delimiter], opener_idx: int, closer_idx: int) -> None:
    opener = delimiters[opener_idx]
    closer = delimiters[closer_idx]
    if opener.matched or closer.matched:
        raise DelimiterMatchError(
            "delimiter {} cannot pair with {}: already matched "
            "(opener.end={}, closer.end={})".format(
                closer_idx, opener_idx, opener.end, closer.end
            )
        )
    opener.end = closer_idx
    closer.end = opener_idx
    closer.open = False
    opener.close = False


def balance_group(group: NestingGroup) -> int:
    """Pair closers with openers inside one group, in place.

    Returns:
        Number of pairs made by this call.
    """
    delimiters = group.delimiters
    if not delimiters:
        return 0

    # Per marker: six lower bounds, by (closer can also open) and length % 3.
    openers_bottom: Dict[str, List[int]] = {}
    header_idx = 0
    last_token_idx = -2
    pairs = 0

    for closer_idx, closer in enumerate(delimiters):
        closer.jump = 0

        # Same marker on adjacent tokens means the same delimiter run.
        header = delimiters[header_idx]
        if header.marker != closer.marker or last_token_idx != closer.token - 1:
            header_idx = closer_idx
        last_token_idx = closer.token

        if not closer.close or closer.matched:
            continue

        bottoms = openers_bottom.setdefault(closer.marker, [-1] * 6)
        bucket = (3 if closer.open else 0) + closer.length % 3
        min_opener_idx = bottoms[bucket]

        opener_idx = header_idx - delimiters[header_idx].jump - 1
        new_min_opener_idx = opener_idx

        while opener_idx > min_opener_idx:
            opener = delimiters[opener_idx]
            if (
                opener.marker == closer.marker
                and opener.open
                and not opener.matched
                and not _is_odd_match(opener, closer)
            ):
                if opener_idx > 0 and not delimiters[opener_idx - 1].open:
                    last_jump = delimiters[opener_idx - 1].jump + 1
                else:
                    last_jump = 0
                closer.jump = closer_idx - opener_idx + last_jump
                opener.jump = last_jump
                _pair(delimiters, opener_idx, closer_idx)
                pairs += 1
                new_min_opener_idx = -1
                # A following closer may not extend this run's header.
                last_token_idx = -2
                break
            opener_idx -= opener.jump + 1

        if new_min_opener_idx != -1:
            bottoms[bucket] = new_min_opener_idx

    return pairs


def check_group(group: NestingGroup, stream_length: Optional[int] = None) -> None:
    """Verify match state of a group is consistent.

    Raises:
        DelimiterMatchError: If an end index is out of range, not
            reciprocal, pairs different markers, or a delimiter points
            past the end of the token stream.
    """
    delimiters = group.delimiters
    for index, delim in enumerate(delimiters):
        if stream_length is not None and not 0 <= delim.token < stream_length:
            raise DelimiterMatchError(
                "delimiter {} points at token {} outside stream of {}".format(
                    index, delim.token, stream_length
                )
            )
        if not delim.matched:
            continue
        if delim.end >= len(delimiters) or delim.end == index:
            raise DelimiterMatchError(
                "delimiter {} has end {} outside its group of {}".format(
                    index, delim.end, len(delimiters)
                )
            )
        partner = delimiters[delim.end]
        if partner.end != index or partner.marker != delim.marker:
            raise DelimiterMatchError(
                "delimiter {} ({!r}) and {} ({!r}) are not a reciprocal pair".format(
                    index, delim.marker, delim.end, partner.marker
                )
            )


def balance_pairs(groups: Iterable[NestingGroup], stream_length: Optional[int] = None) -> int:
    """Balance every group independently and validate the result.

    Returns:
        Total number of pairs made.
    """
    total = 0
    for group in groups:
        total += balance_group(group)
        check_group(group, stream_length)
    logger.debug("Balanced %d delimiter pair(s)", total)
    return total
