"""Section boundary insertion around a chosen heading level.

WHY: Renderers that style or navigate documents by section need every
run of content starting at an <h2> (or the chosen level) wrapped in its
own container. The upstream token stream has headings only as flat
heading_open / heading_close tokens.

HOW: Walk the finished document backward. Before every heading_open of
the chosen level insert (section_close, section_open): the close ends
the previous section, the open starts the next. Walking backward means
an insertion only shifts tokens the cursor has already visited. Then
fix the two ends: a leading section_close (the document opened with a
chosen-level heading) is rotated to the very end; otherwise an outer
section_open / section_close pair is added.

RULES:
- Runs once, after all inline finalization
- level must be 1-6
- The result starts with exactly one section_open and ends with
  exactly one section_close
- Every chosen-level heading_open that is not at index 1 of the result
  is immediately preceded by section_close, section_open
- Headings are matched at any depth; one inside another container
  leaves a boundary inside it, which check_nesting rejects
"""

from __future__ import annotations

import logging

from pairmark.core.ir import Token
from pairmark.core.stream import TokenStream

logger = logging.getLogger(__name__)

SECTION_OPEN = "section_open"
SECTION_CLOSE = "section_close"
SECTION_TAG = "section"


def _section_token(nesting: int) -> Token:
    return Token(
        type=SECTION_OPEN if nesting > 0 else SECTION_CLOSE,
        tag=SECTION_TAG,
        nesting=nesting,
        block=True,
    )


def is_section_heading(token: Token, level: int) -> bool:
    return token.type == "heading_open" and token.tag == "h{}".format(level)


def insert_sections(stream: TokenStream, level: int = 2) -> int:
    """Partition the stream into sections at headings of ``level``.

    Args:
        stream: Complete document token stream, mutated in place.
        level: Heading level (1-6) that starts a new section.

    Returns:
        Number of close/open boundary pairs left in front of headings.

    Raises:
        ValueError: If level is outside 1-6.
    """
    if not 1 <= level <= 6:
        raise ValueError("Section heading level must be 1-6, got {}".format(level))

    inserted = 0
    for index in stream.reversed_indices():
        if is_section_heading(stream[index], level):
            stream.insert_before(index, _section_token(-1), _section_token(1))
            inserted += 1

    if len(stream) and stream[0].type == SECTION_CLOSE:
        stream.rotate_first_to_last()
        inserted -= 1
    else:
        stream.insert_before(0, _section_token(1))
        stream.append(_section_token(-1))

    logger.debug("Inserted %d section boundary pair(s) at h%d", inserted, level)
    return inserted
