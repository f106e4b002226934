"""Unit tests for section boundary insertion.

WHY: Section containers must wrap the whole document and split it
exactly at headings of the chosen level. An extra or missing boundary
leaves an unclosed <section> for the renderer.

HOW: Documents are assembled from the heading/paragraph helpers in
conftest. A shared invariant check runs on every result.
"""

import pytest

from pairmark.core.errors import NestingError
from pairmark.core.ir import Token
from pairmark.core.sections import SECTION_CLOSE, SECTION_OPEN, insert_sections
from pairmark.core.stream import TokenStream


def _types(tokens):
    return [t.type for t in tokens]


def _boundary_pairs(stream):
    return sum(
        1 for i in range(len(stream) - 1)
        if stream[i].type == SECTION_CLOSE and stream[i + 1].type == SECTION_OPEN
    )


def _assert_section_invariant(original, stream, level):
    tag = "h{}".format(level)
    headings = sum(1 for t in original if t.type == "heading_open" and t.tag == tag)
    starts_with_heading = bool(original) and original[0].type == "heading_open" and original[0].tag == tag

    assert stream[0].type == SECTION_OPEN
    assert stream[-1].type == SECTION_CLOSE
    assert _types(stream).count(SECTION_OPEN) == _types(stream).count(SECTION_CLOSE)
    assert _boundary_pairs(stream) == headings - (1 if starts_with_heading else 0)
    for i, token in enumerate(stream):
        if token.type == "heading_open" and token.tag == tag and i != 1:
            assert _types(stream)[i - 2:i] == [SECTION_CLOSE, SECTION_OPEN]
    stream.check_nesting()


class TestInsertSections:

    def test_document_starting_with_heading(self, heading, paragraph):
        original = heading(2, "Title") + paragraph("Body")
        stream = TokenStream(original)
        assert insert_sections(stream, 2) == 0
        assert _types(stream) == [
            "section_open",
            "heading_open", "inline", "heading_close",
            "paragraph_open", "inline", "paragraph_close",
            "section_close",
        ]

    def test_preamble_then_headings(self, heading, paragraph):
        original = paragraph("Intro") + heading(2, "A") + paragraph("a") + heading(2, "B")
        stream = TokenStream(list(original))
        assert insert_sections(stream, 2) == 2
        assert _types(stream) == [
            "section_open",
            "paragraph_open", "inline", "paragraph_close",
            "section_close", "section_open",
            "heading_open", "inline", "heading_close",
            "paragraph_open", "inline", "paragraph_close",
            "section_close", "section_open",
            "heading_open", "inline", "heading_close",
            "section_close",
        ]
        _assert_section_invariant(original, stream, 2)

    def test_consecutive_headings_from_start(self, heading):
        original = heading(2, "A") + heading(2, "B") + heading(2, "C")
        stream = TokenStream(list(original))
        assert insert_sections(stream, 2) == 2
        _assert_section_invariant(original, stream, 2)

    def test_no_headings_wraps_everything(self, paragraph):
        original = paragraph("only")
        stream = TokenStream(list(original))
        assert insert_sections(stream, 2) == 0
        assert _types(stream) == [
            "section_open", "paragraph_open", "inline", "paragraph_close", "section_close",
        ]

    def test_other_levels_are_ignored(self, heading):
        original = heading(1, "Top") + heading(3, "Deep") + heading(2, "Mid") + heading(3, "Deep")
        stream = TokenStream(list(original))
        assert insert_sections(stream, 2) == 1
        _assert_section_invariant(original, stream, 2)

    @pytest.mark.parametrize("level", [1, 3, 6])
    def test_any_level(self, level, heading, paragraph):
        original = heading(level, "A") + paragraph("x") + heading(level, "B") + paragraph("y")
        stream = TokenStream(list(original))
        insert_sections(stream, level)
        _assert_section_invariant(original, stream, level)

    def test_empty_stream(self):
        stream = TokenStream()
        insert_sections(stream, 2)
        assert _types(stream) == ["section_open", "section_close"]

    def test_section_tokens_are_block_tags(self, paragraph):
        stream = TokenStream(paragraph("x"))
        insert_sections(stream, 2)
        assert (stream[0].tag, stream[0].nesting, stream[0].block) == ("section", 1, True)
        assert (stream[-1].tag, stream[-1].nesting, stream[-1].block) == ("section", -1, True)

    @pytest.mark.parametrize("level", [0, 7, -1])
    def test_invalid_level(self, level, paragraph):
        with pytest.raises(ValueError, match="1-6"):
            insert_sections(TokenStream(paragraph("x")), level)

    def test_heading_inside_container_breaks_nesting(self, paragraph):
        # Headings are matched at any depth, so a boundary lands inside the
        # blockquote and the structure check rejects the result.
        original = paragraph("Intro") + [
            Token("blockquote_open", "blockquote", 1, block=True),
            Token("heading_open", "h2", 1, block=True),
            Token("inline", content="Quoted", block=True, level=2),
            Token("heading_close", "h2", -1, block=True),
            Token("blockquote_close", "blockquote", -1, block=True),
        ]
        stream = TokenStream(list(original))
        assert insert_sections(stream, 2) == 1
        assert _types(stream)[4:7] == ["blockquote_open", SECTION_CLOSE, SECTION_OPEN]
        with pytest.raises(NestingError, match="expected 'blockquote_close'"):
            stream.check_nesting()
