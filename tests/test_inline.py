"""Unit tests for InlineState and nesting-group scoping.

WHY: Nesting groups are what keep a marker inside a container from
pairing with one outside it. If push() registers groups wrongly, the
balancer can produce tags that cross the container boundary.

HOW: Drive InlineState.push directly, then run process_children over
upstream child lists that contain span containers.
"""

import pytest

from pairmark.core.errors import NestingError
from pairmark.core.inline import InlineState, parse_inline, process_children
from pairmark.core.ir import Token
from pairmark.rules import RULES

CARET = RULES["caret"]


def _summary(tokens):
    return [t.content if t.type == "text" else t.type for t in tokens]


class TestInlineStatePush:

    def test_open_creates_group_keyed_by_index(self):
        state = InlineState("")
        state.push("text", "", 0)
        state.push("span_open", "span", 1)
        assert set(state.groups) == {None, 1}
        assert state.active is state.groups[1]
        assert state.active.owner == 1
        assert state.active.parent is state.root

    def test_close_returns_to_parent(self):
        state = InlineState("")
        state.push("span_open", "span", 1)
        state.push("span_close", "span", -1)
        assert state.active is state.root

    def test_levels(self):
        state = InlineState("")
        opener = state.push("span_open", "span", 1)
        inner = state.push("text", "", 0)
        closer = state.push("span_close", "span", -1)
        assert (opener.level, inner.level, closer.level) == (0, 1, 0)

    def test_close_at_root_raises(self):
        state = InlineState("")
        with pytest.raises(NestingError, match="no open container"):
            state.push("span_close", "span", -1)

    def test_push_flushes_pending_text(self):
        state = InlineState("")
        state.pending = "abc"
        state.push("span_open", "span", 1)
        assert _summary(state.tokens) == ["abc", "span_open"]
        assert state.pending == ""

    def test_unclosed_container_fails_on_finish(self):
        state = InlineState("")
        state.push("span_open", "span", 1)
        with pytest.raises(NestingError, match="never closed"):
            state.finish([CARET])


class TestParseInline:

    def test_empty_source(self):
        assert parse_inline("", [CARET]) == []

    def test_no_rules_is_one_text_token(self):
        assert _summary(parse_inline("^^a^^", [])) == ["^^a^^"]

    def test_level_offset(self):
        tokens = parse_inline("^^a^^", [CARET], level=2)
        assert [t.level for t in tokens] == [2, 2, 2]


class TestProcessChildren:
    """Containers from the upstream tokenizer scope their own delimiters."""

    def test_pairs_inside_container(self):
        children = [
            Token("span_open", "span", 1),
            Token("text", content="^^x^^"),
            Token("span_close", "span", -1),
        ]
        result = process_children(children, [CARET])
        assert _summary(result) == [
            "span_open", "caret_open", "x", "caret_close", "span_close",
        ]
        assert result[1].level == 1

    def test_no_pairing_across_container_boundary(self):
        children = [
            Token("text", content="^^a"),
            Token("span_open", "span", 1),
            Token("text", content="b^^"),
            Token("span_close", "span", -1),
        ]
        result = process_children(children, [CARET])
        assert _summary(result) == ["^^a", "span_open", "b^^", "span_close"]

    def test_same_marker_in_two_sibling_containers(self):
        children = [
            Token("span_open", "span", 1),
            Token("text", content="^^a"),
            Token("span_close", "span", -1),
            Token("span_open", "span", 1),
            Token("text", content="b^^"),
            Token("span_close", "span", -1),
        ]
        result = process_children(children, [CARET])
        assert not any(t.type.startswith("caret") for t in result)

    def test_outer_pair_around_container(self):
        children = [
            Token("text", content="^^a "),
            Token("span_open", "span", 1),
            Token("text", content="b"),
            Token("span_close", "span", -1),
            Token("text", content=" c^^"),
        ]
        result = process_children(children, [CARET])
        assert _summary(result) == [
            "caret_open", "a ", "span_open", "b", "span_close", " c", "caret_close",
        ]

    def test_input_children_not_mutated(self):
        children = [
            Token("span_open", "span", 1),
            Token("text", content="^^x^^"),
            Token("span_close", "span", -1),
        ]
        process_children(children, [CARET])
        assert _summary(children) == ["span_open", "^^x^^", "span_close"]
        assert children[0].level == 0

    def test_other_tokens_pass_through(self):
        children = [
            Token("text", content="a"),
            Token("softbreak", "br", 0),
            Token("text", content="b"),
        ]
        result = process_children(children, [CARET])
        assert _summary(result) == ["a", "softbreak", "b"]
