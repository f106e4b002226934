"""Index-addressed token sequence with structural mutation primitives.

WHY: Every pass edits one flat token array in place. Insertions shift
every later index, so the primitives are small and explicit, and the
passes that insert ahead of themselves walk the stream backward.

HOW: TokenStream wraps a plain list. insert_before / remove_range /
rotate_* / swap are the only mutations. check_nesting walks the stream
with a stack of open tag types and raises on any mismatch.

RULES:
- Untouched tokens keep their relative order after any mutation
- A pass that inserts while iterating must iterate with strictly
  decreasing indices (see reversed_indices)
- Out-of-range arguments raise StreamIndexError, never clamp
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from pairmark.core.errors import NestingError, StreamIndexError
from pairmark.core.ir import Token


def _closing_type(open_type: str) -> str:
    """Map "s_open" -> "s_close"; other types map to themselves."""
    if open_type.endswith("_open"):
        return open_type[: -len("_open")] + "_close"
    return open_type


class TokenStream:
    """Ordered, index-addressed sequence of tokens."""

    def __init__(self, tokens: Optional[Iterable[Token]] = None) -> None:
        self._tokens: List[Token] = list(tokens) if tokens is not None else []

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __getitem__(self, index: int) -> Token:
        return self._tokens[index]

    def __repr__(self) -> str:
        return "TokenStream({} tokens)".format(len(self._tokens))

    @property
    def tokens(self) -> List[Token]:
        """The underlying list (same object, not a copy)."""
        return self._tokens

    def append(self, token: Token) -> int:
        """Append a token and return its index."""
        self._tokens.append(token)
        return len(self._tokens) - 1

    def reversed_indices(self) -> range:
        """Indices from last to first, safe for inserting at or before the cursor."""
        return range(len(self._tokens) - 1, -1, -1)

    def insert_before(self, index: int, *tokens: Token) -> None:
        """Insert tokens so the first of them lands at ``index``.

        RULES:
        - index may equal len(self) (append at the end)
        - Inserted tokens keep their argument order
        """
        if index < 0 or index > len(self._tokens):
            raise StreamIndexError(
                "insert_before index {} out of range for stream of {}".format(
                    index, len(self._tokens)
                )
            )
        self._tokens[index:index] = list(tokens)

    def remove_range(self, start: int, count: int) -> List[Token]:
        """Remove ``count`` tokens starting at ``start`` and return them."""
        if count < 0 or start < 0 or start + count > len(self._tokens):
            raise StreamIndexError(
                "remove_range({}, {}) out of range for stream of {}".format(
                    start, count, len(self._tokens)
                )
            )
        removed = self._tokens[start:start + count]
        del self._tokens[start:start + count]
        return removed

    def rotate_first_to_last(self) -> None:
        """Move element 0 to the end. No-op on an empty stream."""
        if self._tokens:
            self._tokens.append(self._tokens.pop(0))

    def rotate_last_to_first(self) -> None:
        """Move the last element to index 0. No-op on an empty stream."""
        if self._tokens:
            self._tokens.insert(0, self._tokens.pop())

    def swap(self, i: int, j: int) -> None:
        size = len(self._tokens)
        if not (0 <= i < size and 0 <= j < size):
            raise StreamIndexError(
                "swap({}, {}) out of range for stream of {}".format(i, j, size)
            )
        self._tokens[i], self._tokens[j] = self._tokens[j], self._tokens[i]

    def check_nesting(self) -> None:
        """Verify every open tag has exactly one matching later close tag.

        HOW: Push the expected close type on each open, pop and compare on
        each close. Anything left open at the end is a fault too.

        Raises:
            NestingError: On a close with no open, a close of the wrong
                type, or unclosed opens at the end of the stream.
        """
        expected: List[tuple] = []
        for index, token in enumerate(self._tokens):
            if token.is_open:
                expected.append((_closing_type(token.type), index))
            elif token.is_close:
                if not expected:
                    raise NestingError(
                        "close token {!r} at index {} has no open token".format(
                            token.type, index
                        )
                    )
                close_type, open_index = expected.pop()
                if token.type != close_type:
                    raise NestingError(
                        "close token {!r} at index {} does not match open token "
                        "at index {} (expected {!r})".format(
                            token.type, index, open_index, close_type
                        )
                    )
        if expected:
            _, open_index = expected[-1]
            raise NestingError(
                "open token {!r} at index {} is never closed".format(
                    self._tokens[open_index].type, open_index
                )
            )
