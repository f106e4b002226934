"""Token, delimiter and nesting-group dataclasses.

WHY: Every pass reads and rewrites the same flat token array. Tokens
change kind after the fact (a "~~" text token becomes an s_open tag), so
the model keeps kind as plain fields that passes assign explicitly
rather than as separate classes.

HOW: Three dataclasses:
  Token       : one element of a token stream (text, open tag or close tag)
  Delimiter   : a candidate marker chunk pointing at its backing token
  NestingGroup: the delimiters owned by one enclosing container level

RULES:
- nesting is +1 for open tags, -1 for close tags, 0 otherwise
- Delimiter.end is -1 until the balancer pairs it
- Delimiter.end always indexes the same NestingGroup
- A group's owner is the stream index of the open tag that created it,
  or None for the root group
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Token:
    """A single element of a token stream.

    WHY: The upstream tokenizer, the inline passes and the section pass
    all exchange the same record shape, which also maps 1:1 to the JSON
    token objects read by the loader and written by the formatters.

    RULES:
    - type: "text", "<name>_open", "<name>_close", "inline", ...
    - tag: HTML-ish tag name ("s", "h2", "section") or "" for text
    - nesting: +1 open, -1 close, 0 self-contained
    - content: literal text for text/inline tokens, "" for tags
    - markup: the marker characters that produced the token
    - block: True for block-level tokens
    - level: nesting depth at which the token was pushed
    - children: inline child tokens for "inline" tokens, else None
    """

    type: str
    tag: str = ""
    nesting: int = 0
    content: str = ""
    markup: str = ""
    block: bool = False
    level: int = 0
    info: str = ""
    children: Optional[list[Token]] = None

    @property
    def is_open(self) -> bool:
        return self.nesting > 0

    @property
    def is_close(self) -> bool:
        return self.nesting < 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON token shape (children recursively)."""
        data: dict[str, Any] = {
            "type": self.type,
            "tag": self.tag,
            "nesting": self.nesting,
            "content": self.content,
            "markup": self.markup,
            "block": self.block,
            "level": self.level,
            "info": self.info,
        }
        data["children"] = (
            [child.to_dict() for child in self.children]
            if self.children is not None
            else None
        )
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Token:
        """Parse a Token from a JSON token object.

        RULES:
        - type is required; every other field has a default
        - children is parsed recursively when present and not null
        """
        children = data.get("children")
        return cls(
            type=data["type"],
            tag=data.get("tag", ""),
            nesting=data.get("nesting", 0),
            content=data.get("content", ""),
            markup=data.get("markup", ""),
            block=data.get("block", False),
            level=data.get("level", 0),
            info=data.get("info", ""),
            children=[cls.from_dict(c) for c in children] if children is not None else None,
        )


@dataclass
class Delimiter:
    """Metadata for one candidate marker chunk.

    RULES:
    - marker: the marker character ("~", "=", "+", "^")
    - length: multiplicity class; 0 disables rule-of-three checks
    - token: index of the backing text token in the stream
    - end: index of the matched delimiter in the same group, or -1
    - open / close: flanking eligibility, cleared as pairs are consumed
    - jump: how many preceding delimiters a later search may skip
    """

    marker: str
    length: int
    token: int
    end: int = -1
    open: bool = False
    close: bool = False
    jump: int = 0

    @property
    def matched(self) -> bool:
        return self.end >= 0


@dataclass
class NestingGroup:
    """Delimiters scoped to one container level.

    WHY: A marker inside a container (for example a span opened by an
    upstream tag) must never pair with one outside it, or the container
    would no longer be well nested.

    HOW: The inline state opens a new group whenever it pushes an open
    tag and returns to ``parent`` when the matching close is pushed.
    """

    owner: Optional[int] = None
    parent: Optional[NestingGroup] = None
    delimiters: list[Delimiter] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.delimiters)
