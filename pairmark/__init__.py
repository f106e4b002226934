"""pairmark: matched-pair inline markers and heading sections for token streams.

WHY: A Markdown-like front end leaves inline marker runs ("~~", "==",
"^^") as plain text tokens and emits headings as a flat sequence. A
renderer needs well-nested open/close tags for styled spans and, when
asked, explicit section containers around a chosen heading level.

HOW: Four ordered passes over a linear token array: scan marker runs
into delimiter descriptors, balance descriptors inside each nesting
group, finalize matched pairs into tag tokens, then (whole document)
insert section boundaries. Formatters serialize the finished stream.

RULES:
- Passes never re-read raw source except for local flanking checks
- Unmatched markers stay plain text; they are never an error
- Structural faults abort the document; nothing is silently patched
"""

__version__ = "0.1.0"
