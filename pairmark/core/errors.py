"""Structural fault exceptions.

WHY: Unmatched markers degrade to plain text and are normal. A broken
structure is different: an out-of-range delimiter index, a close tag
with no open tag, or two closers claiming one opener would hand a
malformed tree to the renderer. Those must abort the document with a
typed, descriptive error.

RULES:
- Never caught and patched inside the passes
- Message names the offending index and token/delimiter
"""


class StructuralFault(Exception):
    """Base class for contract violations in a token stream.

    WHY: Callers (the CLI, tests) need one type to catch every
    structural failure of a document.
    """


class NestingError(StructuralFault):
    """Raised when open and close tags do not pair up.

    HOW: Raised by TokenStream.check_nesting and by InlineState.push
    when a close tag arrives with no open container.
    """


class DelimiterMatchError(StructuralFault):
    """Raised when delimiter match state is inconsistent.

    RULES:
    - end index outside its group
    - end pointing at a delimiter that does not point back
    - a second closer claiming an already matched opener
    """


class StreamIndexError(StructuralFault, IndexError):
    """Raised when a stream mutation gets an out-of-range index."""
