"""Abstract base formatter and output container.

WHY: Every output format consumes the same finished token list but
produces different file content. This base class keeps one interface so
the CLI (and any other caller) can drive any formatter generically.

HOW: BaseFormatter is an ABC with two requirements, a ``name`` property
and a ``format()`` method. FormatterOutput bundles a file suffix with
its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``suffix`` starts with a hyphen, e.g. ``"-tokens.json"``
- The caller is responsible for prepending the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from pairmark.core.ir import Token


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-tokens.json"`` → ``"notes-tokens.json"``.
        content: The file content.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Token JSON'."""

    @abstractmethod
    def format(self, tokens: List[Token]) -> FormatterOutput:
        """Serialize a finished document token list.

        Args:
            tokens: Output of process_document.

        Returns:
            The formatted file content with its suffix and MIME type.
        """
