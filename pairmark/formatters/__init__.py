"""Output formatter registry.

WHY: The CLI needs a single lookup to find the right formatter by name.
A central dict makes it trivial to add new formats: create the
formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["outline"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags)
- Values are BaseFormatter subclasses (not instances)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pairmark.formatters.outline import OutlineFormatter
from pairmark.formatters.tokens_json import TokenJSONFormatter

if TYPE_CHECKING:
    from pairmark.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "tokens_json": TokenJSONFormatter,
    "outline": OutlineFormatter,
}
