"""Pair rule registry: which marker characters become which tags.

WHY: The scan/balance/finalize passes are generic over the marker
character. A central dict makes it trivial to add a marker: one
PairRule entry, no pass changes.

HOW: RULES maps a rule name to a PairRule. The name doubles as the
token type prefix ("strikethrough" -> "strikethrough_open" / "_close").

RULES:
- Markers are single characters and unique across rules
- Every rule is length-insensitive (two-character chunks)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List


@dataclass(frozen=True)
class PairRule:
    """One matched-pair inline rule.

    Attributes:
        name: Rule key and token type prefix.
        marker: The marker character.
        tag: Tag name written on the open/close tokens.
    """

    name: str
    marker: str
    tag: str

    @property
    def open_type(self) -> str:
        return "{}_open".format(self.name)

    @property
    def close_type(self) -> str:
        return "{}_close".format(self.name)

    @property
    def markup(self) -> str:
        return self.marker * 2


RULES: Dict[str, PairRule] = {
    "strikethrough": PairRule("strikethrough", "~", "s"),
    "mark": PairRule("mark", "=", "mark"),
    "ins": PairRule("ins", "+", "ins"),
    "caret": PairRule("caret", "^", "u"),
}


def resolve_rules(names: Iterable[str]) -> List[PairRule]:
    """Look up rules by name, preserving order and dropping duplicates.

    Raises:
        ValueError: If a name is not registered.
    """
    resolved: List[PairRule] = []
    for name in names:
        key = name.strip()
        if not key:
            continue
        if key not in RULES:
            raise ValueError(
                "Unknown rule '{}'. Available: {}".format(
                    key, ", ".join(sorted(RULES.keys()))
                )
            )
        if RULES[key] not in resolved:
            resolved.append(RULES[key])
    return resolved
