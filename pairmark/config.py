"""Configuration defaults and .env loading.

WHY: Which pair rules run, which heading level starts a section, and
how chatty logging is are deployment choices, not code. Reading them
from the environment through one set of getters lets the CLI and
library callers share one source of defaults.

HOW: python-dotenv loads the .env file on import. The variable names
are module constants; values are read and parsed only when a get_*()
helper is called, so a malformed value raises a clear ValueError at the
call site instead of breaking every import of this module.

RULES:
- PAIRMARK_RULES: comma-separated rule names, default every registered rule
- PAIRMARK_SECTION_LEVEL: 1-6, or 0 to disable section wrapping (default 2)
- PAIRMARK_LOG_LEVEL: standard logging level name (default WARNING)
"""

from __future__ import annotations

import logging
import os
from typing import List

from dotenv import load_dotenv

from pairmark.rules import RULES

# Load .env from the project root (where the tool is run from)
load_dotenv()

DEFAULT_SECTION_LEVEL = 2


def parse_rule_names(value: str) -> List[str]:
    """Split a comma-separated rule list; an empty value means every rule."""
    names = [part.strip() for part in value.split(",") if part.strip()]
    return names if names else list(RULES.keys())


def parse_section_level(value: str) -> int:
    """Parse a section level; 0 disables sections.

    Raises:
        ValueError: If the value is not an integer in 0-6.
    """
    try:
        level = int(value)
    except ValueError:
        raise ValueError(
            "Section level must be an integer 0-6, got '{}'".format(value)
        ) from None
    if not 0 <= level <= 6:
        raise ValueError("Section level must be 0-6, got {}".format(level))
    return level


def parse_log_level(value: str) -> int:
    """Map a level name ("debug", "INFO") to a logging constant."""
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError("Unknown log level '{}'".format(value))
    return level


RULES_ENV = "PAIRMARK_RULES"
SECTION_LEVEL_ENV = "PAIRMARK_SECTION_LEVEL"
LOG_LEVEL_ENV = "PAIRMARK_LOG_LEVEL"


def get_default_rules() -> List[str]:
    """Rule names from PAIRMARK_RULES (names are checked by resolve_rules)."""
    return parse_rule_names(os.getenv(RULES_ENV, ""))


def get_section_level() -> int:
    """Section level from PAIRMARK_SECTION_LEVEL.

    Raises:
        ValueError: If the configured value is not an integer in 0-6.
    """
    return parse_section_level(os.getenv(SECTION_LEVEL_ENV, str(DEFAULT_SECTION_LEVEL)))


def get_log_level() -> int:
    """Logging level from PAIRMARK_LOG_LEVEL.

    Raises:
        ValueError: If the configured value is not a logging level name.
    """
    return parse_log_level(os.getenv(LOG_LEVEL_ENV, "WARNING"))
