"""Load and validate upstream token arrays.

WHY: pairmark sits behind a separate block tokenizer that hands over
its output as JSON. A malformed array (wrong nesting value, missing
type) would otherwise surface as a confusing error deep inside a pass.

HOW: The JSON is validated against token_stream.schema.json with
jsonschema, then parsed into Token objects with Token.from_dict.

RULES:
- The schema file ships inside the package (pairmark/schemas/)
- Validation happens before any Token is built
- Raises jsonschema.ValidationError on schema violations and ValueError
  on text that is not JSON
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Union

import jsonschema

from pairmark.core.ir import Token

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "token_stream.schema.json"

_CACHED_SCHEMA: Union[dict, None] = None


def get_schema() -> dict:
    """Return the token stream schema, loading it from disk once."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def validate_token_data(data: Any) -> None:
    """Validate decoded JSON against the token stream schema.

    Raises:
        jsonschema.ValidationError: If the data does not conform.
    """
    jsonschema.validate(instance=data, schema=get_schema())


def tokens_from_data(data: Any) -> List[Token]:
    """Validate decoded JSON and build Token objects from it."""
    validate_token_data(data)
    return [Token.from_dict(item) for item in data]


def loads_tokens(text: str) -> List[Token]:
    """Parse a JSON token array from a string.

    Raises:
        ValueError: If the text is not valid JSON.
        jsonschema.ValidationError: If the JSON is not a token array.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError("Could not parse token JSON: {}".format(exc)) from exc
    return tokens_from_data(data)


def load_tokens(path: Union[str, Path]) -> List[Token]:
    """Read and parse a UTF-8 JSON token file."""
    return loads_tokens(Path(path).read_text(encoding="utf-8"))
