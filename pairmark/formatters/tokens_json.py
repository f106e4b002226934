"""Token stream JSON formatter.

WHY: The downstream renderer runs as a separate process and reads the
finished token array as JSON, in the same shape pairmark reads from the
upstream tokenizer. Emitting anything that does not match that shape
would break the renderer, so the output is validated before it leaves.

HOW: Token.to_dict() for every token (children recursively), validated
against token_stream.schema.json with jsonschema, then dumped with
two-space indentation.

RULES:
- Output suffix: "-tokens.json"
- Media type: "application/json"
- Schema validation is mandatory and raises on invalid output
- Non-ASCII text is written as-is (ensure_ascii=False)
"""

from __future__ import annotations

import json
from typing import List

from pairmark.core.ir import Token
from pairmark.core.loader import validate_token_data
from pairmark.formatters.base import BaseFormatter, FormatterOutput


class TokenJSONFormatter(BaseFormatter):
    """Formatter that writes the finished tokens as schema-checked JSON."""

    @property
    def name(self) -> str:
        return "Token JSON"

    def format(self, tokens: List[Token]) -> FormatterOutput:
        """Serialize tokens to JSON.

        Raises:
            jsonschema.ValidationError: If the generated data does not
                conform to the token stream schema.
        """
        data = [token.to_dict() for token in tokens]
        validate_token_data(data)
        content = json.dumps(data, indent=2, ensure_ascii=False)
        return FormatterOutput(
            suffix="-tokens.json",
            content=content + "\n",
            media_type="application/json",
        )
