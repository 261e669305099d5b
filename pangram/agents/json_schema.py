from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class JsonSchema:
    """Shape an agent reply must take, e.g. `{"word": "..."}` for the word picker."""

    name: str
    schema: dict[str, Any]
    strict: bool = True

    def response_format(self) -> dict[str, Any]:
        """OpenAI-style `response_format` payload forwarded through AG2."""

        return {
            "type": "json_schema",
            "json_schema": {"name": self.name, "schema": self.schema, "strict": self.strict},
        }
