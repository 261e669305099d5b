from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

import httpx


DEFAULT_DICTIONARY_URL = "https://api.dictionaryapi.dev/api/v2/entries/en"


class DictionaryLoadError(RuntimeError):
    pass


@dataclass(frozen=True, slots=True)
class WordListDictionary:
    """In-memory word list (case-insensitive)."""

    words: frozenset[str]

    @staticmethod
    def from_words(words: Iterable[str]) -> "WordListDictionary":
        return WordListDictionary(words=frozenset(w.strip().lower() for w in words if w.strip()))

    @staticmethod
    def from_file(path: Path) -> "WordListDictionary":
        """Load one word per line; blank lines and `#` comments are skipped."""

        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise DictionaryLoadError(f"Word list not found: {path}") from e
        return WordListDictionary.from_words(line for line in text.splitlines() if not line.lstrip().startswith("#"))

    async def contains(self, word: str) -> bool:
        return word.strip().lower() in self.words


class HttpDictionary:
    """Dictionary lookup over HTTP (dictionaryapi.dev-style `GET {base_url}/{word}`).

    200 means the word exists and 404 means it does not. Anything else raises, which the
    engine reports as a validation failure rather than a rejection.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_DICTIONARY_URL,
        timeout_s: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout_s)
        self._owns_client = client is None

    async def contains(self, word: str) -> bool:
        resp = await self._client.get(f"{self.base_url}/{quote(word.strip().lower())}")
        if resp.status_code == 404:
            return False
        resp.raise_for_status()
        return True

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
