from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from pangram.dictionary import DEFAULT_DICTIONARY_URL


@dataclass(frozen=True, slots=True)
class GameSettings:
    start_puzzle_index: int
    # When set, words are checked against this local list instead of the HTTP dictionary.
    word_list_path: Path | None
    dictionary_url: str
    dictionary_timeout_s: float
    log_level: str


def settings_from_env() -> GameSettings:
    word_list = os.environ.get("PANGRAM_WORD_LIST")
    return GameSettings(
        start_puzzle_index=int(os.environ.get("PANGRAM_PUZZLE_INDEX", "0")),
        word_list_path=Path(word_list) if word_list else None,
        dictionary_url=os.environ.get("PANGRAM_DICTIONARY_URL", DEFAULT_DICTIONARY_URL),
        dictionary_timeout_s=float(os.environ.get("PANGRAM_DICTIONARY_TIMEOUT_S", "5.0")),
        log_level=os.environ.get("PANGRAM_LOG_LEVEL", "INFO").upper(),
    )
