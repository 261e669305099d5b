from __future__ import annotations

from collections.abc import Collection, Sequence
from typing import Protocol

from pangram.core.results import RuleResult
from pangram.models import Puzzle


class ValidationPort(Protocol):
    """Host-supplied word validation.

    `check_rules` is synchronous and pure. `check_dictionary` may raise; a raise is a
    port failure and is reported differently from returning False.
    """

    def check_rules(
        self,
        word: str,
        letters: Collection[str],
        required_symbol: str,
        accepted_words: Sequence[str],
    ) -> RuleResult:  # pragma: no cover
        ...

    async def check_dictionary(self, word: str) -> bool:  # pragma: no cover
        ...


class Dictionary(Protocol):
    async def contains(self, word: str) -> bool:  # pragma: no cover
        ...


class PuzzleSource(Protocol):
    """Deterministic puzzle catalog. `len()` is the wrap-around size for advancing."""

    def get_puzzle(self, index: int) -> Puzzle:  # pragma: no cover
        ...

    def __len__(self) -> int:  # pragma: no cover
        ...


class Scoring(Protocol):
    def score(self, word: str, letters: Collection[str]) -> int:  # pragma: no cover
        ...

    def is_bonus_word(self, word: str, letters: Collection[str]) -> bool:  # pragma: no cover
        ...
