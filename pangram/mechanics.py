"""Default host-side collaborators: puzzle catalog, word rules and scoring.

The engine only sees these through the protocols in `pangram.core.ports`; hosts can
swap any of them out.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from pangram.core.context import MIN_WORD_LENGTH
from pangram.core.ports import Dictionary
from pangram.core.results import RuleResult
from pangram.models import Puzzle


BONUS_WORD_POINTS = 7


# (letters, required letter). Every entry has at least one pangram (noted alongside).
_CATALOG: tuple[tuple[str, str], ...] = (
    ("RACKING", "K"),  # racking
    ("BLANKET", "L"),  # blanket
    ("CHAPTER", "H"),  # chapter
    ("FOUNDER", "O"),  # founder
    ("JUMPING", "M"),  # jumping
    ("PROFILE", "F"),  # profile
    ("TRIBUNE", "B"),  # tribune
    ("GLAMOUR", "G"),  # glamour
    ("SHOCKED", "C"),  # shocked
    ("WHISPER", "W"),  # whisper
)


@dataclass(frozen=True, slots=True)
class PuzzleCatalog:
    puzzles: tuple[Puzzle, ...]

    @staticmethod
    def default() -> "PuzzleCatalog":
        return PuzzleCatalog(
            puzzles=tuple(Puzzle(letters=frozenset(letters), required_symbol=required) for letters, required in _CATALOG)
        )

    def get_puzzle(self, index: int) -> Puzzle:
        if not self.puzzles:
            raise ValueError("Puzzle catalog is empty")
        return self.puzzles[index % len(self.puzzles)]

    def __len__(self) -> int:
        return len(self.puzzles)


def check_word_rules(
    word: str,
    letters: Collection[str],
    required_symbol: str,
    accepted_words: Sequence[str],
) -> RuleResult:
    w = word.strip().upper()
    allowed = {s.upper() for s in letters}

    if len(w) < MIN_WORD_LENGTH:
        return RuleResult(ok=False, reason=f"Word must be at least {MIN_WORD_LENGTH} letters")
    if any(ch not in allowed for ch in w):
        return RuleResult(ok=False, reason="Word uses letters that are not in the puzzle")
    if required_symbol.upper() not in w:
        return RuleResult(ok=False, reason=f"Word must contain the center letter {required_symbol.upper()}")
    if w.lower() in {a.lower() for a in accepted_words}:
        return RuleResult(ok=False, reason="Already found")
    return RuleResult(ok=True)


def is_pangram(word: str, letters: Collection[str]) -> bool:
    used = set(word.upper())
    return all(s.upper() in used for s in letters)


@dataclass(frozen=True, slots=True)
class SpellingBeeScoring:
    """4-letter words score 1, longer words score their length, pangrams add a bonus."""

    bonus_points: int = BONUS_WORD_POINTS

    def score(self, word: str, letters: Collection[str]) -> int:
        points = 1 if len(word) == MIN_WORD_LENGTH else len(word)
        if is_pangram(word, letters):
            points += self.bonus_points
        return points

    def is_bonus_word(self, word: str, letters: Collection[str]) -> bool:
        return is_pangram(word, letters)


@dataclass(frozen=True, slots=True)
class DefaultValidationPort:
    """Validation port built from the default rules and any async dictionary."""

    dictionary: Dictionary

    def check_rules(
        self,
        word: str,
        letters: Collection[str],
        required_symbol: str,
        accepted_words: Sequence[str],
    ) -> RuleResult:
        return check_word_rules(word, letters, required_symbol, accepted_words)

    async def check_dictionary(self, word: str) -> bool:
        return await self.dictionary.contains(word)
