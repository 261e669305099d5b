from __future__ import annotations

from collections.abc import Collection

from pangram.core.ports import PuzzleSource
from pangram.models import PuzzleContext


MIN_WORD_LENGTH = 4


def normalize_symbol(symbol: str) -> str:
    return symbol.strip().upper()


def filter_word(word: str, letters: Collection[str]) -> str:
    """Normalize `word` one character at a time, as AddSymbol does, and keep puzzle letters.

    A character whose normalized form is not a single puzzle letter (whitespace, or
    one that upper-cases to several letters like "ß") is dropped.
    """

    symbols = (normalize_symbol(ch) for ch in word)
    return "".join(s for s in symbols if s in letters)


def new_puzzle_context(*, puzzles: PuzzleSource, puzzle_index: int, instance: int = 0) -> PuzzleContext:
    """Build a fresh context (empty input, no words, zero tally) for a catalog entry."""

    size = len(puzzles)
    if size <= 0:
        raise ValueError("Puzzle catalog is empty")

    index = puzzle_index % size
    puzzle = puzzles.get_puzzle(index)
    return PuzzleContext(
        letters=frozenset(normalize_symbol(s) for s in puzzle.letters),
        required_symbol=normalize_symbol(puzzle.required_symbol),
        puzzle_index=index,
        instance=instance,
    )


def next_puzzle_context(*, context: PuzzleContext, puzzles: PuzzleSource) -> PuzzleContext:
    return new_puzzle_context(
        puzzles=puzzles,
        puzzle_index=context.puzzle_index + 1,
        instance=context.instance + 1,
    )
