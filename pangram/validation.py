from __future__ import annotations

from pangram.core.ports import Scoring, ValidationPort
from pangram.core.results import Accepted, Rejected, ValidationResult
from pangram.engine import ValidationRequest


NOT_A_WORD_MESSAGE = "Not a valid English word"


def score_message(*, points: int, is_bonus_word: bool) -> str:
    if is_bonus_word:
        return f"PANGRAM! +{points} points!"
    return f"+{points} point{'s' if points > 1 else ''}"


async def validate_word(request: ValidationRequest, *, port: ValidationPort, scoring: Scoring) -> ValidationResult:
    """Run the validation pipeline for one submitted word.

    Rules are checked first so the dictionary is never consulted for a word that
    breaks them. Scoring only runs once both checks pass. Exceptions from the
    dictionary propagate to the caller.
    """

    rules = port.check_rules(request.word, request.letters, request.required_symbol, request.accepted_words)
    if not rules.ok:
        return Rejected(reason=rules.reason)

    if not await port.check_dictionary(request.word):
        return Rejected(reason=NOT_A_WORD_MESSAGE)

    word = request.word.lower()
    points = scoring.score(word, request.letters)
    is_bonus = scoring.is_bonus_word(word, request.letters)
    return Accepted(
        word=word,
        points=points,
        is_bonus_word=is_bonus,
        message=score_message(points=points, is_bonus_word=is_bonus),
    )
