from __future__ import annotations

from dataclasses import dataclass

from pangram.core.context import MIN_WORD_LENGTH, filter_word, next_puzzle_context, normalize_symbol
from pangram.core.events import Event, ValidationCompleted, ValidationFailed
from pangram.core.ports import PuzzleSource
from pangram.core.results import Accepted
from pangram.fsm import next_phase
from pangram.models import (
    CLEARED_FEEDBACK,
    AddSymbol,
    AdvancePuzzle,
    ClearInput,
    DeleteSymbol,
    Feedback,
    FeedbackKind,
    GamePhase,
    PuzzleContext,
    Submit,
    SubmitWord,
)


TOO_SHORT_MESSAGE = "word must be at least 4 letters"
TOO_FEW_VALID_LETTERS_MESSAGE = "word must be at least 4 valid letters"
VALIDATION_FAILED_MESSAGE = "validation failed"


@dataclass(frozen=True, slots=True)
class ValidationRequest:
    """Everything the validation task needs, tagged with the puzzle instance it belongs to."""

    instance: int
    word: str
    letters: frozenset[str]
    required_symbol: str
    accepted_words: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Transition:
    """Result of applying one event.

    - `request`: start a validation task (only when entering resolving).
    - `cancel_inflight`: cancel whatever validation is outstanding.
    - `dropped`: the event was ignored (context is the same object).
    """

    phase: GamePhase
    context: PuzzleContext
    request: ValidationRequest | None = None
    cancel_inflight: bool = False
    dropped: bool = False


def _unchanged(phase: GamePhase, context: PuzzleContext, *, dropped: bool = False) -> Transition:
    return Transition(phase=phase, context=context, dropped=dropped)


def _error(context: PuzzleContext, text: str, **update: object) -> PuzzleContext:
    return context.model_copy(update={**update, "feedback": Feedback(text=text, kind=FeedbackKind.error)})


def _add_symbol(context: PuzzleContext, event: AddSymbol) -> PuzzleContext:
    symbol = normalize_symbol(event.symbol)
    # Only single puzzle letters are accepted; anything else is absorbed.
    if len(symbol) != 1 or symbol not in context.letters:
        return context
    return context.model_copy(update={"pending_input": context.pending_input + symbol, "feedback": CLEARED_FEEDBACK})


def _delete_symbol(context: PuzzleContext) -> PuzzleContext:
    if not context.pending_input:
        return context
    return context.model_copy(update={"pending_input": context.pending_input[:-1], "feedback": CLEARED_FEEDBACK})


def _clear_input(context: PuzzleContext) -> PuzzleContext:
    return context.model_copy(update={"pending_input": "", "feedback": CLEARED_FEEDBACK})


def _submit_pending(context: PuzzleContext) -> Transition:
    """Shared submission path for both Submit and SubmitWord."""

    if len(context.pending_input) < MIN_WORD_LENGTH:
        return Transition(phase=GamePhase.accepting, context=_error(context, TOO_SHORT_MESSAGE))

    request = ValidationRequest(
        instance=context.instance,
        word=context.pending_input,
        letters=context.letters,
        required_symbol=context.required_symbol,
        accepted_words=context.accepted_words,
    )
    return Transition(phase=next_phase(GamePhase.accepting, "submitted"), context=context, request=request)


def _submit_word(context: PuzzleContext, event: SubmitWord) -> Transition:
    filtered = filter_word(event.word, context.letters)
    if len(filtered) < MIN_WORD_LENGTH:
        return Transition(phase=GamePhase.accepting, context=_error(context, TOO_FEW_VALID_LETTERS_MESSAGE))
    return _submit_pending(context.model_copy(update={"pending_input": filtered, "feedback": CLEARED_FEEDBACK}))


def _advance(context: PuzzleContext, puzzles: PuzzleSource, phase: GamePhase) -> Transition:
    return Transition(
        phase=next_phase(phase, "advanced"),
        context=next_puzzle_context(context=context, puzzles=puzzles),
        cancel_inflight=True,
    )


def _resolve(context: PuzzleContext, event: ValidationCompleted | ValidationFailed) -> PuzzleContext:
    if isinstance(event, ValidationFailed):
        return _error(context, VALIDATION_FAILED_MESSAGE, pending_input="")

    result = event.result
    if not isinstance(result, Accepted):
        return _error(context, result.reason, pending_input="")

    words = context.accepted_words
    if result.word not in words:
        words = tuple(sorted((*words, result.word)))

    kind = FeedbackKind.bonus if result.is_bonus_word else FeedbackKind.success
    return context.model_copy(
        update={
            "accepted_words": words,
            "tally": context.tally + max(result.points, 0),
            "pending_input": "",
            "feedback": Feedback(text=result.message, kind=kind),
        }
    )


def apply(*, phase: GamePhase, context: PuzzleContext, event: Event, puzzles: PuzzleSource) -> Transition:
    """Pure transition function: (phase, context, event) -> (phase, context, effects).

    Illegal or currently-inapplicable events never raise; they are absorbed with feedback
    or dropped without effect. First matching branch wins.
    """

    if isinstance(event, AdvancePuzzle):
        return _advance(context, puzzles, phase)

    if phase == GamePhase.resolving:
        if isinstance(event, (ValidationCompleted, ValidationFailed)) and event.instance == context.instance:
            return Transition(phase=next_phase(phase, "resolved"), context=_resolve(context, event))
        # Input while a validation is outstanding and stale completions are dropped.
        return _unchanged(phase, context, dropped=True)

    if isinstance(event, AddSymbol):
        return _unchanged(phase, _add_symbol(context, event))
    if isinstance(event, DeleteSymbol):
        return _unchanged(phase, _delete_symbol(context))
    if isinstance(event, ClearInput):
        return _unchanged(phase, _clear_input(context))
    if isinstance(event, Submit):
        return _submit_pending(context)
    if isinstance(event, SubmitWord):
        return _submit_word(context, event)

    # Completion events can only be stale while accepting.
    return _unchanged(phase, context, dropped=True)
