from __future__ import annotations

import pytest

from pangram.core.context import new_puzzle_context
from pangram.core.events import ValidationCompleted, ValidationFailed
from pangram.core.results import Accepted, Rejected
from pangram.engine import TOO_FEW_VALID_LETTERS_MESSAGE, TOO_SHORT_MESSAGE, Transition, apply
from pangram.mechanics import PuzzleCatalog
from pangram.models import (
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


@pytest.fixture()
def fresh(puzzles: PuzzleCatalog) -> PuzzleContext:
    return new_puzzle_context(puzzles=puzzles, puzzle_index=0)


def _run(puzzles: PuzzleCatalog, context: PuzzleContext, *events, phase: GamePhase = GamePhase.accepting) -> Transition:
    t = Transition(phase=phase, context=context)
    for e in events:
        t = apply(phase=t.phase, context=t.context, event=e, puzzles=puzzles)
    return t


def test_fresh_context_matches_catalog_entry(fresh: PuzzleContext) -> None:
    assert fresh.letters == frozenset("RACKING")
    assert fresh.required_symbol == "K"
    assert fresh.pending_input == ""
    assert fresh.accepted_words == ()
    assert fresh.tally == 0
    assert fresh.feedback == Feedback()


def test_add_symbol_normalizes_case_and_clears_feedback(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    ctx = fresh.model_copy(update={"feedback": Feedback(text="old", kind=FeedbackKind.error)})
    t = _run(puzzles, ctx, AddSymbol(symbol="r"), AddSymbol(symbol="A"))

    assert t.phase == GamePhase.accepting
    assert t.context.pending_input == "RA"
    assert t.context.feedback == Feedback()
    assert t.request is None


@pytest.mark.parametrize("symbol", ["z", "", "ra", "1"])
def test_add_symbol_outside_letters_is_absorbed(puzzles: PuzzleCatalog, fresh: PuzzleContext, symbol: str) -> None:
    t = _run(puzzles, fresh, AddSymbol(symbol=symbol))
    assert t.context is fresh
    assert t.phase == GamePhase.accepting


def test_delete_symbol_removes_last_and_is_noop_when_empty(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    t = _run(puzzles, fresh, AddSymbol(symbol="r"), AddSymbol(symbol="a"), DeleteSymbol())
    assert t.context.pending_input == "R"

    noop = _run(puzzles, fresh, DeleteSymbol())
    assert noop.context is fresh


def test_clear_input_empties_pending(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    t = _run(puzzles, fresh, AddSymbol(symbol="r"), AddSymbol(symbol="a"), ClearInput())
    assert t.context.pending_input == ""

    again = _run(puzzles, fresh, ClearInput())
    assert again.context.pending_input == ""


def test_submit_short_input_stays_accepting_with_error(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    t = _run(puzzles, fresh, AddSymbol(symbol="r"), AddSymbol(symbol="a"), Submit())

    assert t.phase == GamePhase.accepting
    assert t.request is None
    assert t.context.feedback == Feedback(text=TOO_SHORT_MESSAGE, kind=FeedbackKind.error)
    assert t.context.pending_input == "RA"


def test_submit_enters_resolving_with_tagged_request(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    t = _run(puzzles, fresh, *(AddSymbol(symbol=c) for c in "rack"), Submit())

    assert t.phase == GamePhase.resolving
    assert t.request is not None
    assert t.request.word == "RACK"
    assert t.request.instance == fresh.instance
    assert t.request.letters == fresh.letters
    assert t.request.required_symbol == "K"
    assert t.request.accepted_words == ()


def test_submit_word_filters_to_puzzle_letters(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    t = _run(puzzles, fresh, SubmitWord(word="r-a-c-k!z"))

    assert t.phase == GamePhase.resolving
    assert t.context.pending_input == "RACK"
    assert t.request is not None and t.request.word == "RACK"


@pytest.mark.parametrize("word", ["ßhocked", "s hock ed", "\tshockßed "])
def test_submit_word_normalizes_like_add_symbol(puzzles: PuzzleCatalog, word: str) -> None:
    shocked = new_puzzle_context(puzzles=puzzles, puzzle_index=8)
    assert "S" in shocked.letters

    consolidated = _run(puzzles, shocked, SubmitWord(word=word))
    granular = _run(puzzles, shocked, *(AddSymbol(symbol=c) for c in word), Submit())

    assert consolidated == granular
    assert "SS" not in consolidated.context.pending_input


def test_submit_word_with_too_few_valid_letters(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    t = _run(puzzles, fresh, AddSymbol(symbol="g"), SubmitWord(word="rxyz"))

    assert t.phase == GamePhase.accepting
    assert t.request is None
    assert t.context.feedback == Feedback(text=TOO_FEW_VALID_LETTERS_MESSAGE, kind=FeedbackKind.error)
    assert t.context.pending_input == "G"


def test_submit_word_equals_granular_sequence(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    word = "Racking?"
    consolidated = _run(puzzles, fresh, SubmitWord(word=word))
    granular = _run(puzzles, fresh, *(AddSymbol(symbol=c) for c in word), Submit())

    assert consolidated == granular

    result = ValidationCompleted(
        instance=fresh.instance,
        result=Accepted(word="racking", points=14, is_bonus_word=True, message="PANGRAM! +14 points!"),
    )
    assert _run(puzzles, consolidated.context, result, phase=consolidated.phase) == _run(
        puzzles, granular.context, result, phase=granular.phase
    )


def test_events_while_resolving_are_dropped(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    resolving = _run(puzzles, fresh, SubmitWord(word="rack"))
    assert resolving.phase == GamePhase.resolving

    for event in (AddSymbol(symbol="g"), DeleteSymbol(), ClearInput(), Submit(), SubmitWord(word="racking")):
        t = apply(phase=resolving.phase, context=resolving.context, event=event, puzzles=puzzles)
        assert t.dropped is True
        assert t.phase == GamePhase.resolving
        assert t.context is resolving.context
        assert t.request is None


def test_accepted_result_updates_words_tally_and_feedback(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    resolving = _run(puzzles, fresh, SubmitWord(word="rack"))
    t = _run(
        puzzles,
        resolving.context,
        ValidationCompleted(instance=0, result=Accepted(word="rack", points=1, is_bonus_word=False, message="+1 point")),
        phase=resolving.phase,
    )

    assert t.phase == GamePhase.accepting
    assert t.context.accepted_words == ("rack",)
    assert t.context.tally == 1
    assert t.context.pending_input == ""
    assert t.context.feedback == Feedback(text="+1 point", kind=FeedbackKind.success)


def test_bonus_word_feedback_kind(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    ctx = fresh.model_copy(update={"accepted_words": ("rack",), "tally": 1})
    resolving = _run(puzzles, ctx, SubmitWord(word="racking"))
    t = _run(
        puzzles,
        resolving.context,
        ValidationCompleted(
            instance=0,
            result=Accepted(word="racking", points=14, is_bonus_word=True, message="PANGRAM! +14 points!"),
        ),
        phase=resolving.phase,
    )

    assert t.context.feedback.kind == FeedbackKind.bonus
    assert t.context.accepted_words == ("rack", "racking")
    assert t.context.tally == 15


def test_rejected_and_failed_results_are_distinct(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    resolving = _run(puzzles, fresh, SubmitWord(word="rain"))

    rejected = _run(
        puzzles, resolving.context, ValidationCompleted(instance=0, result=Rejected(reason="nope")), phase=resolving.phase
    )
    failed = _run(puzzles, resolving.context, ValidationFailed(instance=0, error="boom"), phase=resolving.phase)

    assert rejected.phase == failed.phase == GamePhase.accepting
    assert rejected.context.pending_input == failed.context.pending_input == ""
    assert rejected.context.feedback == Feedback(text="nope", kind=FeedbackKind.error)
    assert failed.context.feedback == Feedback(text="validation failed", kind=FeedbackKind.error)
    assert rejected.context.tally == failed.context.tally == 0
    assert rejected.context.accepted_words == failed.context.accepted_words == ()


def test_duplicate_accepted_word_is_not_added_twice(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    ctx = fresh.model_copy(update={"accepted_words": ("rack",), "tally": 1})
    resolving = _run(puzzles, ctx, SubmitWord(word="rack"))
    t = _run(
        puzzles,
        resolving.context,
        ValidationCompleted(instance=0, result=Accepted(word="rack", points=1, is_bonus_word=False, message="+1 point")),
        phase=resolving.phase,
    )
    assert t.context.accepted_words == ("rack",)


def test_advance_puzzle_resets_context_and_cancels(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    ctx = fresh.model_copy(update={"accepted_words": ("rack",), "tally": 1})
    resolving = _run(puzzles, ctx, SubmitWord(word="crank"))

    t = apply(phase=resolving.phase, context=resolving.context, event=AdvancePuzzle(), puzzles=puzzles)

    assert t.phase == GamePhase.accepting
    assert t.cancel_inflight is True
    assert t.context.puzzle_index == 1
    assert t.context.instance == 1
    assert t.context.tally == 0
    assert t.context.accepted_words == ()
    assert t.context.pending_input == ""
    assert t.context.letters == puzzles.get_puzzle(1).letters


def test_advance_puzzle_wraps_around_catalog(puzzles: PuzzleCatalog) -> None:
    last = new_puzzle_context(puzzles=puzzles, puzzle_index=len(puzzles) - 1, instance=4)
    t = apply(phase=GamePhase.accepting, context=last, event=AdvancePuzzle(), puzzles=puzzles)
    assert t.context.puzzle_index == 0
    assert t.context.instance == 5


def test_stale_completion_is_dropped(puzzles: PuzzleCatalog, fresh: PuzzleContext) -> None:
    resolving = _run(puzzles, fresh, SubmitWord(word="rack"))
    advanced = _run(puzzles, resolving.context, AdvancePuzzle(), phase=resolving.phase)
    late = ValidationCompleted(instance=0, result=Accepted(word="rack", points=1, is_bonus_word=False, message="+1"))

    # Accepting: any completion is stale.
    t = apply(phase=advanced.phase, context=advanced.context, event=late, puzzles=puzzles)
    assert t.dropped is True
    assert t.context is advanced.context

    # Resolving a newer instance: the old tag is still ignored.
    resolving_new = _run(puzzles, advanced.context, SubmitWord(word="blanket"))
    t2 = apply(phase=resolving_new.phase, context=resolving_new.context, event=late, puzzles=puzzles)
    assert t2.dropped is True
    assert t2.phase == GamePhase.resolving
    assert t2.context is resolving_new.context
