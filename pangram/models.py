from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


class GamePhase(StrEnum):
    accepting = "accepting"
    resolving = "resolving"


class FeedbackKind(StrEnum):
    info = "info"
    success = "success"
    error = "error"
    bonus = "bonus"


class Feedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = ""
    kind: FeedbackKind = FeedbackKind.info


CLEARED_FEEDBACK = Feedback()


class Puzzle(BaseModel):
    """Puzzle descriptor handed out by a puzzle source."""

    model_config = ConfigDict(frozen=True)

    letters: frozenset[str]
    required_symbol: str

    @model_validator(mode="after")
    def _required_is_a_letter(self) -> "Puzzle":
        if self.required_symbol not in self.letters:
            raise ValueError("required_symbol must be one of the puzzle letters")
        return self


class PuzzleContext(BaseModel):
    """Authoritative game context for one puzzle instance.

    Instances are never mutated; every transition produces a new one.
    """

    model_config = ConfigDict(frozen=True)

    letters: frozenset[str]
    required_symbol: str

    # Symbols composed so far (upper-case, each one a member of `letters`).
    pending_input: str = ""

    # Sorted, lower-case, no duplicates.
    accepted_words: tuple[str, ...] = ()

    tally: int = Field(default=0, ge=0)
    feedback: Feedback = CLEARED_FEEDBACK

    # Catalog position; wraps modulo the catalog size on advance.
    puzzle_index: int = Field(default=0, ge=0)

    # Monotonic tag of the puzzle instance, used to discard stale validation results.
    instance: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_invariants(self) -> "PuzzleContext":
        if self.required_symbol not in self.letters:
            raise ValueError("required_symbol must be one of the puzzle letters")
        if any(s not in self.letters for s in self.pending_input):
            raise ValueError("pending_input may only contain puzzle letters")
        if len(set(self.accepted_words)) != len(self.accepted_words):
            raise ValueError("accepted_words must not contain duplicates")
        return self


class Snapshot(BaseModel):
    """Read-only view of the engine published after every processed event."""

    model_config = ConfigDict(frozen=True)

    phase: GamePhase
    context: PuzzleContext
    version: int = 0


# ---- Inbound events (UI + agent surface) ----


class _InboundEvent(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class AddSymbol(_InboundEvent):
    type: Literal["ADD_LETTER"] = "ADD_LETTER"
    symbol: str


class DeleteSymbol(_InboundEvent):
    type: Literal["DELETE_LETTER"] = "DELETE_LETTER"


class ClearInput(_InboundEvent):
    type: Literal["CLEAR"] = "CLEAR"


class Submit(_InboundEvent):
    type: Literal["SUBMIT"] = "SUBMIT"


class SubmitWord(_InboundEvent):
    """Consolidated agent event: equivalent to AddSymbol for each letter then Submit."""

    type: Literal["SUBMIT_WORD"] = "SUBMIT_WORD"
    word: str


class AdvancePuzzle(_InboundEvent):
    type: Literal["NEW_PUZZLE"] = "NEW_PUZZLE"


InboundEvent = Annotated[
    Union[AddSymbol, DeleteSymbol, ClearInput, Submit, SubmitWord, AdvancePuzzle],
    Field(discriminator="type"),
]

_INBOUND_ADAPTER: TypeAdapter[InboundEvent] = TypeAdapter(InboundEvent)


def parse_event(payload: Mapping[str, Any]) -> InboundEvent:
    """Validate a JSON-style payload (e.g. `{"type": "ADD_LETTER", "symbol": "a"}`)."""

    return _INBOUND_ADAPTER.validate_python(dict(payload))
