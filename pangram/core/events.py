from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Union

from pangram.core.results import ValidationResult
from pangram.models import InboundEvent


@dataclass(frozen=True, slots=True)
class ValidationCompleted:
    """The validation task returned a result for the tagged puzzle instance."""

    instance: int
    result: ValidationResult
    ts: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True, slots=True)
class ValidationFailed:
    """The validation task itself errored (as opposed to rejecting the word)."""

    instance: int
    error: str
    ts: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


InternalEvent = Union[ValidationCompleted, ValidationFailed]
Event = Union[InboundEvent, InternalEvent]


def event_name(event: Event) -> str:
    return getattr(event, "type", None) or type(event).__name__
