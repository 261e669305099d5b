from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class RuleResult:
    ok: bool
    reason: str = ""


@dataclass(frozen=True, slots=True)
class Rejected:
    reason: str


@dataclass(frozen=True, slots=True)
class Accepted:
    word: str
    points: int
    is_bonus_word: bool
    message: str


ValidationResult = Union[Rejected, Accepted]
