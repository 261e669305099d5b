from __future__ import annotations

import asyncio
import os
from collections.abc import AsyncGenerator, Collection, Sequence
from pathlib import Path

import pytest

from pangram.core.results import RuleResult
from pangram.game_loop import GameSession
from pangram.mechanics import PuzzleCatalog, SpellingBeeScoring, check_word_rules
from pangram.models import GamePhase, Snapshot


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Load repo .env for local runs so env-gated agent tests can find OPENAI_* settings.

    In CI, we don't auto-load `.env`; opt in with PANGRAM_LOAD_DOTENV_FOR_TESTS=1.
    """

    if os.environ.get("CI") and os.environ.get("PANGRAM_LOAD_DOTENV_FOR_TESTS") != "1":
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)


class FakePort:
    """Validation port with a known word list and hooks to hold or break the dictionary check."""

    def __init__(self, words: Collection[str] = ("rack", "racking", "crank", "gain", "king")) -> None:
        self.words = {w.lower() for w in words}
        self.rule_calls: list[str] = []
        self.dictionary_calls: list[str] = []
        self.gate: asyncio.Event | None = None
        self.fail_with: Exception | None = None

    def check_rules(
        self,
        word: str,
        letters: Collection[str],
        required_symbol: str,
        accepted_words: Sequence[str],
    ) -> RuleResult:
        self.rule_calls.append(word)
        return check_word_rules(word, letters, required_symbol, accepted_words)

    async def check_dictionary(self, word: str) -> bool:
        self.dictionary_calls.append(word)
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        return word.lower() in self.words


@pytest.fixture()
def puzzles() -> PuzzleCatalog:
    return PuzzleCatalog.default()


@pytest.fixture()
def port() -> FakePort:
    return FakePort()


@pytest.fixture()
async def session(port: FakePort, puzzles: PuzzleCatalog) -> AsyncGenerator[GameSession, None]:
    s = GameSession(port=port, scoring=SpellingBeeScoring(), puzzles=puzzles)
    await s.start()
    try:
        yield s
    finally:
        await s.stop()


async def settle(session: GameSession, timeout: float = 2.0) -> Snapshot:
    """Process everything queued and wait until no validation is outstanding."""

    await session.join()
    snap = await session.hub.wait_for(lambda s: s.phase == GamePhase.accepting, timeout=timeout)
    await session.join()
    return snap
