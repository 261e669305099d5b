from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from pangram.agents.base import Agent
from pangram.agents.context import PlayerContext
from pangram.agents.word_picker import pick_word_with_agent
from pangram.contexts import make_player_context, render_agent_context
from pangram.game_loop import GameSession
from pangram.models import GamePhase, Snapshot, SubmitWord


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AgentRunnerConfig:
    # How many words to play in `run_agent`.
    max_words: int = 10
    # How long to wait for the engine to accept input / resolve a submission.
    wait_timeout_s: float = 30.0
    # Attempts per word when the agent returns malformed output.
    max_pick_attempts: int = 3


def _is_accepting(snapshot: Snapshot) -> bool:
    return snapshot.phase == GamePhase.accepting


async def decide_word_via_llm(
    *,
    agent: Agent,
    snapshot: Snapshot,
    player: PlayerContext,
    max_attempts: int = 3,
) -> str:
    """Ask the agent for the next word (kept separate so tests can monkeypatch it)."""

    ctx = render_agent_context(snapshot=snapshot, player=player)
    picked = await pick_word_with_agent(agent=agent, ctx=ctx, context=snapshot.context, max_attempts=max_attempts)
    return picked.word


async def run_agent_turn(
    *,
    session: GameSession,
    agent: Agent,
    config: AgentRunnerConfig | None = None,
    player: PlayerContext | None = None,
) -> Snapshot:
    """Play one word through the consolidated SubmitWord event.

    Waits until the engine is accepting, asks the agent for a word, then waits for the
    queue to drain so the submission is the next event processed. Returns the first
    accepting snapshot at or after the one produced by that submission.
    """

    cfg = config or AgentRunnerConfig()
    player = player or make_player_context(player_id=agent.name)

    before = await session.hub.wait_for(_is_accepting, timeout=cfg.wait_timeout_s)
    word = await decide_word_via_llm(agent=agent, snapshot=before, player=player, max_attempts=cfg.max_pick_attempts)

    # Other callers may have queued events while the agent was thinking.
    current = await _drained_accepting(session, timeout=cfg.wait_timeout_s)

    # The agent may have been slow; bail out if the puzzle moved on meanwhile.
    if current.context.instance != before.context.instance:
        logger.info("agent %s: puzzle advanced while thinking, dropping %r", agent.name, word)
        return current

    # Subscribe before submitting so the resolution snapshot cannot be missed.
    queue = session.hub.subscribe()
    try:
        session.submit(SubmitWord(word=word))
        after = await _next_accepting(queue, newer_than=current.version, timeout=cfg.wait_timeout_s)
    finally:
        session.hub.unsubscribe(queue)

    logger.info(
        "agent %s played %r -> %s (%s), tally=%s",
        agent.name,
        word,
        after.context.feedback.kind.value,
        after.context.feedback.text,
        after.context.tally,
    )
    return after


async def _drained_accepting(session: GameSession, *, timeout: float) -> Snapshot:
    """Wait until nothing is queued and no validation is outstanding."""

    async with asyncio.timeout(timeout):
        while True:
            await session.join()
            snapshot = session.snapshot
            if session.idle:
                return snapshot
            await session.hub.wait_for(lambda s: s.version > snapshot.version)


async def _next_accepting(queue: asyncio.Queue[Snapshot], *, newer_than: int, timeout: float) -> Snapshot:
    async with asyncio.timeout(timeout):
        while True:
            snapshot = await queue.get()
            if snapshot.version > newer_than and _is_accepting(snapshot):
                return snapshot


async def run_agent(
    *,
    session: GameSession,
    agent: Agent,
    config: AgentRunnerConfig | None = None,
) -> Snapshot:
    """Play up to `config.max_words` words and return the final snapshot."""

    cfg = config or AgentRunnerConfig()
    player = make_player_context(player_id=agent.name)

    snapshot = session.snapshot
    for _ in range(cfg.max_words):
        snapshot = await run_agent_turn(session=session, agent=agent, config=cfg, player=player)
    return snapshot
