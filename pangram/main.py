from __future__ import annotations

import argparse
import asyncio
import logging
from dataclasses import replace

from dotenv import load_dotenv

from pangram.agent_runner import AgentRunnerConfig, run_agent
from pangram.agents.factory import create_default_agent
from pangram.config import GameSettings, settings_from_env
from pangram.core.ports import Dictionary
from pangram.dictionary import HttpDictionary, WordListDictionary
from pangram.game_loop import GameSession
from pangram.mechanics import DefaultValidationPort, PuzzleCatalog, SpellingBeeScoring


logger = logging.getLogger(__name__)


def build_dictionary(settings: GameSettings) -> Dictionary:
    if settings.word_list_path is not None:
        return WordListDictionary.from_file(settings.word_list_path)
    return HttpDictionary(base_url=settings.dictionary_url, timeout_s=settings.dictionary_timeout_s)


def build_session(settings: GameSettings, *, dictionary: Dictionary | None = None) -> GameSession:
    return GameSession(
        port=DefaultValidationPort(dictionary=dictionary or build_dictionary(settings)),
        scoring=SpellingBeeScoring(),
        puzzles=PuzzleCatalog.default(),
        puzzle_index=settings.start_puzzle_index,
    )


async def play(*, settings: GameSettings, words: int) -> None:
    dictionary = build_dictionary(settings)
    session = build_session(settings, dictionary=dictionary)
    session.hub.add_listener(
        lambda s: logger.debug("snapshot v%s phase=%s input=%r", s.version, s.phase.value, s.context.pending_input)
    )

    await session.start()
    try:
        agent = create_default_agent(name="pangram-agent")
        final = await run_agent(session=session, agent=agent, config=AgentRunnerConfig(max_words=words))
    finally:
        await session.stop()
        if isinstance(dictionary, HttpDictionary):
            await dictionary.aclose()

    ctx = final.context
    logger.info("final score=%s words=%s", ctx.tally, ", ".join(ctx.accepted_words) or "(none)")


def main() -> None:
    parser = argparse.ArgumentParser(description="Let an LLM agent play a pangram puzzle.")
    parser.add_argument("--words", type=int, default=10, help="Number of words the agent submits")
    parser.add_argument("--puzzle", type=int, default=None, help="Catalog index to start from")
    args = parser.parse_args()

    load_dotenv()
    settings = settings_from_env()
    if args.puzzle is not None:
        settings = replace(settings, start_puzzle_index=args.puzzle)

    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(play(settings=settings, words=args.words))


if __name__ == "__main__":
    main()
