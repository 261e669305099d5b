from __future__ import annotations

from pangram.agents.context import BaseAgentContext, PlayerContext, RenderedContext, compose_context
from pangram.models import Snapshot
from pangram.prompts import BASE_PLAYER_PROMPT, WORD_PLAYER_PROMPT, load_prompt


def make_base_player_context(*, system_prefix: str = "") -> BaseAgentContext:
    """Construct the base shared context for agent players.

    The shared context includes the game rules from prompts/base_player.txt.
    You can optionally prepend extra system-level instructions via system_prefix.
    """

    base_rules = load_prompt(BASE_PLAYER_PROMPT)
    parts: list[str] = []
    if system_prefix.strip():
        parts.append(system_prefix.strip())
    parts.append(base_rules.strip())

    return BaseAgentContext(system_prompt="\n\n".join(parts).strip())


def make_player_context(*, player_id: str, display_name: str | None = None) -> PlayerContext:
    return PlayerContext(
        player_id=player_id,
        display_name=display_name or player_id,
        prompt=load_prompt(WORD_PLAYER_PROMPT),
    )


def board_context(snapshot: Snapshot) -> str:
    """Render what the player can see: letters, found words, score and last feedback."""

    ctx = snapshot.context
    others = sorted(s for s in ctx.letters if s != ctx.required_symbol)
    found = "\n".join(f"- {w}" for w in ctx.accepted_words) or "(no words found yet)"

    lines = [
        "BOARD:",
        f"- puzzle: #{ctx.puzzle_index + 1}",
        f"- required letter: {ctx.required_symbol}",
        f"- other letters: {' '.join(others)}",
        f"- score: {ctx.tally}",
    ]
    if ctx.feedback.text:
        lines.append(f"- last feedback ({ctx.feedback.kind.value}): {ctx.feedback.text}")

    return "\n".join([*lines, "", "FOUND WORDS:", found]).strip()


def render_agent_context(*, snapshot: Snapshot, player: PlayerContext) -> RenderedContext:
    return compose_context(base=make_base_player_context(), player=player, board=board_context(snapshot))
