from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class BaseAgentContext:
    """Global instructions shared by every agent player (game rules)."""

    system_prompt: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class PlayerContext:
    """Per-agent persona and play-style instructions."""

    player_id: str
    display_name: str
    prompt: str = ""


@dataclass(frozen=True, slots=True)
class RenderedContext:
    """Final, merged context passed into the LLM agent."""

    system_prompt: str

    def as_messages(self) -> list[dict[str, str]]:
        return [{"role": "system", "content": self.system_prompt}]


def compose_context(*, base: BaseAgentContext, player: PlayerContext, board: str = "") -> RenderedContext:
    parts: list[str] = []
    parts.append(base.system_prompt.strip())

    parts.append(
        "\n".join(
            [
                "PLAYER CONTEXT:",
                f"- player_id: {player.player_id}",
                f"- display_name: {player.display_name}",
                "- player_prompt:",
                player.prompt.strip(),
            ]
        ).strip()
    )

    if board.strip():
        parts.append(board.strip())

    system_prompt = "\n\n".join([p for p in parts if p.strip()]).strip()
    return RenderedContext(system_prompt=system_prompt)
