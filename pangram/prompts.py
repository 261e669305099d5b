from __future__ import annotations

from pathlib import Path


# Shared game rules, then the per-player instructions layered on top.
BASE_PLAYER_PROMPT = "base_player.txt"
WORD_PLAYER_PROMPT = "word_player.txt"


class PromptLoadError(RuntimeError):
    pass


def prompts_dir() -> Path:
    # pangram/prompts.py -> repo root -> prompts/
    return Path(__file__).resolve().parents[1] / "prompts"


def load_prompt(name: str) -> str:
    """Read one of the agent prompt files (`BASE_PLAYER_PROMPT`, `WORD_PLAYER_PROMPT`).

    Text is stripped and given a single trailing newline so layers join cleanly.
    """

    path = prompts_dir() / name
    try:
        return path.read_text(encoding="utf-8").strip() + "\n"
    except FileNotFoundError as e:
        raise PromptLoadError(f"Prompt not found: {path}") from e
