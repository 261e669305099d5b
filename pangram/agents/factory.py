from __future__ import annotations

import os
from typing import cast

from pangram.agents.base import Agent


def create_default_agent(*, name: str) -> Agent:
    """Create the default LLM-backed word player (AG2, model from env)."""

    from pangram.agents.ag2_backend import Ag2ChatAgent

    model = os.environ.get("OPENAI_MODEL", "gpt-4o-mini")
    return cast(Agent, Ag2ChatAgent(name=name, model=model))
