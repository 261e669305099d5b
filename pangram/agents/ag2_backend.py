from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from autogen import ConversableAgent

from pangram.agents.autogen_config import llm_config_from_env
from pangram.agents.base import AgentAction
from pangram.agents.context import RenderedContext
from pangram.agents.json_schema import JsonSchema


def _extract_last_content(messages: object) -> str:
    """Extract the last non-empty message content from AG2 chat history."""

    if not isinstance(messages, list):
        return ""

    for msg in reversed(messages):
        if isinstance(msg, dict):
            content = msg.get("content")
            if isinstance(content, str) and content.strip():
                return content.strip()
    return ""


@dataclass(slots=True)
class Ag2ChatAgent:
    """Word-proposing agent backed by AG2 (`autogen`).

    The rendered context becomes the system message; each proposal is a single-turn run.
    Model/transport come from OPENAI_MODEL, OPENAI_API_KEY and OPENAI_BASE_URL.
    """

    name: str
    model: str

    async def propose_action(
        self,
        *,
        prompt: str,
        ctx: RenderedContext,
        structured_output: JsonSchema | None = None,
    ) -> AgentAction:
        llm_config = llm_config_from_env(default_model=self.model)

        agent = ConversableAgent(
            name=self.name,
            system_message=ctx.system_prompt,
            llm_config=llm_config,
            human_input_mode="NEVER",
        )

        extra: dict[str, Any] = {}
        if structured_output is not None:
            extra["response_format"] = structured_output.response_format()

        result = agent.run(message=prompt, max_turns=1, **extra)
        result.process()

        text = _extract_last_content(list(result.messages))
        if not text and isinstance(result.summary, str):
            text = result.summary.strip()

        metadata: dict[str, Any] = {"model": self.model}
        if structured_output is not None:
            metadata["structured"] = True
        return AgentAction(kind="word", content=text, metadata=metadata)
