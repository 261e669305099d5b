from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from autogen import LLMConfig


@dataclass(frozen=True, slots=True)
class AgentLLMSettings:
    model: str
    base_url: str | None
    api_key: str | None
    temperature: float | None


def settings_from_env(*, default_model: str) -> AgentLLMSettings:
    temperature = os.environ.get("PANGRAM_AGENT_TEMPERATURE")
    return AgentLLMSettings(
        model=os.environ.get("OPENAI_MODEL", default_model),
        # For a local OpenAI-compatible server (e.g. Ollama: http://127.0.0.1:11434/v1)
        base_url=os.environ.get("OPENAI_BASE_URL"),
        api_key=os.environ.get("OPENAI_API_KEY"),
        temperature=float(temperature) if temperature else None,
    )


def llm_config_from_settings(s: AgentLLMSettings) -> LLMConfig:
    # Local servers ignore the key but the OpenAI client insists on one.
    api_key = s.api_key or ("ollama" if s.base_url else None)
    if not api_key:
        raise RuntimeError(
            "Set OPENAI_API_KEY for hosted OpenAI, or set OPENAI_BASE_URL for a local OpenAI-compatible server"
        )

    config: dict[str, Any] = {"model": s.model, "api_key": api_key}
    if s.base_url:
        config["base_url"] = s.base_url

    extra: dict[str, Any] = {}
    if s.temperature is not None:
        extra["temperature"] = s.temperature

    return LLMConfig(config_list=[config], **extra)


def llm_config_from_env(*, default_model: str) -> LLMConfig:
    return llm_config_from_settings(settings_from_env(default_model=default_model))
