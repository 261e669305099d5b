from __future__ import annotations

import json
from dataclasses import dataclass

from pangram.agents.base import Agent
from pangram.agents.context import RenderedContext
from pangram.agents.json_schema import JsonSchema
from pangram.models import PuzzleContext


@dataclass(frozen=True, slots=True)
class PickedWord:
    word: str


class WordPickError(RuntimeError):
    pass


def parse_picked_word(text: str) -> PickedWord:
    """Parse the model output for a word pick.

    Expected strict JSON object: {"word": "<word>"}. Non-JSON output is rejected.
    """

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise WordPickError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise WordPickError("Expected a JSON object")

    word = data.get("word")
    if not isinstance(word, str) or not word.strip():
        raise WordPickError("Missing/invalid 'word' field")

    word = word.strip()
    if not word.isalpha():
        raise WordPickError("Word must contain letters only")

    return PickedWord(word=word.lower())


_PICK_SCHEMA = JsonSchema(
    name="pick_word",
    schema={
        "type": "object",
        "additionalProperties": False,
        "properties": {"word": {"type": "string"}},
        "required": ["word"],
    },
    strict=True,
)


def _pick_prompt(context: PuzzleContext) -> str:
    letters = ", ".join(sorted(context.letters))
    found = ", ".join(context.accepted_words) or "(none yet)"
    return (
        "Propose ONE new English word for this puzzle.\n"
        f"Allowed letters: {letters}\n"
        f"Required letter: {context.required_symbol}\n"
        f"Already found (do not repeat): {found}\n\n"
        'Return ONLY JSON matching the required schema, e.g. {"word": "example"}. No explanation.\n'
    )


async def pick_word_with_agent(
    *,
    agent: Agent,
    ctx: RenderedContext,
    context: PuzzleContext,
    max_attempts: int = 3,
) -> PickedWord:
    """Ask an agent for the next word to submit.

    Only the response shape is enforced here; whether the word scores is up to the engine.
    """

    prompt = _pick_prompt(context)

    last_err: Exception | None = None
    for _ in range(max_attempts):
        propose = getattr(agent, "propose_action")
        try:
            action = await propose(prompt=prompt, ctx=ctx, structured_output=_PICK_SCHEMA)
        except TypeError:
            action = await propose(prompt=prompt, ctx=ctx)

        try:
            picked = parse_picked_word(action.content)
        except WordPickError as e:
            last_err = e
            continue

        if picked.word in context.accepted_words:
            last_err = WordPickError(f"'{picked.word}' was already found")
            continue

        return picked

    raise WordPickError(f"Failed to pick a valid word after {max_attempts} attempts: {last_err}")
