"""
Chat-completion capability and JSON repair for model output.

Prompt-building code depends only on the `CompletionClient` protocol:
`complete(system_prompt, user_prompt, options) -> str`. The bundled backing
talks to any OpenAI-compatible endpoint through the `openai` SDK (Groq by
default). Model replies are often wrapped in prose or markdown fences, so
`extract_json` tries several strategies before giving up.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import openai

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

JSON_ONLY_INSTRUCTION = (
    "IMPORTANT: You must respond with valid JSON only. "
    "Do not include any markdown formatting or explanations."
)


class CompletionError(RuntimeError):
    """Raised when a completion cannot be produced or parsed."""


@dataclass(frozen=True)
class CompletionOptions:
    temperature: float = 0.7
    max_tokens: int = 2048
    top_p: float = 0.95


class CompletionClient(Protocol):
    def complete(self, system_prompt: str, user_prompt: str, options: Optional[CompletionOptions] = None) -> str:
        ...


def _is_placeholder_key(key: str) -> bool:
    return "your" in key.lower()


class OpenAICompletionClient:
    """`CompletionClient` backed by the openai SDK."""

    def __init__(self, settings: Optional[Settings] = None, sdk_client: Any = None) -> None:
        settings = settings or get_settings()
        self.model = settings.LLM_MODEL
        if sdk_client is not None:
            self._client = sdk_client
            return

        key = settings.LLM_API_KEY
        if not key:
            raise CompletionError("LLM_API_KEY is not set")
        if _is_placeholder_key(key):
            raise CompletionError("LLM_API_KEY still holds a placeholder value")
        self._client = openai.OpenAI(api_key=key, base_url=settings.LLM_BASE_URL)

    def complete(self, system_prompt: str, user_prompt: str, options: Optional[CompletionOptions] = None) -> str:
        options = options or CompletionOptions()
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=options.temperature,
                max_tokens=options.max_tokens,
                top_p=options.top_p,
            )
        except openai.AuthenticationError as e:
            raise CompletionError("LLM API rejected the API key (401)") from e
        except openai.PermissionDeniedError as e:
            raise CompletionError(f"LLM API denied access to model {self.model} (403)") from e
        except openai.OpenAIError as e:
            logger.error("LLM completion failed: %s", e)
            raise CompletionError(f"Failed to get AI response: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise CompletionError("No response content from LLM API")
        return content


def extract_json(text: str) -> Any:
    """
    Extract JSON from a model reply.

    Strategies, in order: the whole text, ```json fences, any fence, then the
    first balanced array or object. Returns None if nothing parses.
    """
    if not text or not text.strip():
        return None

    for strategy in (_try_clean_json, _try_fenced, _try_find_json_bounds):
        result = strategy(text)
        if result is not None:
            return result
    return None


def _try_clean_json(text: str) -> Any:
    try:
        return json.loads(text.strip())
    except json.JSONDecodeError:
        return None


_FENCE_PATTERNS = (
    re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE),
    re.compile(r"```(?:\w*)\s*([\s\S]*?)\s*```"),
)


def _try_fenced(text: str) -> Any:
    for pattern in _FENCE_PATTERNS:
        for match in pattern.findall(text):
            try:
                return json.loads(match.strip())
            except json.JSONDecodeError:
                continue
    return None


def _try_find_json_bounds(text: str) -> Any:
    """Parse the first balanced array or object, whichever opens earlier."""
    starts = sorted(
        (text.find(open_char), open_char, close_char)
        for open_char, close_char in (("[", "]"), ("{", "}"))
        if open_char in text
    )
    for start, open_char, close_char in starts:
        chunk = _extract_balanced(text, start, open_char, close_char)
        if chunk:
            try:
                return json.loads(chunk)
            except json.JSONDecodeError:
                pass
    return None


def _extract_balanced(text: str, start: int, open_char: str, close_char: str) -> Optional[str]:
    """Slice from `start` to its matching close bracket, ignoring brackets in strings."""
    depth = 0
    in_string = False
    escape_next = False

    for i, char in enumerate(text[start:], start):
        if escape_next:
            escape_next = False
            continue
        if char == "\\" and in_string:
            escape_next = True
            continue
        if char == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def complete_json(
    client: CompletionClient,
    system_prompt: str,
    user_prompt: str,
    options: Optional[CompletionOptions] = None,
) -> Any:
    """Ask for a JSON-only reply and return it parsed."""
    options = options or CompletionOptions(temperature=0.3)
    text = client.complete(f"{system_prompt}\n\n{JSON_ONLY_INSTRUCTION}", user_prompt, options)
    result = extract_json(text)
    if result is None:
        logger.error("Failed to parse JSON response: %s", text[:200])
        raise CompletionError("AI response was not valid JSON")
    return result
