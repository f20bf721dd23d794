"""Single entry point for text and vision completions.

``Completer.complete`` never raises: every provider failure is turned into a
``CompletionResult`` with ``ok=False`` and a short human-readable message.
"""

import base64
from dataclasses import dataclass
from enum import Enum

from restock_parser.completion.client_base import BaseCompletionClient
from restock_parser.completion.exceptions import CompletionError
from restock_parser.logging.logger import Log


class CompletionKind(str, Enum):
    TEXT = "text"
    VISION = "vision"


@dataclass(frozen=True)
class CompletionResult:
    ok: bool
    content: str = ""
    error: str = ""

    @classmethod
    def success(cls, content: str) -> "CompletionResult":
        return cls(ok=True, content=content)

    @classmethod
    def failure(cls, error: str) -> "CompletionResult":
        return cls(ok=False, error=error)


def to_data_url(content: bytes, media_type: str) -> str:
    """Encode document bytes as a base64 data URL for vision requests."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


class Completer:
    """Routes prompts to the text or vision model of one provider client."""

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        text_model: str,
        vision_model: str,
        temperature: float = 0.1,
        vision_max_tokens: int = 4096,
    ) -> None:
        self._client = client
        self._text_model = text_model
        self._vision_model = vision_model
        self._temperature = max(0.0, min(1.0, temperature))
        self._vision_max_tokens = vision_max_tokens

    def complete(
        self,
        prompt: str,
        kind: CompletionKind,
        image_data_url: str | None = None,
    ) -> CompletionResult:
        if kind is CompletionKind.VISION and not image_data_url:
            return CompletionResult.failure("Vision completion requires an image")

        try:
            content = self._client.create_chat_completion(
                model=self._text_model if kind is CompletionKind.TEXT else self._vision_model,
                temperature=self._temperature,
                messages=self._build_messages(prompt, kind, image_data_url),
                max_tokens=self._vision_max_tokens if kind is CompletionKind.VISION else None,
            )
        except CompletionError as exc:
            Log.warning(f"{kind.value} completion failed: {exc}")
            return CompletionResult.failure(str(exc) or "Completion request failed")
        except Exception as exc:
            Log.error(f"{kind.value} completion failed unexpectedly: {type(exc).__name__}")
            return CompletionResult.failure("Completion request failed")

        if not content or not content.strip():
            return CompletionResult.failure("Empty response from completion provider")
        Log.debug(f"{kind.value} completion raw reply:\n{content}")
        return CompletionResult.success(content)

    @staticmethod
    def _build_messages(
        prompt: str,
        kind: CompletionKind,
        image_data_url: str | None,
    ) -> list[dict[str, object]]:
        if kind is CompletionKind.TEXT:
            return [{"role": "user", "content": prompt}]
        return [
            {
                "role": "user",
                "content": [
                    {"type": "image_url", "image_url": {"url": image_data_url}},
                    {"type": "text", "text": prompt},
                ],
            }
        ]
