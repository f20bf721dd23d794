import httpx
import openai

from restock_parser.completion.client_base import BaseCompletionClient
from restock_parser.completion.exceptions import CompletionError, CompletionNetworkError


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion client built on the OpenAI-compatible chat API.

    Bounded retry with exponential back-off on connection errors, 429 and 5xx
    replies is delegated to the SDK through ``max_retries``.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        max_retries: int = 2,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=max_retries,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        messages: list[dict[str, object]],
        max_tokens: int | None = None,
    ) -> str:
        options: dict[str, object] = {}
        if max_tokens is not None:
            options["max_tokens"] = max_tokens
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={"type": "json_object"},
                messages=messages,  # type: ignore[arg-type]
                **options,  # type: ignore[arg-type]
            )
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise CompletionNetworkError("Completion provider timed out") from exc
        except (openai.APIConnectionError, httpx.ConnectError) as exc:
            raise CompletionNetworkError("Completion provider unreachable") from exc
        except openai.APIStatusError as exc:
            raise CompletionNetworkError(
                f"Completion provider returned HTTP {exc.status_code}"
            ) from exc
        except openai.APIError as exc:
            raise CompletionNetworkError("Completion provider API error") from exc

        if not response.choices:
            raise CompletionError("Completion provider returned no choices")
        content = response.choices[0].message.content
        if not content or not content.strip():
            raise CompletionError("Empty response from completion provider")
        return content
