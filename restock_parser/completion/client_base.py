from abc import ABC, abstractmethod


class BaseCompletionClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        messages: list[dict[str, object]],
        max_tokens: int | None = None,
    ) -> str:
        """Return the provider's JSON-object reply as plain text.

        Raises:
            CompletionNetworkError: on transport or provider API failures.
            CompletionError: when the provider answers without content.
        """
