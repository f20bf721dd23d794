"""Offline completion client.

Use this module as a reference when implementing new provider adapters.
Implement BaseCompletionClient and register the provider in
CompletionClientFactory.
"""

import json
from typing import ClassVar

from restock_parser.completion.client_base import BaseCompletionClient


class ExampleClientAdapter(BaseCompletionClient):
    """Returns a fixed item list without any network call.

    Useful for local development and for exercising the pipeline end to end.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "items": [
            {"supplier": "Example Supplier", "product": "Example Product", "quantity": 1},
        ],
    }

    def __init__(self, response: dict[str, object] | None = None) -> None:
        self._response = response if response is not None else self.DEFAULT_RESPONSE

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        messages: list[dict[str, object]],
        max_tokens: int | None = None,
    ) -> str:
        _ = model, temperature, messages, max_tokens
        return json.dumps(self._response)
