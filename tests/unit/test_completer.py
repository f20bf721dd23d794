"""Tests for the text/vision completion router."""

import base64
from unittest.mock import MagicMock

import pytest

from restock_parser.completion.client_base import BaseCompletionClient
from restock_parser.completion.completer import (
    Completer,
    CompletionKind,
    CompletionResult,
    to_data_url,
)
from restock_parser.completion.exceptions import CompletionError, CompletionNetworkError

_IMAGE_URL = "data:image/png;base64,AAAA"


def _make_completer(client: MagicMock, temperature: float = 0.1) -> Completer:
    return Completer(
        client=client,
        text_model="text-model",
        vision_model="vision-model",
        temperature=temperature,
        vision_max_tokens=4096,
    )


@pytest.fixture()
def client() -> MagicMock:
    mock = MagicMock(spec=BaseCompletionClient)
    mock.create_chat_completion.return_value = '{"items": []}'
    return mock


class TestToDataUrl:
    def test_encodes_pdf(self) -> None:
        url = to_data_url(b"%PDF-1.4", "application/pdf")
        assert url == "data:application/pdf;base64," + base64.b64encode(b"%PDF-1.4").decode()

    def test_encodes_image(self) -> None:
        assert to_data_url(b"", "image/png") == "data:image/png;base64,"


class TestCompletionResult:
    def test_success(self) -> None:
        result = CompletionResult.success("{}")
        assert result.ok is True
        assert result.content == "{}"
        assert result.error == ""

    def test_failure(self) -> None:
        result = CompletionResult.failure("boom")
        assert result.ok is False
        assert result.content == ""
        assert result.error == "boom"


class TestCompleterText:
    def test_returns_content(self, client: MagicMock) -> None:
        result = _make_completer(client).complete("prompt", CompletionKind.TEXT)
        assert result == CompletionResult.success('{"items": []}')

    def test_sends_single_user_message_to_text_model(self, client: MagicMock) -> None:
        _make_completer(client).complete("prompt", CompletionKind.TEXT)
        client.create_chat_completion.assert_called_once_with(
            model="text-model",
            temperature=0.1,
            messages=[{"role": "user", "content": "prompt"}],
            max_tokens=None,
        )

    @pytest.mark.parametrize(("configured", "sent"), [(-0.5, 0.0), (1.7, 1.0), (0.3, 0.3)])
    def test_temperature_is_clamped(
        self, client: MagicMock, configured: float, sent: float
    ) -> None:
        _make_completer(client, temperature=configured).complete("p", CompletionKind.TEXT)
        assert client.create_chat_completion.call_args.kwargs["temperature"] == sent


class TestCompleterVision:
    def test_sends_image_and_prompt_to_vision_model(self, client: MagicMock) -> None:
        _make_completer(client).complete("prompt", CompletionKind.VISION, _IMAGE_URL)
        client.create_chat_completion.assert_called_once_with(
            model="vision-model",
            temperature=0.1,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "image_url", "image_url": {"url": _IMAGE_URL}},
                        {"type": "text", "text": "prompt"},
                    ],
                }
            ],
            max_tokens=4096,
        )

    @pytest.mark.parametrize("image_url", [None, ""])
    def test_requires_image(self, client: MagicMock, image_url: str | None) -> None:
        result = _make_completer(client).complete("prompt", CompletionKind.VISION, image_url)
        assert result.ok is False
        assert result.error == "Vision completion requires an image"
        client.create_chat_completion.assert_not_called()


class TestCompleterFailures:
    def test_network_error_becomes_failure(self, client: MagicMock) -> None:
        client.create_chat_completion.side_effect = CompletionNetworkError(
            "Completion provider unreachable"
        )
        result = _make_completer(client).complete("prompt", CompletionKind.TEXT)
        assert result == CompletionResult.failure("Completion provider unreachable")

    def test_completion_error_becomes_failure(self, client: MagicMock) -> None:
        client.create_chat_completion.side_effect = CompletionError("Empty response from completion provider")
        result = _make_completer(client).complete("prompt", CompletionKind.VISION, _IMAGE_URL)
        assert result.ok is False
        assert result.error == "Empty response from completion provider"

    def test_unexpected_error_becomes_generic_failure(self, client: MagicMock) -> None:
        client.create_chat_completion.side_effect = RuntimeError("secret detail")
        result = _make_completer(client).complete("prompt", CompletionKind.TEXT)
        assert result == CompletionResult.failure("Completion request failed")

    @pytest.mark.parametrize("content", ["", "  \n "])
    def test_blank_content_is_failure(self, client: MagicMock, content: str) -> None:
        client.create_chat_completion.return_value = content
        result = _make_completer(client).complete("prompt", CompletionKind.TEXT)
        assert result == CompletionResult.failure("Empty response from completion provider")
