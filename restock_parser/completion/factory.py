from typing import ClassVar

from restock_parser.completion.client_base import BaseCompletionClient
from restock_parser.completion.completer import Completer
from restock_parser.completion.example_client_adapter import ExampleClientAdapter
from restock_parser.completion.openai_client_adapter import OpenAIClientAdapter
from restock_parser.config.settings import Settings


class CompletionClientFactory:
    """Creates the configured completion provider and wraps it in a Completer."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "groq": "https://api.groq.com/openai/v1",
        "openrouter": "https://openrouter.ai/api/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> Completer:
        """Create a Completer from application settings."""
        return Completer(
            client=cls.create_client(settings),
            text_model=settings.completion_text_model,
            vision_model=settings.completion_vision_model,
            temperature=settings.completion_temperature,
            vision_max_tokens=settings.completion_vision_max_tokens,
        )

    @classmethod
    def create_client(cls, settings: Settings) -> BaseCompletionClient:
        provider = settings.completion_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        base_url = cls._resolve_base_url(provider, settings)
        return OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=settings.completion_timeout_seconds,
            base_url=base_url,
            max_retries=settings.completion_max_retries,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for "
                    "completion_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown completion provider '{provider}'. Choose from: {supported}"
        )

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.openai_api_key,
            "openai_compatible": settings.openai_compatible_api_key,
            "groq": settings.groq_api_key,
            "openrouter": settings.openrouter_api_key,
            "together": settings.together_api_key,
            "deepseek": settings.deepseek_api_key,
            "ollama": settings.ollama_api_key,
        }
        return key_map.get(provider, "")
