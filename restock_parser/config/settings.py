from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_document_bytes: int = 10 * 1024 * 1024
    max_images: int = 10

    pdf_engine: str = "pdfplumber"
    pdf_line_break_threshold: float = 5.0

    completion_provider: str = "groq"
    completion_text_model: str = "llama-3.1-70b-versatile"
    completion_vision_model: str = "meta-llama/llama-4-maverick-17b-128e-instruct"
    completion_temperature: float = 0.1
    completion_vision_max_tokens: int = 4096
    completion_timeout_seconds: int = 30
    completion_max_retries: int = 2

    groq_api_key: str = ""
    openai_api_key: str = ""
    openai_compatible_api_key: str = ""
    openai_compatible_base_url: str = ""
    openrouter_api_key: str = ""
    together_api_key: str = ""
    deepseek_api_key: str = ""
    ollama_api_key: str = "ollama"
