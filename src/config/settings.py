"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# pydantic-settings reads configuration from two sources, in priority
# order:
#
#   1. Environment variables -- e.g. ANTHROPIC_API_KEY=sk-ant-...
#   2. .env file in the working directory (local development)
#
# Field ``openai_api_key`` maps to env var ``OPENAI_API_KEY``.  Defaults
# apply when neither source sets a value.
#
# The instance is frozen: it is built once at startup and handed to each
# provider constructor.  Nothing reads os.environ after that point.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

# Provider names accepted by AI_PROVIDER, in display order.
PROVIDER_NAMES: tuple[str, ...] = ("openai", "azure", "google", "anthropic", "ollama", "demo")


class Settings(BaseSettings):
    """Document Insights application settings.

    Environment variables override defaults.  Loaded from .env when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # === AI provider selection ===
    # One of PROVIDER_NAMES.  "demo" needs no credentials and makes no calls.
    ai_provider: str = "demo"
    ai_max_tokens: int = 2000
    ai_temperature: float = 0.7
    # Seconds allowed for a single provider call, connect + read.
    ai_timeout: float = 60.0

    # === OpenAI ===
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = ""  # OpenAI-compatible gateways

    # === Azure OpenAI ===
    azure_openai_endpoint: str = ""
    azure_openai_api_key: str = ""
    azure_openai_deployment: str = "gpt-35-turbo"
    azure_openai_api_version: str = "2024-02-15-preview"

    # === Google Gemini ===
    google_gemini_api_key: str = ""
    google_gemini_model: str = "gemini-pro"
    google_gemini_base_url: str = "https://generativelanguage.googleapis.com"

    # === Anthropic ===
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-3-sonnet-20240229"

    # === Ollama (local) ===
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama2"

    # === Confluence ===
    # Default credentials; a request may supply its own email/token pair.
    confluence_email: str = ""
    confluence_api_token: str = ""
    confluence_timeout: float = 30.0

    # === Uploads / extraction ===
    upload_max_size: int = 100 * 1024 * 1024
    libreoffice_timeout: float = 60.0

    # === Storage ===
    document_db_path: str = "data/documents.db"

    # === App config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    app_env: str = "development"
    log_level: str = "INFO"
    frontend_url: str = "http://localhost:3000"

    def get_available_providers(self) -> list[str]:
        """Return provider names whose mandatory settings are all present.

        ``demo`` is always listed.
        """
        providers: list[str] = []
        if self.openai_api_key:
            providers.append("openai")
        if self.azure_openai_endpoint and self.azure_openai_api_key:
            providers.append("azure")
        if self.google_gemini_api_key:
            providers.append("google")
        if self.anthropic_api_key:
            providers.append("anthropic")
        if self.ollama_base_url:
            providers.append("ollama")
        providers.append("demo")
        return providers
