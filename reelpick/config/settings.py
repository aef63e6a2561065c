"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# pydantic-settings reads each field from, in priority order:
#
#   1. **Environment variables** — e.g., OPENAI_API_KEY=sk-abc123
#   2. **.env file** — key=value lines in the project root .env file
#   3. The default declared below
#
# Field ``openai_api_key`` maps to ``OPENAI_API_KEY`` automatically.  A
# few fields also accept a legacy variable name through ``AliasChoices``
# (``OPENAIKEY``, ``CLAUDE_API_KEY``, ``PORT``).  ``populate_by_name``
# keeps ``Settings(openai_api_key=...)`` working in tests.
#
# Settings are read once in main.py and injected into the providers and
# services; nothing else instantiates this class.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """reelpick application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    # === LLM Providers ===
    # Empty string = "not configured": the provider answers every request
    # with an UNAUTHORIZED error instead of calling the backend.
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("OPENAI_API_KEY", "OPENAIKEY", "openai_api_key"),
    )
    openai_base_url: str = ""  # OpenAI-compatible endpoint (TogetherAI, Groq, ...)
    openai_model: str = "gpt-4o-2024-11-20"
    anthropic_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("ANTHROPIC_API_KEY", "CLAUDE_API_KEY", "anthropic_api_key"),
    )
    anthropic_model: str = "claude-3-5-sonnet-20241022"

    recommendation_max_tokens: int = Field(default=350, gt=0)
    llm_timeout_seconds: float = Field(default=30.0, gt=0)

    # === Provider selector vocabulary ===
    # The words a client sends in the "provider" field of a request.
    openai_selector: str = "openai"
    anthropic_selector: str = "claude"
    all_providers_selector: str = "both"
    default_provider: str = "openai"

    # === Web Search Enrichment ===
    search_enabled: bool = True
    search_timeout_seconds: float = Field(default=5.0, gt=0)
    search_query_suffix: str = "movie cast director plot summary reviews"

    # === App Config ===
    static_dir: str = "public"
    app_host: str = "0.0.0.0"
    app_port: int = Field(
        default=3000,
        validation_alias=AliasChoices("PORT", "APP_PORT", "app_port"),
    )
    app_env: str = "development"
    log_level: str = "INFO"

    def get_available_llm_providers(self) -> list[str]:
        """Return the selectors of LLM providers that have an API key configured."""
        providers: list[str] = []
        if self.openai_api_key:
            providers.append(self.openai_selector)
        if self.anthropic_api_key:
            providers.append(self.anthropic_selector)
        return providers
