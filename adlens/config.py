"""ADLENS — Central Configuration via Pydantic Settings."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── Google Ads store ──
    google_supabase_url: str = ""
    google_supabase_key: str = ""
    google_table: str = "Gallant_dadosDiarios"
    google_insights_table: str = "Gallant_insights"

    # ── Meta Ads store ──
    meta_supabase_url: str = ""
    meta_supabase_key: str = ""
    meta_service_key: Optional[str] = None  # Preferred over the anon key
    meta_table: str = "facebook-ads"
    meta_insights_table: str = ""  # Empty = no Meta insights

    # ── Fetching ──
    page_size: int = 1000
    request_timeout: Optional[float] = None  # None = wait indefinitely

    # ── AI Provider ──
    anthropic_api_key: Optional[str] = None
    ai_model: str = "claude-sonnet-4-20250514"

    # ── App ──
    log_level: str = "INFO"
    dashboard_language: str = "pt-BR"  # pt-BR | en

    @property
    def meta_effective_key(self) -> str:
        """Return the service-role key if set, otherwise the anon key."""
        return self.meta_service_key or self.meta_supabase_key

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
