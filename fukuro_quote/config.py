"""
Application configuration using Pydantic Settings.
All environment-specific values are centralized here.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings

from fukuro_quote.models.schemas import RateSchedule


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "Fukuro Studio Quotes"
    debug: bool = True

    # ── LLM ──────────────────────────────────────────────
    groq_api_key: str = ""
    llm_model: str = "llama-3.3-70b-versatile"
    llm_temperature: float = 0.0
    llm_max_tokens: int = 1024
    llm_timeout_seconds: float = 30.0
    llm_max_retries: int = 2

    # ── Storage ──────────────────────────────────────────
    data_dir: str = "./data"

    # ── Studio ───────────────────────────────────────────
    studio_timezone: str = "America/Mexico_City"
    urgency_window_days: int = 3
    currency: str = "MXN"

    # ── Tariff (per minute unless noted) ─────────────────
    base_fee: float = 1200.0  # per project
    audio_tier1_rate: float = 2400.0
    audio_tier2_rate: float = 1200.0
    video_tier1_rate: float = 5000.0
    video_tier2_rate: float = 2500.0
    urgency_percent: float = 0.40

    # ── Dashboard ────────────────────────────────────────
    dashboard_token: str = ""  # empty = no check (development)

    # ── Logging ──────────────────────────────────────────
    log_level: str = "INFO"
    log_file: str = ""  # empty = console only

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def rate_schedule(self) -> RateSchedule:
        """Build the tariff injected into every quote calculation."""
        return RateSchedule(
            base_fee=self.base_fee,
            audio_tier1=self.audio_tier1_rate,
            audio_tier2=self.audio_tier2_rate,
            video_tier1=self.video_tier1_rate,
            video_tier2=self.video_tier2_rate,
            urgency_percent=self.urgency_percent,
            urgency_window_days=self.urgency_window_days,
        )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
