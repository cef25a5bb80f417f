"""
Knucklebones - Application Settings

Loads configuration from environment variables using Pydantic Settings.
Supabase credentials are optional: local and vs-AI play never touch the
network, and the unlock ledger falls back to an in-memory store.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Gameplay
    ai_think_delay: float = Field(default=1.0, ge=0.0)

    # Realtime / persistence
    realtime_channel_prefix: str = "knucklebones"
    preferences_table: str = "preferences"
    unlock_key: str = "max_unlocked_difficulty"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def has_supabase(self) -> bool:
        """Whether both Supabase credentials are configured."""
        return bool(self.supabase_url and self.supabase_anon_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()
