from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    initial_capital: float = Field(default=10000.0, description="Starting capital for the equity curve")

    journal_base_url: str = Field(default="http://localhost:5000", description="Journal server base URL")
    journal_session_cookie: str = Field(default="", description="Session cookie forwarded to the journal server")
    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
    max_retries: int = Field(default=3, description="Maximum retry attempts")
    retry_delay: float = Field(default=1.0, description="Base retry delay in seconds")

    ruin_fraction: float = Field(default=1.0, description="Share of bankroll whose loss counts as ruin")
    ruin_simulations: int = Field(default=2000, description="Monte Carlo paths for risk of ruin")
    ruin_horizon: int = Field(default=500, description="Trades simulated per Monte Carlo path")
    ruin_seed: int = Field(default=42, description="Monte Carlo random seed")
    projection_trades: int = Field(default=100, description="Trades ahead covered by the equity projection")

    confluences_for: Optional[list[str]] = Field(
        default=["Strong trend", "Tested support", "High volume", "Clear pattern", "Key level"],
        description="Catalog of supporting confluences; null derives it from trades",
    )
    confluences_against: Optional[list[str]] = Field(
        default=["Upcoming news", "Weak pattern", "Counter trend", "Low liquidity", "Bad session"],
        description="Catalog of opposing confluences; null derives it from trades",
    )
    emotions: Optional[list[str]] = Field(
        default=["Neutral", "FOMO", "Anger", "Revenge", "Hope", "Confident",
                 "Impatient", "Fear", "Sure", "Stress"],
        description="Catalog of emotion labels; null derives it from trades",
    )

    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str = Field(default="logs/tradebook.log", description="Log file path")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8",
                    "env_prefix": "TRADEBOOK_", "extra": "ignore"}


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    global _settings
    _settings = Settings()
    return _settings
