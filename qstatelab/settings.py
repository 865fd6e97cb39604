# qstatelab/settings.py
from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Runtime settings for qstatelab.
    """

    # --- Backend ---
    BACKEND: str = "qiskit"  # "qiskit" | "stim"

    # --- Trials ---
    TRIALS: int = 1000
    SEED: int | None = None

    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="QSL_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
