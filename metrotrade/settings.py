"""
Environment-based configuration using pydantic-settings.

Environment variables (prefix: METROTRADE_):
    METROTRADE_STORAGE_BACKEND - none | memory | json | sql (default: none)
    METROTRADE_STORAGE_PATH    - JSON file used by the json backend
    METROTRADE_DATABASE_URL    - SQLAlchemy URL used by the sql backend
    METROTRADE_EPSILON         - Exploration rate of the learner (default: 0.1)
    METROTRADE_ALPHA           - Learning rate (default: 0.2)
    METROTRADE_GAMMA           - Discount factor (default: 0.9)
    METROTRADE_REWARD_SCALE    - Net-worth delta divisor (default: 50)
    METROTRADE_LOG_LEVEL       - Logging level (default: WARNING)
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from metrotrade.config import LearnerConfig


class MetroTradeSettings(BaseSettings):
    """Storage backend and learner hyper-parameters."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="METROTRADE_",
    )

    storage_backend: Literal["none", "memory", "json", "sql"] = Field(
        default="none",
        description="Where learned policy tables are kept.",
    )
    storage_path: str = Field(
        default="metrotrade_policy.json",
        description="File used by the json backend.",
    )
    database_url: str = Field(
        default="sqlite:///metrotrade.db",
        description="SQLAlchemy URL used by the sql backend.",
    )

    epsilon: float = Field(default=0.1, ge=0.0, le=1.0)
    alpha: float = Field(default=0.2, gt=0.0, le=1.0)
    gamma: float = Field(default=0.9, ge=0.0, le=1.0)
    reward_scale: float = Field(default=50.0, gt=0.0)

    log_level: str = Field(default="WARNING")

    @field_validator("storage_backend", mode="before")
    @classmethod
    def normalize_backend(cls, value):
        if isinstance(value, str):
            return value.strip().lower() or "none"
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    def learner_config(self) -> LearnerConfig:
        return LearnerConfig(
            epsilon=self.epsilon,
            alpha=self.alpha,
            gamma=self.gamma,
            reward_scale=self.reward_scale,
        )

    def configure_logging(self) -> None:
        logging.basicConfig(level=self.log_level)


@lru_cache
def get_settings() -> MetroTradeSettings:
    """Return cached settings instance."""
    return MetroTradeSettings()
