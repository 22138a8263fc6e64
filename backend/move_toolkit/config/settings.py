from __future__ import annotations

"""backend/move_toolkit/config/settings.py

Toolkit configuration using environment-driven settings.

This module centralizes:
- the path to the aptos CLI binary and its default network
- per-invocation timeout for CLI actions
- extra pattern rows appended to the built-in diagnostic pattern table
- CORS configuration for the local HTTP surface

Settings are frozen: components receive a Settings value at construction
time and never mutate it. Only the HTTP app wiring calls get_settings().
"""
from functools import lru_cache
from typing import Any, Dict, List

from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from move_toolkit.models import Network


class Settings(BaseSettings):
  app_name: str = "move-toolkit"
  environment: str = "development"

  # aptos CLI
  aptos_path: str = "aptos"
  default_network: Network = Network.DEVNET
  output_format: str = "json"
  profile: str = "default"

  # Per-action runtime default (seconds)
  timeout_seconds: float = 30.0

  # Diagnostics
  diagnostic_source: str = "move_compiler"
  extra_patterns: List[Dict[str, Any]] = []

  # Notifications kept in memory for the editor to poll
  notification_history: int = 50

  # CORS
  allowed_origins: List[AnyHttpUrl] = [
      "http://localhost:3000",
      "http://127.0.0.1:3000",
  ]

  model_config = SettingsConfigDict(
      env_prefix="MOVE_TOOLKIT_",
      env_file=".env",
      env_file_encoding="utf-8",
      frozen=True,
  )

  @field_validator("timeout_seconds")
  @classmethod
  def _positive_timeout(cls, value: float) -> float:
    if value <= 0:
      raise ValueError("timeout_seconds must be positive")
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Return a cached Settings instance."""
  return Settings()
