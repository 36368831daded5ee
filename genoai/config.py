"""
Configuration system for GenoAI.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

import logging
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AnalysisServiceConfig(BaseModel):
    """Remote analysis service (Gemini generateContent API)."""
    api_key: Optional[SecretStr] = None
    model: str = "gemini-2.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout: float = 60.0  # seconds


class ScanConfig(BaseModel):
    """Guide RNA scan parameters."""
    guide_length: int = 20
    pam_motif: str = "GG"  # the "GG" of NGG


class GenoAIConfig(BaseSettings):
    """Main configuration for GenoAI."""

    model_config = SettingsConfigDict(
        env_prefix="GENOAI_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Sub-configs
    analysis: AnalysisServiceConfig = Field(default_factory=AnalysisServiceConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    rate_limit_per_minute: int = 60

    @property
    def analysis_enabled(self) -> bool:
        """True when an API key for the analysis service is configured."""
        return self.analysis.api_key is not None and bool(self.analysis.api_key.get_secret_value())


@lru_cache()
def get_config() -> GenoAIConfig:
    """Get cached configuration singleton."""
    return GenoAIConfig()


def configure_logging(config: GenoAIConfig) -> None:
    """Set up root logging from the configured level and optional log file."""
    handlers = [logging.StreamHandler()]
    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.log_file))

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
