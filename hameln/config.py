"""Runtime configuration.

Settings are read from ``HAMELN_*`` environment variables or a ``.env``
file in the working directory. ``get_settings()`` returns one shared
instance; tests construct ``Settings`` directly instead.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic_settings import BaseSettings

# Some pages return a reduced layout to clients without a browser UA.
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings."""

    # Fetching
    novel_url_template: str = "http://syosetu.org/?mode=ss_view_all&nid={nid}"
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = 30.0
    max_retries: int = 3
    retry_backoff: float = 1.0

    # Output
    output_dir: str = "."
    language: str = "ja"

    log_level: str = "INFO"

    class Config:
        env_prefix = "HAMELN_"
        env_file = ".env"
        case_sensitive = False


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the CLI and the HTTP app."""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
