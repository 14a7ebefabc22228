"""
Configuration Management
========================

Crawler settings read from the environment (and a local .env file).
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError
from .logger import configure_logging

DEFAULT_MAX_PRODUCTS = 10


def _parse_int(value: Optional[str], default: int) -> int:
    if value is None or value.strip() == '':
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Expected an integer, got {value!r}")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for one crawl."""

    # Datastore
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None

    # Crawl
    max_products: int = DEFAULT_MAX_PRODUCTS
    headless: bool = True
    crawl_mode: Optional[str] = None
    search_keyword: str = ''
    category: str = 'all'

    # Diagnostics
    screenshot_dir: str = 'screenshots'
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """Build settings from environment variables."""
        env = os.environ if environ is None else environ

        return cls(
            supabase_url=env.get('SUPABASE_URL') or env.get('NEXT_PUBLIC_SUPABASE_URL'),
            supabase_key=env.get('SUPABASE_SERVICE_ROLE_KEY'),
            max_products=_parse_int(env.get('MAX_PRODUCTS'), DEFAULT_MAX_PRODUCTS),
            # Only an explicit "false" turns headless off
            headless=env.get('HEADLESS', 'true').lower() != 'false',
            crawl_mode=env.get('CRAWL_MODE') or None,
            search_keyword=env.get('SEARCH_KEYWORD', '').strip(),
            category=env.get('CATEGORY') or 'all',
            screenshot_dir=env.get('SCREENSHOT_DIR') or 'screenshots',
            log_level=env.get('LOG_LEVEL') or 'INFO',
        )

    def require_datastore(self) -> None:
        """Raise if the datastore URL or service credential is missing."""
        missing = []
        if not self.supabase_url:
            missing.append('SUPABASE_URL')
        if not self.supabase_key:
            missing.append('SUPABASE_SERVICE_ROLE_KEY')
        if missing:
            raise ConfigError(f"Supabase environment variables not set: {', '.join(missing)}")
        if self.max_products < 1:
            raise ConfigError(f"MAX_PRODUCTS must be positive, got {self.max_products}")

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary (credentials masked)."""
        return {
            'supabase_url': self.supabase_url,
            'supabase_key': '***' if self.supabase_key else None,
            'max_products': self.max_products,
            'headless': self.headless,
            'crawl_mode': self.crawl_mode,
            'search_keyword': self.search_keyword,
            'category': self.category,
            'screenshot_dir': self.screenshot_dir,
            'log_level': self.log_level,
        }


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Load .env (if present), read settings from the environment and apply
    the log level.

    Raises:
        ConfigError: on an invalid MAX_PRODUCTS or LOG_LEVEL
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return settings
