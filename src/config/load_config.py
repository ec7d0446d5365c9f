"""
Configuration loading utilities
"""

import json
import logging
from pathlib import Path
from typing import Optional
from .settings import Settings, GuardrailConfig, DEFAULT_SOURCE_LOCALE, DEFAULT_IGNORED_PREFIXES

logger = logging.getLogger(__name__)

# Global settings instance
_settings: Optional[Settings] = None


def load_settings() -> Settings:
    """Load and return application settings"""
    global _settings

    if _settings is None:
        try:
            _settings = Settings.from_env()
            logger.debug("Configuration loaded successfully")
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

    return _settings


def get_settings() -> Settings:
    """Get current settings instance"""
    if _settings is None:
        return load_settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment"""
    global _settings
    _settings = None
    return load_settings()


def load_guardrails_config(path: Path) -> GuardrailConfig:
    """
    Load guardrails configuration

    A missing, unreadable or malformed file yields the defaults; each field
    that has the wrong type falls back to its own default.

    Args:
        path: Path to guardrails JSON file

    Returns:
        GuardrailConfig
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug(f"Using default guardrails config ({path}: {e})")
        return GuardrailConfig()

    if not isinstance(raw, dict):
        return GuardrailConfig()

    source_locale = raw.get('sourceLocale')
    prefixes = raw.get('ignoredUnusedKeyPrefixes')
    keys = raw.get('ignoredUnusedKeys')

    return GuardrailConfig(
        source_locale=source_locale if isinstance(source_locale, str) and source_locale else DEFAULT_SOURCE_LOCALE,
        ignored_unused_key_prefixes=list(prefixes) if isinstance(prefixes, list) else list(DEFAULT_IGNORED_PREFIXES),
        ignored_unused_keys=list(keys) if isinstance(keys, list) else []
    )
