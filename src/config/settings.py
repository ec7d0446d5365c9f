"""
Configuration settings with validation
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple
from dotenv import load_dotenv

DEFAULT_SOURCE_LOCALE = 'en-US'
DEFAULT_IGNORED_PREFIXES = ('_meta.',)
DEEPL_FREE_URL = 'https://api-free.deepl.com/v2/translate'
DEEPL_PRO_URL = 'https://api.deepl.com/v2/translate'


@dataclass
class GuardrailConfig:
    """Which locale is authoritative and which unused keys stay quiet"""
    source_locale: str = DEFAULT_SOURCE_LOCALE
    ignored_unused_key_prefixes: List[str] = None
    ignored_unused_keys: List[str] = None

    def __post_init__(self):
        if self.ignored_unused_key_prefixes is None:
            self.ignored_unused_key_prefixes = list(DEFAULT_IGNORED_PREFIXES)
        if self.ignored_unused_keys is None:
            self.ignored_unused_keys = []

    def key_is_ignored(self, key: str) -> bool:
        """Check if an unused key should be left out of stale key warnings"""
        if key in self.ignored_unused_keys:
            return True
        return any(key.startswith(prefix) for prefix in self.ignored_unused_key_prefixes)


@dataclass
class TranslatorSettings:
    """Machine translation service configuration"""
    api_key: Optional[str] = None
    api_url: Optional[str] = None
    batch_size: int = 40
    max_attempts: int = 3
    base_delay: float = 0.4
    timeout: float = 30.0

    def __post_init__(self):
        if self.batch_size <= 0:
            raise ValueError("Batch size must be a positive integer")

        if self.max_attempts <= 0:
            raise ValueError("Max attempts must be a positive integer")

        if not self.api_url and self.api_key:
            self.api_url = DEEPL_FREE_URL if self.api_key.endswith(':fx') else DEEPL_PRO_URL


@dataclass
class PathSettings:
    """Where catalogs and application sources live"""
    locales_dir: Path = Path('src/lib/i18n/locales')
    source_dir: Path = Path('src')
    guardrails_config: Path = Path('src/lib/i18n/guardrails.json')
    source_extensions: Tuple[str, ...] = ('.svelte', '.ts', '.js')

    def __post_init__(self):
        self.locales_dir = Path(self.locales_dir).resolve()
        self.source_dir = Path(self.source_dir).resolve()
        self.guardrails_config = Path(self.guardrails_config).resolve()


@dataclass
class Settings:
    """Main configuration settings"""
    paths: PathSettings = field(default_factory=PathSettings)
    translator: TranslatorSettings = field(default_factory=TranslatorSettings)
    log_level: str = 'INFO'

    def __post_init__(self):
        # Validate log level
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")

        self.log_level = self.log_level.upper()

    @classmethod
    def from_env(cls) -> 'Settings':
        """Create settings from environment variables"""
        load_dotenv()

        extensions_str = os.getenv('I18N_SOURCE_EXTENSIONS', '')
        extensions = tuple(
            ext.strip() if ext.strip().startswith('.') else f".{ext.strip()}"
            for ext in extensions_str.split(',') if ext.strip()
        ) or PathSettings.source_extensions

        return cls(
            paths=PathSettings(
                locales_dir=Path(os.getenv('I18N_LOCALES_DIR', 'src/lib/i18n/locales')),
                source_dir=Path(os.getenv('I18N_SOURCE_DIR', 'src')),
                guardrails_config=Path(os.getenv('I18N_GUARDRAILS_CONFIG', 'src/lib/i18n/guardrails.json')),
                source_extensions=extensions
            ),
            translator=TranslatorSettings(
                api_key=os.getenv('DEEPL_API_KEY') or None,
                api_url=os.getenv('DEEPL_API_URL') or None
            ),
            log_level=os.getenv('LOG_LEVEL', 'INFO')
        )
