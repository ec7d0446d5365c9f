"""
Configuration module for catalog tooling
"""

from .settings import Settings, GuardrailConfig, TranslatorSettings, PathSettings
from .load_config import load_settings, get_settings, reload_settings, load_guardrails_config

__all__ = [
    'Settings', 'GuardrailConfig', 'TranslatorSettings', 'PathSettings',
    'load_settings', 'get_settings', 'reload_settings', 'load_guardrails_config',
]
