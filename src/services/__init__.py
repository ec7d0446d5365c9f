"""
Services for catalog tooling
"""

from .key_extractor import KeyExtractor
from .tree_sync import sync_locale_tree
from .translation_service import TranslationService
from .guardrail_service import GuardrailService

__all__ = ['KeyExtractor', 'sync_locale_tree', 'TranslationService', 'GuardrailService']
