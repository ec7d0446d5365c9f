"""
Locale catalog helpers
"""

from .flat_catalog import flatten, unflatten, get_value_at_path, set_value_at_path, MISSING
from .placeholders import (
    collect_placeholders,
    encode_placeholders,
    encode_placeholders_fallback,
    decode_placeholders,
)
from .locale_store import LocaleStore

__all__ = [
    'flatten', 'unflatten', 'get_value_at_path', 'set_value_at_path', 'MISSING',
    'collect_placeholders', 'encode_placeholders', 'encode_placeholders_fallback',
    'decode_placeholders', 'LocaleStore',
]
