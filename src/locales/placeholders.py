"""
Placeholder extraction and transit encoding for translation requests
"""

import re
from typing import Any, List

PLACEHOLDER_PATTERN = re.compile(r'\{([a-zA-Z0-9_]+)\}')

# Inline tag the translator is told to leave alone (ignore_tags=ph)
PLACEHOLDER_TAG = 'ph'

_TAG_PATTERN = re.compile(r'<ph\s+id="([^"]+)"\s*/>')
_DOUBLE_ESCAPED_TAG_PATTERN = re.compile(r'&lt;ph\s+id=&quot;([^&]+)&quot;\s*/&gt;')
_FALLBACK_TOKEN_PATTERN = re.compile(r'__DEEPL_PH_([A-Za-z0-9_]+)__')

_XML_ESCAPES = (
    ('&', '&amp;'),
    ('<', '&lt;'),
    ('>', '&gt;'),
    ('"', '&quot;'),
    ("'", '&apos;'),
)


def collect_placeholders(value: Any) -> List[str]:
    """
    Collect placeholder names used in a catalog value

    Args:
        value: Leaf value; anything other than a string has no placeholders

    Returns:
        Sorted list of unique placeholder names
    """
    if not isinstance(value, str):
        return []
    return sorted(set(PLACEHOLDER_PATTERN.findall(value)))


def escape_xml(value: str) -> str:
    for char, entity in _XML_ESCAPES:
        value = value.replace(char, entity)
    return value


def unescape_xml(value: str) -> str:
    # &amp; last so that "&amp;lt;" decodes to "&lt;" and not "<"
    for char, entity in reversed(_XML_ESCAPES):
        value = value.replace(entity, char)
    return value


def encode_placeholders(value: str) -> str:
    """Escape XML metacharacters and turn {name} into <ph id="name"/>"""
    return PLACEHOLDER_PATTERN.sub(r'<ph id="\1"/>', escape_xml(value))


def encode_placeholders_fallback(value: str) -> str:
    """Token encoding for requests sent without tag handling"""
    return PLACEHOLDER_PATTERN.sub(r'__DEEPL_PH_\1__', value)


def decode_placeholders(value: str) -> str:
    """
    Restore {name} placeholders in translated text

    Accepts the inline tag form, the tag form escaped a second time by the
    service, and the fallback token form, then unescapes XML entities.
    """
    restored = _TAG_PATTERN.sub(r'{\1}', value)
    restored = _DOUBLE_ESCAPED_TAG_PATTERN.sub(r'{\1}', restored)
    restored = _FALLBACK_TOKEN_PATTERN.sub(r'{\1}', restored)
    return unescape_xml(restored)
