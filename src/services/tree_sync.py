"""
Reshaping locale trees to match the source catalog
"""

import copy
import re
from typing import Any, Optional

from locales.flat_catalog import MISSING, is_plain_mapping, join_path
from models.sync import SyncStats

META_PREFIX = '_meta.'
TODO_PREFIX = re.compile(r'^\[TODO [^\]]+\]\s*')


def todo_marker(locale_code: str, source_text: str) -> str:
    """Tag source text as not yet translated for a locale"""
    return f"[TODO {locale_code}] {source_text}"


def is_untranslated(value: Any) -> bool:
    return isinstance(value, str) and bool(TODO_PREFIX.match(value))


def sync_locale_tree(
    base_node: Any,
    locale_node: Any,
    locale_code: str,
    path_prefix: str = '',
    stats: Optional[SyncStats] = None,
    keep_extra: bool = False,
) -> Any:
    """
    Build a new locale tree shaped exactly like the source tree

    Existing locale values always win, even when their type differs from the
    source value. Missing text leaves are filled with a TODO marker that keeps
    the source text; missing non-text leaves and anything under `_meta.` are
    copied from the source. Inputs are never modified.

    Args:
        base_node: Source catalog node
        locale_node: Locale catalog node, or MISSING when absent
        locale_code: Locale being synchronized, used in TODO markers
        path_prefix: Dotted path of the current node
        stats: Collects added and removed paths
        keep_extra: Keep locale keys the source does not have

    Returns:
        The synchronized node
    """
    if stats is None:
        stats = SyncStats()

    if is_plain_mapping(base_node):
        next_node = {}
        locale_mapping = locale_node if is_plain_mapping(locale_node) else {}

        for key, child_base in base_node.items():
            next_path = join_path(path_prefix, key)
            if key in locale_mapping:
                child_locale = locale_mapping[key]
            else:
                stats.added.append(next_path)
                child_locale = MISSING
            next_node[key] = sync_locale_tree(child_base, child_locale, locale_code, next_path, stats, keep_extra)

        for key, child_locale in locale_mapping.items():
            if key in base_node:
                continue
            if keep_extra:
                next_node[key] = copy.deepcopy(child_locale)
            else:
                stats.removed.append(join_path(path_prefix, key))

        return next_node

    if locale_node is MISSING:
        if isinstance(base_node, str) and not path_prefix.startswith(META_PREFIX):
            return todo_marker(locale_code, base_node)
        return base_node

    return copy.deepcopy(locale_node)
