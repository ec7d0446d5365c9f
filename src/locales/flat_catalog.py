"""
Conversion between nested locale trees and flat dotted-key catalogs
"""

from typing import Any, Dict, Optional

# Returned by get_value_at_path when the path does not resolve
MISSING = object()


def is_plain_mapping(value: Any) -> bool:
    """Check whether a node is a nesting level rather than a leaf"""
    return isinstance(value, dict)


def join_path(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def flatten(tree: Any, prefix: str = '', output: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Flatten a locale tree into a mapping of dotted key paths to leaf values

    Args:
        tree: Nested locale tree (or a leaf when called with a prefix)
        prefix: Dotted path of the current node
        output: Mapping to fill; a new one is created when omitted

    Returns:
        Flat catalog. A non-mapping root with an empty prefix yields an empty
        catalog since there is no path to assign the value to.
    """
    if output is None:
        output = {}

    if not is_plain_mapping(tree):
        if prefix:
            output[prefix] = tree
        return output

    for key, value in tree.items():
        next_prefix = join_path(prefix, key)
        if is_plain_mapping(value):
            flatten(value, next_prefix, output)
        else:
            output[next_prefix] = value

    return output


def get_value_at_path(tree: Any, dotted_path: str) -> Any:
    """Return the node at a dotted path, or MISSING"""
    cursor = tree
    for part in dotted_path.split('.'):
        if not is_plain_mapping(cursor) or part not in cursor:
            return MISSING
        cursor = cursor[part]
    return cursor


def set_value_at_path(tree: Dict[str, Any], dotted_path: str, value: Any) -> None:
    """Set a leaf at a dotted path, creating (or replacing) intermediate levels"""
    parts = dotted_path.split('.')
    cursor = tree
    for part in parts[:-1]:
        if not is_plain_mapping(cursor.get(part)):
            cursor[part] = {}
        cursor = cursor[part]
    cursor[parts[-1]] = value


def unflatten(flat: Dict[str, Any]) -> Dict[str, Any]:
    """Rebuild a nested locale tree from a flat catalog"""
    tree: Dict[str, Any] = {}
    for dotted_path, value in flat.items():
        set_value_at_path(tree, dotted_path, value)
    return tree
