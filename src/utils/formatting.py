"""
Console report formatting
"""

from typing import List


def format_list(values: List[str], max_items: int = 12) -> str:
    """Render values as an indented bullet list, truncated after max_items"""
    if not values:
        return ''

    lines = [f"  - {value}" for value in values[:max_items]]
    if len(values) > max_items:
        lines.append(f"  - ... and {len(values) - max_items} more")
    return '\n'.join(lines)


def format_section(title: str, values: List[str], max_items: int = 12) -> str:
    return '\n'.join([title, format_list(values, max_items)])
