"""
Conversion between parsed JSON objects and the nested ordered maps held in memory.
"""

from collections import OrderedDict
from typing import Any

# Objects nested deeper than this stay plain values.
MAX_MAP_DEPTH = 2


def to_nested_map(obj: Any, depth: int = 0) -> Any:
    """
    Convert a JSON object into nested OrderedDicts, at most two levels deep.

    Lists, None, scalars and anything at depth >= 2 are returned unchanged.
    Key order follows the object's own order.

    Args:
        obj: Parsed JSON value
        depth: Current recursion depth

    Returns:
        OrderedDict for objects above the depth limit, otherwise ``obj``
    """
    if depth >= MAX_MAP_DEPTH or not isinstance(obj, dict):
        return obj

    return OrderedDict((key, to_nested_map(value, depth + 1)) for key, value in obj.items())


def from_nested_map(mapping: OrderedDict) -> dict[str, Any]:
    """Convert nested OrderedDicts back into plain dicts, at any depth."""
    return {
        key: from_nested_map(value) if isinstance(value, OrderedDict) else value
        for key, value in mapping.items()
    }
