"""Removes empty entries from built payloads."""

from typing import Any, Dict


def is_empty(value: Any) -> bool:
    return value is None or value == "" or value == {}


def prune_empty(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively drop None, "" and {} entries from nested mappings.

    Nested mappings are pruned first, so a block whose fields are all empty
    disappears as well. Lists are kept as they are.
    """
    result = {}
    for key, value in data.items():
        if isinstance(value, dict):
            value = prune_empty(value)
        if not is_empty(value):
            result[key] = value
    return result
