"""Helpers for walking and cleaning nested mapping trees."""

from __future__ import annotations

from typing import Any


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, (dict, list, tuple)) and not value)


def prune_empty(tree: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of tree without None, "" or empty containers, at any depth.

    ``False`` and ``0`` are meaningful mapping values and are kept.
    """
    result: dict[str, Any] = {}
    for key, value in tree.items():
        if isinstance(value, dict):
            value = prune_empty(value)
        elif isinstance(value, (list, tuple)):
            value = [prune_empty(v) if isinstance(v, dict) else v for v in value]
            value = [v for v in value if not _is_empty(v)]
        if not _is_empty(value):
            result[key] = value
    return result


def collect_values(search_key: str, tree: Any) -> list[str]:
    """Collect the names stored under search_key anywhere in tree.

    A string value counts as one name; list values are flattened. The walk
    descends into every dict and list, including matched values. Names are
    deduplicated in first-seen order.
    """
    found: list[str] = []

    def walk(node: Any) -> None:
        if isinstance(node, dict):
            for key, value in node.items():
                if key == search_key:
                    if isinstance(value, (list, tuple)):
                        found.extend(v for v in value if isinstance(v, str))
                    elif isinstance(value, str):
                        found.append(value)
                walk(value)
        elif isinstance(node, (list, tuple)):
            for item in node:
                walk(item)

    walk(tree)
    return list(dict.fromkeys(found))
