"""Metadata cache protocol and implementations.

The extractor writes field name tables into the cache; serializers and
hydrators outside this package read them back. Writes are last-writer-wins
per key.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from doc_schema.core.exceptions import CacheError

# Reserved keys. Each value is a dict keyed by fully-qualified class name,
# except INDEXES which maps index alias -> fully-qualified class name.
OBJ_CACHED_FIELDS = "doc_schema.obj_fields"
EMBEDDED_CACHED_FIELDS = "doc_schema.embedded_fields"
ARRAY_CACHED_FIELDS = "doc_schema.array_fields"
INDEXES = "doc_schema.indexes"


@runtime_checkable
class MetadataCache(Protocol):
    """Simple key -> value store."""

    def contains(self, key: str) -> bool:
        """Check if a key is present."""
        ...

    def fetch(self, key: str) -> Any:
        """Return the value stored under key, or None."""
        ...

    def save(self, key: str, value: Any) -> bool:
        """Store value under key. Returns True on success."""
        ...


class InMemoryCache:
    """Process-local cache backed by a dict."""

    def __init__(self) -> None:
        self._items: dict[str, Any] = {}

    def contains(self, key: str) -> bool:
        return key in self._items

    def fetch(self, key: str) -> Any:
        return self._items.get(key)

    def save(self, key: str, value: Any) -> bool:
        self._items[key] = value
        return True

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


class JsonFileCache:
    """Cache persisted as a single JSON document.

    The whole document is rewritten on every save through a temporary file
    in the same directory, so readers never see a partially written file.

    Args:
        path: Location of the JSON document. Created on first save.

    Raises:
        CacheError: If an existing file is not a JSON object.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._items: dict[str, Any] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise CacheError(f"Cannot read cache file '{self._path}': {e}") from e
        if not isinstance(data, dict):
            raise CacheError(f"Cache file '{self._path}' does not contain a JSON object")
        return data

    def contains(self, key: str) -> bool:
        return key in self._items

    def fetch(self, key: str) -> Any:
        return self._items.get(key)

    def save(self, key: str, value: Any) -> bool:
        items = {**self._items, key: value}
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(items, fh, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except (OSError, TypeError) as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise CacheError(f"Cannot write cache file '{self._path}': {e}") from e
        self._items = items
        return True
