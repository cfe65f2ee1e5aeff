"""Inheritance-aware property resolution.

A class's properties are its own declarations followed by those inherited
along its method resolution order. A property redeclared on a class earlier
in the MRO shadows the declaration of the same name further along it.
"""

from __future__ import annotations

import threading

from doc_schema.mapping.reader import AnnotationReader, PropertyHandle


class PropertyResolver:
    """Resolves and memoizes the property catalog of document classes.

    Each class is resolved once per resolver; later calls return the same
    dict without consulting the reader again, so field order is stable
    across every compilation step. The reader is asked for the own
    properties of any class at most once.

    Args:
        reader: Annotation source for own-class properties.
    """

    def __init__(self, reader: AnnotationReader) -> None:
        self._reader = reader
        self._own: dict[type, list[PropertyHandle]] = {}
        self._resolved: dict[type, dict[str, PropertyHandle]] = {}
        self._lock = threading.RLock()

    def resolve(self, cls: type) -> dict[str, PropertyHandle]:
        """Return property name -> handle for cls, following cls.__mro__."""
        with self._lock:
            cached = self._resolved.get(cls)
            if cached is not None:
                return cached

            properties: dict[str, PropertyHandle] = {}
            for klass in cls.__mro__:
                if klass is object:
                    continue
                for prop in self._own_properties(klass):
                    properties.setdefault(prop.name, prop)

            self._resolved[cls] = properties
            return properties

    def _own_properties(self, cls: type) -> list[PropertyHandle]:
        own = self._own.get(cls)
        if own is None:
            own = self._own[cls] = self._reader.get_properties(cls)
        return own

    def is_resolved(self, cls: type) -> bool:
        return cls in self._resolved

    def reset(self) -> None:
        """Forget every resolved class."""
        with self._lock:
            self._own.clear()
            self._resolved.clear()
