"""Field metadata extraction.

Turns the field declarations of a document class into a mapping fragment,
recursing into embedded classes, and records the field name tables used to
translate between object attributes and schema fields.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from typing import Any

from doc_schema.core.cache import (
    ARRAY_CACHED_FIELDS,
    EMBEDDED_CACHED_FIELDS,
    OBJ_CACHED_FIELDS,
    MetadataCache,
)
from doc_schema.core.casing import snake_case
from doc_schema.core.config import CompilerConfig
from doc_schema.core.enums import MappingType
from doc_schema.core.exceptions import (
    AmbiguousMappingTypeError,
    CircularEmbeddingError,
    EmbeddedClassNotFoundError,
    UnknownMappingTypeError,
)
from doc_schema.mapping.declarations import Embedded, NestedType, ObjectType, Property
from doc_schema.mapping.properties import PropertyResolver
from doc_schema.mapping.reader import AnnotationReader
from doc_schema.mapping.tree import prune_empty

logger = logging.getLogger(__name__)


def class_name(cls: type) -> str:
    """Fully-qualified name used to key cache entries."""
    return f"{cls.__module__}.{cls.__qualname__}"


def load_class(path: str) -> type:
    """Import a class from ``package.module:Class`` or ``package.module.Class``.

    Raises:
        EmbeddedClassNotFoundError: If the module or attribute cannot be loaded.
    """
    if ":" in path:
        module_path, _, qualname = path.partition(":")
    else:
        module_path, _, qualname = path.rpartition(".")
    if not module_path or not qualname:
        raise EmbeddedClassNotFoundError(path, "expected 'module:Class' or 'module.Class'")

    try:
        target: Any = importlib.import_module(module_path)
        for part in qualname.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as e:
        raise EmbeddedClassNotFoundError(path, str(e)) from e

    if not isinstance(target, type):
        raise EmbeddedClassNotFoundError(path, "not a class")
    return target


@dataclass(frozen=True)
class FieldNameTables:
    """Field name lookups of one document class."""

    object_fields: dict[str, str] = field(default_factory=dict)  # attribute -> schema field
    array_fields: dict[str, str] = field(default_factory=dict)  # schema field -> attribute
    embedded_fields: dict[str, str] = field(default_factory=dict)  # attribute -> class name


class FieldMetadataExtractor:
    """Builds mapping fragments and field name tables for document classes.

    Args:
        reader: Annotation source.
        cache: Metadata cache receiving the field name tables.
        resolver: Property resolver; one is created from reader if omitted.
        config: Compiler configuration.
    """

    def __init__(
        self,
        reader: AnnotationReader,
        cache: MetadataCache,
        resolver: PropertyResolver | None = None,
        config: CompilerConfig | None = None,
    ) -> None:
        self._reader = reader
        self._cache = cache
        self._resolver = resolver or PropertyResolver(reader)
        self._config = config or CompilerConfig()

    @property
    def resolver(self) -> PropertyResolver:
        return self._resolver

    def extract(self, cls: type) -> dict[str, Any]:
        """Return the mapping fragment of cls.

        Raises:
            UnknownMappingTypeError: An embedded class has no object/nested marker.
            AmbiguousMappingTypeError: An embedded class has both markers.
            CircularEmbeddingError: Embedded classes form a cycle.
        """
        return self._extract(cls, ())

    def _extract(self, cls: type, chain: tuple[type, ...]) -> dict[str, Any]:
        if cls in chain:
            raise CircularEmbeddingError([class_name(c) for c in (*chain, cls)])
        chain = (*chain, cls)

        mapping: dict[str, Any] = {}
        object_fields: dict[str, str] = {}
        array_fields: dict[str, str] = {}
        embedded_fields: dict[str, str] = {}

        for name, prop in self._resolver.resolve(cls).items():
            for declaration in self._reader.get_property_annotations(prop):
                match declaration:
                    case Property():
                        field_mapping = declaration.to_settings()
                        field_mapping["type"] = declaration.type
                        field_mapping["analyzer"] = declaration.analyzer
                        field_mapping["search_analyzer"] = declaration.search_analyzer
                        field_mapping["search_quote_analyzer"] = (
                            declaration.search_quote_analyzer
                        )
                    case Embedded():
                        target = self._embedded_class(declaration)
                        field_mapping = declaration.to_settings()
                        field_mapping["type"] = self.mapping_type(target).value
                        field_mapping["properties"] = self._extract(target, chain)
                        embedded_fields[name] = class_name(target)
                    case _:
                        continue

                schema_name = declaration.name or snake_case(name)
                mapping[schema_name] = prune_empty(field_mapping)
                object_fields[name] = schema_name
                array_fields[schema_name] = name

        self._store(
            class_name(cls),
            FieldNameTables(
                object_fields=object_fields,
                array_fields=array_fields,
                embedded_fields=embedded_fields,
            ),
        )
        logger.debug(f"Extracted {len(mapping)} fields from {class_name(cls)}")
        return mapping

    def _embedded_class(self, declaration: Embedded) -> type:
        if isinstance(declaration.target, str):
            return load_class(declaration.target)
        return declaration.target

    def mapping_type(self, cls: type) -> MappingType:
        """Return whether an embeddable class maps as object or nested."""
        is_object = self._reader.get_class_annotation(cls, ObjectType) is not None
        is_nested = self._reader.get_class_annotation(cls, NestedType) is not None

        if is_object and is_nested:
            if not self._config.allow_ambiguous_embeddables:
                raise AmbiguousMappingTypeError(class_name(cls))
            logger.warning(
                f"{class_name(cls)} is declared with both @object_type and @nested_type; "
                "mapping it as object"
            )
        if is_object:
            return ObjectType.TYPE
        if is_nested:
            return NestedType.TYPE
        raise UnknownMappingTypeError(class_name(cls))

    def _store(self, name: str, tables: FieldNameTables) -> None:
        # Embedded fields are optional, object and array tables are always written.
        if tables.embedded_fields:
            self._merge(EMBEDDED_CACHED_FIELDS, name, tables.embedded_fields)
        self._merge(ARRAY_CACHED_FIELDS, name, tables.array_fields)
        self._merge(OBJ_CACHED_FIELDS, name, tables.object_fields)

    def _merge(self, key: str, name: str, table: dict[str, str]) -> None:
        entry = dict(self._cache.fetch(key) or {})
        entry[name] = dict(table)
        self._cache.save(key, entry)

    def field_tables(self, cls: type) -> FieldNameTables:
        """Read the field name tables of cls back from the cache."""
        name = class_name(cls)
        return FieldNameTables(
            object_fields=dict((self._cache.fetch(OBJ_CACHED_FIELDS) or {}).get(name) or {}),
            array_fields=dict((self._cache.fetch(ARRAY_CACHED_FIELDS) or {}).get(name) or {}),
            embedded_fields=dict(
                (self._cache.fetch(EMBEDDED_CACHED_FIELDS) or {}).get(name) or {}
            ),
        )
