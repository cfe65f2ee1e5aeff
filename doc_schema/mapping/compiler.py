"""Schema compiler.

Compiles an indexed document class into a complete index definition::

    {
        "settings": {"analysis": {...}, ...index settings},
        "mappings": {"_doc": {"properties": {...}}},
    }
"""

from __future__ import annotations

import logging
from typing import Any

from doc_schema.core.cache import INDEXES, InMemoryCache, MetadataCache
from doc_schema.core.casing import snake_case
from doc_schema.core.config import CompilerConfig
from doc_schema.mapping.analysis import AnalysisConfigResolver
from doc_schema.mapping.declarations import DEFAULT_TYPE_NAME, Index
from doc_schema.mapping.extractor import FieldMetadataExtractor, FieldNameTables, class_name
from doc_schema.mapping.properties import PropertyResolver
from doc_schema.mapping.reader import AnnotationReader, AttributeReader
from doc_schema.mapping.tree import prune_empty

logger = logging.getLogger(__name__)


def _is_structural(cls: type) -> bool:
    """Protocol classes describe shape only and are never indexed."""
    return bool(getattr(cls, "_is_protocol", False))


class SchemaCompiler:
    """Compiles document classes into index definitions.

    Args:
        reader: Annotation source. Defaults to AttributeReader.
        cache: Metadata cache for field name tables and the index registry.
            Defaults to a fresh InMemoryCache.
        config: Compiler configuration, including global analysis settings.
        resolver: Property resolver shared with the extractor.
    """

    def __init__(
        self,
        reader: AnnotationReader | None = None,
        cache: MetadataCache | None = None,
        config: CompilerConfig | None = None,
        resolver: PropertyResolver | None = None,
    ) -> None:
        self.reader = reader or AttributeReader()
        self.cache = cache if cache is not None else InMemoryCache()
        self.config = config or CompilerConfig()
        self.extractor = FieldMetadataExtractor(
            self.reader,
            self.cache,
            resolver=resolver or PropertyResolver(self.reader),
            config=self.config,
        )
        self.analysis = AnalysisConfigResolver(self.extractor, self.config.analysis)

    def compile(self, cls: type) -> dict[str, Any]:
        """Compile cls into an index definition.

        Returns an empty dict for classes without an Index declaration and for
        Protocol classes.
        """
        if _is_structural(cls):
            return {}

        document = self.get_index_annotation(cls)
        if document is None:
            return {}

        settings = dict(document.settings)
        settings["analysis"] = self.analysis.resolve(cls)

        definition = prune_empty(
            {
                "settings": settings,
                "mappings": {
                    self.get_type_name(cls): {
                        "properties": self.extractor.extract(cls),
                    }
                },
            }
        )
        logger.debug(f"Compiled index '{self.get_index_alias_name(cls)}' from {class_name(cls)}")
        return definition

    def get_index_annotation(self, cls: type) -> Index | None:
        """Return the Index declaration of cls, or None."""
        return self.reader.get_class_annotation(cls, Index)

    def get_index_alias_name(self, cls: type) -> str:
        """Return the declared alias, or the snake-cased class name."""
        document = self.get_index_annotation(cls)
        if document is not None and document.alias:
            return document.alias
        return snake_case(cls.__name__)

    def is_default_index(self, cls: type) -> bool:
        document = self.get_index_annotation(cls)
        return document is not None and document.default

    def get_type_name(self, cls: type) -> str:
        """Return the mapping type name.

        Deprecated: mapping types are removed from the search engine; the
        name only wraps the mapping for engines that still expect it.
        """
        document = self.get_index_annotation(cls)
        if document is not None and document.type_name:
            return document.type_name
        return DEFAULT_TYPE_NAME

    def get_document_namespace(self, alias: str) -> str | None:
        """Return the class name registered for an index alias, or None."""
        if not self.cache.contains(INDEXES):
            return None
        indexes = self.cache.fetch(INDEXES) or {}
        return indexes.get(alias)  # type: ignore[no-any-return]

    def get_field_tables(self, cls: type) -> FieldNameTables:
        """Return the field name tables cached for cls by the last extraction."""
        return self.extractor.field_tables(cls)
