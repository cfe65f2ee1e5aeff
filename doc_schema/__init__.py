"""DocSchema - compile annotated document classes into search index schemas."""

from __future__ import annotations

from doc_schema.core.cache import (
    ARRAY_CACHED_FIELDS,
    EMBEDDED_CACHED_FIELDS,
    INDEXES,
    OBJ_CACHED_FIELDS,
    InMemoryCache,
    JsonFileCache,
    MetadataCache,
)
from doc_schema.core.casing import snake_case
from doc_schema.core.config import AnalysisSettings, CompilerConfig, load_config
from doc_schema.core.enums import AnalysisComponent, MappingType
from doc_schema.core.exceptions import (
    AmbiguousMappingTypeError,
    CacheError,
    CircularEmbeddingError,
    ConfigurationError,
    DeclarationError,
    DocSchemaError,
    DuplicateIndexError,
    EmbeddedClassNotFoundError,
    EmbeddingError,
    IndexNotFoundError,
    MappingError,
    RegistryError,
    UnknownMappingTypeError,
)
from doc_schema.core.registry import DocumentRegistry
from doc_schema.mapping.compiler import SchemaCompiler
from doc_schema.mapping.declarations import (
    Embedded,
    Index,
    NestedType,
    ObjectType,
    Property,
    index,
    nested_type,
    object_type,
)

__all__ = [
    # Compiler
    "SchemaCompiler",
    # Registry
    "DocumentRegistry",
    # Declarations
    "Index",
    "Property",
    "Embedded",
    "ObjectType",
    "NestedType",
    "index",
    "object_type",
    "nested_type",
    # Config
    "CompilerConfig",
    "AnalysisSettings",
    "load_config",
    # Cache
    "MetadataCache",
    "InMemoryCache",
    "JsonFileCache",
    "OBJ_CACHED_FIELDS",
    "EMBEDDED_CACHED_FIELDS",
    "ARRAY_CACHED_FIELDS",
    "INDEXES",
    # Helpers
    "snake_case",
    # Enums
    "MappingType",
    "AnalysisComponent",
    # Exceptions
    "DocSchemaError",
    "DeclarationError",
    "MappingError",
    "EmbeddingError",
    "UnknownMappingTypeError",
    "AmbiguousMappingTypeError",
    "CircularEmbeddingError",
    "EmbeddedClassNotFoundError",
    "RegistryError",
    "IndexNotFoundError",
    "DuplicateIndexError",
    "CacheError",
    "ConfigurationError",
]
