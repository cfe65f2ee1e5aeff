"""Mapping layer - turn document declarations into index mappings."""

from __future__ import annotations

from doc_schema.mapping.analysis import AnalysisConfigResolver
from doc_schema.mapping.compiler import SchemaCompiler
from doc_schema.mapping.extractor import FieldMetadataExtractor, FieldNameTables
from doc_schema.mapping.properties import PropertyResolver
from doc_schema.mapping.reader import AnnotationReader, AttributeReader, PropertyHandle

__all__ = [
    "SchemaCompiler",
    "FieldMetadataExtractor",
    "FieldNameTables",
    "AnalysisConfigResolver",
    "PropertyResolver",
    "AnnotationReader",
    "AttributeReader",
    "PropertyHandle",
]
