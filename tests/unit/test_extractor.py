"""Unit tests for FieldMetadataExtractor."""

from __future__ import annotations

import dataclasses
import logging
from typing import Annotated

import pytest

from doc_schema.core.cache import (
    ARRAY_CACHED_FIELDS,
    EMBEDDED_CACHED_FIELDS,
    OBJ_CACHED_FIELDS,
    InMemoryCache,
)
from doc_schema.core.config import CompilerConfig
from doc_schema.core.enums import MappingType
from doc_schema.core.exceptions import (
    AmbiguousMappingTypeError,
    CircularEmbeddingError,
    EmbeddedClassNotFoundError,
    UnknownMappingTypeError,
)
from doc_schema.mapping.declarations import (
    Embedded,
    Property,
    index,
    nested_type,
    object_type,
)
from doc_schema.mapping.extractor import FieldMetadataExtractor, class_name, load_class


@nested_type
class Variant:
    sku: Annotated[str, Property(type="keyword")]
    price: Annotated[float, Property(type="scaled_float", settings={"scaling_factor": 100})]


@object_type
class Address:
    streetName: Annotated[str, Property(type="text", analyzer="std")]
    city: Annotated[str, Property(type="keyword", name="town")]


@index("products")
class Product:
    productName: Annotated[str, Property(type="text", analyzer="std", search_analyzer="custom1")]
    sku: Annotated[str, Property(type="keyword", name="code", settings={"ignore_above": 64})]
    inStock: Annotated[bool, Property(type="boolean", settings={"index": False})]
    address: Annotated[dict, Embedded(Address)]
    variants: Annotated[list, Embedded(Variant, settings={"include_in_parent": True})]
    internal: str


class Unmarked:
    value: Annotated[str, Property(type="keyword")]


@nested_type
@object_type
class Both:
    value: Annotated[str, Property(type="keyword")]


class HasUnmarked:
    part: Annotated[dict, Embedded(Unmarked)]


class HasBoth:
    part: Annotated[dict, Embedded(Both)]


@object_type
class Node:
    label: Annotated[str, Property(type="keyword")]
    children: Annotated[list, Embedded(Node)]


@object_type
class Left:
    right: Annotated[dict, Embedded(Right)]


@object_type
class Right:
    left: Annotated[dict, Embedded(Left)]


@object_type
class Empty:
    pass


class Holder:
    empty: Annotated[dict, Embedded(Empty)]
    blank: Annotated[str, Property(type="keyword", analyzer="", settings={"fields": {}})]


class ByPath:
    address: Annotated[dict, Embedded(f"{__name__}:Address")]


class SpecialProduct(Product):
    productName: Annotated[str, Property(type="keyword", name="name")]


@pytest.fixture
def extractor(reader, cache: InMemoryCache) -> FieldMetadataExtractor:
    return FieldMetadataExtractor(reader, cache)


class TestExtract:
    def test_mapping_fragment(self, extractor: FieldMetadataExtractor) -> None:
        assert extractor.extract(Product) == {
            "product_name": {"type": "text", "analyzer": "std", "search_analyzer": "custom1"},
            "code": {"type": "keyword", "ignore_above": 64},
            "in_stock": {"type": "boolean", "index": False},
            "address": {
                "type": "object",
                "properties": {
                    "street_name": {"type": "text", "analyzer": "std"},
                    "town": {"type": "keyword"},
                },
            },
            "variants": {
                "type": "nested",
                "include_in_parent": True,
                "properties": {
                    "sku": {"type": "keyword"},
                    "price": {"type": "scaled_float", "scaling_factor": 100},
                },
            },
        }

    def test_field_order_follows_declaration(self, extractor: FieldMetadataExtractor) -> None:
        assert list(extractor.extract(Product)) == [
            "product_name",
            "code",
            "in_stock",
            "address",
            "variants",
        ]

    def test_undeclared_property_skipped(self, extractor: FieldMetadataExtractor) -> None:
        assert "internal" not in extractor.extract(Product)

    def test_empty_values_dropped(self, extractor: FieldMetadataExtractor) -> None:
        assert extractor.extract(Holder) == {
            "empty": {"type": "object"},
            "blank": {"type": "keyword"},
        }

    def test_subclass_override(self, extractor: FieldMetadataExtractor) -> None:
        mapping = extractor.extract(SpecialProduct)
        assert mapping["name"] == {"type": "keyword"}
        assert "product_name" not in mapping
        assert list(mapping)[0] == "name"

    def test_embedded_by_import_path(self, extractor: FieldMetadataExtractor) -> None:
        assert extractor.extract(ByPath)["address"]["type"] == "object"

    def test_repeated_extraction_agrees(self, extractor: FieldMetadataExtractor) -> None:
        assert extractor.extract(Product) == extractor.extract(Product)


class TestMappingType:
    def test_object(self, extractor: FieldMetadataExtractor) -> None:
        assert extractor.mapping_type(Address) is MappingType.OBJECT

    def test_nested(self, extractor: FieldMetadataExtractor) -> None:
        assert extractor.mapping_type(Variant) is MappingType.NESTED

    def test_unmarked_embedded_fails(self, extractor: FieldMetadataExtractor) -> None:
        with pytest.raises(UnknownMappingTypeError, match="Unmarked must be declared") as exc:
            extractor.extract(HasUnmarked)
        assert exc.value.class_name == class_name(Unmarked)

    def test_both_markers_fail_by_default(self, extractor: FieldMetadataExtractor) -> None:
        with pytest.raises(AmbiguousMappingTypeError, match="Both"):
            extractor.extract(HasBoth)

    def test_both_markers_allowed_object_wins(
        self, reader, cache: InMemoryCache, caplog: pytest.LogCaptureFixture
    ) -> None:
        extractor = FieldMetadataExtractor(
            reader, cache, config=CompilerConfig(allow_ambiguous_embeddables=True)
        )
        with caplog.at_level(logging.WARNING, logger="doc_schema.mapping.extractor"):
            mapping = extractor.extract(HasBoth)
        assert mapping["part"]["type"] == "object"
        assert "both @object_type and @nested_type" in caplog.text


class TestCircularEmbedding:
    def test_self_reference(self, extractor: FieldMetadataExtractor) -> None:
        with pytest.raises(CircularEmbeddingError) as exc:
            extractor.extract(Node)
        assert exc.value.chain == [class_name(Node), class_name(Node)]

    def test_mutual_reference(self, extractor: FieldMetadataExtractor) -> None:
        with pytest.raises(CircularEmbeddingError, match="Circular embedding") as exc:
            extractor.extract(Left)
        assert exc.value.chain == [class_name(Left), class_name(Right), class_name(Left)]

    def test_same_class_embedded_twice_is_not_circular(
        self, extractor: FieldMetadataExtractor
    ) -> None:
        class Route:
            origin: Annotated[dict, Embedded(Address)]
            destination: Annotated[dict, Embedded(Address)]

        mapping = extractor.extract(Route)
        assert mapping["origin"] == mapping["destination"]


class TestFieldNameTables:
    def test_tables_written_to_cache(
        self, extractor: FieldMetadataExtractor, cache: InMemoryCache
    ) -> None:
        extractor.extract(Product)
        name = class_name(Product)
        assert cache.fetch(OBJ_CACHED_FIELDS)[name] == {
            "productName": "product_name",
            "sku": "code",
            "inStock": "in_stock",
            "address": "address",
            "variants": "variants",
        }
        assert cache.fetch(EMBEDDED_CACHED_FIELDS)[name] == {
            "address": class_name(Address),
            "variants": class_name(Variant),
        }

    def test_tables_are_inverse(self, extractor: FieldMetadataExtractor) -> None:
        extractor.extract(Product)
        tables = extractor.field_tables(Product)
        assert tables.object_fields
        for obj_field, schema_name in tables.object_fields.items():
            assert tables.array_fields[schema_name] == obj_field
        assert len(tables.array_fields) == len(tables.object_fields)

    def test_embedded_classes_get_their_own_tables(
        self, extractor: FieldMetadataExtractor
    ) -> None:
        extractor.extract(Product)
        assert extractor.field_tables(Address).object_fields == {
            "streetName": "street_name",
            "city": "town",
        }

    def test_no_embedded_entry_without_embedded_fields(
        self, extractor: FieldMetadataExtractor, cache: InMemoryCache
    ) -> None:
        extractor.extract(Variant)
        assert not cache.contains(EMBEDDED_CACHED_FIELDS)
        assert cache.fetch(ARRAY_CACHED_FIELDS)[class_name(Variant)] == {
            "sku": "sku",
            "price": "price",
        }

    def test_empty_tables_still_written(
        self, extractor: FieldMetadataExtractor, cache: InMemoryCache
    ) -> None:
        extractor.extract(Empty)
        assert cache.fetch(OBJ_CACHED_FIELDS)[class_name(Empty)] == {}
        assert cache.fetch(ARRAY_CACHED_FIELDS)[class_name(Empty)] == {}

    def test_tables_scoped_per_class(
        self, extractor: FieldMetadataExtractor, cache: InMemoryCache
    ) -> None:
        extractor.extract(Variant)
        extractor.extract(Product)
        entry = cache.fetch(OBJ_CACHED_FIELDS)
        assert entry[class_name(Variant)]["sku"] == "sku"
        assert entry[class_name(Product)]["sku"] == "code"

    def test_tables_are_frozen_snapshots(self, extractor: FieldMetadataExtractor) -> None:
        extractor.extract(Variant)
        tables = extractor.field_tables(Variant)
        with pytest.raises(dataclasses.FrozenInstanceError):
            tables.object_fields = {}  # type: ignore[misc]
        tables.object_fields["sku"] = "changed"
        assert extractor.field_tables(Variant).object_fields["sku"] == "sku"

    def test_unknown_class_has_empty_tables(self, extractor: FieldMetadataExtractor) -> None:
        tables = extractor.field_tables(Unmarked)
        assert tables.object_fields == {}
        assert tables.array_fields == {}
        assert tables.embedded_fields == {}


class TestLoadClass:
    def test_colon_path(self) -> None:
        assert load_class(f"{__name__}:Address") is Address

    def test_dotted_path(self) -> None:
        assert load_class(f"{__name__}.Variant") is Variant

    def test_missing_module(self) -> None:
        with pytest.raises(EmbeddedClassNotFoundError, match="no_such_module"):
            load_class("no_such_module:Thing")

    def test_missing_attribute(self) -> None:
        with pytest.raises(EmbeddedClassNotFoundError):
            load_class(f"{__name__}:Missing")

    def test_not_a_class(self) -> None:
        with pytest.raises(EmbeddedClassNotFoundError, match="not a class"):
            load_class(f"{__name__}:class_name")

    def test_malformed_path(self) -> None:
        with pytest.raises(EmbeddedClassNotFoundError):
            load_class("Address")
