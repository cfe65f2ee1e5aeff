"""
Example 02: Embedded Documents and Analysis

This example demonstrates object/nested embedded documents, class inheritance,
and resolving only the analysis components a document actually uses.
"""

import json
from typing import Annotated

from doc_schema import (
    AnalysisSettings,
    CompilerConfig,
    DocumentRegistry,
    Embedded,
    Property,
    SchemaCompiler,
    index,
    nested_type,
    object_type,
)


@object_type
class Address:
    """Embedded as a plain object"""
    street: Annotated[str, Property(type="text")]
    city: Annotated[str, Property(type="keyword")]


@nested_type
class Review:
    """Embedded as nested documents"""
    rating: Annotated[int, Property(type="byte")]
    body: Annotated[str, Property(type="text", analyzer="english_text")]


class Timestamped:
    createdAt: Annotated[str, Property(type="date")]


@index("shops", default=True)
class Shop(Timestamped):
    shopName: Annotated[str, Property(type="text", analyzer="autocomplete", search_analyzer="english_text")]
    address: Annotated[dict, Embedded(Address)]
    reviews: Annotated[list, Embedded(Review)]


ANALYSIS = AnalysisSettings(
    analyzer={
        "english_text": {"type": "custom", "tokenizer": "standard", "filter": ["lowercase", "english_stop"]},
        "autocomplete": {"type": "custom", "tokenizer": "edge_ngram_tokenizer", "filter": ["lowercase"]},
        "french_text": {"type": "custom", "tokenizer": "standard", "filter": ["french_stop"]},
    },
    tokenizer={
        "edge_ngram_tokenizer": {"type": "edge_ngram", "min_gram": 2, "max_gram": 15},
    },
    filter={
        "english_stop": {"type": "stop", "stopwords": "_english_"},
        "french_stop": {"type": "stop", "stopwords": "_french_"},
    },
)


def main():
    compiler = SchemaCompiler(config=CompilerConfig(analysis=ANALYSIS))

    print("=== Embedded Documents and Analysis ===\n")

    # french_text and french_stop are never referenced, so they are left out
    print("1. Index definition:")
    print(json.dumps(compiler.compile(Shop), indent=2))
    print()

    print("2. Embedded fields:")
    for attr, cls in compiler.get_field_tables(Shop).embedded_fields.items():
        print(f"   {attr} -> {cls}")
    print()

    print("3. Alias registry:")
    registry = DocumentRegistry(compiler)
    registry.register(Shop)
    registry.save()
    print(f"   shops -> {compiler.get_document_namespace('shops')}")


if __name__ == "__main__":
    main()
