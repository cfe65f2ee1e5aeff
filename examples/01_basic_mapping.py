"""
Example 01: Basic Mapping

This example demonstrates compiling an annotated document class into an index definition.
"""

import json
from typing import Annotated

from doc_schema import Property, SchemaCompiler, index


@index("articles", settings={"number_of_shards": 1})
class Article:
    """Blog article document"""
    title: Annotated[str, Property(type="text")]
    authorName: Annotated[str, Property(type="keyword")]
    publishedAt: Annotated[str, Property(type="date", name="published")]
    views: Annotated[int, Property(type="integer")]
    draft_notes: str  # not mapped


def main():
    compiler = SchemaCompiler()

    print("=== Basic Mapping ===\n")

    print("1. Index alias:")
    print(f"   {compiler.get_index_alias_name(Article)}\n")

    print("2. Index definition:")
    print(json.dumps(compiler.compile(Article), indent=2))
    print()

    print("3. Field name tables:")
    tables = compiler.get_field_tables(Article)
    for attr, field in tables.object_fields.items():
        print(f"   {attr} -> {field}")


if __name__ == "__main__":
    main()
