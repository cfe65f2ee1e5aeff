"""Shared test fixtures."""

from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path

import pytest

from doc_schema.core.cache import InMemoryCache
from doc_schema.core.config import AnalysisSettings, CompilerConfig
from doc_schema.mapping.compiler import SchemaCompiler
from doc_schema.mapping.reader import AttributeReader, PropertyHandle


class CountingReader(AttributeReader):
    """AttributeReader recording how often each class's properties are read."""

    def __init__(self) -> None:
        self.property_reads: Counter[type] = Counter()

    def get_properties(self, cls: type) -> list[PropertyHandle]:
        self.property_reads[cls] += 1
        return super().get_properties(cls)


@pytest.fixture
def cache() -> InMemoryCache:
    """Empty in-memory metadata cache."""
    return InMemoryCache()


@pytest.fixture
def reader() -> CountingReader:
    return CountingReader()


@pytest.fixture
def analysis_settings() -> AnalysisSettings:
    """Global analysis settings with used and unused components."""
    return AnalysisSettings(
        analyzer={
            "std": {"type": "custom", "tokenizer": "standard", "filter": ["lowercase"]},
            "custom1": {"type": "custom", "tokenizer": "whitespace", "filter": ["asciifolding"]},
            "autocomplete": {
                "type": "custom",
                "tokenizer": "edge_ngram_tokenizer",
                "filter": ["lowercase", "edge_ngram_filter"],
                "char_filter": ["html_strip_custom"],
            },
        },
        tokenizer={
            "edge_ngram_tokenizer": {"type": "edge_ngram", "min_gram": 2, "max_gram": 10},
            "unused_tokenizer": {"type": "pattern"},
        },
        filter={
            "edge_ngram_filter": {"type": "edge_ngram", "min_gram": 1, "max_gram": 20},
            "unused_filter": {"type": "stop"},
        },
        normalizer={
            "lowercase_normalizer": {"type": "custom", "filter": ["lowercase"]},
        },
        char_filter={
            "html_strip_custom": {"type": "html_strip"},
        },
    )


@pytest.fixture
def config(analysis_settings: AnalysisSettings) -> CompilerConfig:
    return CompilerConfig(analysis=analysis_settings)


@pytest.fixture
def compiler(reader: CountingReader, cache: InMemoryCache, config: CompilerConfig) -> SchemaCompiler:
    """Compiler wired to the counting reader and in-memory cache."""
    return SchemaCompiler(reader=reader, cache=cache, config=config)


@pytest.fixture
def tmp_package(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Helper to write an importable package of document modules.

    Usage:
        tmp_package("shop", {"products.py": "..."})
    """
    monkeypatch.syspath_prepend(str(tmp_path))
    written: list[str] = []

    def _write(package: str, modules: dict[str, str]) -> Path:
        package_dir = tmp_path / package
        package_dir.mkdir(parents=True, exist_ok=True)
        (package_dir / "__init__.py").touch()
        for relative_path, content in modules.items():
            file_path = package_dir / relative_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8")
        written.append(package)
        return package_dir

    yield _write

    for name in list(sys.modules):
        if any(name == p or name.startswith(f"{p}.") for p in written):
            del sys.modules[name]
