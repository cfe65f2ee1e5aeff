"""Mapping enumerations."""

from __future__ import annotations

from enum import Enum


class MappingType(Enum):
    """Mapping kinds of an embedded document class."""

    OBJECT = "object"
    NESTED = "nested"


class AnalysisComponent(Enum):
    """Sections of an index analysis configuration.

    Auxiliary components are listed in the order they are resolved.
    """

    ANALYZER = "analyzer"
    TOKENIZER = "tokenizer"
    FILTER = "filter"
    NORMALIZER = "normalizer"
    CHAR_FILTER = "char_filter"

    @classmethod
    def auxiliary(cls) -> list[AnalysisComponent]:
        return [cls.TOKENIZER, cls.FILTER, cls.NORMALIZER, cls.CHAR_FILTER]
