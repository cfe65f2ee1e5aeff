"""Analysis configuration resolution.

An application declares its analyzers, tokenizers, filters, normalizers
and char filters once. Each index receives only the analyzers its fields
reference, plus the auxiliary components those analyzer definitions name.

Auxiliary components are resolved against the analysis built so far, one
kind at a time (tokenizer, filter, normalizer, char_filter). A component
referenced only by a field mapping, or only by components of its own kind
or of a kind resolved after it, is not copied.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from doc_schema.core.config import AnalysisSettings
from doc_schema.core.enums import AnalysisComponent
from doc_schema.mapping.extractor import FieldMetadataExtractor, class_name
from doc_schema.mapping.tree import collect_values

logger = logging.getLogger(__name__)

ANALYZER_KEYS = ("analyzer", "search_analyzer", "search_quote_analyzer")


class AnalysisConfigResolver:
    """Projects the global analysis settings onto one document class.

    Args:
        extractor: Extractor used to build the class's mapping fragment.
        analysis: Global analysis settings.
    """

    def __init__(
        self,
        extractor: FieldMetadataExtractor,
        analysis: AnalysisSettings | None = None,
    ) -> None:
        self._extractor = extractor
        self._analysis = analysis or AnalysisSettings()

    def resolve(self, cls: type) -> dict[str, dict[str, Any]]:
        """Return the analysis components referenced by cls's mapping."""
        return self.resolve_mapping(self._extractor.extract(cls), owner=class_name(cls))

    def resolve_mapping(
        self, mapping: dict[str, Any], owner: str | None = None
    ) -> dict[str, dict[str, Any]]:
        """Return the analysis components referenced by a mapping fragment."""
        config: dict[str, dict[str, Any]] = {}

        analyzers: list[str] = []
        for key in ANALYZER_KEYS:
            analyzers.extend(collect_values(key, mapping))

        available = self._analysis.analyzer
        for analyzer in dict.fromkeys(analyzers):
            if analyzer in available:
                config.setdefault("analyzer", {})[analyzer] = copy.deepcopy(available[analyzer])

        for component in AnalysisComponent.auxiliary():
            available = self._analysis.section(component)
            for name in collect_values(component.value, config):
                if name in available:
                    config.setdefault(component.value, {})[name] = copy.deepcopy(available[name])

        if owner:
            logger.debug(
                f"Resolved analysis for {owner}: "
                + ", ".join(f"{kind}={sorted(items)}" for kind, items in config.items())
            )
        return config
