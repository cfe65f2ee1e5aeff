"""Compiler configuration.

AnalysisSettings holds the global analysis components an application
declares once; the compiler copies only the referenced subset into each
index. CompilerConfig is a Pydantic model for type-safe compiler options.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from doc_schema.core.enums import AnalysisComponent
from doc_schema.core.exceptions import ConfigurationError


class AnalysisSettings(BaseModel):
    """Global analysis configuration, keyed by component name."""

    analyzer: dict[str, dict[str, Any]] = {}
    tokenizer: dict[str, dict[str, Any]] = {}
    filter: dict[str, dict[str, Any]] = {}
    normalizer: dict[str, dict[str, Any]] = {}
    char_filter: dict[str, dict[str, Any]] = {}

    def section(self, component: AnalysisComponent) -> dict[str, dict[str, Any]]:
        """Return the definitions of one component kind."""
        return getattr(self, component.value)  # type: ignore[no-any-return]


class CompilerConfig(BaseModel):
    """Configuration for the schema compiler."""

    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    allow_ambiguous_embeddables: bool = False
    cache_path: Path | None = None


def load_config(path: Path | str) -> CompilerConfig:
    """Load a CompilerConfig from a JSON file.

    Raises:
        ConfigurationError: If the file is missing or fails validation.
    """
    config_path = Path(path)
    try:
        return CompilerConfig.model_validate_json(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file '{config_path}': {e}") from e
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file '{config_path}': {e}") from e
