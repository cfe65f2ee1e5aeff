"""DocSchema exception hierarchy.

Every failure raised while compiling a document class derives from
DocSchemaError. Absent declarations, settings, or cache entries are not
errors and never raise.
"""

from __future__ import annotations


class DocSchemaError(Exception):
    """Base exception for all DocSchema errors."""


# --- Declarations ---


class DeclarationError(DocSchemaError):
    """Raised when a declaration is attached to a class incorrectly."""

    def __init__(self, class_name: str, detail: str) -> None:
        self.class_name = class_name
        super().__init__(f"Invalid declaration on {class_name}: {detail}")


# --- Mapping ---


class MappingError(DocSchemaError):
    """Base for mapping extraction errors."""


class EmbeddingError(MappingError):
    """Base for errors about an embedded document class."""

    def __init__(self, class_name: str, message: str) -> None:
        self.class_name = class_name
        super().__init__(message)


class UnknownMappingTypeError(EmbeddingError):
    """Raised when an embedded class carries neither object nor nested marker."""

    def __init__(self, class_name: str) -> None:
        super().__init__(
            class_name,
            f"{class_name} must be declared with @object_type or @nested_type "
            "as an embeddable object.",
        )


class AmbiguousMappingTypeError(EmbeddingError):
    """Raised when an embedded class carries both object and nested markers."""

    def __init__(self, class_name: str) -> None:
        super().__init__(
            class_name,
            f"{class_name} is declared with both @object_type and @nested_type; "
            "an embeddable object must use exactly one of them.",
        )


class CircularEmbeddingError(EmbeddingError):
    """Raised when embedded classes reference each other without termination."""

    def __init__(self, chain: list[str]) -> None:
        self.chain = chain
        super().__init__(chain[-1], f"Circular embedding: {' -> '.join(chain)}")


class EmbeddedClassNotFoundError(EmbeddingError):
    """Raised when an embedded target given as an import path cannot be loaded."""

    def __init__(self, target: str, detail: str) -> None:
        super().__init__(target, f"Cannot load embedded class '{target}': {detail}")


# --- Registry ---


class RegistryError(DocSchemaError):
    """Base for document registry errors."""


class IndexNotFoundError(RegistryError):
    """Raised when no document class is registered under an alias."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(f"Index not found: '{alias}'")


class DuplicateIndexError(RegistryError):
    """Raised when two document classes claim the same alias or default slot."""

    def __init__(self, alias: str, class_a: str, class_b: str) -> None:
        self.alias = alias
        super().__init__(f"Duplicate index '{alias}': {class_a} and {class_b}")


# --- Cache ---


class CacheError(DocSchemaError):
    """Raised when the metadata cache cannot be read or written."""


# --- Configuration ---


class ConfigurationError(DocSchemaError):
    """Raised when compiler configuration is invalid."""
