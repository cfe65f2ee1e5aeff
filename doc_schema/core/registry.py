"""Document Registry - collects indexed document classes by alias.

Alias convention:
    @index() class ProductDocument     -> "product_document"
    @index("catalog") class Product    -> "catalog"

The registry populates the alias -> class name entry of the metadata cache
that SchemaCompiler.get_document_namespace reads.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil

from doc_schema.core.cache import INDEXES, MetadataCache
from doc_schema.core.exceptions import DuplicateIndexError, IndexNotFoundError
from doc_schema.mapping.compiler import SchemaCompiler
from doc_schema.mapping.extractor import class_name

logger = logging.getLogger(__name__)


class DocumentRegistry:
    """Collects document classes carrying an Index declaration.

    Args:
        compiler: Compiler used to read index declarations and aliases.

    Raises:
        DuplicateIndexError: If two classes resolve to the same alias, or two
            classes are declared as the default index.
    """

    def __init__(self, compiler: SchemaCompiler) -> None:
        self._compiler = compiler
        self._documents: dict[str, type] = {}
        self._default: str | None = None

    def register(self, cls: type) -> str:
        """Register an indexed document class and return its alias.

        Registering the same class twice is a no-op.
        """
        alias = self._compiler.get_index_alias_name(cls)
        existing = self._documents.get(alias)
        if existing is cls:
            return alias
        if existing is not None:
            raise DuplicateIndexError(alias, class_name(existing), class_name(cls))

        if self._compiler.is_default_index(cls):
            if self._default is not None:
                raise DuplicateIndexError(
                    "default", class_name(self._documents[self._default]), class_name(cls)
                )
            self._default = alias

        self._documents[alias] = cls
        logger.debug(f"Registered index '{alias}' -> {class_name(cls)}")
        return alias

    def scan(self, package: str) -> list[str]:
        """Import every module of a package and register its document classes.

        Only classes defined in the scanned modules are registered, so a
        document imported elsewhere is not picked up twice.

        Returns:
            Aliases registered by this scan, in discovery order.
        """
        root = importlib.import_module(package)
        modules = [root]
        if hasattr(root, "__path__"):
            for info in pkgutil.walk_packages(root.__path__, prefix=f"{root.__name__}."):
                modules.append(importlib.import_module(info.name))

        aliases: list[str] = []
        for module in modules:
            for _, cls in inspect.getmembers(module, inspect.isclass):
                if cls.__module__ != module.__name__:
                    continue
                if self._compiler.get_index_annotation(cls) is None:
                    continue
                alias = self.register(cls)
                if alias not in aliases:
                    aliases.append(alias)
        return aliases

    def get(self, alias: str) -> type:
        """Look up a document class by alias.

        Raises:
            IndexNotFoundError: If no class is registered under alias.
        """
        try:
            return self._documents[alias]
        except KeyError:
            raise IndexNotFoundError(alias) from None

    def has(self, alias: str) -> bool:
        return alias in self._documents

    @property
    def aliases(self) -> list[str]:
        """All registered aliases, sorted alphabetically."""
        return sorted(self._documents.keys())

    @property
    def default_alias(self) -> str | None:
        return self._default

    def save(self, cache: MetadataCache | None = None) -> bool:
        """Write the alias -> class name registry into the metadata cache."""
        target = cache if cache is not None else self._compiler.cache
        return target.save(
            INDEXES, {alias: class_name(cls) for alias, cls in self._documents.items()}
        )

    def __len__(self) -> int:
        return len(self._documents)
