"""Document declarations.

Frozen dataclasses describing how a document class maps to an index.
Class-level declarations are attached with decorators; field declarations
are attached as ``typing.Annotated`` metadata::

    @index(alias="products", settings={"number_of_shards": 1})
    class Product:
        title: Annotated[str, Property(type="text", analyzer="english")]
        variants: Annotated[list, Embedded(Variant)]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar, Union

from doc_schema.core.enums import MappingType
from doc_schema.core.exceptions import DeclarationError

C = TypeVar("C", bound=type)

DEFAULT_TYPE_NAME = "_doc"

# Class declarations live in the class's own __dict__ so subclasses do not
# inherit them through attribute lookup.
DECLARATIONS_ATTR = "__doc_schema_declarations__"


@dataclass(frozen=True)
class Index:
    """Index-level declaration of a document class."""

    alias: str | None = None
    default: bool = False
    # Deprecated: search engines no longer support mapping types.
    type_name: str | None = None
    settings: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ObjectType:
    """Marks an embeddable class mapped as an ``object`` field."""

    TYPE = MappingType.OBJECT


@dataclass(frozen=True)
class NestedType:
    """Marks an embeddable class mapped as a ``nested`` field."""

    TYPE = MappingType.NESTED


@dataclass(frozen=True)
class Property:
    """Scalar field declaration."""

    type: str
    name: str | None = None
    analyzer: str | None = None
    search_analyzer: str | None = None
    search_quote_analyzer: str | None = None
    settings: dict[str, Any] = field(default_factory=dict)

    def to_settings(self) -> dict[str, Any]:
        return dict(self.settings)


@dataclass(frozen=True)
class Embedded:
    """Embedded document field declaration.

    ``target`` is the embedded class, or its import path
    (``"package.module:Class"`` or ``"package.module.Class"``) when the
    class is defined later or elsewhere.
    """

    target: type | str
    name: str | None = None
    settings: dict[str, Any] = field(default_factory=dict)

    def to_settings(self) -> dict[str, Any]:
        return dict(self.settings)


FieldDeclaration = Union[Property, Embedded]
ClassDeclaration = Union[Index, ObjectType, NestedType]


def class_declarations(cls: type) -> list[ClassDeclaration]:
    """Return the declarations attached directly to cls."""
    return list(cls.__dict__.get(DECLARATIONS_ATTR, ()))


def _attach(declaration: ClassDeclaration) -> Callable[[C], C]:
    def decorator(cls: C) -> C:
        existing = class_declarations(cls)
        if any(type(d) is type(declaration) for d in existing):
            raise DeclarationError(
                f"{cls.__module__}.{cls.__qualname__}",
                f"@{type(declaration).__name__} declared more than once",
            )
        setattr(cls, DECLARATIONS_ATTR, (*existing, declaration))
        return cls

    return decorator


def index(
    alias: str | None = None,
    *,
    default: bool = False,
    type_name: str | None = None,
    settings: dict[str, Any] | None = None,
) -> Callable[[C], C]:
    """Declare a class as an indexed document."""
    return _attach(
        Index(alias=alias, default=default, type_name=type_name, settings=dict(settings or {}))
    )


def object_type(cls: C) -> C:
    """Declare an embeddable class mapped as ``object``."""
    return _attach(ObjectType())(cls)


def nested_type(cls: C) -> C:
    """Declare an embeddable class mapped as ``nested``."""
    return _attach(NestedType())(cls)
