"""Annotation source.

The compiler never inspects classes directly; it asks an AnnotationReader
for class and property declarations. A missing declaration is reported as
None or an empty list, never as an error. An annotation that is not a valid
expression raises DeclarationError naming the property.
"""

from __future__ import annotations

import inspect
import logging
import sys
import typing
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar, runtime_checkable

from doc_schema.core.exceptions import DeclarationError
from doc_schema.mapping.declarations import class_declarations

logger = logging.getLogger(__name__)

D = TypeVar("D")


@dataclass(frozen=True)
class PropertyHandle:
    """A property declared on a class body."""

    name: str
    owner: type
    annotation: Any


@runtime_checkable
class AnnotationReader(Protocol):
    """Source of class and property declarations."""

    def get_class_annotation(self, cls: type, kind: type[D]) -> D | None:
        """Return the declaration of the given kind attached to cls, or None."""
        ...

    def get_properties(self, cls: type) -> list[PropertyHandle]:
        """Return properties declared on cls itself, in declaration order."""
        ...

    def get_property_annotations(self, prop: PropertyHandle) -> list[Any]:
        """Return the declarations attached to a property."""
        ...


def _evaluate(cls: type, name: str, annotation: str) -> Any:
    """Evaluate one string annotation in the namespace of cls.

    Names that cannot be resolved at runtime, such as imports guarded by
    TYPE_CHECKING, are bound to Any so the Annotated metadata survives.

    Raises:
        DeclarationError: The annotation is not a valid expression, or fails
            for a reason other than an unresolved name.
    """
    module = sys.modules.get(cls.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = dict(vars(cls))
    while True:
        try:
            return eval(annotation, globalns, localns)  # noqa: S307
        except NameError as e:
            if e.name is None or e.name in localns:
                raise DeclarationError(
                    cls.__qualname__, f"cannot evaluate annotation of '{name}': {e}"
                ) from e
            logger.debug(f"{cls.__qualname__}.{name}: '{e.name}' is unresolved, reading it as Any")
            localns[e.name] = Any
        except (AttributeError, SyntaxError, TypeError) as e:
            raise DeclarationError(
                cls.__qualname__, f"cannot evaluate annotation of '{name}': {e}"
            ) from e


def _own_annotations(cls: type) -> dict[str, Any]:
    """Read the annotations declared on cls itself, evaluating string entries."""
    return {
        name: _evaluate(cls, name, annotation) if isinstance(annotation, str) else annotation
        for name, annotation in inspect.get_annotations(cls).items()
    }


class AttributeReader:
    """Reads decorator-attached class declarations and Annotated metadata."""

    def get_class_annotation(self, cls: type, kind: type[D]) -> D | None:
        for declaration in class_declarations(cls):
            if isinstance(declaration, kind):
                return declaration
        return None

    def get_properties(self, cls: type) -> list[PropertyHandle]:
        return [
            PropertyHandle(name=name, owner=cls, annotation=annotation)
            for name, annotation in _own_annotations(cls).items()
            if typing.get_origin(annotation) is not typing.ClassVar
        ]

    def get_property_annotations(self, prop: PropertyHandle) -> list[Any]:
        if typing.get_origin(prop.annotation) is not typing.Annotated:
            return []
        return list(prop.annotation.__metadata__)
