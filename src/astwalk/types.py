"""
Field type domain for runtime description of node fields.

This module defines how a node field is shaped: plain value, single required
child, optional child, ordered list of children, or keyed collection of
members. The walker reads these descriptions to decide how a field is walked,
written back and validated.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from enum import Enum
from typing import dataclass_transform, get_args, get_origin, Annotated, Any, ClassVar

# =============================================================================
# Annotation Markers
# =============================================================================


class Marker(Enum):
    """Metadata attached to field annotations with ``Annotated``."""
    NON_EMPTY = "non_empty"  # owner is invalid once the list is emptied
    DETACHED = "detached"    # nodes owned elsewhere, never walked


type NonEmpty[T] = Annotated[list[T], Marker.NON_EMPTY]
type Detached[T] = Annotated[T, Marker.DETACHED]

# =============================================================================
# Field Type Base
# =============================================================================


@dataclass_transform(frozen_default=True)
class FieldType:
    """Base for field type definitions."""

    _tag: ClassVar[str]
    _registry: ClassVar[dict[str, type[FieldType]]] = {}

    def __init_subclass__(cls, tag: str | None = None, **kwargs):
        super().__init_subclass__(**kwargs)
        dataclass(frozen=True)(cls)
        cls._tag = tag or cls.__name__.lower().removesuffix("type")

        if existing := FieldType._registry.get(cls._tag):
            if existing is not cls:
                raise ValueError(
                    f"Tag '{cls._tag}' already registered to {existing}. "
                    f"Choose a different tag."
                )
        FieldType._registry[cls._tag] = cls

    @property
    def walked(self) -> bool:
        """Whether the field holds nodes the walker descends into."""
        return True

    def empty(self) -> Any:
        """Value stored in the field once its content has been removed."""
        return None

    def child_type(self) -> ChildType | None:
        """Kind check applied to each node the field holds, or None for plain data."""
        return None


# =============================================================================
# Concrete Field Types
# =============================================================================


class ValueType(FieldType, tag="value"):
    """
    Plain data carried by a node (names, operator tokens, literal text).

    Example: name: str → ValueType(primitive=str)
    """

    primitive: Any

    @property
    def walked(self) -> bool:
        return False


class ChildType(FieldType, tag="child"):
    """
    Single required child node.

    Example: x: Expr → ChildType(kinds=(Expr,))
    """

    kinds: tuple[type, ...]

    def accepts(self, value: Any) -> bool:
        return isinstance(value, self.kinds)

    def describe(self) -> str:
        return " | ".join(kind.__name__ for kind in self.kinds)

    def child_type(self) -> ChildType:
        return self


class OptionalType(FieldType, tag="optional"):
    """
    Child node that may be absent.

    Example: body: BlockStmt | None → OptionalType(child=ChildType(kinds=(BlockStmt,)))
    """

    child: ChildType

    def child_type(self) -> ChildType:
        return self.child


class ListType(FieldType, tag="list"):
    """
    Ordered list of child nodes.

    Examples:
        list[Stmt] → ListType(element=ChildType(kinds=(Stmt,)))
        NonEmpty[Spec] → ListType(element=ChildType(kinds=(Spec,)), non_empty=True)
    """

    element: ChildType
    non_empty: bool = False

    def child_type(self) -> ChildType:
        return self.element

    def empty(self) -> list:
        return []


class MappingType(FieldType, tag="mapping"):
    """
    Keyed collection of independent members.

    Example: files: dict[str, File] → MappingType(key=str, value=ChildType(kinds=(File,)))
    """

    key: Any
    value: ChildType

    def child_type(self) -> ChildType:
        return self.value

    def empty(self) -> dict:
        return {}


# =============================================================================
# Type Parameter Substitution
# =============================================================================


def _substitute_type_params(type_expr: Any, substitutions: dict[Any, Any]) -> Any:
    """
    Recursively substitute type parameters in a type expression.

    Args:
        type_expr: The type expression to substitute in
        substitutions: Mapping from type parameters to their concrete types

    Returns:
        The type expression with parameters substituted
    """
    if isinstance(type_expr, type) or isinstance(type_expr, Enum):
        return type_expr

    if type_expr in substitutions:
        return substitutions[type_expr]

    origin = get_origin(type_expr)
    args = get_args(type_expr)
    if origin is None or not args:
        return type_expr

    new_args = tuple(_substitute_type_params(arg, substitutions) for arg in args)

    # Unions built with | are not subscriptable
    if isinstance(type_expr, types.UnionType):
        result = new_args[0]
        for arg in new_args[1:]:
            result = result | arg
        return result

    # Annotated keeps its metadata as-is
    if origin is Annotated:
        return Annotated[new_args]

    return origin[new_args]
