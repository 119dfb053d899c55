"""Schema extraction and field reflection for node kinds."""

from __future__ import annotations

import types
from collections.abc import Iterable
from dataclasses import dataclass, fields, replace
from typing import (
    Annotated,
    Any,
    Literal,
    TypeAliasType,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from astwalk.nodes import Node
from astwalk.types import (
    ChildType,
    FieldType,
    ListType,
    MappingType,
    Marker,
    OptionalType,
    ValueType,
    _substitute_type_params,
)

# Plain data a node may carry next to its children
_VALUE_TYPES: frozenset[type] = frozenset({str, int, float, bool, bytes, type(None)})


@dataclass(frozen=True)
class FieldSchema:
    """Schema for a node field."""

    name: str
    type: FieldType
    walked: bool = True
    trivia: bool = False


@dataclass(frozen=True)
class NodeSchema:
    """Complete schema for a node kind."""

    tag: str
    kind: type[Node]
    fields: tuple[FieldSchema, ...]
    trivia: bool = False

    @property
    def walked_fields(self) -> tuple[FieldSchema, ...]:
        return tuple(f for f in self.fields if f.walked)


def _expand_alias(py_type: Any) -> Any:
    """Expand PEP 695 type aliases, generic or not."""
    if isinstance(py_type, TypeAliasType):
        return _expand_alias(py_type.__value__)

    origin = get_origin(py_type)
    if isinstance(origin, TypeAliasType):
        args = get_args(py_type)
        type_params = origin.__type_params__
        if len(type_params) != len(args):
            msg = (
                f"Type alias {origin.__name__} expects {len(type_params)} "
                f"arguments but got {len(args)}"
            )
            raise ValueError(msg)
        substitutions = dict(zip(type_params, args, strict=True))
        return _expand_alias(_substitute_type_params(origin.__value__, substitutions))

    return py_type


def _markers(py_type: Any) -> tuple[Any, ...]:
    py_type = _expand_alias(py_type)
    if get_origin(py_type) is Annotated:
        return py_type.__metadata__
    return ()


def _is_node_class(py_type: Any) -> bool:
    return isinstance(py_type, type) and issubclass(py_type, Node)


def extract_type(py_type: Any) -> FieldType:
    """Convert a resolved field annotation to a FieldType."""
    py_type = _expand_alias(py_type)
    origin = get_origin(py_type)
    args = get_args(py_type)

    # Annotated markers refine the wrapped type
    if origin is Annotated:
        inner = extract_type(args[0])
        if Marker.NON_EMPTY in py_type.__metadata__:
            if not isinstance(inner, ListType):
                msg = f"NON_EMPTY marker requires a list type, got {args[0]}"
                raise ValueError(msg)
            inner = replace(inner, non_empty=True)
        return inner

    # Plain data
    if py_type in _VALUE_TYPES:
        return ValueType(primitive=py_type)
    if origin is Literal:
        if not args:
            msg = "Literal type must have values"
            raise ValueError(msg)
        return ValueType(primitive=py_type)

    # Single child
    if _is_node_class(py_type):
        return ChildType(kinds=(py_type,))

    # Unions: children, optional children, or plain data
    if isinstance(py_type, types.UnionType) or origin is Union:
        options = [a for a in args if a is not type(None)]
        optional = len(options) != len(args)
        if options and all(_is_node_class(a) for a in options):
            child = ChildType(kinds=tuple(options))
            return OptionalType(child=child) if optional else child
        if all(a in _VALUE_TYPES for a in args):
            return ValueType(primitive=py_type)
        msg = f"Cannot mix nodes and plain values in field type: {py_type}"
        raise ValueError(msg)

    # Ordered children
    if origin is list:
        if not args:
            msg = "list type must have an element type"
            raise ValueError(msg)
        element = extract_type(args[0])
        if not isinstance(element, ChildType):
            msg = f"list elements must be node kinds, got {args[0]}"
            raise ValueError(msg)
        return ListType(element=element)

    # Keyed members
    if origin is dict:
        if len(args) != 2:
            msg = "dict type must have key and value types"
            raise ValueError(msg)
        value = extract_type(args[1])
        if not isinstance(value, ChildType):
            msg = f"dict values must be node kinds, got {args[1]}"
            raise ValueError(msg)
        return MappingType(key=args[0], value=value)

    msg = f"Cannot extract field type from: {py_type}"
    raise ValueError(msg)


def _is_trivia(field_type: FieldType) -> bool:
    child = field_type.child_type()
    return child is not None and all(kind.is_trivia() for kind in child.kinds)


def node_schema(cls: type[Node]) -> NodeSchema:
    """Get schema for a node class."""
    hints = get_type_hints(cls, include_extras=True)

    node_fields = []
    for f in fields(cls):
        if f.name.startswith("_"):
            continue
        hint = hints[f.name]
        field_type = extract_type(hint)
        node_fields.append(
            FieldSchema(
                name=f.name,
                type=field_type,
                walked=field_type.walked and Marker.DETACHED not in _markers(hint),
                trivia=_is_trivia(field_type),
            ),
        )

    return NodeSchema(
        tag=cls._tag,
        kind=cls,
        fields=tuple(node_fields),
        trivia=cls.is_trivia(),
    )


def all_schemas(kinds: Iterable[type[Node]] | None = None) -> dict[str, NodeSchema]:
    """Get schemas for the given node kinds, or for every registered kind."""
    if kinds is None:
        kinds = Node.registry().values()
    return {cls._tag: node_schema(cls) for cls in kinds}
