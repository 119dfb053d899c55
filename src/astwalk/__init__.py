"""astWalk - rewriting depth-first walker for syntax trees."""

import logging

from astwalk.errors import (
    TypeMismatch,
    UnknownNodeKind,
    WalkError,
)
from astwalk.handle import (
    Handle,
    Visitor,
)
from astwalk.nodes import Node
from astwalk.schema import (
    FieldSchema,
    NodeSchema,
    all_schemas,
    extract_type,
    node_schema,
)
from astwalk.syntax import CATALOGUE
from astwalk.types import (
    ChildType,
    Detached,
    FieldType,
    ListType,
    MappingType,
    Marker,
    NonEmpty,
    OptionalType,
    ValueType,
)
from astwalk.visitor import Rewriter
from astwalk.walker import (
    Walker,
    default_walker,
    inspect_tree,
    iter_child_nodes,
    walk,
    walk_handle,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CATALOGUE",
    "ChildType",
    "Detached",
    "FieldSchema",
    # Field types
    "FieldType",
    # Traversal
    "Handle",
    "ListType",
    "MappingType",
    "Marker",
    # Core types
    "Node",
    "NodeSchema",
    "NonEmpty",
    "OptionalType",
    "Rewriter",
    # Errors
    "TypeMismatch",
    "UnknownNodeKind",
    "ValueType",
    "Visitor",
    "WalkError",
    "Walker",
    # Schema extraction
    "all_schemas",
    "default_walker",
    "extract_type",
    "inspect_tree",
    "iter_child_nodes",
    "node_schema",
    "walk",
    "walk_handle",
]
