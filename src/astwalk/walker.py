"""
Depth-first rewriting walker.

The walker visits every node of a tree, hands each one to a visitor through a
:class:`~astwalk.handle.Handle`, and writes the visitor's verdict back into
the parent structure:

- a replaced node is stored in place of the original, after checking that
  its kind fits the field;
- a deleted node is removed: optional fields become ``None``, lists are
  compacted, mapping members are dropped, and a required field or a
  non-empty list that loses its content deletes the owner in turn;
- a node whose traversal was broken stays where it is, but its children are
  not visited.

Comment groups below a removed node are emptied so that they do not float
around in the file's comment list.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from functools import cache
from typing import Any

from astwalk.errors import TypeMismatch, UnknownNodeKind
from astwalk.handle import Handle, Visitor
from astwalk.nodes import Node
from astwalk.schema import FieldSchema, NodeSchema, node_schema
from astwalk.syntax import CATALOGUE
from astwalk.types import ChildType, ListType, MappingType, OptionalType, ValueType

logger = logging.getLogger(__name__)


def _removed(handle: Handle | None) -> bool:
    return handle is None or handle.is_deleted()


class Walker:
    """
    Walks trees built from a closed catalogue of node kinds.

    Args:
        catalogue: Node kinds the walker accepts. Meeting any other kind
            raises UnknownNodeKind.
        scrub_trivia: Empty the comment groups found below removed nodes.
    """

    def __init__(
        self,
        catalogue: Iterable[type[Node]] = CATALOGUE,
        *,
        scrub_trivia: bool = True,
    ) -> None:
        self._rules: dict[type[Node], NodeSchema] = {cls: node_schema(cls) for cls in catalogue}
        self.scrub_trivia = scrub_trivia
        logger.debug("walker built with %d node kinds", len(self._rules))

    @property
    def catalogue(self) -> frozenset[type[Node]]:
        return frozenset(self._rules)

    def rule(self, kind: type) -> NodeSchema:
        """Return the schema driving the traversal of ``kind``."""
        try:
            return self._rules[kind]
        except KeyError:
            raise UnknownNodeKind(kind) from None

    # =========================================================================
    # Walking
    # =========================================================================

    def walk(self, root: Node | None, visitor: Visitor) -> Node | None:
        """
        Walk the tree under ``root`` and return the rewritten root.

        Returns None if the visitor deleted the root itself.
        """
        handle = self.walk_handle(Handle(root), visitor)
        return None if _removed(handle) else handle.current

    def walk_handle(self, handle: Handle, visitor: Visitor) -> Handle | None:
        """
        Visit ``handle`` and then every node below it, depth first.

        Returns the handle produced by the visitor. Its delete flag is set if
        the node has to be removed from its parent, either because the
        visitor asked for it or because a required child was removed.
        """
        if handle.current is None:
            return handle

        handle = visitor(handle)
        if _removed(handle):
            logger.debug("deleted %r", handle)
            return handle
        if handle.is_canceled():
            logger.debug("not descending into %r", handle)
            return handle

        node = handle.current
        rule = self.rule(type(node))
        for f in rule.walked_fields:
            if not self._walk_field(handle, node, f, visitor) and not f.trivia:
                logger.debug("%s.%s lost its content, deleting owner", rule.tag, f.name)
                return handle.delete()

        return handle

    def _walk_field(self, handle: Handle, node: Node, f: FieldSchema, visitor: Visitor) -> bool:
        """Walk one field of ``node``; return False if the owner has to go."""
        match f.type:
            case ChildType() | OptionalType():
                original = getattr(node, f.name)
                child = self.walk_handle(Handle(original, handle), visitor)
                kept = self._assign(node, f, original, child)
                return kept or isinstance(f.type, OptionalType)

            case ListType(non_empty=non_empty):
                items = getattr(node, f.name)
                survivors = self._walk_list(handle, node, f, items, visitor)
                lost = len(survivors) < len(items)
                items[:] = survivors
                return not (non_empty and lost and not items)

            case MappingType():
                self._walk_members(handle, node, f, getattr(node, f.name), visitor)
                return True

            case _:
                raise AssertionError(f"{f.name}: field type {f.type!r} is not walked")

    def _walk_list(
        self,
        handle: Handle,
        node: Node,
        f: FieldSchema,
        items: list[Node],
        visitor: Visitor,
    ) -> list[Node]:
        survivors = []
        for item in items:
            child = self.walk_handle(Handle(item, handle), visitor)
            if _removed(child):
                self._scrub_removed(item, child)
            else:
                survivors.append(self._checked(node, f, child.current))
        return survivors

    def _walk_members(
        self,
        handle: Handle,
        node: Node,
        f: FieldSchema,
        members: dict[Any, Node],
        visitor: Visitor,
    ) -> None:
        for key, member in list(members.items()):
            child = self.walk_handle(Handle(member, handle), visitor)
            if _removed(child):
                logger.debug("dropping member %r of %s.%s", key, type(node).__name__, f.name)
                del members[key]
                self._scrub_removed(member, child)
            else:
                members[key] = self._checked(node, f, child.current)

    def _assign(self, node: Node, f: FieldSchema, original: Node | None, child: Handle | None) -> bool:
        """
        Write a walked child back into ``node``.

        Returns True if the child was kept, False if the field was zeroed.
        A removed child is scrubbed here, since the owner no longer reaches it.
        """
        if _removed(child):
            self._scrub_removed(original, child)
            setattr(node, f.name, f.type.empty())
            return False
        setattr(node, f.name, self._checked(node, f, child.current))
        return True

    def _checked(self, node: Node, f: FieldSchema, value: Any) -> Any:
        expected = f.type.child_type()
        if not expected.accepts(value):
            raise TypeMismatch(
                owner=type(node).__name__,
                field=f.name,
                expected=expected.describe(),
                actual=type(value).__name__,
            )
        return value

    # =========================================================================
    # Inspection and Trivia
    # =========================================================================

    def iter_child_nodes(self, node: Node, *, detached: bool = False) -> Iterator[Node]:
        """Yield the direct children of ``node`` in field order."""
        for f in self.rule(type(node)).fields:
            if isinstance(f.type, ValueType) or not (f.walked or detached):
                continue
            value = getattr(node, f.name)
            match f.type:
                case ChildType() | OptionalType():
                    if value is not None:
                        yield value
                case ListType():
                    yield from value
                case MappingType():
                    yield from value.values()

    def inspect(self, node: Node | None, fn: Callable[[Node], bool]) -> None:
        """
        Call ``fn`` on ``node`` and every node below it, in pre-order.

        Descent below a node stops when ``fn`` returns a false value. Nothing
        is rewritten; fields owned elsewhere are included.
        """
        if node is None or not fn(node):
            return
        for child in self.iter_child_nodes(node, detached=True):
            self.inspect(child, fn)

    def scrub(self, node: Node | None) -> None:
        """Empty every comment group in the subtree under ``node``."""

        def clear(n: Node) -> bool:
            rule = self.rule(type(n))
            if not rule.trivia:
                return True
            for f in rule.fields:
                if isinstance(f.type, ListType):
                    getattr(n, f.name).clear()
            return False

        self.inspect(node, clear)

    def _scrub_removed(self, original: Node | None, child: Handle | None) -> None:
        if not self.scrub_trivia:
            return
        self.scrub(original)
        if child is not None and child.current is not None and child.current is not original:
            self.scrub(child.current)


# =============================================================================
# Default Walker
# =============================================================================


@cache
def default_walker() -> Walker:
    """Return the shared walker over the built-in catalogue."""
    return Walker()


def walk(root: Node | None, visitor: Visitor) -> Node | None:
    """Walk ``root`` with ``visitor`` and return the rewritten tree, or None if it was deleted."""
    return default_walker().walk(root, visitor)


def walk_handle(handle: Handle, visitor: Visitor) -> Handle | None:
    return default_walker().walk_handle(handle, visitor)


def inspect_tree(node: Node | None, fn: Callable[[Node], bool]) -> None:
    default_walker().inspect(node, fn)


def iter_child_nodes(node: Node) -> Iterator[Node]:
    return default_walker().iter_child_nodes(node)
