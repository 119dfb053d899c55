"""
Handles wrap the node being visited during a walk.

A handle carries the node, a non-owning link to the enclosing handle, and the
visitor's verdict: delete the node, or keep it but skip its children. Handles
exist only for the duration of one walk.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from astwalk.nodes import Node


class Handle:
    """Wraps one tree node together with its parent handle and mutation flags."""

    __slots__ = ("_parent", "_current", "_delete", "_skip")

    def __init__(self, current: Node | None, parent: Handle | None = None) -> None:
        self._parent = parent
        self._current = current
        self._delete = False
        self._skip = False

    def __repr__(self) -> str:
        flags = [name for name, on in (("delete", self._delete), ("skip", self._skip)) if on]
        kind = type(self._current).__name__ if self._current is not None else "None"
        return f"Handle({kind}{', ' + ', '.join(flags) if flags else ''})"

    @property
    def parent(self) -> Handle | None:
        """The enclosing handle, or None at the root."""
        return self._parent

    @property
    def current(self) -> Node | None:
        """The wrapped node, or None once it has been nulled."""
        return self._current

    def replace(self, node: Node | None) -> Handle:
        """
        Replace the wrapped node.

        The kind of the new node is checked when the walker writes it back
        into the parent field, not here.
        """
        self._current = node
        return self

    def delete(self) -> Handle:
        """Mark the node for removal from whatever holds it."""
        self._delete = True
        return self

    def break_traversal(self) -> Handle:
        """Keep the node but do not descend into its children."""
        self._skip = True
        return self

    def is_canceled(self) -> bool:
        return self._current is None or self._delete or self._skip

    def is_deleted(self) -> bool:
        """True if the node is to be removed from its parent; skip alone keeps it."""
        return self._current is None or self._delete

    def ancestors(self) -> Iterator[Handle]:
        """Iterate enclosing handles, innermost first."""
        handle = self._parent
        while handle is not None:
            yield handle
            handle = handle._parent

    def find_parent(self, *kinds: type[Node]) -> Handle | None:
        """Return the nearest enclosing handle whose node is one of ``kinds``."""
        for handle in self.ancestors():
            if isinstance(handle._current, kinds):
                return handle
        return None


type Visitor = Callable[[Handle], Handle | None]
