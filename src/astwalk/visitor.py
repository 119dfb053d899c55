"""Class-based visitors dispatching on node tags."""

from __future__ import annotations

from astwalk.handle import Handle
from astwalk.nodes import Node
from astwalk.walker import Walker, default_walker


class Rewriter:
    """
    Visitor that dispatches each handle to ``visit_<tag>``.

    Subclasses define methods named after the tags of the node kinds they
    care about; every other node goes to :meth:`generic_visit`. A method
    returns the handle, usually after calling ``replace``, ``delete`` or
    ``break_traversal`` on it.

    Example:
        class DropPrintln(Rewriter):
            def visit_call_expr(self, handle):
                fun = handle.current.fun
                if isinstance(fun, SelectorExpr) and fun.sel.name == "Println":
                    return handle.delete()
                return handle

        tree = DropPrintln().rewrite(tree)
    """

    def __call__(self, handle: Handle) -> Handle | None:
        method = getattr(self, f"visit_{handle.current.kind_tag()}", self.generic_visit)
        return method(handle)

    def generic_visit(self, handle: Handle) -> Handle | None:
        """Called for nodes without a dedicated visit method."""
        return handle

    def rewrite(self, root: Node, walker: Walker | None = None) -> Node | None:
        """Walk ``root`` with this rewriter and return the rewritten tree."""
        return (walker or default_walker()).walk(root, self)
