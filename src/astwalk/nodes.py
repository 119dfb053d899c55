"""
Node system domain for syntax tree infrastructure.

This module provides the base class for tree node kinds. Subclasses that
declare fields become mutable dataclasses and are registered under a tag;
subclasses without fields of their own are abstract categories.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import dataclass_transform, ClassVar

# =============================================================================
# Core Types
# =============================================================================


@dataclass_transform(kw_only_default=True)
class Node:
    """Base for syntax tree nodes."""

    _tag: ClassVar[str]
    _trivia: ClassVar[bool] = False
    _registry: ClassVar[dict[str, type[Node]]] = {}

    def __init_subclass__(cls, tag: str | None = None, trivia: bool | None = None, **kwargs):
        super().__init_subclass__(**kwargs)
        if trivia is not None:
            cls._trivia = trivia
        # Categories such as Expr or Stmt carry no fields and stay abstract
        if not inspect.get_annotations(cls):
            return
        dataclass(eq=True, repr=True, kw_only=True)(cls)
        cls._tag = tag or cls.__name__.lower()

        if existing := Node._registry.get(cls._tag):
            if existing is not cls:
                raise ValueError(
                    f"Tag '{cls._tag}' already registered to {existing}. "
                    f"Choose a different tag."
                )
        Node._registry[cls._tag] = cls

    @classmethod
    def registry(cls) -> dict[str, type[Node]]:
        """Return all registered node kinds by tag."""
        return dict(Node._registry)

    @classmethod
    def kind_tag(cls) -> str:
        """Return the tag this kind is registered under."""
        return cls._tag

    @classmethod
    def is_trivia(cls) -> bool:
        return cls._trivia
