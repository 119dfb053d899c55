"""Errors raised while walking a tree."""

from __future__ import annotations


class WalkError(Exception):
    """Base for errors raised by the walker."""


class TypeMismatch(WalkError, TypeError):
    """A node written back into a field does not match the field's declared kind."""

    def __init__(self, owner: str, field: str, expected: str, actual: str) -> None:
        self.owner = owner
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(f"{owner}.{field}: expected {expected}, got {actual}")


class UnknownNodeKind(WalkError, LookupError):
    """The walker met a node kind outside its catalogue."""

    def __init__(self, kind: type) -> None:
        self.kind = kind
        super().__init__(f"unexpected node kind {kind.__module__}.{kind.__qualname__}")
