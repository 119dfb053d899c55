"""
Node kinds of a procedural-language syntax tree.

The catalogue mirrors a Go-like AST: comments, field lists, expressions,
statements, specs, declarations, files and packages. Field annotations tell
the walker how each field is traversed:

    x: Expr                    required child, removal deletes the owner
    label: Ident | None        optional child
    args: list[Expr]           ordered children, compacted on removal
    specs: NonEmpty[Spec]      ordered children, owner deleted once emptied
    comments: Detached[...]    owned elsewhere, not walked
    files: dict[str, File]     independent members

Plain data (names, tokens, literal text) is carried as str/int/bool fields.
"""

from __future__ import annotations

from dataclasses import field

from astwalk.nodes import Node
from astwalk.types import Detached, NonEmpty

# =============================================================================
# Categories
# =============================================================================


class Expr(Node):
    """Expressions and type expressions."""


class Stmt(Node):
    """Statements."""


class Spec(Node):
    """Import, value and type specs inside a general declaration."""


class Decl(Node):
    """Top-level declarations."""


# =============================================================================
# Comments and Fields
# =============================================================================


class Comment(Node):
    text: str


class CommentGroup(Node, tag="comment_group", trivia=True):
    """A run of comments with no other tokens between them."""

    comments: list[Comment] = field(default_factory=list)

    def text(self) -> str:
        lines = []
        for c in self.comments:
            line = c.text
            if line.startswith("//"):
                line = line[2:].removeprefix(" ")
            elif line.startswith("/*"):
                line = line[2:-2].strip()
            lines.append(line)
        return "\n".join(lines)


class Field(Node):
    """A parameter, result, struct field or interface method."""

    doc: CommentGroup | None = None
    names: list[Ident] = field(default_factory=list)
    type: Expr
    tag: BasicLit | None = None
    comment: CommentGroup | None = None


class FieldList(Node, tag="field_list"):
    fields: NonEmpty[Field] = field(default_factory=list)


# =============================================================================
# Expressions
# =============================================================================


class BadExpr(Expr, tag="bad_expr"):
    """Placeholder for source that failed to parse."""

    start: int = 0
    end: int = 0


class Ident(Expr):
    name: str


class EllipsisExpr(Expr, tag="ellipsis"):
    """``...T`` in parameter lists, ``[...]T`` in array types."""

    elt: Expr | None = None


class BasicLit(Expr, tag="basic_lit"):
    kind: str
    value: str


class FuncLit(Expr, tag="func_lit"):
    type: FuncType
    body: BlockStmt | None = None


class CompositeLit(Expr, tag="composite_lit"):
    type: Expr | None = None
    elts: list[Expr] = field(default_factory=list)


class ParenExpr(Expr, tag="paren_expr"):
    x: Expr


class SelectorExpr(Expr, tag="selector_expr"):
    x: Expr
    sel: Ident


class IndexExpr(Expr, tag="index_expr"):
    x: Expr
    index: Expr


class SliceExpr(Expr, tag="slice_expr"):
    x: Expr
    low: Expr | None = None
    high: Expr | None = None
    max: Expr | None = None
    slice3: bool = False


class TypeAssertExpr(Expr, tag="type_assert_expr"):
    x: Expr
    type: Expr | None = None  # None for x.(type) in a type switch


class CallExpr(Expr, tag="call_expr"):
    fun: Expr
    args: list[Expr] = field(default_factory=list)
    has_ellipsis: bool = False


class StarExpr(Expr, tag="star_expr"):
    x: Expr


class UnaryExpr(Expr, tag="unary_expr"):
    op: str
    x: Expr


class BinaryExpr(Expr, tag="binary_expr"):
    x: Expr
    op: str
    y: Expr


class KeyValueExpr(Expr, tag="key_value_expr"):
    key: Expr
    value: Expr


class ArrayType(Expr, tag="array_type"):
    len: Expr | None = None  # None for slices
    elt: Expr


class StructType(Expr, tag="struct_type"):
    fields: FieldList


class FuncType(Expr, tag="func_type"):
    params: FieldList | None = None
    results: FieldList | None = None


class InterfaceType(Expr, tag="interface_type"):
    methods: FieldList | None = None


class MapType(Expr, tag="map_type"):
    key: Expr
    value: Expr


class ChanType(Expr, tag="chan_type"):
    dir: str = "both"
    value: Expr


# =============================================================================
# Statements
# =============================================================================


class BadStmt(Stmt, tag="bad_stmt"):
    start: int = 0
    end: int = 0


class DeclStmt(Stmt, tag="decl_stmt"):
    decl: GenDecl


class EmptyStmt(Stmt, tag="empty_stmt"):
    implicit: bool = False


class LabeledStmt(Stmt, tag="labeled_stmt"):
    label: Ident
    stmt: Stmt


class ExprStmt(Stmt, tag="expr_stmt"):
    x: Expr


class SendStmt(Stmt, tag="send_stmt"):
    chan: Expr
    value: Expr


class IncDecStmt(Stmt, tag="inc_dec_stmt"):
    x: Expr
    tok: str


class AssignStmt(Stmt, tag="assign_stmt"):
    lhs: list[Expr] = field(default_factory=list)
    tok: str = "="
    rhs: list[Expr] = field(default_factory=list)


class GoStmt(Stmt, tag="go_stmt"):
    call: CallExpr


class DeferStmt(Stmt, tag="defer_stmt"):
    call: CallExpr


class ReturnStmt(Stmt, tag="return_stmt"):
    results: list[Expr] = field(default_factory=list)


class BranchStmt(Stmt, tag="branch_stmt"):
    """break, continue, goto or fallthrough."""

    tok: str
    label: Ident | None = None


class BlockStmt(Stmt, tag="block_stmt"):
    body: list[Stmt] = field(default_factory=list)


class IfStmt(Stmt, tag="if_stmt"):
    init: Stmt | None = None
    cond: Expr
    body: BlockStmt
    orelse: Stmt | None = None


class CaseClause(Stmt, tag="case_clause"):
    exprs: list[Expr] = field(default_factory=list)  # empty for default
    body: list[Stmt] = field(default_factory=list)


class SwitchStmt(Stmt, tag="switch_stmt"):
    init: Stmt | None = None
    tag: Expr | None = None
    body: BlockStmt


class TypeSwitchStmt(Stmt, tag="type_switch_stmt"):
    init: Stmt | None = None
    assign: Stmt
    body: BlockStmt


class CommClause(Stmt, tag="comm_clause"):
    comm: Stmt | None = None  # None for default
    body: list[Stmt] = field(default_factory=list)


class SelectStmt(Stmt, tag="select_stmt"):
    body: BlockStmt


class ForStmt(Stmt, tag="for_stmt"):
    init: Stmt | None = None
    cond: Expr | None = None
    post: Stmt | None = None
    body: BlockStmt


class RangeStmt(Stmt, tag="range_stmt"):
    key: Expr | None = None
    value: Expr | None = None
    tok: str = ""
    x: Expr
    body: BlockStmt


# =============================================================================
# Specs
# =============================================================================


class ImportSpec(Spec, tag="import_spec"):
    doc: CommentGroup | None = None
    name: Ident | None = None
    path: BasicLit
    comment: CommentGroup | None = None


class ValueSpec(Spec, tag="value_spec"):
    """A const or var spec."""

    doc: CommentGroup | None = None
    names: NonEmpty[Ident] = field(default_factory=list)
    type: Expr | None = None
    values: list[Expr] = field(default_factory=list)
    comment: CommentGroup | None = None


class TypeSpec(Spec, tag="type_spec"):
    doc: CommentGroup | None = None
    name: Ident
    assign: bool = False  # alias declaration
    type: Expr
    comment: CommentGroup | None = None


# =============================================================================
# Declarations, Files and Packages
# =============================================================================


class BadDecl(Decl, tag="bad_decl"):
    start: int = 0
    end: int = 0


class GenDecl(Decl, tag="gen_decl"):
    """An import, const, type or var declaration."""

    doc: CommentGroup | None = None
    tok: str
    specs: NonEmpty[Spec] = field(default_factory=list)


class FuncDecl(Decl, tag="func_decl"):
    doc: CommentGroup | None = None
    recv: FieldList | None = None
    name: Ident
    type: FuncType
    body: BlockStmt | None = None


class File(Node):
    """
    A source file.

    ``comments`` lists every comment group in the file, including the ones
    reachable through ``doc`` and ``comment`` fields of its nodes.
    """

    doc: CommentGroup | None = None
    name: Ident
    decls: list[Decl] = field(default_factory=list)
    comments: Detached[list[CommentGroup]] = field(default_factory=list)


class Package(Node):
    """A set of files forming one package."""

    name: str
    files: dict[str, File] = field(default_factory=dict)


CATALOGUE: frozenset[type[Node]] = frozenset({
    Comment, CommentGroup, Field, FieldList,
    BadExpr, Ident, EllipsisExpr, BasicLit, FuncLit, CompositeLit, ParenExpr,
    SelectorExpr, IndexExpr, SliceExpr, TypeAssertExpr, CallExpr, StarExpr,
    UnaryExpr, BinaryExpr, KeyValueExpr, ArrayType, StructType, FuncType,
    InterfaceType, MapType, ChanType,
    BadStmt, DeclStmt, EmptyStmt, LabeledStmt, ExprStmt, SendStmt, IncDecStmt,
    AssignStmt, GoStmt, DeferStmt, ReturnStmt, BranchStmt, BlockStmt, IfStmt,
    CaseClause, SwitchStmt, TypeSwitchStmt, CommClause, SelectStmt, ForStmt,
    RangeStmt,
    ImportSpec, ValueSpec, TypeSpec,
    BadDecl, GenDecl, FuncDecl,
    File, Package,
})
