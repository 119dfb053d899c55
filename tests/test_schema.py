"""Tests for astwalk.schema module."""

from typing import Annotated, Literal, Union

import pytest

from astwalk.nodes import Node
from astwalk.schema import FieldSchema, NodeSchema, all_schemas, extract_type, node_schema
from astwalk.syntax import (
    CATALOGUE,
    BlockStmt,
    CallExpr,
    CommentGroup,
    Expr,
    Field,
    FieldList,
    File,
    FuncDecl,
    GenDecl,
    Ident,
    Package,
    Spec,
    Stmt,
    ValueSpec,
)
from astwalk.types import (
    ChildType,
    Detached,
    ListType,
    MappingType,
    Marker,
    NonEmpty,
    OptionalType,
    ValueType,
)


class TestExtractValues:
    """Test extracting plain data fields."""

    @pytest.mark.parametrize("py_type", [str, int, float, bool, bytes, type(None)])
    def test_primitives(self, py_type):
        """Test extracting primitive types."""
        result = extract_type(py_type)
        assert isinstance(result, ValueType)
        assert result.primitive is py_type

    def test_literal(self):
        """Test extracting a Literal."""
        result = extract_type(Literal["send", "recv", "both"])
        assert isinstance(result, ValueType)

    def test_primitive_union(self):
        """Test extracting a union of primitives."""
        assert isinstance(extract_type(str | None), ValueType)


class TestExtractChildren:
    """Test extracting node-valued fields."""

    def test_node_class(self):
        """Test extracting a single required child."""
        assert extract_type(Expr) == ChildType(kinds=(Expr,))

    def test_union_of_nodes(self):
        """Test extracting a child of several kinds."""
        assert extract_type(Expr | Stmt) == ChildType(kinds=(Expr, Stmt))

    def test_optional_pipe(self):
        """Test extracting X | None."""
        assert extract_type(BlockStmt | None) == OptionalType(child=ChildType(kinds=(BlockStmt,)))

    def test_optional_typing(self):
        """Test extracting typing.Union with None."""
        assert extract_type(Union[Expr, None]) == OptionalType(child=ChildType(kinds=(Expr,)))

    def test_list(self):
        """Test extracting an ordered list of children."""
        assert extract_type(list[Stmt]) == ListType(element=ChildType(kinds=(Stmt,)))

    def test_non_empty_alias(self):
        """Test extracting the NonEmpty alias."""
        result = extract_type(NonEmpty[Spec])
        assert result == ListType(element=ChildType(kinds=(Spec,)), non_empty=True)

    def test_annotated_non_empty(self):
        """Test extracting a list annotated by hand."""
        result = extract_type(Annotated[list[Spec], Marker.NON_EMPTY])
        assert result.non_empty

    def test_detached_alias_keeps_type(self):
        """Test that Detached does not change the field type."""
        assert extract_type(Detached[list[CommentGroup]]) == ListType(
            element=ChildType(kinds=(CommentGroup,)),
        )

    def test_mapping(self):
        """Test extracting keyed members."""
        assert extract_type(dict[str, File]) == MappingType(key=str, value=ChildType(kinds=(File,)))


class TestExtractErrors:
    """Test unsupported annotations."""

    def test_invalid_type(self):
        """Test that an arbitrary object is rejected."""
        with pytest.raises(ValueError, match="Cannot extract field type from"):
            extract_type(object())

    def test_list_of_values(self):
        """Test that lists must hold nodes."""
        with pytest.raises(ValueError, match="list elements must be node kinds"):
            extract_type(list[str])

    def test_mixed_union(self):
        """Test that nodes and plain values cannot share a field."""
        with pytest.raises(ValueError, match="Cannot mix"):
            extract_type(Expr | str)

    def test_non_empty_requires_list(self):
        """Test that NON_EMPTY only applies to lists."""
        with pytest.raises(ValueError, match="requires a list type"):
            extract_type(Annotated[Expr, Marker.NON_EMPTY])

    def test_dict_of_values(self):
        """Test that mapping values must be nodes."""
        with pytest.raises(ValueError, match="dict values must be node kinds"):
            extract_type(dict[str, int])


class TestNodeSchema:
    """Test reflecting node kinds."""

    def test_tag_and_kind(self):
        """Test schema identity fields."""
        schema = node_schema(CallExpr)
        assert isinstance(schema, NodeSchema)
        assert schema.tag == "call_expr"
        assert schema.kind is CallExpr
        assert not schema.trivia

    def test_fields_in_declaration_order(self):
        """Test that fields keep their declaration order."""
        schema = node_schema(CallExpr)
        assert [f.name for f in schema.fields] == ["fun", "args", "has_ellipsis"]
        assert [f.name for f in schema.walked_fields] == ["fun", "args"]

    def test_field_schema(self):
        """Test a single field's schema."""
        schema = node_schema(CallExpr)
        assert schema.fields[0] == FieldSchema(name="fun", type=ChildType(kinds=(Expr,)))

    def test_trivia_kind(self):
        """Test that comment groups are trivia."""
        assert node_schema(CommentGroup).trivia

    def test_trivia_fields(self):
        """Test that fields holding comment groups are marked as trivia."""
        fields = {f.name: f for f in node_schema(Field).fields}
        assert fields["doc"].trivia
        assert fields["comment"].trivia
        assert not fields["type"].trivia

    def test_detached_field_not_walked(self):
        """Test that a file's comment list is not walked."""
        fields = {f.name: f for f in node_schema(File).fields}
        assert not fields["comments"].walked
        assert fields["decls"].walked

    def test_non_empty_fields(self):
        """Test the lists that delete their owner once emptied."""
        assert {f.name: f for f in node_schema(GenDecl).fields}["specs"].type.non_empty
        assert {f.name: f for f in node_schema(FieldList).fields}["fields"].type.non_empty
        assert {f.name: f for f in node_schema(ValueSpec).fields}["names"].type.non_empty

    def test_required_and_optional(self):
        """Test required and optional children of a function declaration."""
        fields = {f.name: f.type for f in node_schema(FuncDecl).fields}
        assert isinstance(fields["name"], ChildType)
        assert isinstance(fields["type"], ChildType)
        assert isinstance(fields["recv"], OptionalType)
        assert isinstance(fields["body"], OptionalType)

    def test_package_members(self):
        """Test that package files are a mapping."""
        fields = {f.name: f.type for f in node_schema(Package).fields}
        assert isinstance(fields["files"], MappingType)
        assert isinstance(fields["name"], ValueType)

    def test_private_fields_skipped(self):
        """Test that underscore fields are not part of the schema."""

        class Marked(Node, tag="test_schema_marked"):
            name: str
            _cache: str = ""

        assert [f.name for f in node_schema(Marked).fields] == ["name"]


class TestAllSchemas:
    """Test bulk schema extraction."""

    def test_catalogue(self):
        """Test that every catalogue kind has a schema."""
        schemas = all_schemas(CATALOGUE)
        assert len(schemas) == len(CATALOGUE)
        assert schemas["ident"].kind is Ident

    def test_registry_default(self):
        """Test that the registry is used when no kinds are given."""
        schemas = all_schemas()
        assert "gen_decl" in schemas
