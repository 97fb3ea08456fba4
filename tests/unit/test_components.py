"""
Tests for core.components: decoding .component files into documents.
"""

import json

import pytest

from core.components import (
    AssignExpr,
    IdentifierExpr,
    IfExpr,
    LitExpr,
    decode_component,
)
from core.errors import (
    ComponentDecodeError,
    ErrorKind,
    UnknownExprTypeError,
    UnknownParameterError,
)


def component(params=None, root=None, logic=None) -> str:
    return json.dumps({
        "params": params or [],
        "root": root or {"id": "Root", "type": "View"},
        "logic": logic or [],
    })


# ============================================================================
# LAYER TESTS
# ============================================================================

class TestLayers:
    """Test cases for the layer tree."""

    def test_decode_tree(self):
        document = decode_component(component(root={
            "id": "Root",
            "type": "Lona:View",
            "parameters": {"backgroundColor": "primary"},
            "children": [
                {"id": "Label", "type": "Lona:Text", "parameters": {"text": "Hi"}},
                {"id": "Avatar", "type": "Avatar", "parameters": {"size": 4}},
            ],
        }), "Profile", "people/Profile.component")

        assert document.name == "Profile"
        assert document.relative_path == "people/Profile.component"
        assert [layer.id for layer in document.layers()] == ["Root", "Label", "Avatar"]
        assert document.root.type == "View"
        assert document.find_layer("Label").parameters == {"text": "Hi"}
        assert document.component_references == ["Avatar"]

    def test_relative_path_defaults_to_name(self):
        assert decode_component(component(), "Plain").relative_path == "Plain.component"

    def test_unknown_builtin_property(self):
        with pytest.raises(UnknownParameterError) as exc_info:
            decode_component(component(root={
                "id": "Root", "type": "View", "parameters": {"fontSize": 12},
            }), "Bad")
        assert exc_info.value.kind == ErrorKind.UNKNOWN_PARAMETER

    def test_component_layer_properties_are_not_checked_here(self):
        document = decode_component(component(root={
            "id": "Root", "type": "Card", "parameters": {"anything": 1},
        }), "Wrapper")
        assert document.root.parameters == {"anything": 1}

    @pytest.mark.parametrize("root", [
        {"type": "View"},
        {"id": "Root"},
        {"id": "Root", "type": "View", "children": {}},
        "View",
    ])
    def test_malformed_layer(self, root):
        with pytest.raises(ComponentDecodeError):
            decode_component(component(root=root), "Bad")

    def test_duplicate_layer_id(self):
        with pytest.raises(ComponentDecodeError, match="duplicate layer id"):
            decode_component(component(root={
                "id": "Root", "type": "View",
                "children": [{"id": "Root", "type": "Text"}],
            }), "Bad")


class TestDocumentErrors:
    """Test cases for file level decode errors."""

    def test_invalid_json(self):
        with pytest.raises(ComponentDecodeError) as exc_info:
            decode_component("{", "Broken")
        assert exc_info.value.kind == ErrorKind.DECODE

    def test_missing_root(self):
        with pytest.raises(ComponentDecodeError, match="no root"):
            decode_component('{"params": []}', "Broken")

    def test_unsupported_parameter_type(self):
        with pytest.raises(ComponentDecodeError):
            decode_component(component(params=[{"name": "x", "type": "Matrix"}]), "Broken")

    def test_duplicate_parameter(self):
        with pytest.raises(ComponentDecodeError):
            decode_component(component(params=[{"name": "x"}, {"name": "x"}]), "Broken")


# ============================================================================
# LOGIC TESTS
# ============================================================================

class TestLogic:
    """Test cases for logic expressions."""

    def test_decode_assign_and_if(self):
        document = decode_component(component(
            params=[{"name": "title", "type": "String"}, {"name": "on", "type": "Boolean"}],
            root={"id": "Root", "type": "View", "children": [{"id": "Label", "type": "Text"}]},
            logic=[
                {"type": "AssignExpr", "assignee": ["layers", "Label", "text"], "content": ["parameters", "title"]},
                {
                    "type": "IfExpr",
                    "condition": {"type": "IdentifierExpr", "path": ["parameters", "on"]},
                    "body": [{
                        "type": "AssignExpr",
                        "assignee": ["layers", "Root", "opacity"],
                        "content": {"type": "LitExpr", "value": 0.5},
                    }],
                },
            ],
        ), "Toggle")

        assign, condition = document.logic
        assert assign == AssignExpr(
            assignee=IdentifierExpr(("layers", "Label", "text")),
            content=IdentifierExpr(("parameters", "title")),
        )
        assert isinstance(condition, IfExpr)
        assert condition.condition.is_parameter
        assert condition.body[0].content == LitExpr(0.5)
        assert document.assigned_properties() == {("Label", "text"), ("Root", "opacity")}
        assert document.read_properties() == set()

    def test_read_properties(self):
        document = decode_component(component(
            root={"id": "Root", "type": "View", "children": [{"id": "A", "type": "Text"}, {"id": "B", "type": "Text"}]},
            logic=[{"type": "AssignExpr", "assignee": ["layers", "B", "text"], "content": ["layers", "A", "text"]}],
        ), "Copy")
        assert document.read_properties() == {("A", "text")}

    def test_unknown_expression_type(self):
        with pytest.raises(UnknownExprTypeError) as exc_info:
            decode_component(component(logic=[{"type": "WhileExpr"}]), "Loop")
        assert exc_info.value.kind == ErrorKind.UNKNOWN_EXPR_TYPE
        assert "WhileExpr" in str(exc_info.value)

    def test_undeclared_parameter(self):
        with pytest.raises(UnknownParameterError, match="missing"):
            decode_component(component(logic=[{
                "type": "AssignExpr",
                "assignee": ["layers", "Root", "opacity"],
                "content": ["parameters", "missing"],
            }]), "Bad")

    def test_unknown_layer_property_in_logic(self):
        with pytest.raises(UnknownParameterError):
            decode_component(component(logic=[{
                "type": "AssignExpr",
                "assignee": ["layers", "Root", "text"],
                "content": {"type": "LitExpr", "value": "x"},
            }]), "Bad")

    def test_unknown_layer(self):
        with pytest.raises(ComponentDecodeError, match="unknown layer"):
            decode_component(component(logic=[{
                "type": "AssignExpr",
                "assignee": ["layers", "Ghost", "opacity"],
                "content": {"type": "LitExpr", "value": 1},
            }]), "Bad")

    def test_literal_is_not_a_statement(self):
        with pytest.raises(ComponentDecodeError, match="statements"):
            decode_component(component(logic=[{"type": "LitExpr", "value": 1}]), "Bad")

    def test_cannot_assign_to_parameter(self):
        with pytest.raises(ComponentDecodeError):
            decode_component(component(
                params=[{"name": "x"}],
                logic=[{"type": "AssignExpr", "assignee": ["parameters", "x"], "content": {"type": "LitExpr"}}],
            ), "Bad")
