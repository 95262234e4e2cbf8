import pytest
from mcp_chat.llm_core.tools.schema import SchemaValidator
from mcp_chat.llm_core.exceptions import ToolValidationError


def test_assert_no_recursive_refs_no_recursion():
    schema = {
        "type": "object",
        "properties": {
            "prop1": {"type": "string"},
            "prop2": {
                "type": "object",
                "properties": {
                    "subprop": {"type": "integer"}
                }
            }
        }
    }
    # Should not raise
    SchemaValidator.assert_no_recursive_refs(schema)


def test_assert_no_recursive_refs_with_recursion():
    schema = {
        "$defs": {
            "Node": {
                "type": "object",
                "properties": {
                    "child": {"$ref": "#/$defs/Node"}
                }
            }
        },
        "properties": {
            "root": {"$ref": "#/$defs/Node"}
        }
    }
    with pytest.raises(ToolValidationError, match="Recursive structure detected"):
        SchemaValidator.assert_no_recursive_refs(schema)


def test_resolve_refs_inlines_definitions():
    schema = {
        "type": "object",
        "definitions": {"Unit": {"type": "string", "enum": ["C", "F"]}},
        "properties": {"unit": {"$ref": "#/definitions/Unit"}},
    }
    resolved = SchemaValidator.resolve_refs(schema)

    assert resolved["properties"]["unit"] == {"type": "string", "enum": ["C", "F"]}


def test_resolve_refs_refuses_remote_documents():
    schema = {"type": "object", "properties": {"x": {"$ref": "https://example.com/schema.json"}}}

    with pytest.raises(ToolValidationError, match="reference"):
        SchemaValidator.resolve_refs(schema)


def test_sanitize_schema_removes_metadata():
    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "$id": "http://example.com/schema",
        "title": "MySchema",
        "type": "object",
        "properties": {
            "field": {"type": "string", "title": "FieldTitle"}
        },
        "definitions": {"SomeDef": {}}
    }
    sanitized = SchemaValidator.sanitize_schema(schema)

    assert "$schema" not in sanitized
    assert "$id" not in sanitized
    assert "title" not in sanitized
    assert "definitions" not in sanitized
    assert "title" not in sanitized["properties"]["field"]


def test_sanitize_schema_keeps_property_named_title():
    schema = {"type": "object", "properties": {"title": {"type": "string"}}}

    assert SchemaValidator.sanitize_schema(schema)["properties"] == {"title": {"type": "string"}}


def test_sanitize_schema_simplifies_optional():
    # Simulating Optional[int] -> anyOf: [type: integer, type: null]
    schema = {
        "type": "object",
        "properties": {
            "count": {
                "anyOf": [{"type": "integer"}, {"type": "null"}],
                "description": "How many",
                "default": None,
            }
        },
    }
    sanitized = SchemaValidator.sanitize_schema(schema)

    assert sanitized["properties"]["count"]["type"] == "integer"
    assert sanitized["properties"]["count"]["description"] == "How many"
    assert "anyOf" not in sanitized["properties"]["count"]


def test_sanitize_schema_keeps_real_unions():
    schema = {"anyOf": [{"type": "integer"}, {"type": "string"}]}

    assert SchemaValidator.sanitize_schema(schema) == schema
