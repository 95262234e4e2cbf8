from typing import Any, Dict, List

from ..models import (
    AnyParameter,
    ArrayParameter,
    BooleanParameter,
    IntegerParameter,
    NullParameter,
    NumberParameter,
    ObjectParameter,
    ParameterSchema,
    StringParameter,
)
from ...exceptions import ToolValidationError

_SCALAR_KINDS = {
    "string": StringParameter,
    "number": NumberParameter,
    "integer": IntegerParameter,
    "boolean": BooleanParameter,
    "null": NullParameter,
}


class ParameterParser:
    """Turns a sanitized JSON schema into the tagged ``ParameterSchema`` variant."""

    @classmethod
    def parse_object(cls, schema: Any, tool_name: str) -> ObjectParameter:
        """Parse a tool's top-level input schema.

        Only ``properties`` and ``required`` are taken from the top level; a
        missing schema is an object without parameters.

        Raises:
            ToolValidationError: If the schema is not an object schema or is malformed.
        """
        if schema is None:
            return ObjectParameter()
        if not isinstance(schema, dict):
            raise ToolValidationError(f"Input schema of tool '{tool_name}' must be an object, got {type(schema).__name__}.")

        schema_type = schema.get("type", "object")
        if schema_type != "object":
            raise ToolValidationError(f"Input schema of tool '{tool_name}' must have type 'object', got '{schema_type}'.")

        properties = cls._parse_properties(schema.get("properties"), tool_name, "")
        required = cls._parse_required(schema.get("required"), properties, tool_name, "")
        return ObjectParameter(properties=properties, required=required)

    @classmethod
    def parse(cls, schema: Any, tool_name: str, path: str) -> ParameterSchema:
        if not isinstance(schema, dict):
            raise ToolValidationError(f"Schema for '{path}' in tool '{tool_name}' must be an object.")

        common: Dict[str, Any] = {
            "description": schema.get("description"),
            "enum": schema.get("enum"),
            "default": schema.get("default"),
        }
        if common["enum"] is not None and not isinstance(common["enum"], list):
            raise ToolValidationError(f"'enum' for '{path}' in tool '{tool_name}' must be a list.")

        schema_type = schema.get("type")

        if schema_type in _SCALAR_KINDS:
            if schema_type == "string":
                return StringParameter(format=schema.get("format"), **common)
            return _SCALAR_KINDS[schema_type](**common)

        if schema_type == "array":
            items = schema.get("items")
            parsed_items = cls.parse(items, tool_name, f"{path}[]") if items is not None else None
            return ArrayParameter(items=parsed_items, **common)

        if schema_type == "object":
            properties = cls._parse_properties(schema.get("properties"), tool_name, path)
            required = cls._parse_required(schema.get("required"), properties, tool_name, path)
            return ObjectParameter(properties=properties, required=required, **common)

        if schema_type is None or isinstance(schema_type, list):
            raw = {k: v for k, v in schema.items() if k not in ("description", "enum", "default")}
            return AnyParameter(raw=raw, **common)

        raise ToolValidationError(f"Unsupported type '{schema_type}' for '{path}' in tool '{tool_name}'.")

    @classmethod
    def _parse_properties(cls, properties: Any, tool_name: str, path: str) -> Dict[str, ParameterSchema]:
        if properties is None:
            return {}
        if not isinstance(properties, dict):
            raise ToolValidationError(f"'properties' of '{path or tool_name}' must be an object.")
        prefix = f"{path}." if path else ""
        return {name: cls.parse(sub, tool_name, f"{prefix}{name}") for name, sub in properties.items()}

    @staticmethod
    def _parse_required(
        required: Any, properties: Dict[str, ParameterSchema], tool_name: str, path: str
    ) -> List[str]:
        if required is None:
            return []
        if not isinstance(required, list) or not all(isinstance(r, str) for r in required):
            raise ToolValidationError(f"'required' of '{path or tool_name}' must be a list of names.")
        unknown = [r for r in required if r not in properties]
        if unknown:
            raise ToolValidationError(f"Tool '{tool_name}' requires undeclared parameter(s): {', '.join(unknown)}.")
        return list(required)
