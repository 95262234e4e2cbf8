"""Tool catalog data models.

A tool server describes each tool with a JSON schema. Those schemas are parsed
once, when the catalog is adapted, into a small tagged union of parameter kinds
so the rest of the client never handles untyped schema dicts.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _ParameterBase(BaseModel):
    """Fields shared by every parameter kind."""

    model_config = ConfigDict(frozen=True)

    description: Optional[str] = None
    enum: Optional[List[Any]] = None
    default: Optional[Any] = None

    def _annotations(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.description is not None:
            out["description"] = self.description
        if self.enum is not None:
            out["enum"] = list(self.enum)
        if self.default is not None:
            out["default"] = self.default
        return out


class StringParameter(_ParameterBase):
    kind: Literal["string"] = "string"
    format: Optional[str] = None

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": "string", **self._annotations()}
        if self.format is not None:
            schema["format"] = self.format
        return schema


class NumberParameter(_ParameterBase):
    kind: Literal["number"] = "number"

    def to_json_schema(self) -> Dict[str, Any]:
        return {"type": "number", **self._annotations()}


class IntegerParameter(_ParameterBase):
    kind: Literal["integer"] = "integer"

    def to_json_schema(self) -> Dict[str, Any]:
        return {"type": "integer", **self._annotations()}


class BooleanParameter(_ParameterBase):
    kind: Literal["boolean"] = "boolean"

    def to_json_schema(self) -> Dict[str, Any]:
        return {"type": "boolean", **self._annotations()}


class NullParameter(_ParameterBase):
    kind: Literal["null"] = "null"

    def to_json_schema(self) -> Dict[str, Any]:
        return {"type": "null", **self._annotations()}


class ArrayParameter(_ParameterBase):
    kind: Literal["array"] = "array"
    items: Optional["ParameterSchema"] = None

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": "array", **self._annotations()}
        if self.items is not None:
            schema["items"] = self.items.to_json_schema()
        return schema


class ObjectParameter(_ParameterBase):
    kind: Literal["object"] = "object"
    properties: Dict[str, "ParameterSchema"] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {name: prop.to_json_schema() for name, prop in self.properties.items()},
            **self._annotations(),
        }
        if self.required:
            schema["required"] = list(self.required)
        return schema


class AnyParameter(_ParameterBase):
    """A parameter whose schema is not a single plain type (unions, ``anyOf``, untyped).

    The sanitized schema is forwarded to the model unchanged.
    """

    kind: Literal["any"] = "any"
    raw: Dict[str, Any] = Field(default_factory=dict)

    def to_json_schema(self) -> Dict[str, Any]:
        return {**self.raw, **self._annotations()}


ParameterSchema = Union[
    StringParameter,
    NumberParameter,
    IntegerParameter,
    BooleanParameter,
    NullParameter,
    ArrayParameter,
    ObjectParameter,
    AnyParameter,
]

ArrayParameter.model_rebuild()
ObjectParameter.model_rebuild()


class ToolDescriptor(BaseModel):
    """A capability advertised by the tool server.

    Attributes:
        name: The unique name of the tool.
        description: Human-readable description shown to the model.
        input_schema: JSON schema describing the accepted arguments.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: Optional[str] = None
    input_schema: Dict[str, Any] = Field(default_factory=dict)


class FunctionSpec(BaseModel):
    """The function-calling schema of one tool, as the chat API expects it."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: ObjectParameter

    def to_openai(self) -> Dict[str, Any]:
        """Render the spec as an OpenAI ``tools`` entry."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters.to_json_schema(),
            },
        }
