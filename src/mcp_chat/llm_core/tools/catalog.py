"""Conversion of tool-server descriptors into the model's function-calling schema."""

from typing import Any, Dict, Iterator, List, Sequence

from ..exceptions import ToolValidationError
from ..logger import get_logger
from .models import FunctionSpec, ToolDescriptor
from .schema import ParameterParser, SchemaValidator

logger = get_logger(__name__)


def adapt(descriptors: Sequence[ToolDescriptor]) -> List[FunctionSpec]:
    """Build one ``FunctionSpec`` per descriptor, preserving order.

    Each input schema is resolved, sanitized and parsed into typed parameters,
    so a malformed schema fails here rather than midway through a conversation.
    The function is pure: the same descriptors always give equal specs.

    Args:
        descriptors: Tools advertised by the tool server.

    Returns:
        The function specs, in descriptor order.

    Raises:
        ToolValidationError: If two tools share a name or a schema is malformed.
    """
    specs: List[FunctionSpec] = []
    seen: set[str] = set()

    for descriptor in descriptors:
        if descriptor.name in seen:
            raise ToolValidationError(f"Tool '{descriptor.name}' is advertised more than once.")
        seen.add(descriptor.name)
        specs.append(_adapt_one(descriptor))

    return specs


def _adapt_one(descriptor: ToolDescriptor) -> FunctionSpec:
    schema: Dict[str, Any] = descriptor.input_schema or {}
    if schema:
        schema = SchemaValidator.resolve_refs(schema)
        schema = SchemaValidator.sanitize_schema(schema)

    parameters = ParameterParser.parse_object(schema, descriptor.name)
    description = descriptor.description or f"Tool {descriptor.name} provided by MCP server."

    return FunctionSpec(name=descriptor.name, description=description, parameters=parameters)


class ToolCatalog:
    """The ordered set of tools the model may call during a session.

    Built once per connection and not modified afterwards.
    """

    def __init__(self, specs: Sequence[FunctionSpec] = ()) -> None:
        self._specs: tuple[FunctionSpec, ...] = tuple(specs)
        self._by_name: Dict[str, FunctionSpec] = {spec.name: spec for spec in self._specs}

    @classmethod
    def from_descriptors(cls, descriptors: Sequence[ToolDescriptor]) -> "ToolCatalog":
        catalog = cls(adapt(descriptors))
        logger.info(f"Tool catalog built with {len(catalog)} tool(s): {catalog.names}")
        return catalog

    @property
    def specs(self) -> Sequence[FunctionSpec]:
        return self._specs

    @property
    def names(self) -> List[str]:
        return [spec.name for spec in self._specs]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._specs)

    def __iter__(self) -> Iterator[FunctionSpec]:
        return iter(self._specs)
