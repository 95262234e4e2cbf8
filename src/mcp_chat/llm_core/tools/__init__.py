"""Tool catalog, call protocol and invocation bridge.

The resolution loop lives in ``tool_loop`` and is exported from ``llm_core``,
since it depends on the message models which in turn use the call protocol.
"""

from .models import ToolDescriptor, FunctionSpec, ParameterSchema, ObjectParameter
from .call_protocol import ToolCallRequest, ToolCallResult
from .catalog import ToolCatalog, adapt
from .bridge import ToolInvocationBridge, ToolServer
from .schema import SchemaValidator, ParameterParser

__all__ = [
    "ToolDescriptor",
    "FunctionSpec",
    "ParameterSchema",
    "ObjectParameter",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolCatalog",
    "adapt",
    "ToolInvocationBridge",
    "ToolServer",
    "SchemaValidator",
    "ParameterParser",
]
