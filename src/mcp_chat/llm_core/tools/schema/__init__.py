"""Tool schema resolution, sanitizing and parsing."""

from .schema_validator import SchemaValidator
from .parameter_parser import ParameterParser

__all__ = ["SchemaValidator", "ParameterParser"]
