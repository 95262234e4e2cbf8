from typing import Any, Dict, Set

import jsonref  # type: ignore

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)


class SchemaValidator:
    """
    Helper class for validating and sanitizing the JSON schemas advertised by a tool server.
    """

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Checks if the schema contains recursive references by traversing the graph.
        Raises ToolValidationError if a cycle is detected.

        Args:
            schema: The JSON schema to check.

        Raises:
            ToolValidationError: If a recursive reference is found.
        """
        defs = schema.get("$defs", {}) or schema.get("definitions", {})

        def check(node: Any, path: Set[str]) -> None:
            if isinstance(node, dict):
                if "$ref" in node:
                    ref = node["$ref"]
                    if ref in path:
                        msg = (
                            f"Recursive structure detected: {ref}. "
                            "Recursive structures are not supported in tool inputs."
                        )
                        logger.error(msg)
                        raise ToolValidationError(msg)

                    # e.g. #/$defs/MyModel
                    if isinstance(ref, str) and ref.startswith("#"):
                        parts = ref.split("/")
                        if len(parts) >= 3:
                            def_name = parts[-1]
                            if def_name in defs:
                                check(defs[def_name], path | {ref})
                    return

                for v in node.values():
                    check(v, path)
            elif isinstance(node, list):
                for item in node:
                    check(item, path)

        check(schema, set())

    @staticmethod
    def resolve_refs(schema: Dict[str, Any]) -> Dict[str, Any]:
        """
        Inlines local ``$ref`` pointers so the model sees a self-contained schema.

        Args:
            schema: The JSON schema to resolve.

        Returns:
            A plain dict with every local reference replaced by its target.

        Raises:
            ToolValidationError: If the schema is recursive or references a remote document.
        """
        SchemaValidator.assert_no_recursive_refs(schema)

        def refuse_remote(uri: str) -> Any:
            raise ToolValidationError(f"Remote schema reference '{uri}' is not supported.")

        try:
            # proxies=False ensures we get a plain dict back, not JsonRef objects
            return jsonref.replace_refs(schema, proxies=False, lazy_load=False, loader=refuse_remote)
        except jsonref.JsonRefError as exc:
            raise ToolValidationError(f"Could not resolve schema reference: {exc.message}") from exc

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Cleans up the schema for better compatibility with LLM providers.
        Removes $defs, $schema, $id, title.
        Simplifies Optional fields (anyOf with null).

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        new_schema = schema.copy()

        # 1. Remove metadata keys
        for key in ["$defs", "$schema", "$id", "title", "definitions"]:
            new_schema.pop(key, None)

        # 2. Handle anyOf with null (Optional fields)
        if "anyOf" in new_schema:
            any_of = new_schema["anyOf"]
            non_null = [x for x in any_of if not (isinstance(x, dict) and x.get("type") == "null")]

            if len(non_null) == 1 and isinstance(non_null[0], dict):
                # We prefer the description from the parent (new_schema) if present
                merged = non_null[0].copy()
                if "description" in new_schema:
                    merged["description"] = new_schema["description"]
                if "default" in new_schema and "default" not in merged:
                    merged["default"] = new_schema["default"]

                return SchemaValidator.sanitize_schema(merged)

        # Recurse on children. "properties" maps names to schemas, so a property
        # literally called "title" must survive.
        for key, value in new_schema.items():
            if key == "properties" and isinstance(value, dict):
                new_schema[key] = {name: SchemaValidator.sanitize_schema(sub) for name, sub in value.items()}
            elif isinstance(value, dict):
                new_schema[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                new_schema[key] = [
                    SchemaValidator.sanitize_schema(item) if isinstance(item, dict) else item for item in value
                ]

        return new_schema
