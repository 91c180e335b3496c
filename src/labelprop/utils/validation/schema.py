"""
Schema validation for edge documents.

Edge documents are the JSON input accepted by the command line tool::

    {"edges": [[1, 2], [2, 3]], "isolated_nodes": [7]}

Documents are checked against registered JSON schemas with ``jsonschema``
before any node id reaches the propagation kernel.
"""

from typing import Any, Dict

from jsonschema import ValidationError as JsonSchemaError
from jsonschema import validate as json_validate

from .base import ValidationResult

NODE_ID_SCHEMA: Dict[str, Any] = {"type": ["integer", "string"]}

EDGE_DOCUMENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "edges": {
            "type": "array",
            "items": {
                "type": "array",
                "items": NODE_ID_SCHEMA,
                "minItems": 2,
                "maxItems": 2,
            },
        },
        "isolated_nodes": {"type": "array", "items": NODE_ID_SCHEMA},
    },
    "required": ["edges"],
    "additionalProperties": False,
}


class SchemaValidator:
    """
    JSON Schema-based validator for input documents.

    Schemas are held by name and documents are validated against the schema
    held under that name. The edge document schema is registered on
    construction.

    Attributes:
        schemas (Dict[str, Dict[str, Any]]): Registered schemas by name
    """

    EDGE_DOCUMENT = "edge_document"

    def __init__(self):
        self.schemas: Dict[str, Dict[str, Any]] = {self.EDGE_DOCUMENT: EDGE_DOCUMENT_SCHEMA}

    def validate(self, name: str, instance: Any) -> ValidationResult:
        """
        Validate ``instance`` against the schema registered as ``name``.

        Returns:
            ValidationResult: Invalid with the schema error message on failure

        Raises:
            KeyError: If no schema is registered under ``name``
        """
        schema = self.schemas[name]
        try:
            json_validate(instance=instance, schema=schema)
        except JsonSchemaError as e:
            path = "/".join(str(part) for part in e.absolute_path)
            location = f" at /{path}" if path else ""
            return ValidationResult(
                is_valid=False,
                errors=[f"{e.message}{location}"],
                context={"schema": name},
            )
        return ValidationResult(is_valid=True, context={"schema": name})
