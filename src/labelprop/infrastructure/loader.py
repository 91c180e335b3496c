"""
Edge document loading.

Reads edge documents from JSON text or files, validates them against the edge
document schema and the node id rules, and hands back plain tuples ready for
the propagation driver. File reads are asynchronous through ``aiofiles``.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

import aiofiles

from ..core.exceptions import ValidationError
from ..utils.validation import SchemaValidator, validate_node_ids

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgeDocument:
    """
    Validated edge input.

    Attributes:
        edges (Tuple[Tuple[Any, Any], ...]): Edge pairs in document order
        isolated_nodes (Tuple[Any, ...]): Nodes declared without edges
    """

    edges: Tuple[Tuple[Any, Any], ...]
    isolated_nodes: Tuple[Any, ...] = ()

    @property
    def node_ids(self) -> Tuple[Any, ...]:
        """Every identifier mentioned by the document, duplicates included."""
        return tuple(node for edge in self.edges for node in edge) + self.isolated_nodes


def parse_edge_document(data: Any, validator: Optional[SchemaValidator] = None) -> EdgeDocument:
    """Validate a decoded JSON edge document.

    Args:
        data: Decoded JSON value.
        validator: Schema validator to use, a default one if omitted.

    Returns:
        EdgeDocument: The validated edges and isolated nodes.

    Raises:
        ValidationError: If the document or any node id is invalid.
    """
    validator = validator or SchemaValidator()
    result = validator.validate(SchemaValidator.EDGE_DOCUMENT, data)
    if not result.is_valid:
        raise ValidationError(f"Invalid edge document: {'; '.join(result.errors)}")

    document = EdgeDocument(
        edges=tuple((source, target) for source, target in data["edges"]),
        isolated_nodes=tuple(data.get("isolated_nodes", ())),
    )
    ids = validate_node_ids(document.node_ids)
    if not ids.is_valid:
        raise ValidationError(f"Invalid node ids: {'; '.join(ids.errors)}")

    logger.debug(
        f"Parsed {len(document.edges)} edges over {ids.context['node_count']} nodes"
    )
    return document


def parse_edge_json(text: Union[str, bytes]) -> EdgeDocument:
    """Decode and validate an edge document from JSON text.

    Raises:
        ValidationError: If the text is not valid UTF-8 or JSON, or not a
            valid document.
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ValidationError(f"Invalid JSON input: {e}") from e
    return parse_edge_document(data)


async def load_edge_file(path: Union[str, os.PathLike]) -> EdgeDocument:
    """Read and validate a UTF-8 encoded edge document from a JSON file.

    Raises:
        ValidationError: If the file is missing, unreadable, not UTF-8 or invalid.
    """
    if not os.path.exists(path):
        raise ValidationError(f"File not found: {path}")
    try:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            text = await f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read edge file {path}: {str(e)}")
        raise ValidationError(f"Cannot read {path}: {str(e)}") from e
    logger.info(f"Loaded edge document from {path}")
    return parse_edge_json(text)
