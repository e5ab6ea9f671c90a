#!/usr/bin/env python3

import logging
import re
from typing import Any

from fastapi import HTTPException

from ..core.config import xsd_config
from ..models.models import GenerateOptions, GenerateRequest, GenerationErrorDetail
from ..services.domain.xsd import (
    MalformedHierarchyError,
    MalformedNodeError,
    RecursiveNestedObjectError,
    ReferenceNotFoundError,
    SchemaNode,
    UnsupportedRangeTypeError,
    XsdGenerationError,
    generate,
    serialize_schema,
)

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def _resolve_options(request: GenerateRequest) -> GenerateOptions:
    """Fill unset options from the service configuration."""
    options = request.options or GenerateOptions()
    if not options.email_pattern:
        options = options.model_copy(update={"email_pattern": xsd_config.EMAIL_PATTERN})
    return options


def _to_http_error(error: XsdGenerationError) -> HTTPException:
    """Convert a generation error to an HTTP error with a structured body."""
    if isinstance(error, ReferenceNotFoundError):
        status_code, kind = 404, "reference_not_found"
    elif isinstance(error, UnsupportedRangeTypeError):
        status_code, kind = 422, "unsupported_range_type"
    elif isinstance(error, MalformedHierarchyError):
        status_code, kind = 422, "malformed_hierarchy"
    elif isinstance(error, MalformedNodeError):
        status_code, kind = 422, "malformed_node"
    elif isinstance(error, RecursiveNestedObjectError):
        status_code, kind = 422, "recursive_nested_object"
    else:
        status_code, kind = 400, "generation_failed"

    detail = GenerationErrorDetail(error=kind, message=str(error), identifier=error.identifier)
    return HTTPException(status_code=status_code, detail=detail.model_dump())


def _build_tree(request: GenerateRequest) -> SchemaNode:
    try:
        return generate(request.graph, request.root_class_id, _resolve_options(request))
    except XsdGenerationError as e:
        logger.warning(f"XSD generation failed for {request.root_class_id}: {e}")
        raise _to_http_error(e) from e


def schema_filename(tree: SchemaNode) -> str:
    """Download filename derived from the root element name."""
    root_elements = tree.children.get("xs:element") or [SchemaNode()]
    label = str(root_elements[0].attributes.get("name", "schema"))
    return f"{_UNSAFE_FILENAME_CHARS.sub('_', label).strip('_') or 'schema'}.xsd"


def handle_xsd_generation(request: GenerateRequest) -> tuple[str, str]:
    """Generate the XSD document for a request.

    Args:
        request: Graph, root class uid and options

    Returns:
        Tuple of (xsd_content, filename)

    Raises:
        HTTPException: 404 for unresolved references, 422 for invalid graphs
    """
    tree = _build_tree(request)
    content = serialize_schema(tree, **xsd_config.serializer_kwargs())
    return content, schema_filename(tree)


def handle_schema_tree(request: GenerateRequest) -> dict[str, Any]:
    """Generate the schema tree for a request, as a JSON-ready dictionary."""
    tree = _build_tree(request)
    return {"xs:schema": tree.to_dict()}
