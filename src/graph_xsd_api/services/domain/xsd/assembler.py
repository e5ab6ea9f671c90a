#!/usr/bin/env python3
"""Entry points: turn a class graph into an XSD schema tree or document."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from ....models.models import GenerateOptions
from .context import EMAIL_PATTERN, EmissionContext
from .errors import ReferenceNotFoundError
from .graph_index import build_graph_index
from .graph_model import GraphNode
from .hierarchy import flatten_hierarchies
from .schema_tree import SchemaNode
from .serializer import serialize_schema
from .type_emitter import emit_class

XS_NS = "http://www.w3.org/2001/XMLSchema"

logger = logging.getLogger(__name__)

Graph = Iterable[Union[Mapping[str, Any], GraphNode]]


def generate(
    graph: Graph,
    root_class_id: str,
    options: Optional[GenerateOptions] = None
) -> SchemaNode:
    """Build the schema tree for ``root_class_id`` and every class it references.

    A fresh emission context is created for every call.

    Args:
        graph: Flat list of class and property nodes
        root_class_id: uid of the class to export
        options: Per-call generation options

    Returns:
        Root node of the schema document tree

    Raises:
        ReferenceNotFoundError: if the root class or any reference is missing
        UnsupportedRangeTypeError: if a property range has an unknown type
        MalformedHierarchyError: if a subClassOf chain is cyclic
    """
    class_cache, property_cache = build_graph_index(graph)

    root_class = class_cache.get(root_class_id)
    if root_class is None:
        raise ReferenceNotFoundError("class", root_class_id)

    email_pattern = EMAIL_PATTERN
    if options is not None and options.email_pattern:
        email_pattern = options.email_pattern

    schema = SchemaNode({"xmlns:xs": XS_NS})
    schema.add_child("xs:element", SchemaNode({"name": root_class.label, "type": root_class.uid}))
    schema.child_list("xs:complexType")

    context = EmissionContext(
        class_cache=class_cache,
        property_cache=property_cache,
        schema=schema,
        email_pattern=email_pattern,
    )

    flatten_hierarchies(context)
    emit_class(context, root_class_id)

    logger.info(
        f"Generated schema for {root_class_id} with "
        f"{len(context.added_classes)} complex types"
    )
    return schema


def generate_xsd(
    graph: Graph,
    root_class_id: str,
    options: Optional[GenerateOptions] = None,
    indent: int = 2,
    xml_declaration: bool = True
) -> str:
    """Generate the schema and serialize it to XSD text."""
    tree = generate(graph, root_class_id, options)
    return serialize_schema(tree, indent=indent, xml_declaration=xml_declaration)
