#!/usr/bin/env python3
"""Lookup tables for classes and properties by uid."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any, Union

from .graph_model import ClassNode, GraphNode, PropertyNode, parse_node

logger = logging.getLogger(__name__)


def _copy_node(node: GraphNode) -> GraphNode:
    # Flattening extends property_refs in place; keep the caller's node intact
    if isinstance(node, ClassNode):
        return replace(node, property_refs=list(node.property_refs))
    return node


def build_graph_index(
    graph: Iterable[Union[Mapping[str, Any], GraphNode]]
) -> tuple[dict[str, ClassNode], dict[str, PropertyNode]]:
    """Index graph nodes by uid.

    Time: O(n) where n = number of nodes.

    Args:
        graph: Wire-format node mappings or already-typed nodes

    Returns:
        Tuple of (class_cache, property_cache)

    Raises:
        UnsupportedRangeTypeError: if a property range has an unknown type tag
    """
    class_cache: dict[str, ClassNode] = {}
    property_cache: dict[str, PropertyNode] = {}

    for raw in graph:
        if isinstance(raw, (ClassNode, PropertyNode)):
            node = _copy_node(raw)
        else:
            node = parse_node(dict(raw))

        if isinstance(node, ClassNode):
            cache = class_cache
        elif isinstance(node, PropertyNode):
            cache = property_cache
        else:
            continue

        if node.uid in cache:
            logger.warning(f"Duplicate uid {node.uid} in graph, keeping the last definition")
        cache[node.uid] = node

    logger.debug(f"Indexed {len(class_cache)} classes and {len(property_cache)} properties")
    return class_cache, property_cache
