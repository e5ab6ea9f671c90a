#!/usr/bin/env python3
"""Attribute/children tree handed to the XML serializer."""

from dataclasses import dataclass, field
from typing import Any, Union

AttributeValue = Union[str, int, float]


@dataclass
class SchemaNode:
    """Node of the output schema tree.

    Children are grouped by tag; groups keep insertion order, and so do the
    nodes within each group.
    """
    attributes: dict[str, AttributeValue] = field(default_factory=dict)
    children: dict[str, list['SchemaNode']] = field(default_factory=dict)

    def add_child(self, tag: str, node: 'SchemaNode') -> 'SchemaNode':
        self.children.setdefault(tag, []).append(node)
        return node

    def child_list(self, tag: str) -> list['SchemaNode']:
        """Return the group for ``tag``, creating an empty one if missing."""
        return self.children.setdefault(tag, [])

    def to_dict(self) -> dict[str, Any]:
        """Render as ``{"$": attributes, tag: [child, ...]}``."""
        result: dict[str, Any] = {}
        if self.attributes:
            result["$"] = dict(self.attributes)
        for tag, nodes in self.children.items():
            result[tag] = [node.to_dict() for node in nodes]
        return result
