#!/usr/bin/env python3

from dataclasses import dataclass, field

from .errors import ReferenceNotFoundError
from .graph_model import ClassNode, PropertyNode
from .schema_tree import SchemaNode

EMAIL_PATTERN = ".+@.+"


@dataclass
class EmissionContext:
    """State of a single generation run. Never reused across calls."""
    class_cache: dict[str, ClassNode]
    property_cache: dict[str, PropertyNode]
    schema: SchemaNode = field(default_factory=SchemaNode)
    # Classes already emitted as complex types
    added_classes: set[str] = field(default_factory=set)
    # Nested-object property uids being expanded, outermost first
    nested_path: list[str] = field(default_factory=list)
    email_pattern: str = EMAIL_PATTERN

    def get_class(self, uid: str) -> ClassNode:
        try:
            return self.class_cache[uid]
        except KeyError:
            raise ReferenceNotFoundError("class", uid) from None

    def get_property(self, uid: str) -> PropertyNode:
        try:
            return self.property_cache[uid]
        except KeyError:
            raise ReferenceNotFoundError("property", uid) from None
