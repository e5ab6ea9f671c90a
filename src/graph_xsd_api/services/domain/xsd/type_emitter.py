#!/usr/bin/env python3
"""Expand classes into XSD complex types.

Each class reachable from the root becomes one named ``xs:complexType``
holding an ``xs:sequence`` of its (flattened) properties. Linked classes are
emitted recursively and referenced by type name; nested objects become
anonymous complex types inlined in the owning element.
"""

import logging
from collections.abc import Iterable

from .context import EmissionContext
from .errors import RecursiveNestedObjectError
from .graph_model import LinkedClassRange, NestedObjectRange, PropertyNode, PropertyRef
from .range_mapper import map_range, occurs_attributes, simple_type_element
from .schema_tree import SchemaNode

logger = logging.getLogger(__name__)


def build_sequence(context: EmissionContext, property_refs: Iterable[PropertyRef]) -> SchemaNode:
    """Build an ``xs:sequence`` with one element per property ref."""
    sequence = SchemaNode()
    elements = sequence.child_list("xs:element")
    for ref in property_refs:
        elements.append(map_property(context, ref))
    return sequence


def _inline_nested_object(context: EmissionContext, prop: PropertyNode, ref: PropertyRef) -> SchemaNode:
    """Build the element of a nested object with its anonymous complex type.

    Nested objects are not deduplicated, so a nested property that is already
    being expanded on the current path would never terminate.
    """
    if prop.uid in context.nested_path:
        raise RecursiveNestedObjectError(context.nested_path + [prop.uid])

    context.nested_path.append(prop.uid)
    try:
        sequence = build_sequence(context, prop.range.property_refs)
    finally:
        context.nested_path.pop()

    complex_type = SchemaNode()
    complex_type.add_child("xs:sequence", sequence)

    element = SchemaNode({"name": prop.label})
    element.attributes.update(occurs_attributes(ref.cardinality))
    element.add_child("xs:complexType", complex_type)
    return element


def map_property(context: EmissionContext, ref: PropertyRef) -> SchemaNode:
    """Map one property usage to an element, emitting linked classes on the way.

    Raises:
        ReferenceNotFoundError: if the property or a linked class does not resolve
        RecursiveNestedObjectError: if a nested object contains itself
    """
    prop = context.get_property(ref.ref)
    range_ = prop.range

    if isinstance(range_, LinkedClassRange):
        emit_class(context, range_.ref)
        return simple_type_element(range_.ref, prop.label, ref.cardinality)

    if isinstance(range_, NestedObjectRange):
        return _inline_nested_object(context, prop, ref)

    return map_range(prop.label, range_, ref.cardinality, context.email_pattern)


def emit_class(context: EmissionContext, class_uid: str) -> None:
    """Register the complex type of a class, at most once per context.

    The uid is marked before its properties are mapped, so a class linking
    back to itself (directly or through other classes) stops here. Types are
    appended after their properties are mapped: a class reached deeper in the
    recursion is listed before the class that referenced it.
    """
    if class_uid in context.added_classes:
        return

    class_node = context.get_class(class_uid)
    context.added_classes.add(class_uid)

    # A named type starts its own nesting path
    outer_path = context.nested_path
    context.nested_path = []
    try:
        sequence = build_sequence(context, class_node.property_refs)
    finally:
        context.nested_path = outer_path

    complex_type = SchemaNode({"name": class_node.uid})
    complex_type.add_child("xs:sequence", sequence)

    context.schema.add_child("xs:complexType", complex_type)
    logger.debug(f"Emitted complex type {class_node.uid} with {len(class_node.property_refs)} elements")
