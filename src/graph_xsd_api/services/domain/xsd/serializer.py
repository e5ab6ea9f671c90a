#!/usr/bin/env python3
"""Serialize a schema tree to XSD text."""

import xml.etree.ElementTree as ET

from .schema_tree import AttributeValue, SchemaNode

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'


def _format_value(value: AttributeValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _to_element(tag: str, node: SchemaNode) -> ET.Element:
    element = ET.Element(tag, {key: _format_value(value) for key, value in node.attributes.items()})
    for child_tag, children in node.children.items():
        for child in children:
            element.append(_to_element(child_tag, child))
    return element


def serialize_schema(
    tree: SchemaNode,
    root_tag: str = "xs:schema",
    indent: int = 2,
    xml_declaration: bool = True
) -> str:
    """Render the tree as an XML document.

    Tags and attribute names are written verbatim, so prefixed names such as
    ``xs:element`` rely on the ``xmlns:xs`` attribute carried by the root.

    Args:
        tree: Root node of the schema tree
        root_tag: Tag of the document element
        indent: Spaces per nesting level; 0 disables pretty printing
        xml_declaration: Prefix the document with an XML declaration

    Returns:
        XML text
    """
    root = _to_element(root_tag, tree)
    if indent > 0:
        ET.indent(root, space=" " * indent)

    text = ET.tostring(root, encoding="unicode")
    if xml_declaration:
        return f"{XML_DECLARATION}\n{text}"
    return text
