"""
Graph to XSD Generation Domain

Converts a class graph into an XML Schema document:
- Graph indexing (classes and properties by uid)
- Hierarchy flattening (inherited property usages)
- Range mapping (simple types, facets, occurrence constraints)
- Type emission (complex types for linked and nested classes)
- Schema assembly and serialization
"""

from .assembler import generate, generate_xsd
from .errors import (
    MalformedHierarchyError,
    MalformedNodeError,
    RecursiveNestedObjectError,
    ReferenceNotFoundError,
    UnsupportedRangeTypeError,
    XsdGenerationError,
)
from .schema_tree import SchemaNode
from .serializer import serialize_schema

__all__ = [
    # Generation
    "generate",
    "generate_xsd",
    "serialize_schema",
    "SchemaNode",
    # Errors
    "XsdGenerationError",
    "ReferenceNotFoundError",
    "UnsupportedRangeTypeError",
    "MalformedHierarchyError",
    "MalformedNodeError",
    "RecursiveNestedObjectError",
]
