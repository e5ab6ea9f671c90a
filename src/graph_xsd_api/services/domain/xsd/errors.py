#!/usr/bin/env python3
"""Errors raised while generating an XSD from a class graph.

Every error aborts the whole generation; no partial schema is returned.
"""


class XsdGenerationError(Exception):
    """Base error for schema generation failures."""

    def __init__(self, message: str, identifier: str | None = None):
        super().__init__(message)
        self.identifier = identifier


class ReferenceNotFoundError(XsdGenerationError):
    """A class or property identifier does not resolve in the graph."""

    def __init__(self, kind: str, identifier: str):
        super().__init__(f"{kind.capitalize()} {identifier} could not be found in graph", identifier)
        self.kind = kind


class UnsupportedRangeTypeError(XsdGenerationError):
    """A property range carries a type tag outside the known variants."""

    def __init__(self, type_name: str):
        super().__init__(f"Not expecting type: {type_name}", type_name)
        self.type_name = type_name


class MalformedHierarchyError(XsdGenerationError):
    """The subClassOf chain of a class loops back on itself."""

    def __init__(self, chain: list[str]):
        super().__init__(f"Cyclic subClassOf chain: {' -> '.join(chain)}", chain[0] if chain else None)
        self.chain = chain


class MalformedNodeError(XsdGenerationError):
    """A graph node is missing a field it cannot do without."""

    def __init__(self, node_type: str, field_name: str, identifier: str | None = None):
        where = f" {identifier}" if identifier else ""
        super().__init__(f"{node_type}{where} is missing required field '{field_name}'", identifier)
        self.field_name = field_name


class RecursiveNestedObjectError(XsdGenerationError):
    """A nested object contains itself, directly or through other nested objects."""

    def __init__(self, path: list[str]):
        super().__init__(f"Nested object contains itself: {' -> '.join(path)}", path[-1])
        self.path = path
