#!/usr/bin/env python3
"""Typed model of the input class graph.

Graphs arrive in the wire format used by the graph editor: a flat list of
``Class`` and ``Property`` nodes with camelCase keys. This module turns those
mappings into dataclasses so the rest of the generator works over a closed set
of range variants instead of raw string tags.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from .errors import MalformedNodeError, UnsupportedRangeTypeError

CLASS_NODE = "Class"
PROPERTY_NODE = "Property"


class RangeType(str, Enum):
    """Type tag of a property range."""
    BOOLEAN = "Boolean"
    TEXT = "Text"
    NUMBER = "Number"
    DATE = "Date"
    ENUM = "Enum"
    NESTED_OBJECT = "NestedObject"
    LINKED_CLASS = "LinkedClass"


class TextFormat(str, Enum):
    URL = "Url"
    EMAIL = "Email"
    HOSTNAME = "Hostname"


class NumberFormat(str, Enum):
    INT = "Int"
    INT_8 = "Int8"
    INT_16 = "Int16"
    INT_32 = "Int32"
    INT_64 = "Int64"
    FLOAT_32 = "Float32"
    FLOAT_64 = "Float64"


class DateFormat(str, Enum):
    SHORT_DATE = "ShortDate"
    DATE_TIME = "DateTime"
    TIME = "Time"


@dataclass(frozen=True)
class Cardinality:
    """Occurrence bounds attached to one usage of a property."""
    min_items: Optional[int] = None
    max_items: Optional[int] = None


@dataclass(frozen=True)
class PropertyRef:
    """Reference from a class (or nested object) to a property definition."""
    ref: str
    cardinality: Cardinality = field(default_factory=Cardinality)


@dataclass(frozen=True)
class BooleanRange:
    type: ClassVar[RangeType] = RangeType.BOOLEAN


@dataclass(frozen=True)
class TextRange:
    type: ClassVar[RangeType] = RangeType.TEXT
    format: Optional[str] = None
    regex: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None


@dataclass(frozen=True)
class NumberRange:
    type: ClassVar[RangeType] = RangeType.NUMBER
    format: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass(frozen=True)
class DateRange:
    type: ClassVar[RangeType] = RangeType.DATE
    format: Optional[str] = None


@dataclass(frozen=True)
class EnumRange:
    type: ClassVar[RangeType] = RangeType.ENUM
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class NestedObjectRange:
    """Anonymous inline class; has no uid of its own."""
    type: ClassVar[RangeType] = RangeType.NESTED_OBJECT
    property_refs: tuple[PropertyRef, ...] = ()


@dataclass(frozen=True)
class LinkedClassRange:
    type: ClassVar[RangeType] = RangeType.LINKED_CLASS
    ref: str = ""


Range = Union[
    BooleanRange,
    TextRange,
    NumberRange,
    DateRange,
    EnumRange,
    NestedObjectRange,
    LinkedClassRange,
]


@dataclass
class ClassNode:
    """Class node. ``property_refs`` is extended in place by flattening."""
    uid: str
    label: str
    sub_class_of: Optional[str] = None
    property_refs: list[PropertyRef] = field(default_factory=list)
    exclude_parent_properties: tuple[str, ...] = ()


@dataclass(frozen=True)
class PropertyNode:
    uid: str
    label: str
    range: Range


GraphNode = Union[ClassNode, PropertyNode]


def _as_number(value: Any) -> Optional[Union[int, float]]:
    """Return value if it is a real number, else None (booleans are not numbers)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _property_refs_of(raw: dict[str, Any]) -> list[dict[str, Any]]:
    # Older graphs name the list propertySpecs
    refs = raw.get("propertyRefs")
    if refs is None:
        refs = raw.get("propertySpecs")
    return list(refs or [])


def parse_cardinality(raw: Optional[dict[str, Any]]) -> Cardinality:
    if not raw:
        return Cardinality()
    return Cardinality(
        min_items=_as_number(raw.get("minItems")),
        max_items=_as_number(raw.get("maxItems")),
    )


def parse_property_ref(raw: dict[str, Any], owner: Optional[str] = None) -> PropertyRef:
    """Parse a property ref; ``owner`` is the class or property holding it.

    Raises:
        MalformedNodeError: if the ref has no target uid
    """
    ref = raw.get("ref")
    if not ref:
        raise MalformedNodeError("Property ref", "ref", owner)
    return PropertyRef(ref=ref, cardinality=parse_cardinality(raw.get("cardinality")))


def parse_range(raw: Optional[dict[str, Any]], owner: Optional[str] = None) -> Range:
    """Build a typed range from its wire mapping.

    Raises:
        UnsupportedRangeTypeError: if the type tag is not a known variant
        MalformedNodeError: if a linked class range has no target uid
    """
    raw = raw or {}
    type_name = raw.get("type")
    try:
        range_type = RangeType(type_name)
    except ValueError as e:
        raise UnsupportedRangeTypeError(str(type_name)) from e

    if range_type is RangeType.BOOLEAN:
        return BooleanRange()
    if range_type is RangeType.TEXT:
        return TextRange(
            format=raw.get("format"),
            regex=raw.get("regex") or None,
            min_length=_as_number(raw.get("minLength")),
            max_length=_as_number(raw.get("maxLength")),
        )
    if range_type is RangeType.NUMBER:
        return NumberRange(
            format=raw.get("format"),
            min=_as_number(raw.get("min")),
            max=_as_number(raw.get("max")),
        )
    if range_type is RangeType.DATE:
        return DateRange(format=raw.get("format"))
    if range_type is RangeType.ENUM:
        return EnumRange(values=tuple(str(value) for value in raw.get("values") or []))
    if range_type is RangeType.NESTED_OBJECT:
        return NestedObjectRange(
            property_refs=tuple(parse_property_ref(ref, owner) for ref in _property_refs_of(raw))
        )

    ref = raw.get("ref")
    if not ref:
        raise MalformedNodeError("LinkedClass range", "ref", owner)
    return LinkedClassRange(ref=ref)


def parse_node(raw: dict[str, Any]) -> Optional[GraphNode]:
    """Parse one wire node. Nodes that are neither classes nor properties yield None.

    Raises:
        MalformedNodeError: if a class or property has no uid, or holds a
            ref without a target
        UnsupportedRangeTypeError: if a property range has an unknown type tag
    """
    node_type = raw.get("type")
    if node_type not in (CLASS_NODE, PROPERTY_NODE):
        return None

    uid = raw.get("uid")
    if not uid:
        raise MalformedNodeError(node_type, "uid", raw.get("label"))

    if node_type == CLASS_NODE:
        return ClassNode(
            uid=uid,
            label=raw.get("label") or uid,
            sub_class_of=raw.get("subClassOf") or None,
            property_refs=[parse_property_ref(ref, uid) for ref in _property_refs_of(raw)],
            exclude_parent_properties=tuple(raw.get("excludeParentProperties") or ()),
        )

    return PropertyNode(
        uid=uid,
        label=raw.get("label") or uid,
        range=parse_range(raw.get("range"), uid),
    )
