#!/usr/bin/env python3
"""Map leaf property ranges to XSD element declarations.

Every function here is pure: given a property label, its range and the
cardinality of the usage, it returns a new ``xs:element`` node. An element
is either typed directly (``<xs:element name="x" type="xs:string"/>``) or,
when the range carries facets, wraps an anonymous ``xs:simpleType`` with a
single ``xs:restriction`` holding every facet.
"""

from collections.abc import Sequence
from typing import Optional

from .context import EMAIL_PATTERN
from .errors import UnsupportedRangeTypeError
from .graph_model import (
    BooleanRange,
    Cardinality,
    DateFormat,
    DateRange,
    EnumRange,
    NumberFormat,
    NumberRange,
    Range,
    TextFormat,
    TextRange,
)
from .schema_tree import AttributeValue, SchemaNode

# (facet tag, facet value)
Facet = tuple[str, AttributeValue]

XS_BOOLEAN = "xs:boolean"
XS_STRING = "xs:string"
XS_ANY_URI = "xs:anyURI"
XS_FLOAT = "xs:float"
XS_DATE_TIME = "xs:dateTime"

NUMBER_TYPES = {
    NumberFormat.INT.value: "xs:integer",
    NumberFormat.INT_8.value: "xs:byte",
    NumberFormat.INT_16.value: "xs:short",
    NumberFormat.INT_32.value: "xs:integer",
    NumberFormat.INT_64.value: "xs:long",
    NumberFormat.FLOAT_32.value: XS_FLOAT,
    NumberFormat.FLOAT_64.value: "xs:double",
}

DATE_TYPES = {
    DateFormat.TIME.value: "xs:time",
    DateFormat.SHORT_DATE.value: "xs:date",
    DateFormat.DATE_TIME.value: XS_DATE_TIME,
}


def occurs_attributes(cardinality: Cardinality) -> dict[str, str]:
    """Translate a cardinality into minOccurs/maxOccurs attributes.

    Only the non-default markers are returned: ``minOccurs="0"`` when the
    usage is optional and ``maxOccurs="unbounded"`` when it repeats.
    """
    attributes = {}
    if cardinality.min_items is None or cardinality.min_items <= 0:
        attributes["minOccurs"] = "0"
    if cardinality.max_items is None or cardinality.max_items > 1:
        attributes["maxOccurs"] = "unbounded"
    return attributes


def simple_type_element(
    xs_type: str,
    name: str,
    cardinality: Cardinality,
    facets: Sequence[Facet] = ()
) -> SchemaNode:
    """Build an element of a simple type, restricted by ``facets`` if any.

    Facets sharing a tag are grouped together in the order first seen.
    """
    if facets:
        restriction = SchemaNode({"base": xs_type})
        for tag, value in facets:
            restriction.add_child(tag, SchemaNode({"value": value}))

        simple_type = SchemaNode()
        simple_type.add_child("xs:restriction", restriction)

        element = SchemaNode({"name": name})
        element.add_child("xs:simpleType", simple_type)
    else:
        element = SchemaNode({"name": name, "type": xs_type})

    element.attributes.update(occurs_attributes(cardinality))
    return element


def _format_is(value: Optional[str], text_format: TextFormat) -> bool:
    return bool(value) and value.lower() == text_format.value.lower()


def from_boolean_range(label: str, cardinality: Cardinality) -> SchemaNode:
    return simple_type_element(XS_BOOLEAN, label, cardinality)


def from_text_range(
    label: str,
    range_: TextRange,
    cardinality: Cardinality,
    email_pattern: str = EMAIL_PATTERN
) -> SchemaNode:
    xs_type = XS_ANY_URI if _format_is(range_.format, TextFormat.URL) else XS_STRING

    facets: list[Facet] = []
    if _format_is(range_.format, TextFormat.EMAIL):
        facets.append(("xs:pattern", email_pattern))
    if range_.regex:
        facets.append(("xs:pattern", range_.regex))
    if range_.min_length is not None:
        facets.append(("xs:minLength", range_.min_length))
    if range_.max_length is not None:
        facets.append(("xs:maxLength", range_.max_length))

    return simple_type_element(xs_type, label, cardinality, facets)


def from_number_range(label: str, range_: NumberRange, cardinality: Cardinality) -> SchemaNode:
    xs_type = NUMBER_TYPES.get(range_.format, XS_FLOAT)

    # Bounds are exclusive
    facets: list[Facet] = []
    if range_.min is not None:
        facets.append(("xs:minExclusive", range_.min))
    if range_.max is not None:
        facets.append(("xs:maxExclusive", range_.max))

    return simple_type_element(xs_type, label, cardinality, facets)


def from_date_range(label: str, range_: DateRange, cardinality: Cardinality) -> SchemaNode:
    xs_type = DATE_TYPES.get(range_.format, XS_DATE_TIME)
    return simple_type_element(xs_type, label, cardinality)


def from_enum_range(label: str, range_: EnumRange, cardinality: Cardinality) -> SchemaNode:
    facets = [("xs:enumeration", value) for value in range_.values]
    return simple_type_element(XS_STRING, label, cardinality, facets)


def map_range(
    label: str,
    range_: Range,
    cardinality: Cardinality,
    email_pattern: str = EMAIL_PATTERN
) -> SchemaNode:
    """Map a leaf range (boolean, text, number, date, enum) to an element.

    Nested objects and linked classes need the emission context and are
    handled by the type emitter.

    Raises:
        UnsupportedRangeTypeError: for any range that is not a leaf variant
    """
    if isinstance(range_, BooleanRange):
        return from_boolean_range(label, cardinality)
    if isinstance(range_, TextRange):
        return from_text_range(label, range_, cardinality, email_pattern)
    if isinstance(range_, NumberRange):
        return from_number_range(label, range_, cardinality)
    if isinstance(range_, DateRange):
        return from_date_range(label, range_, cardinality)
    if isinstance(range_, EnumRange):
        return from_enum_range(label, range_, cardinality)

    type_name = getattr(range_, "type", type(range_).__name__)
    raise UnsupportedRangeTypeError(getattr(type_name, "value", str(type_name)))
