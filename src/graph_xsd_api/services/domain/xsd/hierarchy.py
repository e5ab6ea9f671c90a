#!/usr/bin/env python3
"""Copy inherited property usages down the subClassOf chain.

After flattening, every class lists its own property refs followed by the
refs it inherits, so emission never has to look at ancestors.
"""

import logging

from .context import EmissionContext
from .errors import MalformedHierarchyError
from .graph_model import ClassNode, PropertyRef

logger = logging.getLogger(__name__)


def _label_of(context: EmissionContext, ref: PropertyRef) -> str:
    return context.get_property(ref.ref).label


def _flatten_class(
    context: EmissionContext,
    class_node: ClassNode,
    own_refs: dict[str, list[PropertyRef]]
) -> int:
    """Append inherited refs to one class. Returns the number of refs added.

    A property whose label is already present is skipped, so the declaration
    closest to the class wins. Ancestor lists come from ``own_refs``, the
    snapshot taken before any class was flattened.
    """
    labels = {_label_of(context, ref) for ref in class_node.property_refs}
    excluded: set[str] = set()
    visited = [class_node.uid]
    added = 0

    current = class_node
    while current.sub_class_of:
        excluded.update(current.exclude_parent_properties)
        parent_uid = current.sub_class_of

        if parent_uid in visited:
            raise MalformedHierarchyError(visited + [parent_uid])
        visited.append(parent_uid)

        parent = context.get_class(parent_uid)
        for parent_ref in own_refs[parent_uid]:
            if parent_ref.ref in excluded:
                continue
            label = _label_of(context, parent_ref)
            if label in labels:
                continue
            labels.add(label)
            class_node.property_refs.append(parent_ref)
            added += 1

        current = parent

    return added


def flatten_hierarchies(context: EmissionContext) -> None:
    """Flatten the inheritance chain of every class in the context, in place.

    Raises:
        ReferenceNotFoundError: if a parent class or property does not resolve
        MalformedHierarchyError: if a subClassOf chain is cyclic
    """
    own_refs = {uid: list(node.property_refs) for uid, node in context.class_cache.items()}

    for class_node in context.class_cache.values():
        if not class_node.sub_class_of:
            continue
        added = _flatten_class(context, class_node, own_refs)
        if added:
            logger.debug(f"Class {class_node.uid} inherits {added} properties")
