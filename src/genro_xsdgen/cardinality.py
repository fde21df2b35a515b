# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Optional/repeated/bare wrapping of attributes and elements."""

from __future__ import annotations

from enum import Enum

from .schema import Attribute, Element, Group, Use


class Cardinality(Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    REPEATED = "repeated"


def attribute_cardinality(attr: Attribute) -> Cardinality | None:
    """Wrapping for an attribute field; None means the field is omitted."""
    if attr.use is Use.PROHIBITED:
        return None
    if attr.use is Use.REQUIRED:
        return Cardinality.REQUIRED
    return Cardinality.OPTIONAL


def element_cardinality(min_occurs: int | None, max_occurs: str | None) -> Cardinality:
    """Wrapping for an element field.

    maxOccurs other than "1" wins over minOccurs; minOccurs 0 makes the
    field optional; anything else is a bare required field.
    """
    if max_occurs is not None and max_occurs != "1":
        return Cardinality.REPEATED
    if min_occurs == 0:
        return Cardinality.OPTIONAL
    return Cardinality.REQUIRED


def effective_min_occurs(child: int | None, group: int | None) -> int | None:
    """Fold a group-level minOccurs into one child's minOccurs."""
    if group is None:
        return child
    if child is None:
        return group
    return child * group


def propagate_group_min_occurs(group: Group) -> list[tuple[Element, int | None]]:
    """Pair every child of ``group`` with its effective minOccurs.

    The tree is left untouched; callers use the returned value instead of
    ``element.min_occurs``.
    """
    return [
        (element, effective_min_occurs(element.min_occurs, group.min_occurs))
        for element in group.elements
    ]
