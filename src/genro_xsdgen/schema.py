# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""In-memory XML Schema tree consumed by the type emitter.

The tree is built once (usually by XsdReader) and only read afterwards.
Anonymous nested types have no name of their own: the owning element or
attribute gives them one at emission time.

Which value type an element or attribute carries is a single TypeSource
variant, so "at most one of type reference, inline complex type, inline
simple type" holds by construction:

    >>> Element("age", TypeReference("xs:int"), min_occurs=0)
    >>> Element("address", InlineComplex(ComplexType(content=Sequence([...]))))
    >>> Element("note")  # NoType: defaults to the string primitive
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

UNBOUNDED = "unbounded"


class Use(Enum):
    """Value of the ``use`` attribute of xs:attribute."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    PROHIBITED = "prohibited"


# =============================================================================
# Type sources
# =============================================================================


@dataclass(frozen=True)
class TypeReference:
    """Reference by name to a primitive (``xs:int``) or a named schema type."""

    name: str


@dataclass(frozen=True)
class InlineComplex:
    """Anonymous complexType owned by its element/attribute."""

    complex_type: ComplexType


@dataclass(frozen=True)
class InlineSimple:
    """Anonymous simpleType owned by its element/attribute."""

    simple_type: SimpleType


@dataclass(frozen=True)
class NoType:
    """No type given at all."""


TypeSource = Union[TypeReference, InlineComplex, InlineSimple, NoType]


# =============================================================================
# Nodes
# =============================================================================


@dataclass
class Element:
    name: str
    type: TypeSource = field(default_factory=NoType)
    min_occurs: int | None = None
    max_occurs: str | None = None


@dataclass
class Attribute:
    name: str
    type: TypeSource = field(default_factory=NoType)
    use: Use = Use.OPTIONAL


@dataclass
class Group:
    """Model group: ordered child elements plus an optional group minOccurs."""

    elements: list[Element] = field(default_factory=list)
    min_occurs: int | None = None


class Sequence(Group):
    """xs:sequence"""


class All(Group):
    """xs:all"""


class Choice(Group):
    """xs:choice - recognized so it can be rejected, never emitted."""


@dataclass
class SimpleContentExtension:
    """Text value of type ``base`` carrying attributes."""

    base: str
    attributes: list[Attribute] = field(default_factory=list)


ContentModel = Union[Sequence, All, Choice, SimpleContentExtension]


@dataclass
class ComplexType:
    name: str | None = None
    content: ContentModel | None = None
    attributes: list[Attribute] = field(default_factory=list)


@dataclass
class Restriction:
    base: str
    enumerations: list[str] | None = None


@dataclass
class SimpleType:
    name: str | None = None
    restriction: Restriction | None = None


@dataclass
class Schema:
    """Top-level collections, each in document order."""

    elements: list[Element] = field(default_factory=list)
    complex_types: list[ComplexType] = field(default_factory=list)
    simple_types: list[SimpleType] = field(default_factory=list)
