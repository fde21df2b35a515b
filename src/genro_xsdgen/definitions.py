# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Target-independent type definitions and the buffer collecting them.

The emitter appends StructDef/EnumDef/AliasDef values to an OutputBuffer
in emission order; a Target renders the buffer to text. Definition names
are unique inside a buffer.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .cardinality import Cardinality
from .errors import NameCollisionError
from .primitives import FieldType

TEXT_WIRE_NAME = "$text"


class WireRole(Enum):
    """Where a field's value sits in the markup."""

    ATTRIBUTE = "attribute"
    ELEMENT = "element"
    TEXT = "text"


@dataclass(frozen=True)
class FieldDef:
    ident: str
    wire_name: str
    role: WireRole
    type: FieldType
    cardinality: Cardinality


@dataclass
class StructDef:
    name: str
    wire_name: str
    fields: list[FieldDef] = field(default_factory=list)


@dataclass(frozen=True)
class VariantDef:
    ident: str
    literal: str


@dataclass
class EnumDef:
    name: str
    variants: list[VariantDef] = field(default_factory=list)


@dataclass(frozen=True)
class AliasDef:
    name: str
    target: FieldType


Definition = Union[StructDef, EnumDef, AliasDef]


class OutputBuffer:
    """Ordered, name-keyed collection of emitted definitions."""

    def __init__(self) -> None:
        self._definitions: dict[str, Definition] = {}

    def add(self, definition: Definition, path: str = "") -> None:
        if definition.name in self._definitions:
            raise NameCollisionError(
                f"Type '{definition.name}' is defined more than once", path
            )
        self._definitions[definition.name] = definition

    def get(self, name: str) -> Definition | None:
        return self._definitions.get(name)

    def names(self) -> list[str]:
        return list(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[Definition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def __getitem__(self, name: str) -> Definition:
        return self._definitions[name]

    def __repr__(self) -> str:
        return f"OutputBuffer({self.names()!r})"
