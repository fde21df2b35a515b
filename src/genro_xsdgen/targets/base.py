# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Base class for output languages."""

from __future__ import annotations

from ..definitions import AliasDef, Definition, EnumDef, OutputBuffer, StructDef
from ..naming import KeywordPolicy
from ..primitives import FieldType, ScalarType


class Target:
    """Renders an OutputBuffer to source text of one language.

    Subclasses set ``name``, ``policy`` and ``scalars`` and implement the
    three ``render_*`` methods. Each definition renders to a block of
    lines; blocks are separated by ``separator``.
    """

    name: str = ""
    policy: KeywordPolicy
    scalars: dict[ScalarType, str] = {}
    separator: str = "\n"

    def header(self) -> str:
        return ""

    def type_name(self, field_type: FieldType) -> str:
        if isinstance(field_type, ScalarType):
            return self.scalars[field_type]
        return field_type

    def render(self, buffer: OutputBuffer, header: bool = True) -> str:
        blocks = [self.render_definition(definition) for definition in buffer]
        if header and self.header():
            blocks.insert(0, self.header())
        return self.separator.join(blocks)

    def render_definition(self, definition: Definition) -> str:
        if isinstance(definition, StructDef):
            return self.render_struct(definition)
        if isinstance(definition, EnumDef):
            return self.render_enum(definition)
        if isinstance(definition, AliasDef):
            return self.render_alias(definition)
        raise TypeError(f"Cannot render {type(definition).__name__}")

    def render_struct(self, struct: StructDef) -> str:
        raise NotImplementedError

    def render_enum(self, enum: EnumDef) -> str:
        raise NotImplementedError

    def render_alias(self, alias: AliasDef) -> str:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
