# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Python dataclasses with xsdata-style field metadata.

Each struct becomes a ``@dataclass(kw_only=True)`` whose fields carry
``metadata={"name": ..., "type": "Attribute" | "Element" | "Text"}``, so
an xsdata-like binder can map markup positions back onto fields. The
module starts with ``from __future__ import annotations``: annotations
may name classes defined further down. Enum and TypeAlias are referenced
through their modules so that generated class names cannot shadow them;
generated type names are PascalCase and never collide with ``enum`` or
``typing``.
"""

from __future__ import annotations

import json

from ..cardinality import Cardinality
from ..definitions import AliasDef, EnumDef, FieldDef, StructDef, WireRole
from ..naming import PYTHON_KEYWORDS, KeywordPolicy
from ..primitives import ScalarType
from .base import Target

ROLE_NAMES = {
    WireRole.ATTRIBUTE: "Attribute",
    WireRole.ELEMENT: "Element",
    WireRole.TEXT: "Text",
}

# Names called inside generated class bodies; a field bound to one of them
# would shadow it for the fields that follow.
CLASS_BODY_NAMES = frozenset({"field", "list"})


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class PythonTarget(Target):
    name = "python"
    policy = KeywordPolicy(PYTHON_KEYWORDS.keywords | CLASS_BODY_NAMES)
    separator = "\n\n"
    scalars = {
        ScalarType.STRING: "str",
        ScalarType.BOOLEAN: "bool",
        ScalarType.FLOAT32: "float",
        ScalarType.FLOAT64: "float",
        ScalarType.INT8: "int",
        ScalarType.INT16: "int",
        ScalarType.INT32: "int",
        ScalarType.INT64: "int",
        ScalarType.UINT8: "int",
        ScalarType.UINT16: "int",
        ScalarType.UINT32: "int",
        ScalarType.UINT64: "int",
    }

    def header(self) -> str:
        return (
            "from __future__ import annotations\n"
            "\n"
            "import enum\n"
            "import typing\n"
            "from dataclasses import dataclass, field\n"
        )

    def render_struct(self, struct: StructDef) -> str:
        lines = [
            "@dataclass(kw_only=True)",
            f"class {struct.name}:",
            "    class Meta:",
            f"        name = {_quote(struct.wire_name)}",
        ]
        for field_def in struct.fields:
            lines.append("")
            lines.extend(self._render_field(field_def))
        return "\n".join(lines) + "\n"

    def _render_field(self, field_def: FieldDef) -> list[str]:
        base = self.type_name(field_def.type)
        metadata = []
        if field_def.role is not WireRole.TEXT:
            metadata.append(f'"name": {_quote(field_def.wire_name)},')
        metadata.append(f'"type": "{ROLE_NAMES[field_def.role]}",')

        if field_def.cardinality is Cardinality.REPEATED:
            annotation = f"list[{base}]"
            default = "default_factory=list,"
        elif field_def.cardinality is Cardinality.OPTIONAL:
            annotation = f"{base} | None"
            default = "default=None,"
        else:
            annotation = base
            default = None
            metadata.append('"required": True,')

        lines = [f"    {field_def.ident}: {annotation} = field("]
        if default:
            lines.append(f"        {default}")
        lines.append("        metadata={")
        lines.extend(f"            {entry}" for entry in metadata)
        lines.append("        },")
        lines.append("    )")
        return lines

    def render_enum(self, enum: EnumDef) -> str:
        lines = [f"class {enum.name}(enum.Enum):"]
        lines.extend(
            f"    {variant.ident} = {_quote(variant.literal)}" for variant in enum.variants
        )
        return "\n".join(lines) + "\n"

    def render_alias(self, alias: AliasDef) -> str:
        target = self.type_name(alias.target)
        if not isinstance(alias.target, ScalarType):
            target = _quote(target)
        return f"{alias.name}: typing.TypeAlias = {target}\n"
