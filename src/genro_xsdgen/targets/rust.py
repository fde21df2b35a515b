# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Rust structs and enums for serde + quick-xml.

Attributes are renamed ``@name``, text content ``$text``; optional and
repeated elements get ``#[serde(default)]``.
"""

from __future__ import annotations

import json

from ..cardinality import Cardinality
from ..definitions import AliasDef, EnumDef, FieldDef, StructDef, WireRole
from ..naming import RUST_KEYWORDS
from ..primitives import ScalarType
from .base import Target

DERIVE = "#[derive(Clone, Debug, Deserialize, Serialize)]"


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class RustTarget(Target):
    name = "rust"
    policy = RUST_KEYWORDS
    scalars = {
        ScalarType.STRING: "String",
        ScalarType.BOOLEAN: "bool",
        ScalarType.FLOAT32: "f32",
        ScalarType.FLOAT64: "f64",
        ScalarType.INT8: "i8",
        ScalarType.INT16: "i16",
        ScalarType.INT32: "i32",
        ScalarType.INT64: "i64",
        ScalarType.UINT8: "u8",
        ScalarType.UINT16: "u16",
        ScalarType.UINT32: "u32",
        ScalarType.UINT64: "u64",
    }

    def header(self) -> str:
        return "use serde::{Deserialize, Serialize};\n"

    def render_struct(self, struct: StructDef) -> str:
        lines = [DERIVE, f"pub struct {struct.name} {{"]
        for field_def in struct.fields:
            lines.extend(self._render_field(field_def))
        lines.append("}")
        return "\n".join(lines) + "\n"

    def _render_field(self, field_def: FieldDef) -> list[str]:
        base = self.type_name(field_def.type)
        lines = []
        if field_def.cardinality is Cardinality.REPEATED:
            rs_type = f"Vec<{base}>"
        elif field_def.cardinality is Cardinality.OPTIONAL:
            rs_type = f"Option<{base}>"
        else:
            rs_type = base
        if field_def.role is WireRole.ATTRIBUTE:
            wire = f"@{field_def.wire_name}"
        else:
            wire = field_def.wire_name
            if field_def.cardinality is not Cardinality.REQUIRED:
                lines.append("    #[serde(default)]")
        lines.append(f"    #[serde(rename = {_quote(wire)})]")
        lines.append(f"    pub {field_def.ident}: {rs_type},")
        return lines

    def render_enum(self, enum: EnumDef) -> str:
        lines = [DERIVE, f"pub enum {enum.name} {{"]
        for variant in enum.variants:
            lines.append(f"    #[serde(rename = {_quote(variant.literal)})]")
            lines.append(f"    {variant.ident},")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def render_alias(self, alias: AliasDef) -> str:
        return f"pub type {alias.name} = {self.type_name(alias.target)};\n"
