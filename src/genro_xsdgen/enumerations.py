# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Emission of restricted simple types.

A restriction whose enumeration literals all start with an ASCII letter
becomes a closed enum ``<Name>Enum`` plus a one-field wrapper struct
``<Name>`` holding the enum as text content. Any other restriction (no
literals, or a literal such as ``1st``) becomes a plain alias of its base.
"""

from __future__ import annotations

import logging

from .cardinality import Cardinality
from .definitions import (
    TEXT_WIRE_NAME,
    AliasDef,
    EnumDef,
    FieldDef,
    OutputBuffer,
    StructDef,
    VariantDef,
    WireRole,
)
from .errors import NameCollisionError
from .naming import PYTHON_KEYWORDS, KeywordPolicy, to_type_identifier
from .primitives import ScalarType, resolve_type
from .schema import SimpleType

logger = logging.getLogger(__name__)

VALUE_FIELD = "value"


def is_enumerable(literals: list[str]) -> bool:
    """True when every literal starts with an ASCII letter."""
    return all(lit[:1].isascii() and lit[:1].isalpha() for lit in literals)


def emit_simple_type(
    simple_type: SimpleType,
    name: str,
    buffer: OutputBuffer,
    wire_name: str | None = None,
    policy: KeywordPolicy = PYTHON_KEYWORDS,
    path: str = "",
) -> None:
    """Emit the definitions for ``simple_type`` under the resolved ``name``."""
    restriction = simple_type.restriction
    if restriction is None:
        buffer.add(AliasDef(name, ScalarType.STRING), path)
        return

    literals = restriction.enumerations
    if not literals:
        buffer.add(AliasDef(name, resolve_type(restriction.base)), path)
        return

    if not is_enumerable(literals):
        logger.warning(
            "Enumeration of %s has non-alphabetic literals, emitting a plain alias of %s",
            name,
            restriction.base,
        )
        buffer.add(AliasDef(name, resolve_type(restriction.base)), path)
        return

    enum_name = f"{name}Enum"
    variants: list[VariantDef] = []
    seen: dict[str, str] = {}
    for literal in literals:
        ident = policy.escape(to_type_identifier(literal))
        if seen.get(ident) == literal:
            continue
        if ident in seen:
            raise NameCollisionError(
                f"Enumeration literals '{seen[ident]}' and '{literal}' "
                f"both map to variant '{ident}' of {enum_name}",
                path,
            )
        seen[ident] = literal
        variants.append(VariantDef(ident, literal))

    buffer.add(EnumDef(enum_name, variants), path)
    buffer.add(
        StructDef(
            name,
            wire_name or name,
            [
                FieldDef(
                    VALUE_FIELD,
                    TEXT_WIRE_NAME,
                    WireRole.TEXT,
                    enum_name,
                    Cardinality.REQUIRED,
                )
            ],
        ),
        path,
    )
    logger.debug("Emitted enum %s with %d variants", enum_name, len(variants))
